"""JSON column type: JSONB on PostgreSQL, generic JSON elsewhere."""

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

JSONDocument = JSON().with_variant(JSONB(), "postgresql")
