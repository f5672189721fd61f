"""Pydantic DTOs for the shared-data endpoints. Wire format is camelCase."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class DocumentResponse(BaseModel):
    """Current value of a key; ``data`` is null when the key was never written."""

    data: Any = None


class DocumentWrite(BaseModel):
    """Full-value replacement for a key."""

    data: Any = Field(..., examples=[[{"id": "t-1", "name": "Hero banner"}]])
    actor: str | None = Field(None, max_length=100, examples=["jane@team"])


class WriteAcceptedResponse(BaseModel):
    model_config = _CAMEL

    accepted: Literal[True] = True
    count: int
    backup_id: int | None = None


class WriteRejectedResponse(BaseModel):
    """Structured refusal from the loss-prevention guard."""

    model_config = _CAMEL

    rejected: Literal[True] = True
    reason: str
    current_count: int
    attempted_count: int


class DocumentSummaryResponse(BaseModel):
    model_config = _CAMEL

    key: str
    item_count: int
    updated_at: datetime
