"""Pydantic DTOs for a user's saved items. Wire format is camelCase."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SavedItemsResponse(BaseModel):
    model_config = _CAMEL

    saved_items: list[Any] = []


class SavedItemsWrite(BaseModel):
    """Full replacement of the user's saved items.

    Items are checked by the store (array of objects with ``templateId``)
    so refusals carry the same messages as shared-data writes.
    """

    model_config = _CAMEL

    saved_items: Any = Field(..., examples=[[{"templateId": "t-1", "variantKey": "dark"}]])
    actor: str | None = Field(None, max_length=100)
