"""Pydantic DTOs for the activity log. Wire format is camelCase."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ActivityLogRequest(BaseModel):
    """An activity reported by a client, e.g. a component inserted into a file."""

    model_config = _CAMEL

    action: str = Field(..., min_length=1, max_length=30, examples=["component_insert"])
    asset_id: str = Field(..., min_length=1, max_length=255)
    asset_name: str = Field(..., min_length=1, max_length=500)
    asset_data: Any = None
    cloud_id: str | None = Field(None, max_length=100)
    cloud_name: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=255)
    user_name: str | None = Field(None, max_length=255)


class ActivityResponse(BaseModel):
    model_config = _CAMEL

    id: int
    action: str
    asset_id: str
    asset_name: str
    asset_data: Any = None
    cloud_id: str | None = None
    cloud_name: str | None = None
    category: str | None = None
    user_name: str | None = None
    data_key: str | None = None
    is_restored: bool = False
    created_at: datetime


class ActivityStatsResponse(BaseModel):
    model_config = _CAMEL

    components_added: int
    components_reused: int
    designers_engaged: int


class AssetOriginResponse(BaseModel):
    """Who added an asset and when."""

    model_config = _CAMEL

    user_name: str | None = None
    created_at: datetime


class ActivityRestoreRequest(BaseModel):
    model_config = _CAMEL

    activity_ids: list[int] = Field(..., min_length=1)
    user_name: str | None = Field(None, max_length=255)


class ActivityRestoreResponse(BaseModel):
    model_config = _CAMEL

    restored_count: int
    message: str
