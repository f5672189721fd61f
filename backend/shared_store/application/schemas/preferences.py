"""Pydantic DTOs for per-user preferences. Wire format is camelCase."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PreferencesResponse(BaseModel):
    model_config = _CAMEL

    user_id: str
    default_cloud: str | None = None
    onboarding_completed: bool = False
    skip_splash: bool = False
    hidden_clouds: list[str] = []
    created_at: datetime
    updated_at: datetime


class PreferencesUpdate(BaseModel):
    """Partial update: only the fields present in the body are applied.

    Unknown fields are kept so the service can reject them by name.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    default_cloud: StrictStr | None = None
    onboarding_completed: StrictBool | None = None
    skip_splash: StrictBool | None = None
    hidden_clouds: list[StrictStr] | None = None

    def provided_fields(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by wire name."""
        provided = self.model_dump(by_alias=True, exclude_unset=True)
        provided.update(self.model_extra or {})
        return provided


class DefaultCloudState(BaseModel):
    model_config = _CAMEL

    cloud_id: StrictStr | None = None


class OnboardingState(BaseModel):
    model_config = _CAMEL

    has_completed: StrictBool | None = None
    skip_splash: StrictBool | None = None


class HiddenCloudsState(BaseModel):
    model_config = _CAMEL

    hidden_clouds: list[StrictStr] = []


class FieldValueUpdate(BaseModel):
    value: Any = None
