"""Application service for per-user preferences."""

import logging
from collections.abc import Mapping
from typing import Any

from shared_store.application.interfaces import PreferenceRepository
from shared_store.domain.entities import PREFERENCE_FIELDS, PreferenceRecord
from shared_store.domain.exceptions import InvalidFieldError, ValidationError

logger = logging.getLogger(__name__)


class PreferenceService:
    """Lazily creates and updates preference records. Depends on the repository port (DI)."""

    def __init__(self, repository: PreferenceRepository):
        self._repository = repository

    async def get_or_create(self, user_id: str) -> PreferenceRecord:
        record = await self._repository.get(user_id)
        if record is not None:
            return record

        await self._repository.insert_default(user_id)
        logger.info("Created default preferences for user %s", user_id)
        return await self._repository.get(user_id) or PreferenceRecord(user_id=user_id)

    async def replace(self, user_id: str, fields: Mapping[str, Any]) -> PreferenceRecord:
        """Update the supplied fields only.

        ``fields`` is keyed by wire name. Keys that are absent keep their
        stored value; a key present with ``None`` is an explicit clear.
        """
        changes: dict[str, Any] = {}
        for name, value in fields.items():
            _check_name(name)
            changes[PREFERENCE_FIELDS[name]] = _coerce(name, value)

        record = await self.get_or_create(user_id)
        if not changes:
            return record
        record.apply(**changes)
        return await self._repository.update(record)

    async def update_field(self, user_id: str, field_name: str, value: Any) -> PreferenceRecord:
        _check_name(field_name)
        coerced = _coerce(field_name, value)
        record = await self.get_or_create(user_id)
        record.apply(**{PREFERENCE_FIELDS[field_name]: coerced})
        return await self._repository.update(record)


def _check_name(field_name: str) -> None:
    if field_name not in PREFERENCE_FIELDS:
        raise InvalidFieldError(field_name, tuple(PREFERENCE_FIELDS))


def _coerce(field_name: str, value: Any) -> Any:
    """Validate a preference value for its field."""
    if field_name == "defaultCloud":
        if value is not None and not isinstance(value, str):
            raise ValidationError(field_name, "must be a string or null")
        return value
    if field_name in ("onboardingCompleted", "skipSplash"):
        if not isinstance(value, bool):
            raise ValidationError(field_name, "must be a boolean")
        return value
    # hiddenClouds
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(field_name, "must be a list of strings")
    return value
