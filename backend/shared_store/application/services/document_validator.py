"""Shape validation for incoming document payloads."""

from typing import Any

from shared_store.domain.entities import CollectionPolicy, DocumentShape
from shared_store.domain.exceptions import ValidationError


class DocumentValidator:
    """Checks a payload against its key's declared shape before it is guarded."""

    def validate(self, policy: CollectionPolicy, payload: Any) -> None:
        if payload is None:
            raise ValidationError(policy.key, "data must not be null")

        if policy.shape is DocumentShape.ARRAY and not isinstance(payload, list):
            raise ValidationError(policy.key, f"must be an array, got {_json_type(payload)}")

        if policy.shape is DocumentShape.OBJECT and not isinstance(payload, dict):
            raise ValidationError(policy.key, f"must be an object, got {_json_type(payload)}")

        if isinstance(payload, list) and policy.required_fields:
            self._check_items(policy, payload)

    def _check_items(self, policy: CollectionPolicy, items: list[Any]) -> None:
        invalid = 0
        for item in items:
            if not isinstance(item, dict):
                invalid += 1
                continue
            if any(not item.get(name) for name in policy.required_fields):
                invalid += 1
        if invalid:
            raise ValidationError(
                policy.key,
                f"{invalid} item(s) missing required fields: {', '.join(policy.required_fields)}",
            )


def _json_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
