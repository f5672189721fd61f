"""Merge a backup payload into the live value without dropping live data.

Arrays are unioned by item identity; items with no identity are kept once
by value. Objects are merged key by key at every depth, whatever the
document key. On conflicting scalars the backup value is taken.
"""

import json
from typing import Any

_Identity = tuple[Any, ...] | None


def merge_backup_data(
    current: Any,
    backup: Any,
    identity_fields: tuple[str, ...] = (),
) -> Any:
    """Return ``current`` combined with ``backup``."""
    if isinstance(current, list) and isinstance(backup, list):
        return _merge_arrays(current, backup, identity_fields)
    if isinstance(current, dict) and isinstance(backup, dict):
        return _merge_objects(current, backup, identity_fields)
    return backup


def item_identity(item: Any, identity_fields: tuple[str, ...] = ()) -> _Identity:
    """Stable identity of an array item, or None when it has none."""
    if not isinstance(item, dict):
        return None
    if identity_fields:
        values = tuple(item.get(name) for name in identity_fields)
        return values if any(v is not None for v in values) else None
    if item.get("id"):
        return ("id", item["id"])
    if item.get("templateId"):
        return ("template", item["templateId"], item.get("variantKey") or "")
    if item.get("name"):
        return ("name", item["name"])
    return None


def _merge_arrays(
    current: list[Any], backup: list[Any], identity_fields: tuple[str, ...]
) -> list[Any]:
    merged = list(current)
    seen_ids = {i for i in (item_identity(x, identity_fields) for x in current) if i}
    seen_raw = {_canonical(x) for x in current}
    for item in backup:
        identity = item_identity(item, identity_fields)
        if identity is not None:
            if identity in seen_ids:
                continue
            seen_ids.add(identity)
        else:
            raw = _canonical(item)
            if raw in seen_raw:
                continue
            seen_raw.add(raw)
        merged.append(item)
    return merged


def _merge_objects(
    current: dict[str, Any], backup: dict[str, Any], identity_fields: tuple[str, ...]
) -> dict[str, Any]:
    result = dict(current)
    for key, backup_value in backup.items():
        if key not in result:
            result[key] = backup_value
            continue
        live_value = result[key]
        if isinstance(live_value, list) and isinstance(backup_value, list):
            result[key] = _merge_arrays(live_value, backup_value, identity_fields)
        elif isinstance(live_value, dict) and isinstance(backup_value, dict):
            result[key] = _merge_objects(live_value, backup_value, identity_fields)
        else:
            result[key] = backup_value
    return result


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)
