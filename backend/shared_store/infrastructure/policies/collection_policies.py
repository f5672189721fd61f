"""Collection policy providers — static and YAML-backed.

The YAML file declares the known document keys and how each is written:

    collections:
      - key: templates
        shape: array
        required_fields: [id, name]
        retention: 100

Keys that are not declared get the default policy built from Settings.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from shared_store.application.interfaces import CollectionPolicyProvider
from shared_store.domain.entities import CollectionPolicy, DocumentShape

logger = logging.getLogger(__name__)


class StaticCollectionPolicyProvider(CollectionPolicyProvider):
    """Serves policies from an in-memory mapping with a default for unknown keys."""

    def __init__(
        self,
        policies: Iterable[CollectionPolicy] = (),
        default_retention: int = 50,
        min_base: int = 5,
        max_reduction_ratio: float = 0.5,
    ):
        self._policies = {p.key: p for p in policies}
        self._default_retention = default_retention
        self._min_base = min_base
        self._max_reduction_ratio = max_reduction_ratio

    def policy_for(self, key: str) -> CollectionPolicy:
        policy = self._policies.get(key)
        if policy is not None:
            return policy
        return CollectionPolicy(
            key=key,
            retention=self._default_retention,
            min_base=self._min_base,
            max_reduction_ratio=self._max_reduction_ratio,
        )

    def known_keys(self) -> list[str]:
        return sorted(self._policies)


class YamlCollectionPolicyProvider(StaticCollectionPolicyProvider):
    """Loads policies from a YAML file once, at construction."""

    def __init__(
        self,
        path: str | Path,
        default_retention: int = 50,
        min_base: int = 5,
        max_reduction_ratio: float = 0.5,
    ):
        self._path = Path(path)
        defaults = {
            "retention": default_retention,
            "min_base": min_base,
            "max_reduction_ratio": max_reduction_ratio,
        }
        policies = [
            self._build_policy(entry, defaults)
            for entry in self._read_entries()
        ]
        super().__init__(policies, default_retention, min_base, max_reduction_ratio)
        logger.info("Loaded %d collection policies from %s", len(policies), self._path)

    def _read_entries(self) -> list[dict[str, Any]]:
        data = self._load_yaml(self._path)
        if not data:
            return []
        entries = data.get("collections", [])
        if not isinstance(entries, list):
            logger.warning("'collections' in %s is not a list, ignoring", self._path)
            return []
        return [e for e in entries if isinstance(e, dict) and e.get("key")]

    @staticmethod
    def _build_policy(entry: dict[str, Any], defaults: dict[str, Any]) -> CollectionPolicy:
        return CollectionPolicy(
            key=str(entry["key"]),
            shape=DocumentShape(entry.get("shape", DocumentShape.ANY.value)),
            required_fields=tuple(entry.get("required_fields") or ()),
            guarded=bool(entry.get("guarded", True)),
            retention=int(entry.get("retention", defaults["retention"])),
            min_base=int(entry.get("min_base", defaults["min_base"])),
            max_reduction_ratio=float(
                entry.get("max_reduction_ratio", defaults["max_reduction_ratio"])
            ),
            merge_identity=tuple(entry.get("merge_identity") or ()),
            allow_clear=bool(entry.get("allow_clear", False)),
            max_removals=_optional_int(entry.get("max_removals")),
            track_activity=bool(entry.get("track_activity", False)),
        )

    @staticmethod
    def _load_yaml(path: Path) -> dict | None:
        """Load and parse a YAML file, returning None when missing or unreadable."""
        if not path.exists():
            logger.warning("Collection policy file not found: %s, using defaults", path)
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except Exception:
            logger.exception("Failed to parse YAML file: %s", path)
            return None


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)
