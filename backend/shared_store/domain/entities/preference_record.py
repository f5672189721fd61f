"""Domain entity for per-user preferences."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Wire name → attribute name for the four recognised preference fields.
PREFERENCE_FIELDS: dict[str, str] = {
    "defaultCloud": "default_cloud",
    "onboardingCompleted": "onboarding_completed",
    "skipSplash": "skip_splash",
    "hiddenClouds": "hidden_clouds",
}


@dataclass
class PreferenceRecord:
    """Preferences of one external user, created lazily with defaults.

    ``saved_items`` is written through its own guarded path, never by field
    name, so it is not listed in PREFERENCE_FIELDS.
    """

    user_id: str
    default_cloud: str | None = None
    onboarding_completed: bool = False
    skip_splash: bool = False
    hidden_clouds: list[str] = field(default_factory=list)
    saved_items: list[dict[str, Any]] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def apply(self, **fields: Any) -> None:
        """Set the given attributes and refresh updated_at.

        Only attributes passed in are touched; omitted ones keep their value.
        ``hidden_clouds`` is de-duplicated, keeping first-seen order.
        """
        for name, value in fields.items():
            if name == "hidden_clouds":
                value = list(dict.fromkeys(value))
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)
