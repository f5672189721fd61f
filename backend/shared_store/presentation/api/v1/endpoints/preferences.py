"""Per-user preference endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from shared_store.application.schemas import (
    DefaultCloudState,
    FieldValueUpdate,
    HiddenCloudsState,
    OnboardingState,
    PreferencesResponse,
    PreferencesUpdate,
)
from shared_store.application.services import PreferenceService
from shared_store.domain.exceptions import InvalidFieldError, ValidationError
from shared_store.infrastructure.dependencies import get_preference_service

router = APIRouter(prefix="/users/{user_id}/preferences", tags=["Preferences"])


async def _update(service: PreferenceService, user_id: str, fields: dict[str, Any]):
    try:
        return await service.replace(user_id, fields)
    except InvalidFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("", response_model=PreferencesResponse)
async def get_preferences(
    user_id: str,
    service: PreferenceService = Depends(get_preference_service),
) -> PreferencesResponse:
    """Preferences for a user, created with defaults on first access."""
    record = await service.get_or_create(user_id)
    return PreferencesResponse.model_validate(record)


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    user_id: str,
    body: PreferencesUpdate,
    service: PreferenceService = Depends(get_preference_service),
) -> PreferencesResponse:
    """Apply the fields present in the body; omitted fields keep their value."""
    record = await _update(service, user_id, body.provided_fields())
    return PreferencesResponse.model_validate(record)


@router.get("/default-cloud", response_model=DefaultCloudState)
async def get_default_cloud(
    user_id: str,
    service: PreferenceService = Depends(get_preference_service),
) -> DefaultCloudState:
    record = await service.get_or_create(user_id)
    return DefaultCloudState(cloud_id=record.default_cloud)


@router.put("/default-cloud", response_model=DefaultCloudState)
async def set_default_cloud(
    user_id: str,
    body: DefaultCloudState,
    service: PreferenceService = Depends(get_preference_service),
) -> DefaultCloudState:
    """Set the default cloud, or clear it with ``cloudId: null``."""
    record = await _update(service, user_id, {"defaultCloud": body.cloud_id})
    return DefaultCloudState(cloud_id=record.default_cloud)


@router.get("/onboarding", response_model=OnboardingState)
async def get_onboarding(
    user_id: str,
    service: PreferenceService = Depends(get_preference_service),
) -> OnboardingState:
    record = await service.get_or_create(user_id)
    return OnboardingState(
        has_completed=record.onboarding_completed,
        skip_splash=record.skip_splash,
    )


@router.put("/onboarding", response_model=OnboardingState)
async def set_onboarding(
    user_id: str,
    body: OnboardingState,
    service: PreferenceService = Depends(get_preference_service),
) -> OnboardingState:
    """Update whichever of ``hasCompleted`` / ``skipSplash`` is provided."""
    fields: dict[str, Any] = {}
    if body.has_completed is not None:
        fields["onboardingCompleted"] = body.has_completed
    if body.skip_splash is not None:
        fields["skipSplash"] = body.skip_splash
    record = await _update(service, user_id, fields)
    return OnboardingState(
        has_completed=record.onboarding_completed,
        skip_splash=record.skip_splash,
    )


@router.get("/hidden-clouds", response_model=HiddenCloudsState)
async def get_hidden_clouds(
    user_id: str,
    service: PreferenceService = Depends(get_preference_service),
) -> HiddenCloudsState:
    record = await service.get_or_create(user_id)
    return HiddenCloudsState(hidden_clouds=record.hidden_clouds)


@router.put("/hidden-clouds", response_model=HiddenCloudsState)
async def set_hidden_clouds(
    user_id: str,
    body: HiddenCloudsState,
    service: PreferenceService = Depends(get_preference_service),
) -> HiddenCloudsState:
    """Replace the hidden-clouds list. Duplicates are dropped."""
    record = await _update(service, user_id, {"hiddenClouds": body.hidden_clouds})
    return HiddenCloudsState(hidden_clouds=record.hidden_clouds)


@router.put("/fields/{field_name}", response_model=PreferencesResponse)
async def update_preference_field(
    user_id: str,
    field_name: str,
    body: FieldValueUpdate,
    service: PreferenceService = Depends(get_preference_service),
) -> PreferencesResponse:
    """Set a single preference field by its wire name."""
    try:
        record = await service.update_field(user_id, field_name, body.value)
    except InvalidFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return PreferencesResponse.model_validate(record)
