"""Per-user saved items — guarded writes with backups under ``saved_items:<userId>``."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from shared_store.application.schemas import (
    SavedItemsResponse,
    SavedItemsWrite,
    WriteAcceptedResponse,
    WriteRejectedResponse,
)
from shared_store.application.services import SavedItemsService
from shared_store.domain.exceptions import RejectedByGuardError, ValidationError
from shared_store.infrastructure.dependencies import get_saved_items_service

router = APIRouter(prefix="/users/{user_id}/saved-items", tags=["Saved Items"])


@router.get("", response_model=SavedItemsResponse)
async def get_saved_items(
    user_id: str,
    service: SavedItemsService = Depends(get_saved_items_service),
) -> SavedItemsResponse:
    return SavedItemsResponse(saved_items=await service.get(user_id))


@router.put(
    "",
    response_model=WriteAcceptedResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": WriteRejectedResponse}},
)
async def put_saved_items(
    user_id: str,
    body: SavedItemsWrite,
    service: SavedItemsService = Depends(get_saved_items_service),
):
    """Replace the user's saved items. Clearing all is allowed; removing more
    than a couple at once is refused like a shared-data bulk reduction."""
    try:
        result = await service.put(user_id, body.saved_items, body.actor)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except RejectedByGuardError as e:
        rejected = WriteRejectedResponse(
            reason=e.reason,
            current_count=e.current_count,
            attempted_count=e.attempted_count,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=rejected.model_dump(by_alias=True),
        )
    return WriteAcceptedResponse(count=result.count, backup_id=result.backup_id)
