"""Shared-data endpoints — one resource per collection key."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from shared_store.application.schemas import (
    DocumentResponse,
    DocumentSummaryResponse,
    DocumentWrite,
    WriteAcceptedResponse,
    WriteRejectedResponse,
)
from shared_store.application.services import SharedDataService
from shared_store.domain.exceptions import RejectedByGuardError, ValidationError
from shared_store.infrastructure.dependencies import get_shared_data_service

router = APIRouter(prefix="/data", tags=["Shared Data"])


@router.get("", response_model=list[DocumentSummaryResponse])
async def list_documents(
    service: SharedDataService = Depends(get_shared_data_service),
) -> list[DocumentSummaryResponse]:
    """List every stored key with its item count."""
    summaries = await service.list_documents()
    return [DocumentSummaryResponse.model_validate(s) for s in summaries]


@router.get("/{key}", response_model=DocumentResponse)
async def get_document(
    key: str,
    service: SharedDataService = Depends(get_shared_data_service),
) -> DocumentResponse:
    """Current value of a key; ``data`` is null if it was never written."""
    return DocumentResponse(data=await service.get(key))


@router.put(
    "/{key}",
    response_model=WriteAcceptedResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": WriteRejectedResponse}},
)
async def put_document(
    key: str,
    body: DocumentWrite,
    service: SharedDataService = Depends(get_shared_data_service),
):
    """Replace the value of a key, subject to the loss-prevention guard."""
    try:
        result = await service.put(key, body.data, body.actor)
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
