import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_storage
from app.schemas import ErrorResponse, PresignResponse
from app.services.storage import PRESIGN_TTL, StorageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])

MISSING_PARAMS_ERROR = "Missing filename or type"
PRESIGN_FAILED_ERROR = "Could not generate presigned URL"


@router.get(
    "/presign",
    response_model=PresignResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def presign_upload(
    filename: str | None = Query(default=None),
    content_type: str | None = Query(default=None, alias="type"),
    storage: StorageService = Depends(get_storage),
):
    """Issue a one-minute presigned PUT URL plus the object's public URL.

    The content type is accepted for the caller's benefit only; it is not
    bound into the signature. Signing happens locally without contacting the
    storage endpoint, so a 500 only comes from signer or parameter errors.
    """
    if not filename or not content_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=MISSING_PARAMS_ERROR).model_dump(),
        )

    try:
        upload_url = storage.presign_put(filename, expires_in=PRESIGN_TTL)
    except Exception:
        logger.exception("Failed to presign upload for %r", filename)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=PRESIGN_FAILED_ERROR).model_dump(),
        )

    logger.info("Issued presigned upload URL for %r (%s)", filename, content_type)
    return PresignResponse(url=upload_url, public_url=storage.public_url(filename))
