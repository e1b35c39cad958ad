"""
Storefront Backend — File Serving Route
=========================================

What:  GET /uploads/{key} streams files stored by LocalFileService.
How:   Public keys are served directly. Keys under private/ require the
       `expires` and `signature` query parameters of a presigned URL.

Caching:
    Public files never change after upload (UUID names), so they are
    cacheable for a day. Private files are not cached.
"""

import logging
import mimetypes

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from storefront.exceptions import UnauthorizedError
from storefront.schemas.common import ERROR_RESPONSES
from storefront.schemas.file import GetUploadedFileType
from storefront.services.local_file_service import LocalFileService, get_file_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Files"])


@router.get(
    "/uploads/{key:path}",
    response_class=StreamingResponse,
    responses={401: ERROR_RESPONSES[401], 404: ERROR_RESPONSES[404]},
    summary="Download a stored file",
)
async def serve_file(
    key: str,
    expires: int | None = Query(default=None, description="Presigned URL expiry (unix seconds)"),
    signature: str | None = Query(default=None, description="Presigned URL signature"),
    file_service: LocalFileService = Depends(get_file_service),
) -> StreamingResponse:
    private = file_service.is_private(key)
    if private and not file_service.verify_signature(key, expires, signature):
        logger.info("Rejected unsigned or expired download of a private file")
        raise UnauthorizedError("Invalid or expired download link")

    stream = await file_service.download_as_stream(GetUploadedFileType(key=key))
    media_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
    headers = {"Cache-Control": "private, no-store" if private else "public, max-age=86400"}
    return StreamingResponse(stream, media_type=media_type, headers=headers)
