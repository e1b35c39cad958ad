"""
Storefront Backend — Admin Upload Routes
==========================================

What:  Upload, delete and link files through the configured file service.
    POST   /admin/uploads               multipart "files" → {uploads: [{url, key}]}
    DELETE /admin/uploads               {file_key} → {id, object: "file", deleted}
    POST   /admin/uploads/download-url  {file_key} → {download_url}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile

from storefront.schemas.common import ERROR_RESPONSES, DeleteResponse
from storefront.schemas.file import (
    AdminDeleteUploadsReq,
    AdminPostUploadsDownloadUrlReq,
    DownloadUrlResponse,
    GetUploadedFileType,
    UploadsResponse,
)
from storefront.services.file_service import AbstractFileService, UploadedFile
from storefront.services.local_file_service import get_file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["Admin Uploads"])


@router.post(
    "",
    response_model=UploadsResponse,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="Upload files",
)
async def upload_files(
    files: List[UploadFile] = File(..., description="Files to upload"),
    file_service: AbstractFileService = Depends(get_file_service),
) -> UploadsResponse:
    results = []
    for upload in files:
        content = await upload.read()
        results.append(
            await file_service.upload(
                UploadedFile(
                    filename=upload.filename or "",
                    content=content,
                    content_type=upload.content_type,
                )
            )
        )
    logger.info("Uploaded %d file(s)", len(results))
    return UploadsResponse(uploads=results)


@router.delete("", response_model=DeleteResponse, summary="Delete an uploaded file")
async def delete_upload(
    body: AdminDeleteUploadsReq,
    file_service: AbstractFileService = Depends(get_file_service),
) -> DeleteResponse:
    await file_service.delete({"file_key": body.file_key})
    return DeleteResponse(id=body.file_key, object="file", deleted=True)


@router.post(
    "/download-url",
    response_model=DownloadUrlResponse,
    responses={404: ERROR_RESPONSES[404]},
    summary="Get a presigned download URL",
)
async def get_download_url(
    body: AdminPostUploadsDownloadUrlReq,
    file_service: AbstractFileService = Depends(get_file_service),
) -> DownloadUrlResponse:
    url = await file_service.get_presigned_download_url(GetUploadedFileType(key=body.file_key))
    return DownloadUrlResponse(download_url=url)
