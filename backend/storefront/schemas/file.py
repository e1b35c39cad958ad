"""
Storefront Backend — File Service Types and Upload Schemas
============================================================

What:  Value types of the file service contract plus the /admin/uploads
       request and response bodies.

The descriptor types accept extra keys: concrete file services may need
backend-specific hints (bucket, content type, …) that the contract does not
enumerate.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.common import RequestModel


class FileServiceUploadResult(BaseModel):
    url: str = Field(description="URL the file can be fetched from")
    key: str = Field(description="Storage key used to delete or download the file")


class UploadStreamDescriptorType(BaseModel):
    """What a file service needs to open a streamed upload."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(description="Base name of the file to create")
    ext: Optional[str] = Field(default=None, description="Extension without the dot, e.g. 'csv'")
    acl: Optional[str] = Field(default=None, description="'private' keeps the file off public URLs")


class GetUploadedFileType(BaseModel):
    """Identifies a stored file for download operations."""

    model_config = ConfigDict(extra="allow")

    key: str


class UploadsResponse(BaseModel):
    uploads: List[FileServiceUploadResult]


class AdminDeleteUploadsReq(RequestModel):
    file_key: str = Field(min_length=1, description="Key of the file to delete")


class AdminPostUploadsDownloadUrlReq(RequestModel):
    file_key: str = Field(min_length=1, description="Key of the file to obtain a download URL for")


class DownloadUrlResponse(BaseModel):
    download_url: str


class ExportResponse(BaseModel):
    file_key: str
    download_url: str
