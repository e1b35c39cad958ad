"""
Storefront Backend — File Service Interface
=============================================

What:  The contract every file storage backend implements.
Why:   Routes and the export service depend only on this interface, so the
       local-disk backend can be replaced by an object store without
       touching them.
Who:   Implemented by LocalFileService; consumed by /admin/uploads,
       /uploads and ExportService.

Operations:
    upload(file)                          whole file in one call → {url, key}
    delete(file_data)                     remove by file_data["file_key"]
    get_upload_stream_descriptor(desc)    open a streamed upload; returns
                                          the writable stream, a future that
                                          resolves when it closes, the URL
                                          and the key
    download_as_stream(file_data)         async iterator of byte chunks
    get_presigned_download_url(file_data) time-limited URL to the file
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional, Union

from storefront.schemas.file import (
    FileServiceUploadResult,
    GetUploadedFileType,
    UploadStreamDescriptorType,
)


@dataclass
class UploadedFile:
    """A file received from a client, fully read into memory."""

    filename: str
    content: bytes
    content_type: Optional[str] = None


class UploadStream(ABC):
    """Writable side of a streamed upload."""

    @abstractmethod
    async def write(self, data: Union[bytes, str]) -> None:
        """Append a chunk; str chunks are UTF-8 encoded."""

    @abstractmethod
    async def close(self) -> None:
        """Finish the upload and resolve the descriptor's future."""

    @abstractmethod
    async def abort(self) -> None:
        """Discard everything written so far."""


@dataclass
class FileServiceGetUploadStreamResult:
    write_stream: UploadStream
    promise: "asyncio.Future[FileServiceUploadResult]"
    url: str
    file_key: str


class AbstractFileService(ABC):
    """Base class for file storage backends."""

    @abstractmethod
    async def upload(self, file: UploadedFile) -> FileServiceUploadResult:
        """Store `file` and return where it can be fetched."""

    @abstractmethod
    async def delete(self, file_data: Dict[str, Any]) -> None:
        """
        Delete the file identified by `file_data["file_key"]`.

        Deleting a key that does not exist is not an error.
        """

    @abstractmethod
    async def get_upload_stream_descriptor(
        self,
        file_data: UploadStreamDescriptorType,
    ) -> FileServiceGetUploadStreamResult:
        """Open a streamed upload for a file named by `file_data`."""

    @abstractmethod
    async def download_as_stream(self, file_data: GetUploadedFileType) -> AsyncIterator[bytes]:
        """
        Return an async iterator over the file's bytes.

        Raises:
            NotFoundError: no file is stored under the key
        """

    @abstractmethod
    async def get_presigned_download_url(self, file_data: GetUploadedFileType) -> str:
        """Return a URL that grants temporary read access to the file."""


def is_file_service(obj: Any) -> bool:
    """True when `obj` is a file service implementation."""
    return isinstance(obj, AbstractFileService)
