"""
Storefront Backend — Local Disk File Service
==============================================

What:  AbstractFileService implementation storing files under
       `settings.storage_root` and serving them through GET /uploads/{key}.
How:   Async I/O with aiofiles; date-organized keys with UUID file names;
       HMAC-signed presigned URLs for private files.
Who:   The application's file service (see get_file_service()).

Directory Structure:
    uploads/
    ├── 2024/01/15/a1b2c3d4….png          public: /uploads/2024/01/15/a1b2….png
    └── private/
        └── 2024/01/15/exports/regions-….csv
                                          private: needs ?expires=…&signature=…

Security Model:
    1. UUID file names:   no user input reaches the file system path
    2. Key resolution:    keys must be canonical (no empty, . or ..
                          segments) and resolve inside the storage root
    3. Size check:        uploads above settings.max_file_size are rejected
    4. Private files:     served only with a valid, unexpired signature
"""

import asyncio
import hashlib
import hmac
import logging
import os
import re
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional, Union
from urllib.parse import quote, urlencode

import aiofiles

from storefront.config import settings
from storefront.exceptions import FileStorageError, NotFoundError, ValidationError
from storefront.schemas.file import (
    FileServiceUploadResult,
    GetUploadedFileType,
    UploadStreamDescriptorType,
)
from storefront.services.file_service import (
    AbstractFileService,
    FileServiceGetUploadStreamResult,
    UploadedFile,
    UploadStream,
)

logger = logging.getLogger(__name__)

PRIVATE_DIR = "private"
PRIVATE_PREFIX = PRIVATE_DIR + "/"
DOWNLOAD_CHUNK_SIZE = 64 * 1024

_SAFE_EXTENSION = re.compile(r"^[a-z0-9]{1,16}$")
_SAFE_NAME = re.compile(r"[^A-Za-z0-9._/-]+")


class LocalUploadStream(UploadStream):
    """
    Streamed write to a file on disk.

    The descriptor's future resolves with the upload result on close() and
    is cancelled by abort().
    """

    def __init__(
        self,
        path: Path,
        handle: Any,
        result: FileServiceUploadResult,
        future: "asyncio.Future[FileServiceUploadResult]",
        max_size: int,
    ):
        self.path = path
        self._handle = handle
        self._result = result
        self._future = future
        self._max_size = max_size
        self._written = 0
        self._closed = False

    async def write(self, data: Union[bytes, str]) -> None:
        if self._closed:
            raise FileStorageError("Upload stream is already closed", context={"key": self._result.key})
        chunk = data.encode("utf-8") if isinstance(data, str) else data
        self._written += len(chunk)
        if self._written > self._max_size:
            await self.abort()
            raise ValidationError(
                f"File size exceeds maximum of {self._max_size} bytes",
                field="file",
                context={"max_size": self._max_size},
            )
        try:
            await self._handle.write(chunk)
        except OSError as e:
            await self.abort()
            raise FileStorageError(context={"key": self._result.key, "os_error": str(e)})

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._handle.close()
        logger.info("Streamed upload stored: %s (%d bytes)", self._result.key, self._written)
        if not self._future.done():
            self._future.set_result(self._result)

    async def abort(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._handle.close()
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        logger.warning("Streamed upload aborted: %s", self._result.key)
        if not self._future.done():
            self._future.cancel()


class LocalFileService(AbstractFileService):
    """
    Stores files on the local file system.

    Lifecycle of an uploaded file:
        1. upload() checks the size and builds a YYYY/MM/DD/<uuid>.<ext> key
        2. Content is written with aiofiles
        3. The public URL is {backend_url}/uploads/{key}
        4. delete() removes the file; missing files are ignored
    """

    def __init__(self, storage_root: Optional[str] = None, backend_url: Optional[str] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
                          If None, uses settings.storage_root.
            backend_url:  Override the base URL of generated links.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.backend_url = (backend_url or settings.backend_url).rstrip("/")
        self.storage_root.mkdir(parents=True, exist_ok=True)
        logger.info("LocalFileService initialized with storage_root=%s", self.storage_root)

    # ── Contract ──────────────────────────────────────────────────────────

    async def upload(self, file: UploadedFile) -> FileServiceUploadResult:
        """
        Store an uploaded file.

        Raises:
            ValidationError: file is larger than settings.max_file_size
            FileStorageError: the file could not be written
        """
        self.validate_size(len(file.content))
        key = self._generate_key(self._extension(file.filename))
        path = self.resolve_key(key)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(file.content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded file. Please try again.",
                context={"key": key, "os_error": str(e)},
            )

        logger.info("File stored: %s (%d bytes)", key, len(file.content))
        return FileServiceUploadResult(url=self.url_for(key), key=key)

    async def delete(self, file_data: Dict[str, Any]) -> None:
        key = file_data.get("file_key")
        if not key:
            raise ValidationError("file_key is required", field="file_key")

        path = self.resolve_key(key)
        try:
            os.remove(path)
            logger.info("File deleted: %s", key)
        except FileNotFoundError:
            logger.debug("Delete: file already gone: %s", key)
        except OSError as e:
            logger.error("Failed to delete file %s: %s", key, str(e))
            raise FileStorageError(context={"key": key, "os_error": str(e)})

    async def get_upload_stream_descriptor(
        self,
        file_data: UploadStreamDescriptorType,
    ) -> FileServiceGetUploadStreamResult:
        """
        Open `<name>-<uuid>.<ext>` for streamed writing.

        `acl="private"` places the file under private/, which is only
        served with a presigned URL.
        """
        name = _SAFE_NAME.sub("-", file_data.name).strip("/.") or "file"
        ext = f".{file_data.ext.lower()}" if file_data.ext and _SAFE_EXTENSION.match(file_data.ext.lower()) else ""
        key = f"{name}-{uuid.uuid4().hex}{ext}"
        if file_data.acl == "private":
            key = PRIVATE_PREFIX + key
        path = self.resolve_key(key)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = await aiofiles.open(path, "wb")
        except OSError as e:
            raise FileStorageError(context={"key": key, "os_error": str(e)})

        url = self.url_for(key)
        future: "asyncio.Future[FileServiceUploadResult]" = asyncio.get_running_loop().create_future()
        stream = LocalUploadStream(
            path=path,
            handle=handle,
            result=FileServiceUploadResult(url=url, key=key),
            future=future,
            max_size=settings.max_file_size,
        )
        return FileServiceGetUploadStreamResult(
            write_stream=stream,
            promise=future,
            url=url,
            file_key=key,
        )

    async def download_as_stream(self, file_data: GetUploadedFileType) -> AsyncIterator[bytes]:
        path = self.resolve_key(file_data.key)
        if not path.is_file():
            raise NotFoundError(resource="File", resource_id=file_data.key)
        return self._iter_file(path)

    async def get_presigned_download_url(self, file_data: GetUploadedFileType) -> str:
        path = self.resolve_key(file_data.key)
        if not path.is_file():
            raise NotFoundError(resource="File", resource_id=file_data.key)

        expires = int(time.time()) + settings.presigned_url_ttl
        query = urlencode({"expires": expires, "signature": self.sign(file_data.key, expires)})
        return f"{self.url_for(file_data.key)}?{query}"

    # ── Helpers ───────────────────────────────────────────────────────────

    def validate_size(self, actual_size: int) -> None:
        if actual_size > settings.max_file_size:
            max_mb = settings.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=f"File size ({actual_size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="files",
                context={"max_size": settings.max_file_size, "actual_size": actual_size},
            )

    def resolve_key(self, key: str) -> Path:
        """
        Map a storage key to an absolute path inside the storage root.

        Raises:
            ValidationError: the key is not in canonical form or escapes the
                             storage root
        """
        # "a/./b" and "a//b" would name the same file under a second key
        if any(segment in ("", ".", "..") for segment in key.split("/")):
            raise ValidationError("Invalid file key", field="file_key", context={"key": key})
        path = (self.storage_root / key).resolve()
        if path == self.storage_root or self.storage_root not in path.parents:
            raise ValidationError("Invalid file key", field="file_key", context={"key": key})
        return path

    def url_for(self, key: str) -> str:
        return f"{self.backend_url}/uploads/{quote(key)}"

    def sign(self, key: str, expires: int) -> str:
        message = f"{key}:{expires}".encode("utf-8")
        return hmac.new(settings.jwt_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()

    def verify_signature(self, key: str, expires: Optional[int], signature: Optional[str]) -> bool:
        """True when `signature` matches `key` and `expires` is in the future."""
        if expires is None or not signature:
            return False
        if expires < int(time.time()):
            return False
        return hmac.compare_digest(self.sign(key, expires), signature)

    def is_private(self, key: str) -> bool:
        """True when `key` names a file under private/ once resolved."""
        relative = self.resolve_key(key).relative_to(self.storage_root)
        return relative.parts[0] == PRIVATE_DIR

    def _generate_key(self, extension: str) -> str:
        date_dir = datetime.now(timezone.utc).strftime("%Y/%m/%d")
        return f"{date_dir}/{uuid.uuid4()}{extension}"

    @staticmethod
    def _extension(filename: str) -> str:
        ext = Path(filename or "").suffix.lower().lstrip(".")
        return f".{ext}" if _SAFE_EXTENSION.match(ext) else ""

    @staticmethod
    async def _iter_file(path: Path) -> AsyncIterator[bytes]:
        async with aiofiles.open(path, "rb") as f:
            while True:
                chunk = await f.read(DOWNLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = LocalFileService()


def get_file_service() -> AbstractFileService:
    """FastAPI dependency returning the configured file service."""
    return file_service
