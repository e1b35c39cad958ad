"""
Storefront Backend — File Service Unit Tests
==============================================

What:  Tests for LocalFileService (upload, delete, streams, presigned URLs).
How:   Each test gets a service rooted in a temporary directory.

Test Strategy:
    - upload(): date-organized keys, public URL, size limit
    - delete(): removes the file, ignores missing files, rejects traversal
    - get_upload_stream_descriptor(): streamed write, private ACL, abort
    - download_as_stream() / get_presigned_download_url()
    - is_file_service() contract check
"""

import asyncio
from pathlib import Path
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest

from storefront.config import settings
from storefront.exceptions import NotFoundError, ValidationError
from storefront.schemas.file import GetUploadedFileType, UploadStreamDescriptorType
from storefront.services.file_service import UploadedFile, is_file_service
from storefront.services.local_file_service import LocalFileService


@pytest.fixture
def service(temp_storage):
    return LocalFileService(storage_root=temp_storage, backend_url="http://files.test/")


async def read_all(stream):
    chunks = []
    async for chunk in stream:
        chunks.append(chunk)
    return b"".join(chunks)


class TestUpload:
    """upload() and delete()."""

    @pytest.mark.asyncio
    async def test_upload_stores_file(self, service, temp_storage):
        result = await service.upload(
            UploadedFile(filename="Photo.PNG", content=b"png-bytes", content_type="image/png")
        )

        assert result.key.endswith(".png")
        assert result.key.count("/") == 3  # YYYY/MM/DD/<uuid>.png
        assert result.url == f"http://files.test/uploads/{result.key}"
        assert (Path(temp_storage) / result.key).read_bytes() == b"png-bytes"

    @pytest.mark.asyncio
    async def test_upload_without_extension(self, service):
        result = await service.upload(UploadedFile(filename="README", content=b"text"))
        assert "." not in result.key.rsplit("/", 1)[-1]

    @pytest.mark.asyncio
    async def test_upload_over_size_limit(self, service):
        with patch.object(settings, "max_file_size", 4):
            with pytest.raises(ValidationError, match="exceeds maximum"):
                await service.upload(UploadedFile(filename="big.bin", content=b"12345"))

    @pytest.mark.asyncio
    async def test_delete_removes_file(self, service, temp_storage):
        result = await service.upload(UploadedFile(filename="a.txt", content=b"a"))

        await service.delete({"file_key": result.key})

        assert not (Path(temp_storage) / result.key).exists()

    @pytest.mark.asyncio
    async def test_delete_missing_file(self, service):
        """Deleting a file that is already gone should not raise."""
        await service.delete({"file_key": "2024/01/01/missing.txt"})

    @pytest.mark.asyncio
    async def test_delete_requires_key(self, service):
        with pytest.raises(ValidationError, match="file_key"):
            await service.delete({})

    @pytest.mark.asyncio
    async def test_path_traversal_rejected(self, service):
        with pytest.raises(ValidationError, match="Invalid file key"):
            await service.delete({"file_key": "../outside.txt"})

    @pytest.mark.parametrize("key", ["./private/a.csv", "x/../private/a.csv", "private//a.csv", ""])
    def test_non_canonical_keys_rejected(self, service, key):
        with pytest.raises(ValidationError, match="Invalid file key"):
            service.is_private(key)


class TestUploadStream:
    """get_upload_stream_descriptor()."""

    @pytest.mark.asyncio
    async def test_streamed_write(self, service, temp_storage):
        upload = await service.get_upload_stream_descriptor(
            UploadStreamDescriptorType(name="exports/report", ext="csv")
        )

        await upload.write_stream.write("id,name\n")
        await upload.write_stream.write(b"1,Nordics\n")
        await upload.write_stream.close()
        stored = await upload.promise

        assert stored.key == upload.file_key
        assert upload.file_key.startswith("exports/report-")
        assert upload.file_key.endswith(".csv")
        assert (Path(temp_storage) / stored.key).read_text() == "id,name\n1,Nordics\n"

    @pytest.mark.asyncio
    async def test_private_acl(self, service):
        upload = await service.get_upload_stream_descriptor(
            UploadStreamDescriptorType(name="exports/secret", ext="csv", acl="private")
        )
        await upload.write_stream.close()

        assert upload.file_key.startswith("private/")
        assert service.is_private(upload.file_key)

    @pytest.mark.asyncio
    async def test_abort_removes_partial_file(self, service, temp_storage):
        upload = await service.get_upload_stream_descriptor(
            UploadStreamDescriptorType(name="partial", ext="txt")
        )
        await upload.write_stream.write(b"half")

        await upload.write_stream.abort()

        assert not (Path(temp_storage) / upload.file_key).exists()
        with pytest.raises(asyncio.CancelledError):
            await upload.promise

    @pytest.mark.asyncio
    async def test_stream_size_limit(self, service, temp_storage):
        upload = await service.get_upload_stream_descriptor(
            UploadStreamDescriptorType(name="big", ext="bin")
        )
        with patch.object(upload.write_stream, "_max_size", 4):
            with pytest.raises(ValidationError):
                await upload.write_stream.write(b"12345")

        assert not (Path(temp_storage) / upload.file_key).exists()


class TestDownload:
    """download_as_stream() and presigned URLs."""

    @pytest.mark.asyncio
    async def test_download_as_stream(self, service):
        result = await service.upload(UploadedFile(filename="a.txt", content=b"hello"))

        stream = await service.download_as_stream(GetUploadedFileType(key=result.key))

        assert await read_all(stream) == b"hello"

    @pytest.mark.asyncio
    async def test_download_missing_file(self, service):
        with pytest.raises(NotFoundError):
            await service.download_as_stream(GetUploadedFileType(key="2024/01/01/nope.txt"))

    @pytest.mark.asyncio
    async def test_presigned_url_signature(self, service):
        result = await service.upload(UploadedFile(filename="a.txt", content=b"hello"))

        url = await service.get_presigned_download_url(GetUploadedFileType(key=result.key))

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        expires = int(params["expires"][0])
        signature = params["signature"][0]
        assert parsed.path == f"/uploads/{result.key}"
        assert service.verify_signature(result.key, expires, signature)
        assert not service.verify_signature("other/key.txt", expires, signature)
        assert not service.verify_signature(result.key, expires - 10_000, signature)
        assert not service.verify_signature(result.key, None, None)

    def test_is_file_service(self, service):
        assert is_file_service(service)
        assert not is_file_service(object())
