"""Tests for the MinIO-backed document storage adapter."""

import io
import struct
import zlib
from unittest.mock import MagicMock

import pytest
from minio.error import MinioException
from PIL import Image

from petrohr.api.deps import get_document_storage
from petrohr.exceptions import StorageError
from petrohr.main import app
from petrohr.services.storage_service import DocumentStorage


def _png(width=5, height=7) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height)).save(buf, format="PNG")
    return buf.getvalue()


def _png_header(width: int, height: int) -> bytes:
    """A tiny PNG that only declares its size; no real pixel data."""

    def chunk(tag: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(tag + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


def _provider_error() -> MinioException:
    return MinioException("Access Denied.")


@pytest.fixture()
def minio_client():
    client = MagicMock()
    client.bucket_exists.return_value = True
    return client


@pytest.fixture()
def store(minio_client):
    return DocumentStorage(minio_client, "docs", "http://files.test/docs/")


class TestUpload:

    def test_pdf_is_raw_with_timestamped_name(self, store, minio_client):
        result = store.upload(b"%PDF-1.4", "application/pdf", "contract.pdf", "employees/e1/folders/f1")

        assert result.resource_type == "raw"
        assert result.format == "pdf"
        assert result.public_id.startswith("employees/e1/folders/f1/")
        assert result.public_id.endswith("-contract.pdf")
        assert result.url == f"http://files.test/docs/{result.public_id}"
        assert result.width is None and result.height is None
        kwargs = minio_client.put_object.call_args.kwargs
        assert kwargs["bucket_name"] == "docs"
        assert kwargs["content_type"] == "application/pdf"
        assert kwargs["length"] == 8

    def test_image_dimensions(self, store):
        content = _png(5, 7)
        result = store.upload(content, "image/png", "scan.png", "employees/profile-images")

        assert result.resource_type == "image"
        assert result.format == "png"
        assert (result.width, result.height) == (5, 7)
        assert result.size == len(content)
        assert result.public_id.startswith("employees/profile-images/scan_")
        assert result.public_id.endswith(".png")

    def test_office_document_is_raw(self, store):
        result = store.upload(
            b"PK\x03\x04 not really",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "letter.docx",
            "employees/e1/documents",
        )
        assert result.resource_type == "raw"
        assert result.format == "docx"
        assert result.width is None

    def test_same_file_twice_gets_distinct_names(self, store):
        a = store.upload(_png(), "image/png", "scan.png", "x")
        b = store.upload(_png(), "image/png", "scan.png", "x")
        assert a.public_id != b.public_id

    def test_bucket_created_once(self, minio_client, store):
        minio_client.bucket_exists.return_value = False
        store.upload(b"%PDF", "application/pdf", "a.pdf", "x")
        store.upload(b"%PDF", "application/pdf", "b.pdf", "x")
        minio_client.make_bucket.assert_called_once_with("docs")

    def test_provider_error_becomes_storage_error(self, store, minio_client):
        minio_client.put_object.side_effect = _provider_error()
        with pytest.raises(StorageError) as exc_info:
            store.upload(b"%PDF", "application/pdf", "a.pdf", "x")
        assert exc_info.value.status_code == 502
        assert "Access Denied" in exc_info.value.message


class TestDestroy:

    def test_removes_object(self, store, minio_client):
        store.destroy("employees/e1/a.pdf")
        minio_client.remove_object.assert_called_once_with("docs", "employees/e1/a.pdf")

    def test_error_is_raised(self, store, minio_client):
        minio_client.remove_object.side_effect = _provider_error()
        with pytest.raises(StorageError) as exc_info:
            store.destroy("employees/e1/a.pdf")
        assert exc_info.value.details == {"public_id": "employees/e1/a.pdf"}


class TestOversizedImages:

    def test_huge_declared_size_is_stored_raw(self, store, minio_client):
        content = _png_header(20000, 20000)

        result = store.upload(content, "image/png", "scan.png", "employees/e1/folders/f1")

        assert result.resource_type == "raw"
        assert result.format == "png"
        assert result.width is None and result.height is None
        minio_client.put_object.assert_called_once()

    def test_upload_route_accepts_huge_scan(self, client, employee, store):
        app.dependency_overrides[get_document_storage] = lambda: store
        base = f"/api/employees/{employee['id']}/folders"
        folder = client.post(base, json={"name": "Scans"}).json()

        resp = client.post(
            f"{base}/{folder['id']}/documents",
            files={"file": ("scan.png", _png_header(20000, 20000), "image/png")},
        )

        assert resp.status_code == 201, resp.text
        assert resp.json()["document"]["resourceType"] == "raw"
