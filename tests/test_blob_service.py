import asyncio

import httpx
import pytest
from fastapi import HTTPException

from crew_directory.core.errors import BlobStorageError
from crew_directory.services import blob_service


def test_build_blob_url_appends_sas_token():
    assert blob_service.build_blob_url("P000007") == "https://blob.test/container/P000007?sv=2024&sig=abc"


def test_build_blob_url_blank_ids():
    assert blob_service.build_blob_url(None) is None
    assert blob_service.build_blob_url("") is None
    assert blob_service.build_blob_url("   ") is None


def test_generate_fixed_blob_ids():
    assert blob_service.generate_photo_blob_id(123) == "P000123"
    assert blob_service.generate_cv_blob_id(7) == "C000007"
    assert blob_service.generate_equipment_blob_id(1234567) == "E1234567"
    assert blob_service.generate_blob_id("cv", 5) == "C000005"
    assert blob_service.generate_news_blob_id(3) == "N000003"


@pytest.mark.parametrize("bad_id", [0, -3, "7", None, True])
def test_generate_blob_id_rejects_invalid_ids(bad_id):
    with pytest.raises(ValueError):
        blob_service.generate_photo_blob_id(bad_id)


def test_validate_upload_accepts_allowed_file():
    blob_service.validate_upload("image/png", 1024, "image")
    blob_service.validate_upload("application/pdf", 2 * 1024 * 1024, "cv")
    blob_service.validate_upload("application/pdf", 8 * 1024 * 1024, "news-pdf")


@pytest.mark.parametrize("content_type,size,kind", [
    ("image/gif", 100, "image"),
    ("image/png", 3 * 1024 * 1024, "image"),
    ("image/png", 100, "equipment"),
    ("application/pdf", 100, "news"),
])
def test_validate_upload_rejects(content_type, size, kind):
    with pytest.raises(HTTPException) as exc_info:
        blob_service.validate_upload(content_type, size, kind)
    assert exc_info.value.status_code == 400


@pytest.fixture
def mock_blob_api(monkeypatch):
    """Routes every httpx.AsyncClient created by the blob service to a handler."""
    requests = []
    responses = {}
    real_client = httpx.AsyncClient

    def handler(request):
        requests.append(request)
        return responses.get(request.method, httpx.Response(201))

    def client_factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(blob_service.httpx, "AsyncClient", client_factory)
    return requests, responses


def test_upload_blob_puts_block_blob(mock_blob_api):
    requests, _ = mock_blob_api
    url = asyncio.run(blob_service.upload_blob(b"png-bytes", "P000007", "image/png"))

    assert url == "https://blob.test/container/P000007?sv=2024&sig=abc"
    request = requests[0]
    assert request.method == "PUT"
    assert request.headers["x-ms-blob-type"] == "BlockBlob"
    assert request.headers["content-type"] == "image/png"
    assert request.content == b"png-bytes"


def test_upload_blob_raises_on_error_status(mock_blob_api):
    _, responses = mock_blob_api
    responses["PUT"] = httpx.Response(403, text="AuthenticationFailed")
    with pytest.raises(BlobStorageError):
        asyncio.run(blob_service.upload_blob(b"x", "P000007", "image/png"))


def test_delete_blob_treats_missing_blob_as_success(mock_blob_api):
    _, responses = mock_blob_api
    responses["DELETE"] = httpx.Response(404)
    asyncio.run(blob_service.delete_blob("C000007"))


def test_delete_blob_raises_on_server_error(mock_blob_api):
    _, responses = mock_blob_api
    responses["DELETE"] = httpx.Response(500)
    with pytest.raises(BlobStorageError):
        asyncio.run(blob_service.delete_blob("C000007"))


def test_delete_stale_blobs_only_warns_on_failure(mock_blob_api):
    requests, responses = mock_blob_api
    responses["DELETE"] = httpx.Response(500)

    asyncio.run(blob_service.delete_stale_blobs(["C000007", "P000007"]))
    assert [r.url.path for r in requests] == ["/container/C000007", "/container/P000007"]
