import pytest

from crew_directory.services import blob_service


@pytest.fixture
def deleted_blobs(monkeypatch):
    deleted = []

    async def fake_delete(blob_id):
        deleted.append(blob_id)

    monkeypatch.setattr(blob_service, "delete_blob", fake_delete)
    return deleted


def news_by_id(client):
    return {item["id"]: item for item in client.get("/news").json()["data"]}


# --- public list ---

def test_public_news_list(client):
    response = client.get("/news")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 3
    assert body["data"][0] == {
        "id": 1,
        "title": "Drama Production Graph",
        "pdfUrl": "https://blob.test/container/N000001?sv=2024&sig=abc",
        "pdfFileName": "drama-graph.pdf",
        "blobId": "N000001",
    }
    # only stored documents of the news type are joined
    assert body["data"][1]["pdfFileName"] == "tvc-report.pdf"
    assert body["data"][2]["pdfUrl"] is None
    assert body["data"][2]["pdfFileName"] is None


# --- admin access ---

def test_admin_routes_require_admin(client, auth_headers):
    assert client.get("/admin/news").status_code == 401

    member = client.get("/admin/news", headers=auth_headers(9, "anna-berg"))
    assert member.status_code == 403
    assert member.json() == {"success": False, "error": "Admin access required"}


def test_admin_list_shows_document_details(client, auth_headers):
    response = client.get("/admin/news", headers=auth_headers())

    assert response.status_code == 200
    items = {item["id"]: item for item in response.json()["data"]}
    assert items[1]["storedDocumentId"] == 1
    assert items[1]["publishDate"].startswith("2024-05-01")
    assert items[3]["pdfFileName"] == "No file"
    assert items[3]["storedDocumentId"] is None


# --- create / update / delete ---

def test_create_news_item(client, auth_headers):
    client.get("/news")

    response = client.post("/admin/news", headers=auth_headers(), json={"title": " Crew Survey "})
    assert response.status_code == 201
    created = response.json()["data"]
    assert created["title"] == "Crew Survey"
    assert created["pdfFileName"] == "No file"

    assert news_by_id(client)[created["id"]]["title"] == "Crew Survey"


def test_create_news_requires_title(client, auth_headers):
    response = client.post("/admin/news", headers=auth_headers(), json={"title": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "Title is required"


def test_rename_invalidates_public_list(client, auth_headers):
    assert news_by_id(client)[3]["title"] == "Crew News"

    response = client.patch("/admin/news/3", headers=auth_headers(), json={"title": "Crew News March"})
    assert response.status_code == 200
    assert response.json()["updatedFields"] == {"title": True, "file": False, "blobId": None}

    assert news_by_id(client)[3]["title"] == "Crew News March"


def test_update_rejects_blank_title_and_unknown_item(client, auth_headers):
    assert client.patch("/admin/news/1", headers=auth_headers(), json={"title": ""}).status_code == 400
    assert client.patch("/admin/news/999", headers=auth_headers(), json={"title": "x"}).status_code == 404


def test_reupload_to_same_blob_keeps_file(client, auth_headers, deleted_blobs):
    response = client.patch(
        "/admin/news/1",
        headers=auth_headers(),
        json={"newBlobId": "N000001", "fileName": "drama-graph-june.pdf"},
    )
    assert response.json()["updatedFields"]["file"] is True

    item = news_by_id(client)[1]
    assert item["title"] == "Drama Production Graph"
    assert item["pdfFileName"] == "drama-graph-june.pdf"
    assert deleted_blobs == []


def test_new_blob_replaces_old_pdf(client, auth_headers, deleted_blobs):
    response = client.patch(
        "/admin/news/2",
        headers=auth_headers(),
        json={"title": "TVC Report Q2", "newBlobId": "N000099", "fileName": "tvc-q2.pdf"},
    )
    assert response.json()["updatedFields"] == {"title": True, "file": True, "blobId": "N000099"}

    item = news_by_id(client)[2]
    assert item["blobId"] == "N000099"
    assert item["pdfFileName"] == "tvc-q2.pdf"
    assert deleted_blobs == ["N000002"]


def test_first_pdf_for_item_creates_document_info(client, auth_headers, deleted_blobs):
    client.patch(
        "/admin/news/3",
        headers=auth_headers(),
        json={"newBlobId": "N000003", "fileName": "crew-news.pdf"},
    )

    item = news_by_id(client)[3]
    assert item["pdfUrl"] == "https://blob.test/container/N000003?sv=2024&sig=abc"
    assert item["pdfFileName"] == "crew-news.pdf"
    assert deleted_blobs == []


def test_delete_news_item_removes_pdf(client, auth_headers, deleted_blobs):
    client.get("/news")

    response = client.delete("/admin/news/1", headers=auth_headers())
    assert response.status_code == 200
    assert response.json()["message"] == "News item deleted successfully"
    assert deleted_blobs == ["N000001"]
    assert 1 not in news_by_id(client)

    assert client.delete("/admin/news/1", headers=auth_headers()).status_code == 404


def test_blob_failure_does_not_fail_delete(client, auth_headers, monkeypatch):
    async def failing_delete(blob_id):
        raise blob_service.BlobStorageError("Blob deletion failed: 500", 500)

    monkeypatch.setattr(blob_service, "delete_blob", failing_delete)

    response = client.delete("/admin/news/2", headers=auth_headers())
    assert response.status_code == 200
    assert 2 not in news_by_id(client)


# --- PDF upload ---

def test_upload_news_pdf_uses_fixed_blob_id(client, auth_headers, monkeypatch):
    uploaded = {}

    async def fake_upload(data, blob_id, content_type):
        uploaded.update(blob_id=blob_id, content_type=content_type)
        return f"https://blob.test/container/{blob_id}"

    monkeypatch.setattr(blob_service, "upload_blob", fake_upload)

    response = client.post(
        "/admin/news/2/upload",
        headers=auth_headers(),
        files={"file": ("report.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert response.status_code == 200
    assert response.json()["blobId"] == "N000002"
    assert uploaded == {"blob_id": "N000002", "content_type": "application/pdf"}


def test_upload_news_pdf_rejects_other_types(client, auth_headers):
    response = client.post(
        "/admin/news/2/upload",
        headers=auth_headers(),
        files={"file": ("report.png", b"png", "image/png")},
    )
    assert response.status_code == 400
