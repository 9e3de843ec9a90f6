import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from fastapi.testclient import TestClient

from main import app
from app.api.routes import deps
from app.schemas.ingestion_schema import Plan
from app.services.content_probe_service import HttpContentProbe, ProbeHeaders

HEADERS = {"X-User-Email": "Test@Example.com"}
PDF = ("files", ("report.pdf", b"%PDF-1.4 data", "application/pdf"))


@pytest.fixture
def registry():
    registry = MagicMock()
    registry.count = AsyncMock(return_value=0)
    registry.list = AsyncMock(return_value=[])
    registry.register_by_link = AsyncMock(return_value="doc-link")
    return registry


@pytest.fixture
def storage():
    storage = MagicMock()
    storage.upload = AsyncMock(return_value={"uploaded": True, "document_id": "doc-file"})
    return storage


@pytest.fixture
def plan():
    return {"value": Plan.PRO}


@pytest.fixture(autouse=True)
def overrides(registry, storage, plan):
    app.dependency_overrides = {}
    app.dependency_overrides[deps.get_registry] = lambda: registry
    app.dependency_overrides[deps.get_storage] = lambda: storage
    app.dependency_overrides[deps.get_current_plan] = lambda: plan["value"]
    yield
    app.dependency_overrides = {}


client = TestClient(app)


def test_upload_file_success(storage):
    response = client.post("/documents/ingest", files=[PDF], headers=HEADERS)
    assert response.status_code == 201
    assert response.json() == {
        "status": "success", "title": "report.pdf", "source_kind": "uploaded_file", "document_id": "doc-file",
    }
    args, kwargs = storage.upload.await_args
    assert args[0] == "test@example.com"
    assert args[1][0].filename == "report.pdf"


def test_missing_identity_header():
    response = client.post("/documents/ingest", files=[PDF])
    assert response.status_code == 401


def test_quota_exceeded_returns_upgrade_path(registry, storage, plan):
    plan["value"] = Plan.FREE
    registry.count.return_value = 1
    response = client.post("/documents/ingest", files=[PDF], headers=HEADERS)
    assert response.status_code == 403
    body = response.json()
    assert body["reason"] == "quota_exceeded"
    assert body["upgrade_required"] is True
    storage.upload.assert_not_called()


def test_no_source_is_invalid_combination():
    response = client.post("/documents/ingest", data={"url": ""}, headers=HEADERS)
    assert response.status_code == 400
    assert response.json()["reason"] == "invalid_combination"


def test_file_and_url_is_invalid_combination(storage):
    response = client.post(
        "/documents/ingest", files=[PDF], data={"url": "https://example.com/doc.pdf"}, headers=HEADERS
    )
    assert response.status_code == 400
    assert response.json()["reason"] == "invalid_combination"
    storage.upload.assert_not_called()


def test_multiple_files_rejected(storage):
    files = [PDF, ("files", ("second.pdf", b"%PDF", "application/pdf"))]
    response = client.post("/documents/ingest", files=files, headers=HEADERS)
    assert response.status_code == 400
    assert "Please upload a single file." in str(response.json())
    storage.upload.assert_not_called()


def test_non_pdf_file_rejected():
    files = [("files", ("notes.txt", b"text", "text/plain"))]
    response = client.post("/documents/ingest", files=files, headers=HEADERS)
    assert response.status_code == 400
    assert "Only PDF files are allowed." in str(response.json())


def test_quota_checked_before_file_type(registry, storage, plan):
    plan["value"] = Plan.FREE
    registry.count.return_value = 1
    files = [("files", ("notes.txt", b"text", "text/plain"))]
    response = client.post("/documents/ingest", files=files, headers=HEADERS)
    assert response.status_code == 403
    body = response.json()
    assert body["reason"] == "quota_exceeded"
    assert body["upgrade_required"] is True
    storage.upload.assert_not_called()


def test_quota_checked_before_file_count(registry, storage, plan):
    plan["value"] = Plan.FREE
    registry.count.return_value = 1
    files = [PDF, ("files", ("second.pdf", b"%PDF", "application/pdf"))]
    response = client.post("/documents/ingest", files=files, headers=HEADERS)
    assert response.status_code == 403
    assert response.json()["reason"] == "quota_exceeded"
    storage.upload.assert_not_called()


def test_upload_failure_maps_to_bad_gateway(storage):
    storage.upload.side_effect = Exception("S3 down")
    response = client.post("/documents/ingest", files=[PDF], headers=HEADERS)
    assert response.status_code == 502
    assert response.json()["reason"] == "upload_failed"


def test_url_ingest_success(registry):
    probe = AsyncMock(return_value=ProbeHeaders(content_type="application/pdf"))
    with patch.object(HttpContentProbe, "fetch_headers", new=probe):
        response = client.post("/documents/ingest", data={"url": "https://example.com/doc.pdf"}, headers=HEADERS)
    assert response.status_code == 201
    assert response.json()["title"] == "doc.pdf"
    assert response.json()["source_kind"] == "remote_link"
    registry.register_by_link.assert_awaited_once_with("test@example.com", "doc.pdf", "https://example.com/doc.pdf")


def test_url_not_pdf():
    probe = AsyncMock(return_value=ProbeHeaders(content_type="text/html"))
    with patch.object(HttpContentProbe, "fetch_headers", new=probe):
        response = client.post("/documents/ingest", data={"url": "https://example.com/page"}, headers=HEADERS)
    assert response.status_code == 422
    assert response.json()["message"] == "URL is not a PDF"


def test_invalid_url_syntax():
    probe = AsyncMock()
    with patch.object(HttpContentProbe, "fetch_headers", new=probe):
        response = client.post("/documents/ingest", data={"url": "not-a-url"}, headers=HEADERS)
    assert response.status_code == 400
    assert response.json()["reason"] == "invalid_url_syntax"
    probe.assert_not_called()


def test_registration_failure(registry):
    registry.register_by_link.side_effect = Exception("mongo down")
    probe = AsyncMock(return_value=ProbeHeaders(content_type="application/pdf"))
    with patch.object(HttpContentProbe, "fetch_headers", new=probe):
        response = client.post("/documents/ingest", data={"url": "https://example.com/doc.pdf"}, headers=HEADERS)
    assert response.status_code == 502
    assert response.json()["reason"] == "registration_failed"


def test_get_plan_limits():
    response = client.get("/plans/free/limits")
    assert response.status_code == 200
    body = response.json()
    assert body["max_document_count"] == 1
    assert body["max_file_size_bytes"] == 7 * 1024 * 1024


def test_get_plan_limits_unknown_plan():
    response = client.get("/plans/gold/limits")
    assert response.status_code == 404


def test_get_quota(registry, plan):
    plan["value"] = Plan.FREE
    registry.count.return_value = 1
    response = client.get("/documents/quota", headers=HEADERS)
    assert response.status_code == 200
    body = response.json()
    assert body["plan"] == "FREE"
    assert body["current_document_count"] == 1
    assert body["remaining_documents"] == 0


def test_get_quota_unbounded(registry):
    registry.count.return_value = 40
    response = client.get("/documents/quota", headers=HEADERS)
    assert response.json()["remaining_documents"] is None


def test_list_documents(registry):
    registry.list.return_value = [
        {"document_id": "d1", "title": "doc.pdf", "source_kind": "remote_link", "url": "https://example.com/doc.pdf"},
        {"document_id": "d2", "title": "a.pdf", "source_kind": "uploaded_file", "url": None},
    ]
    response = client.get("/documents", headers=HEADERS)
    assert response.status_code == 200
    assert [doc["document_id"] for doc in response.json()] == ["d1", "d2"]
    registry.list.assert_awaited_once_with("test@example.com")
