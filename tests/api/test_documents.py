"""API tests for /documents: upload, read, transitions, history, deletion."""

import io

import pytest
from fastapi import UploadFile
from httpx import AsyncClient

from casework.api.v1.endpoints.documents import UPLOAD_CHUNK_SIZE, _read_bounded
from casework.core.config import get_settings
from casework.domain.exceptions import ValidationException

CLIENT = {"X-Actor-Id": "client-1", "X-Actor-Role": "CLIENT"}
OTHER_CLIENT = {"X-Actor-Id": "client-2", "X-Actor-Role": "CLIENT"}
STAFF = {"X-Actor-Id": "staff-1", "X-Actor-Role": "STAFF"}


async def _upload(client: AsyncClient, document_type: str = "birth_certificate", **data) -> dict:
    response = await client.post(
        "/api/v1/documents",
        headers=CLIENT,
        data={"owner_id": "client-1", "document_type": document_type, **data},
        files={"file": ("scan.pdf", b"%PDF-1.7 scan", "application/pdf")},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_upload_returns_document_with_stage(client: AsyncClient) -> None:
    body = await _upload(client, parent_case_id="case-1")
    assert body["status"] == "ANALYZING"
    assert body["stage"] == "ANALYZING"
    assert body["ownerId"] == "client-1"
    assert body["parentCaseId"] == "case-1"
    assert body["requiredCertifications"] == ["APOSTILLE", "TRANSLATION"]
    assert body["isApostilled"] is False
    assert body["originalFilename"] == "scan.pdf"
    assert body["publicUrl"].startswith("/files/")


async def test_missing_actor_headers(client: AsyncClient) -> None:
    response = await client.get("/api/v1/documents", params={"owner_id": "client-1"})
    assert response.status_code == 400
    assert response.json()["errorKind"] == "VALIDATION_ERROR"


async def test_unknown_role(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/documents",
        params={"owner_id": "client-1"},
        headers={"X-Actor-Id": "x", "X-Actor-Role": "ADMIN"},
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "X-Actor-Role"}


async def test_get_and_list(client: AsyncClient) -> None:
    doc = await _upload(client)
    response = await client.get(f"/api/v1/documents/{doc['id']}", headers=STAFF)
    assert response.status_code == 200
    assert response.json()["id"] == doc["id"]

    listed = await client.get("/api/v1/documents", params={"owner_id": "client-1"}, headers=CLIENT)
    assert [d["id"] for d in listed.json()] == [doc["id"]]

    foreign = await client.get(f"/api/v1/documents/{doc['id']}", headers=OTHER_CLIENT)
    assert foreign.status_code == 403
    assert foreign.json()["errorKind"] == "FORBIDDEN"


async def test_not_found_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/v1/documents/nope", headers=STAFF)
    assert response.status_code == 404
    body = response.json()
    assert body["errorKind"] == "NOT_FOUND"
    assert body["details"]["resource_id"] == "nope"


async def test_staff_approval_moves_to_waiting_apostille(client: AsyncClient) -> None:
    doc = await _upload(client)
    response = await client.post(
        f"/api/v1/documents/{doc['id']}/status",
        headers=STAFF,
        json={"toStatus": "APPROVED", "note": "looks good"},
    )
    assert response.status_code == 200
    assert response.json()["stage"] == "WAITING_APOSTILLE"

    history = await client.get(f"/api/v1/documents/{doc['id']}/history", headers=CLIENT)
    assert [h["toStatus"] for h in history.json()] == ["ANALYZING", "APPROVED", "WAITING_APOSTILLE"]
    assert history.json()[1]["note"] == "looks good"
    assert history.json()[1]["actorRole"] == "STAFF"


async def test_client_cannot_change_status(client: AsyncClient) -> None:
    doc = await _upload(client)
    response = await client.post(
        f"/api/v1/documents/{doc['id']}/status", headers=CLIENT, json={"toStatus": "APPROVED"}
    )
    assert response.status_code == 403


async def test_reject_without_reason_is_422(client: AsyncClient) -> None:
    doc = await _upload(client)
    response = await client.post(
        f"/api/v1/documents/{doc['id']}/status", headers=STAFF, json={"toStatus": "REJECTED"}
    )
    assert response.status_code == 422
    assert response.json()["errorKind"] == "MISSING_REJECTION_REASON"


async def test_reject_then_reupload(client: AsyncClient) -> None:
    doc = await _upload(client)
    rejected = await client.post(
        f"/api/v1/documents/{doc['id']}/status",
        headers=STAFF,
        json={"toStatus": "REJECTED", "rejectionReason": "illegible"},
    )
    assert rejected.json()["stage"] == "REJECTED"
    assert rejected.json()["rejectionReason"] == "illegible"

    again = await _upload(client, document_id=doc["id"])
    assert again["id"] == doc["id"]
    assert again["stage"] == "ANALYZING"
    assert again["rejectionReason"] is None
    assert again["revision"] == 2


async def test_invalid_transition_is_409(client: AsyncClient) -> None:
    doc = await _upload(client)
    response = await client.post(
        f"/api/v1/documents/{doc['id']}/status",
        headers=STAFF,
        json={"toStatus": "WAITING_TRANSLATION"},
    )
    assert response.status_code == 409
    assert response.json()["errorKind"] == "INVALID_TRANSITION"


async def test_unknown_status_is_request_validation_error(client: AsyncClient) -> None:
    doc = await _upload(client)
    response = await client.post(
        f"/api/v1/documents/{doc['id']}/status", headers=STAFF, json={"toStatus": "DONE"}
    )
    assert response.status_code == 422
    assert response.json()["errorKind"] == "VALIDATION_ERROR"


async def test_empty_upload_is_rejected(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/documents",
        headers=CLIENT,
        data={"owner_id": "client-1", "document_type": "passport"},
        files={"file": ("empty.pdf", b"", "application/pdf")},
    )
    assert response.status_code == 400
    assert response.json()["errorKind"] == "VALIDATION_ERROR"


async def test_delete_document(client: AsyncClient) -> None:
    doc = await _upload(client, "passport")
    response = await client.delete(f"/api/v1/documents/{doc['id']}", headers=CLIENT)
    assert response.status_code == 204
    missing = await client.get(f"/api/v1/documents/{doc['id']}", headers=STAFF)
    assert missing.status_code == 404


async def test_oversized_upload_is_rejected(client: AsyncClient, monkeypatch) -> None:
    monkeypatch.setenv("MAX_UPLOAD_SIZE", "1024")
    get_settings.cache_clear()

    response = await client.post(
        "/api/v1/documents",
        headers=CLIENT,
        data={"owner_id": "client-1", "document_type": "passport"},
        files={"file": ("scan.pdf", b"x" * 4096, "application/pdf")},
    )

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "file"}
    listed = await client.get("/api/v1/documents", params={"owner_id": "client-1"}, headers=CLIENT)
    assert listed.json() == []


async def test_upload_read_stops_after_the_limit() -> None:
    source = io.BytesIO(b"x" * (UPLOAD_CHUNK_SIZE * 4))
    upload = UploadFile(file=source, filename="big.pdf")

    with pytest.raises(ValidationException):
        await _read_bounded(upload, limit=UPLOAD_CHUNK_SIZE + 1)

    assert source.tell() == UPLOAD_CHUNK_SIZE * 2


async def test_upload_at_the_limit_is_read_whole() -> None:
    upload = UploadFile(file=io.BytesIO(b"y" * 3000), filename="ok.pdf")
    assert await _read_bounded(upload, limit=3000) == b"y" * 3000
