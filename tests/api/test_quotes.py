"""API tests for the quote negotiation: vendor quote, publish, approve, checkout, payment."""

from decimal import Decimal

from httpx import AsyncClient

CLIENT = {"X-Actor-Id": "client-1", "X-Actor-Role": "CLIENT"}
STAFF = {"X-Actor-Id": "staff-1", "X-Actor-Role": "STAFF"}
VENDOR = {"X-Actor-Id": "vendor-1", "X-Actor-Role": "VENDOR"}
FINANCE = {"X-Actor-Id": "finance-1", "X-Actor-Role": "FINANCE"}
SYSTEM = {"X-Actor-Id": "payments", "X-Actor-Role": "SYSTEM"}


async def _approved_birth_certificate(client: AsyncClient) -> str:
    upload = await client.post(
        "/api/v1/documents",
        headers=CLIENT,
        data={"owner_id": "client-1", "document_type": "birth_certificate"},
        files={"file": ("birth.pdf", b"%PDF birth", "application/pdf")},
    )
    doc_id = upload.json()["id"]
    approved = await client.post(
        f"/api/v1/documents/{doc_id}/status", headers=STAFF, json={"toStatus": "APPROVED"}
    )
    assert approved.json()["stage"] == "WAITING_APOSTILLE"
    return doc_id


async def _request_quote(client: AsyncClient, doc_id: str, **body) -> dict:
    response = await client.post(
        f"/api/v1/documents/{doc_id}/quotes", headers=STAFF, json={"kind": "APOSTILLE", **body}
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_apostille_quote_to_payment(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    quote = await _request_quote(client, doc_id)
    assert quote["status"] == "AWAITING_VENDOR_QUOTE"

    queue = await client.get("/api/v1/quotes", params={"status": "AWAITING_VENDOR_QUOTE"}, headers=VENDOR)
    assert [q["id"] for q in queue.json()] == [quote["id"]]

    quoted = await client.post(
        f"/api/v1/quotes/{quote['id']}/vendor-quote",
        headers=VENDOR,
        json={"baseCost": 150, "deadline": "2026-04-01", "notes": "5 working days"},
    )
    assert quoted.status_code == 200
    assert quoted.json()["status"] == "QUOTED"
    assert Decimal(quoted.json()["baseCost"]) == Decimal("150")

    published = await client.patch(
        f"/api/v1/quotes/{quote['id']}", headers=FINANCE, json={"action": "publish"}
    )
    assert published.json()["status"] == "AWAITING_CLIENT_APPROVAL"
    assert Decimal(published.json()["finalPrice"]) == Decimal("180.00")

    doc = await client.get(f"/api/v1/documents/{doc_id}", headers=CLIENT)
    assert doc.json()["stage"] == "WAITING_QUOTE_APPROVAL"
    assert [q["id"] for q in doc.json()["activeQuotes"]] == [quote["id"]]

    approved = await client.patch(
        f"/api/v1/quotes/{quote['id']}", headers=CLIENT, json={"action": "approve"}
    )
    assert approved.json()["status"] == "APPROVED"

    checkout = await client.post(f"/api/v1/quotes/{quote['id']}/checkout", headers=CLIENT)
    assert checkout.status_code == 201
    assert Decimal(checkout.json()["amount"]) == Decimal("180.00")
    assert checkout.json()["checkoutId"].startswith("chk_")

    paid = await client.post(
        f"/api/v1/quotes/{quote['id']}/payment-confirmation",
        headers=SYSTEM,
        json={"paymentReference": "pay_123"},
    )
    assert paid.json()["status"] == "PAID"

    doc = await client.get(f"/api/v1/documents/{doc_id}", headers=CLIENT)
    body = doc.json()
    assert body["status"] == "WAITING_TRANSLATION"
    assert body["stage"] == "WAITING_TRANSLATION"
    assert body["isApostilled"] is True
    assert body["activeQuotes"] == []


async def test_duplicate_quote_request(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    first = await _request_quote(client, doc_id, idempotencyKey="k1")
    retry = await _request_quote(client, doc_id, idempotencyKey="k1")
    assert retry["id"] == first["id"]

    response = await client.post(
        f"/api/v1/documents/{doc_id}/quotes", headers=STAFF, json={"kind": "APOSTILLE"}
    )
    assert response.status_code == 409
    assert response.json()["errorKind"] == "QUOTE_ALREADY_ACTIVE"

    superseding = await _request_quote(client, doc_id, supersede=True)
    assert superseding["id"] != first["id"]
    old = await client.get(f"/api/v1/quotes/{first['id']}", headers=STAFF)
    assert old.json()["status"] == "CANCELLED"


async def test_invalid_amounts_are_422(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    quote = await _request_quote(client, doc_id)
    response = await client.post(
        f"/api/v1/quotes/{quote['id']}/vendor-quote", headers=VENDOR, json={"baseCost": "-10"}
    )
    assert response.status_code == 422
    assert response.json()["errorKind"] == "INVALID_AMOUNT"

    await client.post(
        f"/api/v1/quotes/{quote['id']}/vendor-quote", headers=VENDOR, json={"baseCost": "10"}
    )
    response = await client.patch(
        f"/api/v1/quotes/{quote['id']}",
        headers=FINANCE,
        json={"action": "publish", "markupPercent": -5},
    )
    assert response.status_code == 422
    assert response.json()["errorKind"] == "INVALID_AMOUNT"


async def test_client_declines_quote(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    quote = await _request_quote(client, doc_id)
    await client.post(
        f"/api/v1/quotes/{quote['id']}/vendor-quote", headers=VENDOR, json={"baseCost": "40"}
    )
    await client.patch(f"/api/v1/quotes/{quote['id']}", headers=FINANCE, json={"action": "publish"})

    no_reason = await client.patch(
        f"/api/v1/quotes/{quote['id']}", headers=CLIENT, json={"action": "reject"}
    )
    assert no_reason.status_code == 422
    assert no_reason.json()["errorKind"] == "MISSING_REJECTION_REASON"

    declined = await client.patch(
        f"/api/v1/quotes/{quote['id']}",
        headers=CLIENT,
        json={"action": "reject", "reason": "too expensive"},
    )
    assert declined.json()["status"] == "REJECTED"
    doc = await client.get(f"/api/v1/documents/{doc_id}", headers=CLIENT)
    assert doc.json()["stage"] == "WAITING_APOSTILLE"


async def test_payment_before_approval_is_409(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    quote = await _request_quote(client, doc_id)
    response = await client.post(
        f"/api/v1/quotes/{quote['id']}/payment-confirmation",
        headers=SYSTEM,
        json={"paymentReference": "pay_early"},
    )
    assert response.status_code == 409
    assert response.json()["errorKind"] == "INVALID_STATE"


async def test_client_cannot_list_work_queues(client: AsyncClient) -> None:
    response = await client.get("/api/v1/quotes", params={"status": "QUOTED"}, headers=CLIENT)
    assert response.status_code == 403


async def test_document_quote_history(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    first = await _request_quote(client, doc_id)
    await _request_quote(client, doc_id, supersede=True)
    response = await client.get(f"/api/v1/documents/{doc_id}/quotes", headers=CLIENT)
    statuses = {q["id"]: q["status"] for q in response.json()}
    assert statuses[first["id"]] == "CANCELLED"
    assert len(statuses) == 2


async def test_staff_approval_during_live_quote_is_409(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    quote = await _request_quote(client, doc_id)
    await client.post(
        f"/api/v1/quotes/{quote['id']}/vendor-quote", headers=VENDOR, json={"baseCost": "150"}
    )
    await client.patch(f"/api/v1/quotes/{quote['id']}", headers=FINANCE, json={"action": "publish"})
    await client.patch(f"/api/v1/quotes/{quote['id']}", headers=CLIENT, json={"action": "approve"})

    response = await client.post(
        f"/api/v1/documents/{doc_id}/status", headers=STAFF, json={"toStatus": "APPROVED"}
    )
    assert response.status_code == 409
    assert response.json()["errorKind"] == "INVALID_STATE"

    doc = await client.get(f"/api/v1/documents/{doc_id}", headers=CLIENT)
    assert doc.json()["isApostilled"] is False
    assert doc.json()["stage"] == "ANALYZING_APOSTILLE"


async def test_fractional_json_amounts_keep_decimal_precision(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    quote = await _request_quote(client, doc_id)
    quoted = await client.post(
        f"/api/v1/quotes/{quote['id']}/vendor-quote", headers=VENDOR, json={"baseCost": 19.99}
    )
    assert quoted.json()["baseCost"] == "19.99"

    published = await client.patch(
        f"/api/v1/quotes/{quote['id']}",
        headers=FINANCE,
        json={"action": "publish", "markupPercent": 10.5},
    )
    assert Decimal(published.json()["markupPercent"]) == Decimal("10.5")
    assert published.json()["finalPrice"] == "22.09"


async def test_non_numeric_amount_is_invalid_amount(client: AsyncClient) -> None:
    doc_id = await _approved_birth_certificate(client)
    quote = await _request_quote(client, doc_id)
    response = await client.post(
        f"/api/v1/quotes/{quote['id']}/vendor-quote", headers=VENDOR, json={"baseCost": "abc"}
    )
    assert response.json()["errorKind"] == "INVALID_AMOUNT"
