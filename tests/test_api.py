from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.notifications import LoggingNotifier
from core.quotes import QuoteService
from core.repository import InMemoryQuoteRepository
from web.api import create_app


def D(v):
    return Decimal(str(v))


@pytest.fixture
def notifier():
    return LoggingNotifier()


@pytest.fixture
def client(notifier):
    service = QuoteService(notifier=notifier)
    return TestClient(create_app(service=service, settings=Settings(cors_origins=["http://localhost:3000"])))


QUOTE_BODY = {
    "contact": {"client_name": "Ana", "client_email": "ana@example.com", "client_phone": "+15552223333"},
    "service_id": "4",
    "sqft": 1500,
    "hours": 2,
    "zone": "residential",
    "project_type": "maintenance",
}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_calculate(client):
    r = client.post("/calculate", json={"hours": 2, "sqft": 1500, "visits": 1})
    assert r.status_code == 200
    b = r.json()["breakdown"]
    assert D(b["subtotal"]) == Decimal("3090.00")
    assert D(b["total"]) == Decimal("3355.74")
    assert [li["id"] for li in r.json()["line_items"]] == ["labor", "materials"]


def test_money_is_serialized_as_numbers(client):
    body = client.post("/calculate", json={"hours": 2, "sqft": 1500}).json()
    assert body["breakdown"]["total"] == 3355.74
    assert isinstance(body["breakdown"]["labor"], float)
    assert all(isinstance(li["total"], float) for li in body["line_items"])

    r = client.post("/quote-range", json={"hours": 2, "sqft": 1500}).json()
    assert r["min_total"] == 2626.5
    assert r["breakdown"]["subtotal"] == 3090.0


def test_negative_zero_hours_price_as_zero(client):
    r = client.post("/calculate", json={"hours": -0.0, "sqft": 10})
    assert r.status_code == 200
    labor = r.json()["breakdown"]["labor"]
    assert str(labor) == "0.0"


def test_calculate_reports_all_errors(client):
    r = client.post("/calculate", json={"hours": 201, "sqft": -1, "visits": 0})
    assert r.status_code == 400
    assert len(r.json()["detail"]) == 3


def test_calculate_respects_service_project_types(client):
    r = client.post("/calculate?service_id=1", json={"hours": 2, "project_type": "repair"})
    assert r.status_code == 400
    assert "not offered" in r.json()["detail"][0]


def test_quote_range(client):
    r = client.post("/quote-range", json={"hours": 2, "sqft": 1500})
    assert r.status_code == 200
    assert (r.json()["min_cents"], r.json()["max_cents"]) == (262650, 355350)


def test_catalog_endpoints(client):
    assert len(client.get("/services").json()) == 5
    r = client.get("/services/2/project-types").json()
    assert r["project_types"] == ["repair", "maintenance"]
    assert r["label"] == "Repair & Maintenance"
    assert set(client.get("/presets").json()) == {"lawn", "sprinkler", "install"}


def test_quote_lifecycle(client, notifier):
    r = client.post("/quotes", json=QUOTE_BODY)
    assert r.status_code == 201
    quote_id = r.json()["id"]
    assert r.json()["status"] == "new"

    r = client.patch(f"/quotes/{quote_id}/review", json={"approved_min_cents": 250000})
    assert r.status_code == 200
    assert r.json()["status"] == "reviewed"
    assert r.json()["min_cents"] == 262650

    detail = client.get(f"/quotes/{quote_id}").json()
    assert detail["effective_min_cents"] == 250000
    assert detail["effective_max_cents"] == 355350

    r = client.post(f"/quotes/{quote_id}/send")
    assert r.status_code == 200
    assert r.json()["status"] == "sent"
    assert notifier.sent[-1][0] == "+15552223333"

    r = client.patch(f"/quotes/{quote_id}/review", json={"approved_min_cents": 1})
    assert r.status_code == 409
    assert client.post(f"/quotes/{quote_id}/send").status_code == 409

    assert [q["id"] for q in client.get("/quotes").json()] == [quote_id]


def test_invalid_quote_is_not_stored(client):
    body = dict(QUOTE_BODY, sqft=200000)
    r = client.post("/quotes", json=body)
    assert r.status_code == 400
    assert client.get("/quotes").json() == []


def test_blank_contact_is_422(client):
    body = dict(QUOTE_BODY, contact={"client_name": " ", "client_email": "a@b.c"})
    assert client.post("/quotes", json=body).status_code == 422


def test_unknown_quote_is_404(client):
    assert client.get("/quotes/missing").status_code == 404
    assert client.post("/quotes/missing/send").status_code == 404


def test_invoice_generation(client):
    r = client.post("/invoices?job_id=job-1&client_name=Ana", json={"hours": 2, "sqft": 1500})
    assert r.status_code == 201
    inv = r.json()
    assert D(inv["total"]) == Decimal("3355.74")
    assert inv["job_id"] == "job-1"

    fetched = client.get(f"/invoices/{inv['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["due_date"] == inv["due_date"]
    assert client.get("/invoices/inv-nope").status_code == 404


class BusyRepository(InMemoryQuoteRepository):
    def update(self, quote_id, changes, expected_version):
        super().update(quote_id, {}, expected_version)
        return super().update(quote_id, changes, expected_version)


def test_contended_transitions_are_409(notifier):
    service = QuoteService(repository=BusyRepository(), notifier=notifier)
    client = TestClient(create_app(service=service, settings=Settings()))
    quote_id = client.post("/quotes", json=QUOTE_BODY).json()["id"]

    r = client.patch(f"/quotes/{quote_id}/review", json={"message_to_client": "x"})
    assert r.status_code == 409
    assert quote_id in r.json()["detail"]

    assert client.post(f"/quotes/{quote_id}/send").status_code == 409
    assert client.get(f"/quotes/{quote_id}").json()["quote"]["status"] == "new"
