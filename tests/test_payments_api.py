"""HTTP tests for POST /create-payment-intent."""
from decimal import Decimal

import pytest

from academia.integrations.stripe_client import StripeError

from conftest import make_course, make_user

URL = "/api/v1/payments/create-payment-intent"


@pytest.fixture
def people(seed):
    admin = make_user("admin")
    buyer = make_user("client")
    seed(admin, buyer)
    return admin, buyer


def _body(course_id="course-1", user_id="client-user", title="Python desde cero"):
    return {"courseId": course_id, "userId": user_id, "courseTitle": title}


def test_create_payment_intent_returns_client_secret(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin, price="100", discount_percentage=Decimal("30")))

    r = client.post(URL, json=_body(user_id=buyer.id))

    assert r.status_code == 200, r.text
    data = r.json()
    assert data["clientSecret"] == "pi_test_1_secret_abc"
    assert data["paymentIntentId"] == "pi_test_1"
    assert data["amount"] == 7000
    assert data["currency"] == "mxn"
    assert gateway.calls[0]["amount"] == 7000
    assert gateway.calls[0]["metadata"]["finalAmount"] == "70.00"


def test_charged_amount_matches_quote(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin, price="20", discount_percentage=Decimal("10"), minimum_gain=Decimal("19")))

    quote = client.get("/api/v1/courses/course-1/quote").json()
    r = client.post(URL, json=_body(user_id=buyer.id))

    assert r.status_code == 200
    assert quote["amount_minor_units"] == 1900
    assert gateway.calls[0]["amount"] == quote["amount_minor_units"]


def test_legacy_root_route(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin))

    r = client.post("/create-payment-intent", json=_body(user_id=buyer.id))

    assert r.status_code == 200
    assert r.json()["clientSecret"]


def test_client_supplied_amount_is_ignored(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin, price="100"))

    body = _body(user_id=buyer.id) | {"amount": 1}
    r = client.post(URL, json=body)

    assert r.status_code == 200
    assert gateway.calls[0]["amount"] == 10000


def test_missing_fields_return_400(client, gateway):
    r = client.post(URL, json={"courseTitle": "x"})
    assert r.status_code == 400
    assert "courseId" in r.json()["error"]
    assert gateway.calls == []


def test_invalid_user_role_returns_400(client, gateway, seed, people):
    admin, _ = people
    seed(make_course(admin))

    r = client.post(URL, json=_body(user_id=admin.id))

    assert r.status_code == 400
    assert "error" in r.json()
    assert gateway.calls == []


def test_unknown_course_returns_404(client, gateway, people):
    _, buyer = people
    r = client.post(URL, json=_body(course_id="nope", user_id=buyer.id))
    assert r.status_code == 404
    assert gateway.calls == []


def test_unpublished_course_returns_400(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin, is_published=False))

    r = client.post(URL, json=_body(user_id=buyer.id))

    assert r.status_code == 400
    assert gateway.calls == []


def test_invalid_discount_returns_400(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin, discount_percentage=Decimal("100")))

    r = client.post(URL, json=_body(user_id=buyer.id))

    assert r.status_code == 400
    assert gateway.calls == []


def test_free_course_creates_no_intent(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin, price="0"))

    r = client.post(URL, json=_body(user_id=buyer.id))

    assert r.status_code == 400
    assert gateway.calls == []


def test_processor_error_returns_500(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin))
    gateway.error = StripeError("create_payment_intent_failed", {"error": {"message": "Invalid currency"}})

    r = client.post(URL, json=_body(user_id=buyer.id))

    assert r.status_code == 500
    assert r.json() == {"error": "Invalid currency"}
    assert len(gateway.calls) == 1


def test_unexpected_error_returns_generic_500(client, gateway, seed, people):
    admin, buyer = people
    seed(make_course(admin))
    gateway.error = RuntimeError("connection to server at 10.0.0.5 failed")

    r = client.post(URL, json=_body(user_id=buyer.id))

    assert r.status_code == 500
    assert r.json() == {"error": "Erro interno"}
