"""Pytest configuration and shared fixtures."""

import hashlib
import hmac
import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import Role, User
from accounts.services.tokens import issue_token
from events.models import Category, Event, EventStatus, EventType
from payments.domain.errors import PaymentGatewayError
from payments.gateways import CheckoutSession, GatewayRefund, GatewayTransaction, PaymentGateway

WEBHOOK_SECRET = "sk_test_secret"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def eventful_settings(settings):
    """Deliver notifications inline and sign webhooks with a known secret."""
    settings.EVENTFUL = {
        **settings.EVENTFUL,
        "DISPATCH_ASYNC": False,
        "PAYSTACK_SECRET_KEY": WEBHOOK_SECRET,
        "JWT_SECRET": "test-jwt-secret",
        "FRONTEND_URL": "https://eventful.test",
    }
    settings.DEFAULT_FROM_EMAIL = "Eventful <no-reply@eventful.test>"
    return settings


@pytest.fixture
def make_user(db):
    def make(role: str = Role.EVENTEE, email: str | None = None, **fields) -> User:
        fields.setdefault("first_name", "Ada")
        fields.setdefault("last_name", "Obi")
        return User.objects.create_user(
            email=email or f"{role}-{uuid.uuid4().hex[:8]}@example.com",
            password="secret123",
            role=role,
            **fields,
        )

    return make


@pytest.fixture
def creator(make_user) -> User:
    return make_user(Role.CREATOR, email="creator@example.com", first_name="Chidi", last_name="Eze")


@pytest.fixture
def eventee(make_user) -> User:
    return make_user(Role.EVENTEE, email="eventee@example.com", phone="08031234567")


@pytest.fixture
def auth_client():
    """Return an APIClient that sends a bearer token for ``user``."""

    def make(user: User) -> APIClient:
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return client

    return make


@pytest.fixture
def creator_client(auth_client, creator) -> APIClient:
    return auth_client(creator)


@pytest.fixture
def eventee_client(auth_client, eventee) -> APIClient:
    return auth_client(eventee)


@pytest.fixture
def make_event(creator):
    def make(owner: User | None = None, **overrides) -> Event:
        starts_at = overrides.pop("starts_at", timezone.now() + timedelta(days=10))
        fields = {
            "creator": owner or creator,
            "title": "Lagos Tech Summit",
            "description": "A day of talks and workshops.",
            "event_type": EventType.CONFERENCE,
            "category": Category.BUSINESS,
            "starts_at": starts_at,
            "ends_at": starts_at + timedelta(hours=6),
            "venue": "Landmark Centre",
            "address": "Water Corporation Drive",
            "city": "Lagos",
            "state": "Lagos",
            "zip_code": "101241",
            "country": "Nigeria",
            "capacity": 100,
            "ticket_price": Decimal("0.00"),
            "status": EventStatus.PUBLISHED,
        }
        fields.update(overrides)
        fields.setdefault("tickets_available", fields["capacity"])
        return Event.objects.create(**fields)

    return make


@pytest.fixture
def free_event(make_event) -> Event:
    return make_event()


@pytest.fixture
def paid_event(make_event) -> Event:
    return make_event(title="Afrobeats Live", ticket_price=Decimal("5000.00"), capacity=50)


class FakeGateway(PaymentGateway):
    """In-memory gateway. Charges stay pending until ``complete`` is called."""

    def __init__(self) -> None:
        self.initialized: list[dict] = []
        self.refunds: list[dict] = []
        self.transactions: dict[str, GatewayTransaction] = {}
        self.verify_calls = 0
        self.fail_refunds = False

    def initialize(self, *, reference, email, amount, currency, callback_url="", metadata=None):
        self.initialized.append({"reference": reference, "email": email, "amount": amount, "currency": currency})
        self.transactions[reference] = GatewayTransaction(
            reference=reference, status="ongoing", amount=amount, currency=currency
        )
        return CheckoutSession(
            reference=reference,
            authorization_url=f"https://checkout.paystack.test/{reference}",
            access_code=f"ac_{reference.lower()}",
        )

    def complete(self, reference: str, status: str = "success", amount: int | None = None) -> None:
        current = self.transactions[reference]
        self.transactions[reference] = GatewayTransaction(
            reference=reference,
            status=status,
            amount=current.amount if amount is None else amount,
            currency=current.currency,
            gateway_reference="4099260516",
            paid_at=timezone.now() if status == "success" else None,
            raw={"status": status},
        )

    def verify(self, reference):
        self.verify_calls += 1
        return self.transactions[reference]

    def refund(self, reference, amount=None, reason=""):
        if self.fail_refunds:
            raise PaymentGatewayError("Refund rejected")
        self.refunds.append({"reference": reference, "reason": reason})
        return GatewayRefund(reference=f"rf_{reference}", status="pending", raw={"status": "pending"})

    def verify_signature(self, body, signature):
        expected = hmac.new(WEBHOOK_SECRET.encode(), body, hashlib.sha512).hexdigest()
        return hmac.compare_digest(expected, signature or "")


@pytest.fixture
def fake_gateway(monkeypatch) -> FakeGateway:
    gateway = FakeGateway()
    monkeypatch.setattr("payments.services.get_gateway", lambda: gateway)
    return gateway


@pytest.fixture
def sign_webhook():
    def sign(body: bytes) -> str:
        return hmac.new(WEBHOOK_SECRET.encode(), body, hashlib.sha512).hexdigest()

    return sign
