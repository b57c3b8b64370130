"""Unit tests for the Paystack adapter, run against httpx.MockTransport.

Run with: pytest tests/test_paystack.py -v
"""

import hashlib
import hmac
import json

import httpx
import pytest

from payments.domain.errors import PaymentGatewayError
from payments.gateways.paystack import PaystackGateway

SECRET = "sk_test_paystack"


class CountingTransport(httpx.MockTransport):
    """Mock transport that counts how often its client was closed."""

    closed = 0

    def close(self) -> None:
        self.closed += 1


def gateway_for(handler) -> PaystackGateway:
    return PaystackGateway(
        secret_key=SECRET,
        base_url="https://api.paystack.test",
        timeout=2.0,
        transport=httpx.MockTransport(handler),
    )


class TestInitialize:
    def test_sends_amount_in_minor_units_with_bearer_key(self):
        """Given a checkout request, posts it to /transaction/initialize and returns the session."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "message": "Authorization URL created",
                    "data": {
                        "authorization_url": "https://checkout.paystack.com/abc123",
                        "access_code": "abc123",
                        "reference": "TXN-ABC",
                    },
                },
            )

        session = gateway_for(handler).initialize(
            reference="TXN-ABC",
            email="eventee@example.com",
            amount=500000,
            currency="NGN",
            callback_url="https://eventful.test/payments/callback",
        )

        assert session.authorization_url == "https://checkout.paystack.com/abc123"
        assert session.access_code == "abc123"
        assert seen["path"] == "/transaction/initialize"
        assert seen["auth"] == f"Bearer {SECRET}"
        assert seen["body"] == {
            "reference": "TXN-ABC",
            "email": "eventee@example.com",
            "amount": 500000,
            "currency": "NGN",
            "metadata": {},
            "callback_url": "https://eventful.test/payments/callback",
        }

    def test_status_false_becomes_gateway_error(self):
        """Given {"status": false}, raises with the gateway's message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"status": False, "message": "Invalid key"})

        with pytest.raises(PaymentGatewayError) as excinfo:
            gateway_for(handler).initialize(reference="TXN-1", email="a@b.co", amount=100, currency="NGN")

        assert excinfo.value.message == "Invalid key"

    def test_non_json_error_page(self):
        """Given an HTML 503, raises with the HTTP status in the message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="<html>Service Unavailable</html>")

        with pytest.raises(PaymentGatewayError) as excinfo:
            gateway_for(handler).initialize(reference="TXN-1", email="a@b.co", amount=100, currency="NGN")

        assert excinfo.value.message == "Payment gateway returned HTTP 503"

    def test_timeout(self):
        """Given a timeout, raises a gateway error instead of hanging the request."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(PaymentGatewayError) as excinfo:
            gateway_for(handler).initialize(reference="TXN-1", email="a@b.co", amount=100, currency="NGN")

        assert excinfo.value.message == "Payment gateway timed out"

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PaymentGatewayError) as excinfo:
            gateway_for(handler).verify("TXN-1")

        assert excinfo.value.message == "Payment gateway is unreachable"


class TestVerify:
    def test_parses_transaction(self):
        """Given a successful verify response, returns amount, status and paid time."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/transaction/verify/TXN-ABC"
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "message": "Verification successful",
                    "data": {
                        "id": 4099260516,
                        "status": "success",
                        "reference": "TXN-ABC",
                        "amount": 500000,
                        "currency": "NGN",
                        "paid_at": "2026-08-01T12:30:00.000Z",
                    },
                },
            )

        transaction = gateway_for(handler).verify("TXN-ABC")

        assert transaction.succeeded
        assert transaction.amount == 500000
        assert transaction.currency == "NGN"
        assert transaction.gateway_reference == "4099260516"
        assert transaction.paid_at.isoformat() == "2026-08-01T12:30:00+00:00"
        assert transaction.raw["id"] == 4099260516

    def test_abandoned_checkout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "data": {"status": "abandoned", "reference": "TXN-ABC", "amount": 500000, "currency": "NGN"},
                },
            )

        transaction = gateway_for(handler).verify("TXN-ABC")

        assert transaction.is_terminal_failure
        assert transaction.paid_at is None


class TestRefund:
    def test_posts_transaction_and_note(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"status": True, "data": {"id": 3018284, "status": "pending"}})

        refund = gateway_for(handler).refund("TXN-ABC", reason="Event cancelled")

        assert seen == {"path": "/refund", "body": {"transaction": "TXN-ABC", "merchant_note": "Event cancelled"}}
        assert refund.reference == "3018284"
        assert refund.status == "pending"


class TestConnections:
    def test_each_call_closes_its_client(self):
        """Given two calls, each opened connection pool is closed afterwards."""
        transport = CountingTransport(
            lambda request: httpx.Response(200, json={"status": True, "data": {"status": "success"}})
        )
        gateway = PaystackGateway(secret_key=SECRET, base_url="https://api.paystack.test", transport=transport)

        gateway.verify("TXN-1")
        gateway.verify("TXN-2")

        assert transport.closed == 2

    def test_failed_call_closes_its_client(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = CountingTransport(handler)
        gateway = PaystackGateway(secret_key=SECRET, base_url="https://api.paystack.test", transport=transport)

        with pytest.raises(PaymentGatewayError):
            gateway.verify("TXN-1")

        assert transport.closed == 1


class TestSignature:
    def test_valid_signature(self):
        body = b'{"event":"charge.success"}'
        signature = hmac.new(SECRET.encode(), body, hashlib.sha512).hexdigest()

        assert gateway_for(lambda request: httpx.Response(200)).verify_signature(body, signature)

    def test_tampered_body(self):
        signature = hmac.new(SECRET.encode(), b'{"event":"charge.success"}', hashlib.sha512).hexdigest()

        assert not gateway_for(lambda request: httpx.Response(200)).verify_signature(b"{}", signature)

    def test_missing_signature(self):
        assert not gateway_for(lambda request: httpx.Response(200)).verify_signature(b"{}", "")

    def test_no_secret_configured(self):
        gateway = PaystackGateway(secret_key="", base_url="https://api.paystack.test")

        assert not gateway.verify_signature(b"{}", "anything")
