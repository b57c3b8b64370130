"""Paystack HTTP adapter.

Each call opens its own ``httpx.Client`` with the secret key as bearer token
and a bounded timeout, and closes it before returning. Transport failures,
non-2xx responses and ``{"status": false}`` bodies all surface as
``PaymentGatewayError``.
"""

import hashlib
import hmac
import logging
from typing import Any

import httpx
from django.utils.dateparse import parse_datetime

from eventful.conf import get_setting
from payments.domain.errors import PaymentGatewayError
from payments.gateways.interfaces import CheckoutSession, GatewayRefund, GatewayTransaction, PaymentGateway

logger = logging.getLogger(__name__)


class PaystackGateway(PaymentGateway):
    def __init__(
        self,
        secret_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._secret_key = secret_key if secret_key is not None else get_setting("PAYSTACK_SECRET_KEY")
        self._base_url = base_url or get_setting("PAYSTACK_BASE_URL")
        self._timeout = timeout if timeout is not None else get_setting("GATEWAY_TIMEOUT_SECONDS")
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {self._secret_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=self._timeout,
            transport=self._transport,
        )

    def initialize(
        self,
        *,
        reference: str,
        email: str,
        amount: int,
        currency: str,
        callback_url: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> CheckoutSession:
        payload: dict[str, Any] = {
            "reference": reference,
            "email": email,
            "amount": amount,
            "currency": currency,
            "metadata": metadata or {},
        }
        if callback_url:
            payload["callback_url"] = callback_url
        data = self._request("POST", "/transaction/initialize", json=payload)
        return CheckoutSession(
            reference=data.get("reference", reference),
            authorization_url=data.get("authorization_url", ""),
            access_code=data.get("access_code", ""),
        )

    def verify(self, reference: str) -> GatewayTransaction:
        data = self._request("GET", f"/transaction/verify/{reference}")
        paid_at = data.get("paid_at") or data.get("paidAt")
        return GatewayTransaction(
            reference=data.get("reference", reference),
            status=str(data.get("status", "")),
            amount=int(data.get("amount") or 0),
            currency=str(data.get("currency", "")),
            gateway_reference=str(data.get("id", "")),
            paid_at=parse_datetime(paid_at) if paid_at else None,
            raw=data,
        )

    def refund(self, reference: str, amount: int | None = None, reason: str = "") -> GatewayRefund:
        payload: dict[str, Any] = {"transaction": reference}
        if amount is not None:
            payload["amount"] = amount
        if reason:
            payload["merchant_note"] = reason
        data = self._request("POST", "/refund", json=payload)
        return GatewayRefund(reference=str(data.get("id", "")), status=str(data.get("status", "")), raw=data)

    def verify_signature(self, body: bytes, signature: str) -> bool:
        if not self._secret_key or not signature:
            return False
        expected = hmac.new(self._secret_key.encode(), body, hashlib.sha512).hexdigest()
        return hmac.compare_digest(expected, signature)

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            with self._client() as client:
                response = client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("Paystack %s %s timed out", method, path)
            raise PaymentGatewayError("Payment gateway timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("Paystack %s %s failed: %s", method, path, exc)
            raise PaymentGatewayError("Payment gateway is unreachable") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.is_success or not body.get("status"):
            message = body.get("message") or f"Payment gateway returned HTTP {response.status_code}"
            logger.warning("Paystack %s %s rejected (%s): %s", method, path, response.status_code, message)
            raise PaymentGatewayError(message, status_code=response.status_code)
        return body.get("data") or {}
