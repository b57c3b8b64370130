"""HTTP handlers (views) for payments.

Buying is for eventee accounts; refunds and event payment reports for the
event's creator. The webhook is unauthenticated and trusts only the
gateway signature.
"""

from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.handlers import IsCreator, IsEventee, current_user_id
from common.responses import success
from payments.handlers.serializers import (
    CheckoutSerializer,
    InitializePaymentSerializer,
    PaymentSerializer,
    PaymentStatsSerializer,
    RefundPaymentSerializer,
    VerifyPaymentSerializer,
)
from payments.services import build_payment_service
from tickets.handlers.serializers import TicketDetailSerializer

SIGNATURE_HEADER = "X-Paystack-Signature"


class InitializePaymentView(APIView):
    """Handler for POST /api/payments/initialize"""

    permission_classes = [IsAuthenticated, IsEventee]
    throttle_scope = "payment"

    def post(self, request: Request) -> Response:
        serializer = InitializePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        payment = build_payment_service().initialize_payment(
            current_user_id(request), data["event_id"], data.get("email"), data.get("reminder")
        )
        return success(CheckoutSerializer(payment).data, "Payment initialized successfully")


class VerifyPaymentView(APIView):
    """Handler for GET/POST /api/payments/verify"""

    permission_classes = [IsAuthenticated, IsEventee]
    throttle_scope = "payment"

    def get(self, request: Request) -> Response:
        return self._verify(request, request.query_params)

    def post(self, request: Request) -> Response:
        return self._verify(request, request.data)

    def _verify(self, request: Request, params) -> Response:
        serializer = VerifyPaymentSerializer(data=params)
        serializer.is_valid(raise_exception=True)
        payment, ticket = build_payment_service().verify_payment(
            serializer.validated_data["reference"], current_user_id(request)
        )
        return success(
            {"payment": PaymentSerializer(payment).data, "ticket": TicketDetailSerializer(ticket).data},
            "Payment verified successfully",
        )


class PaymentWebhookView(APIView):
    """Handler for POST /api/payments/webhook"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        build_payment_service().handle_webhook(request.body, request.headers.get(SIGNATURE_HEADER, ""))
        return success(message="Webhook processed")


class PaymentListView(APIView):
    """Handler for GET /api/payments"""

    permission_classes = [IsAuthenticated, IsEventee]

    def get(self, request: Request) -> Response:
        payments = build_payment_service().list_my_payments(current_user_id(request))
        return success(PaymentSerializer(payments, many=True).data)


class EventPaymentsView(APIView):
    """Handler for GET /api/payments/event/{event_id}"""

    permission_classes = [IsAuthenticated, IsCreator]

    def get(self, request: Request, event_id: str) -> Response:
        payments, stats = build_payment_service().event_payments(current_user_id(request), event_id)
        return success(
            {
                "payments": PaymentSerializer(payments, many=True).data,
                "stats": PaymentStatsSerializer(stats).data,
            }
        )


class RefundPaymentView(APIView):
    """Handler for POST /api/payments/{transaction_id}/refund"""

    permission_classes = [IsAuthenticated, IsCreator]
    throttle_scope = "payment"

    def post(self, request: Request, transaction_id: str) -> Response:
        serializer = RefundPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = build_payment_service().refund_payment(
            transaction_id, current_user_id(request), serializer.validated_data.get("reason")
        )
        return success(PaymentSerializer(payment).data, "Payment refunded successfully")
