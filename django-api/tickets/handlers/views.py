"""HTTP handlers (views) for tickets.

Attendee endpoints are limited to eventee accounts, admission endpoints to
creators; services decide per-ticket ownership.
"""

from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.handlers import IsCreator, IsEventee, current_user_id
from common.domain.pagination import PageRequest
from common.responses import success
from tickets.handlers.serializers import (
    ClaimTicketSerializer,
    TicketDetailSerializer,
    TicketSerializer,
    TicketStatsSerializer,
    UpdateReminderSerializer,
    VerifyTicketSerializer,
)
from tickets.services import build_issuance_service, build_ticket_service


class TicketListView(APIView):
    """Handler for GET /api/tickets"""

    permission_classes = [IsAuthenticated, IsEventee]

    def get(self, request: Request) -> Response:
        page = build_ticket_service().list_my_tickets(
            current_user_id(request), PageRequest.from_query(request.query_params)
        )
        return success({"tickets": TicketSerializer(page.items, many=True).data, "pagination": page.meta()})


class ClaimTicketView(APIView):
    """Handler for POST /api/tickets/claim"""

    permission_classes = [IsAuthenticated, IsEventee]

    def post(self, request: Request) -> Response:
        serializer = ClaimTicketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = build_issuance_service().claim_free_ticket(
            current_user_id(request),
            serializer.validated_data["event_id"],
            serializer.validated_data.get("reminder"),
        )
        return success(
            {"ticket": TicketDetailSerializer(ticket).data},
            "Free ticket claimed successfully",
            status.HTTP_201_CREATED,
        )


class TicketDetailView(APIView):
    """Handler for GET /api/tickets/{ticket_id}"""

    permission_classes = [IsAuthenticated, IsEventee]

    def get(self, request: Request, ticket_id: str) -> Response:
        ticket = build_ticket_service().get_my_ticket(current_user_id(request), ticket_id)
        return success(TicketDetailSerializer(ticket).data)


class TicketQRCodeView(APIView):
    """Handler for GET /api/tickets/{ticket_id}/qr (PNG image)"""

    permission_classes = [IsAuthenticated, IsEventee]

    def get(self, request: Request, ticket_id: str) -> HttpResponse:
        png = build_ticket_service().ticket_qr_png(current_user_id(request), ticket_id)
        return HttpResponse(png, content_type="image/png")


class TicketReminderView(APIView):
    """Handler for PUT /api/tickets/{ticket_id}/reminder"""

    permission_classes = [IsAuthenticated, IsEventee]

    def put(self, request: Request, ticket_id: str) -> Response:
        serializer = UpdateReminderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = build_ticket_service().update_reminder(
            current_user_id(request), ticket_id, serializer.validated_data["reminder"]
        )
        return success(TicketSerializer(ticket).data, "Reminder updated successfully")


class MarkTicketUsedView(APIView):
    """Handler for PATCH /api/tickets/{ticket_id}/mark-used"""

    permission_classes = [IsAuthenticated, IsCreator]
    throttle_scope = "scan"

    def patch(self, request: Request, ticket_id: str) -> Response:
        ticket = build_ticket_service().mark_used(current_user_id(request), ticket_id)
        return success(TicketSerializer(ticket).data, "Ticket marked as used")


class VerifyTicketView(APIView):
    """Handler for GET /api/tickets/verify/{ticket_number}"""

    permission_classes = [IsAuthenticated, IsCreator]
    throttle_scope = "scan"

    def get(self, request: Request, ticket_number: str) -> Response:
        ticket = build_ticket_service().verify_ticket(current_user_id(request), ticket_number)
        return success({"ticket": TicketSerializer(ticket).data, "valid": True}, "Ticket verified")


class VerifyTicketForEventView(APIView):
    """Handler for POST /api/tickets/verify"""

    permission_classes = [IsAuthenticated, IsCreator]
    throttle_scope = "scan"

    def post(self, request: Request) -> Response:
        serializer = VerifyTicketSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = build_ticket_service()
        if data.get("qr_data"):
            ticket = service.verify_qr(current_user_id(request), data["qr_data"])
        else:
            ticket = service.verify_ticket(current_user_id(request), data["ticket_number"], data["event_id"])
        return success({"ticket": TicketSerializer(ticket).data, "valid": True}, "Ticket verified")


class ScanTicketView(APIView):
    """Handler for POST /api/tickets/scan/{ticket_number}"""

    permission_classes = [IsAuthenticated, IsCreator]
    throttle_scope = "scan"

    def post(self, request: Request, ticket_number: str) -> Response:
        ticket = build_ticket_service().scan_ticket(current_user_id(request), ticket_number)
        return success(TicketSerializer(ticket).data, "Ticket scanned successfully")


class EventAttendeesView(APIView):
    """Handler for GET /api/tickets/event/{event_id}/attendees"""

    permission_classes = [IsAuthenticated, IsCreator]

    def get(self, request: Request, event_id: str) -> Response:
        attendees, stats = build_ticket_service().list_attendees(current_user_id(request), event_id)
        return success(
            {
                "total": len(attendees),
                "attendees": TicketSerializer(attendees, many=True).data,
                "stats": TicketStatsSerializer(stats).data,
            }
        )
