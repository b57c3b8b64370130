"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Never contain business logic
- Never expose internal error details (eventful.exceptions maps domain errors)
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.handlers import IsCreator, current_user_id
from common.domain.pagination import PageRequest
from common.responses import success
from events.domain import EventFilters
from events.handlers.serializers import (
    EventCreateSerializer,
    EventListQuerySerializer,
    EventSerializer,
    EventStatusSerializer,
    EventWriteSerializer,
    ShareLinksSerializer,
)
from events.services import build_event_service


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsCreator()]
        return [IsAuthenticated()]

    def get(self, request: Request) -> Response:
        query = EventListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        page = build_event_service().list_events(
            EventFilters(**query.validated_data), PageRequest.from_query(request.query_params)
        )
        return success(
            {"events": EventSerializer(page.items, many=True).data, "pagination": page.meta()}
        )

    def post(self, request: Request) -> Response:
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = build_event_service().create_event(current_user_id(request), serializer.validated_data)
        return success(EventSerializer(event).data, "Event created successfully", status.HTTP_201_CREATED)


class MyEventsView(APIView):
    """Handler for GET /api/events/mine"""

    permission_classes = [IsAuthenticated, IsCreator]

    def get(self, request: Request) -> Response:
        events = build_event_service().list_creator_events(current_user_id(request))
        return success(EventSerializer(events, many=True).data)


class EventDetailView(APIView):
    """Handler for GET/PUT/PATCH/DELETE /api/events/{event_id}"""

    def get_permissions(self):
        if self.request.method in ("PUT", "PATCH", "DELETE"):
            return [IsAuthenticated(), IsCreator()]
        return [IsAuthenticated()]

    def get(self, request: Request, event_id: str) -> Response:
        event = build_event_service().get_event(event_id)
        return success(EventSerializer(event).data)

    def put(self, request: Request, event_id: str) -> Response:
        return self._update(request, event_id, partial=False)

    def patch(self, request: Request, event_id: str) -> Response:
        return self._update(request, event_id, partial=True)

    def delete(self, request: Request, event_id: str) -> Response:
        build_event_service().delete_event(event_id, current_user_id(request))
        return success(message="Event deleted successfully")

    def _update(self, request: Request, event_id: str, *, partial: bool) -> Response:
        serializer = EventWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        event = build_event_service().update_event(
            event_id, current_user_id(request), serializer.validated_data
        )
        return success(EventSerializer(event).data, "Event updated successfully")


class EventPublishView(APIView):
    """Handler for POST /api/events/{event_id}/publish"""

    permission_classes = [IsAuthenticated, IsCreator]

    def post(self, request: Request, event_id: str) -> Response:
        event = build_event_service().publish_event(event_id, current_user_id(request))
        return success(EventSerializer(event).data, "Event published successfully")


class EventCancelView(APIView):
    """Handler for POST /api/events/{event_id}/cancel"""

    permission_classes = [IsAuthenticated, IsCreator]

    def post(self, request: Request, event_id: str) -> Response:
        event = build_event_service().cancel_event(event_id, current_user_id(request))
        return success(EventSerializer(event).data, "Event cancelled successfully")


class EventStatusView(APIView):
    """Handler for PATCH /api/events/{event_id}/status"""

    permission_classes = [IsAuthenticated, IsCreator]

    def patch(self, request: Request, event_id: str) -> Response:
        serializer = EventStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = build_event_service().change_status(
            event_id, current_user_id(request), serializer.validated_data["status"]
        )
        return success(EventSerializer(event).data, "Event status updated")


class EventShareView(APIView):
    """Handler for GET /api/events/{event_id}/share"""

    def get(self, request: Request, event_id: str) -> Response:
        links = build_event_service().share_links(event_id)
        return success(ShareLinksSerializer(links).data)
