from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.handlers import IsCreator, current_user_id
from analytics.handlers.serializers import CreatorSummarySerializer, EventAnalyticsSerializer
from analytics.services import build_analytics_service
from common.responses import success


class OverallAnalyticsView(APIView):
    """Handler for GET /api/analytics/overall"""

    permission_classes = [IsAuthenticated, IsCreator]

    def get(self, request: Request) -> Response:
        summary = build_analytics_service().overall(current_user_id(request))
        return success(CreatorSummarySerializer(summary).data)


class EventsAnalyticsView(APIView):
    """Handler for GET /api/analytics/events"""

    permission_classes = [IsAuthenticated, IsCreator]

    def get(self, request: Request) -> Response:
        rollups = build_analytics_service().events(current_user_id(request))
        return success(EventAnalyticsSerializer(rollups, many=True).data)


class EventAnalyticsView(APIView):
    """Handler for GET /api/analytics/events/{event_id}"""

    permission_classes = [IsAuthenticated, IsCreator]

    def get(self, request: Request, event_id: str) -> Response:
        rollup = build_analytics_service().event(current_user_id(request), event_id)
        return success(EventAnalyticsSerializer(rollup).data)
