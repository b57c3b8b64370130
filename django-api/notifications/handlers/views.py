"""HTTP handlers (views) for the notification inbox.

Every endpoint works on the caller's own notifications only.
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.handlers import current_user_id
from common.responses import success
from notifications.handlers.serializers import (
    CreateNotificationSerializer,
    NotificationListQuerySerializer,
    NotificationSerializer,
)
from notifications.services import build_notification_service


class NotificationListView(APIView):
    """Handler for GET/POST/DELETE /api/notifications"""

    def get(self, request: Request) -> Response:
        query = NotificationListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        notifications = build_notification_service().list_notifications(
            current_user_id(request), query.validated_data["limit"], query.validated_data["unread_only"]
        )
        return success(NotificationSerializer(notifications, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = CreateNotificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notification = build_notification_service().create_notification(
            current_user_id(request), **serializer.validated_data
        )
        return success(
            NotificationSerializer(notification).data,
            "Notification created successfully",
            status.HTTP_201_CREATED,
        )

    def delete(self, request: Request) -> Response:
        deleted = build_notification_service().delete_all(current_user_id(request))
        return success({"deleted": deleted}, "All notifications deleted")


class UnreadCountView(APIView):
    """Handler for GET /api/notifications/unread/count"""

    def get(self, request: Request) -> Response:
        return success({"count": build_notification_service().unread_count(current_user_id(request))})


class MarkAllReadView(APIView):
    """Handler for PATCH /api/notifications/read/all"""

    def patch(self, request: Request) -> Response:
        updated = build_notification_service().mark_all_read(current_user_id(request))
        return success({"updated": updated}, "All notifications marked as read")


class NotificationDetailView(APIView):
    """Handler for GET/DELETE /api/notifications/{notification_id}"""

    def get(self, request: Request, notification_id: str) -> Response:
        notification = build_notification_service().get_notification(current_user_id(request), notification_id)
        return success(NotificationSerializer(notification).data)

    def delete(self, request: Request, notification_id: str) -> Response:
        build_notification_service().delete_notification(current_user_id(request), notification_id)
        return success(message="Notification deleted")


class MarkReadView(APIView):
    """Handler for PATCH /api/notifications/{notification_id}/read"""

    def patch(self, request: Request, notification_id: str) -> Response:
        notification = build_notification_service().mark_read(current_user_id(request), notification_id)
        return success(NotificationSerializer(notification).data, "Notification marked as read")
