"""API views for the notification service."""

import structlog
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.auth.oauth2 import OAuth2Authentication
from notifications.constants import ADMIN_SCOPE, USER_SCOPE
from notifications.exceptions import NotificationNotFoundError, TemplateNotFoundError
from notifications.pagination import NotificationPageNumberPagination
from notifications.repositories import TemplateRepository
from notifications.scheduler.trigger_rules import trigger_rules
from notifications.schemas import (
    MealPaceEvent,
    MealPaceEventResponse,
    NotificationDetail,
    PreferenceResponse,
    PreferenceUpdateRequest,
    PushTokenRequest,
    ScheduleNotificationRequest,
    ScheduleNotificationResponse,
    TemplateInfo,
    TemplateListResponse,
)
from notifications.services import (
    health_service,
    notification_service,
    preference_service,
)

logger = structlog.get_logger(__name__)


def _forbidden(detail: str) -> Response:
    return Response(
        {
            "error": "forbidden",
            "message": "You do not have permission to perform this action",
            "detail": detail,
        },
        status=status.HTTP_403_FORBIDDEN,
    )


def _check_user_scope(request) -> Response | None:
    """Require a user-scoped token that identifies an app user."""
    user = request.user
    if not user.has_any_scope(USER_SCOPE, ADMIN_SCOPE):
        logger.warning("missing_scope", user_id=user.user_id, scopes=user.scopes)
        return _forbidden(f"Requires {USER_SCOPE} or {ADMIN_SCOPE} scope")
    if user.user_id is None:
        return _forbidden("Token does not identify a user")
    return None


def _check_admin_scope(request) -> Response | None:
    user = request.user
    if not user.has_scope(ADMIN_SCOPE):
        logger.warning("missing_admin_scope", user_id=user.user_id, scopes=user.scopes)
        return _forbidden(f"Requires {ADMIN_SCOPE} scope")
    return None


def _preference_payload(preference) -> dict:
    return PreferenceResponse.model_validate(preference).model_dump(mode="json")


class LivenessCheckView(APIView):
    """Liveness probe. Never touches dependencies."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        liveness = health_service.get_liveness_status()
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe: 503 when the database is unreachable."""

    authentication_classes = ()
    permission_classes = (AllowAny,)

    def get(self, _request):
        readiness = health_service.get_readiness_status()
        return Response(
            readiness.model_dump(mode="json"),
            status=status.HTTP_200_OK
            if readiness.ready
            else status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class PreferencesView(APIView):
    """GET returns the caller's preferences (creating defaults); PUT updates them."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        if denied := _check_user_scope(request):
            return denied
        preference = preference_service.get_preferences(request.user.user_id)
        return Response(_preference_payload(preference), status=status.HTTP_200_OK)

    def put(self, request):
        """Apply a partial update.

        Returns:
            200 OK with the updated preferences
            400 Bad Request if validation fails
            403 Forbidden if the token lacks a user scope
        """
        if denied := _check_user_scope(request):
            return denied
        update = PreferenceUpdateRequest.model_validate(request.data)
        preference = preference_service.update_preferences(request.user.user_id, update)
        return Response(_preference_payload(preference), status=status.HTTP_200_OK)


class PushTokenView(APIView):
    """Register the caller's device push token."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        if denied := _check_user_scope(request):
            return denied
        token_request = PushTokenRequest.model_validate(request.data)
        preference_service.register_push_token(
            request.user.user_id, token_request.token, token_request.platform
        )
        return Response({"registered": True}, status=status.HTTP_200_OK)


class NotificationHistoryView(APIView):
    """Paginated notification history of the caller, newest first.

    Query parameters: ``page`` and ``page_size`` (default 20, max 100).
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        if denied := _check_user_scope(request):
            return denied

        queryset = notification_service.get_user_history(request.user.user_id)
        paginator = NotificationPageNumberPagination()
        page = paginator.paginate_queryset(queryset, request, view=self) or []
        results = [
            NotificationDetail.model_validate(row).model_dump(mode="json") for row in page
        ]
        return paginator.get_paginated_response(results)


class _NotificationInteractionView(APIView):
    """Shared flow for client-reported interactions on one notification."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)
    interaction = ""

    def record(self, notification_id: int):
        raise NotImplementedError

    def post(self, request, notification_id: int):
        """Stamp the interaction time once.

        Returns:
            200 OK with the notification
            403 Forbidden if the notification belongs to someone else
            404 Not Found if it does not exist
        """
        if denied := _check_user_scope(request):
            return denied

        notification = notification_service.get_notification(notification_id)
        if notification is None:
            raise NotificationNotFoundError(notification_id)
        if notification.user_id != request.user.user_id:
            logger.warning(
                "notification_access_denied",
                notification_id=notification_id,
                user_id=request.user.user_id,
                interaction=self.interaction,
            )
            return _forbidden("You can only update your own notifications")

        updated = self.record(notification_id)
        if updated is None:
            raise NotificationNotFoundError(notification_id)
        return Response(
            NotificationDetail.model_validate(updated).model_dump(mode="json"),
            status=status.HTTP_200_OK,
        )


class NotificationOpenedView(_NotificationInteractionView):
    interaction = "opened"

    def record(self, notification_id: int):
        return notification_service.mark_opened(notification_id)


class NotificationActionView(_NotificationInteractionView):
    interaction = "action"

    def record(self, notification_id: int):
        return notification_service.mark_action_taken(notification_id)


class TemplateListView(APIView):
    """Active templates grouped by category."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def get(self, request):
        if not request.user.has_any_scope(USER_SCOPE, ADMIN_SCOPE):
            return _forbidden(f"Requires {USER_SCOPE} or {ADMIN_SCOPE} scope")

        categories: dict[str, list[TemplateInfo]] = {}
        templates = list(TemplateRepository.list_active())
        for template in templates:
            categories.setdefault(template.category, []).append(
                TemplateInfo.model_validate(template)
            )
        response_data = TemplateListResponse(categories=categories, total=len(templates))
        return Response(response_data.model_dump(mode="json"), status=status.HTTP_200_OK)


class ScheduleNotificationView(APIView):
    """Internal endpoint for other services to schedule a notification.

    With ``wait`` the call runs synchronously; otherwise it is queued on RQ.
    """

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        """Schedule a notification.

        Returns:
            201 Created with the notification (wait=true, scheduled)
            200 OK with ``scheduled: false`` (wait=true, throttled)
            202 Accepted with the job id (queued)
            403 Forbidden without the admin scope
            422 Unprocessable Entity if the type has no active template
        """
        if denied := _check_admin_scope(request):
            return denied

        schedule_request = ScheduleNotificationRequest.model_validate(request.data)
        if TemplateRepository.get_by_type(schedule_request.notification_type) is None:
            raise TemplateNotFoundError(schedule_request.notification_type)

        if not schedule_request.wait:
            job_id = notification_service.enqueue_schedule(
                schedule_request.user_id,
                schedule_request.notification_type,
                schedule_request.data,
                schedule_request.trigger_source,
                schedule_request.scheduled_for,
            )
            response_data = ScheduleNotificationResponse(scheduled=False, job_id=job_id)
            return Response(
                response_data.model_dump(mode="json"), status=status.HTTP_202_ACCEPTED
            )

        instance = notification_service.schedule(
            schedule_request.user_id,
            schedule_request.notification_type,
            schedule_request.data,
            trigger_source=schedule_request.trigger_source,
            scheduled_for=schedule_request.scheduled_for,
        )
        if instance is None:
            return Response({"scheduled": False}, status=status.HTTP_200_OK)

        response_data = ScheduleNotificationResponse(
            scheduled=True, notification=NotificationDetail.model_validate(instance)
        )
        return Response(
            response_data.model_dump(mode="json"), status=status.HTTP_201_CREATED
        )


class MealPaceEventView(APIView):
    """Telemetry hook evaluating the fast-eating rule for a finished meal."""

    authentication_classes = (OAuth2Authentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        if denied := _check_admin_scope(request):
            return denied

        event = MealPaceEvent.model_validate(request.data)
        instance = trigger_rules.evaluate_meal_pace(
            event.user_id, event.avg_pace_bpm, meal_id=event.meal_id
        )
        response_data = MealPaceEventResponse(
            triggered=instance is not None,
            notification_id=instance.id if instance else None,
        )
        return Response(response_data.model_dump(mode="json"), status=status.HTTP_200_OK)
