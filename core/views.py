import time

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from questions.sqlrunner import SqlRunner
from .models import ActivityEvent
from .serializers import ActivityEventSerializer


class MyEventsView(APIView):
    """
    GET /api/core/events/me/?type=login
    The current user's activity log, newest first.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        events = ActivityEvent.objects.filter(user=request.user)

        event_type = request.query_params.get("type")
        if event_type:
            events = events.filter(type=event_type)

        events = events.order_by("-triggered_at", "-id")[:100]
        serializer = ActivityEventSerializer(events, many=True)
        return Response(serializer.data)


class HealthCheckView(APIView):
    """
    Lightweight health endpoint for uptime checks.
    - Checks DB connectivity
    - Checks the SQL sandbox (reported, does not degrade status)
    - Returns env and simple latency
    """
    permission_classes = [AllowAny]
    authentication_classes = []  # public endpoint

    def get(self, request, *args, **kwargs):
        start = time.time()

        db_ok = True
        try:
            connections["default"].cursor()
        except OperationalError:
            db_ok = False

        sqlrunner_ok = SqlRunner(timeout=2).is_healthy()

        duration_ms = int((time.time() - start) * 1000)

        return Response(
            {
                "status": "ok" if db_ok else "degraded",
                "db": db_ok,
                "sqlrunner": sqlrunner_ok,
                "env": getattr(settings, "ENV", "unknown"),
                "latency_ms": duration_ms,
            }
        )
