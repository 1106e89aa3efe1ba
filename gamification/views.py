from django.db.models import Sum
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from .models import Point
from .ranking import RankingFilter, RankingService
from .serializers import (
    PointSerializer,
    RankingConnectionSerializer,
    RankingQuerySerializer,
)


class RankingView(APIView):
    """
    GET /api/gamification/ranking/?first=&after=&by=&period=&order=

    Cursor-paginated leaderboard. `after` is the `cursor` of the last edge
    of the previous page.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        params = RankingQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data

        connection = RankingService().get_ranking(
            first=data.get("first"),
            after=data.get("after"),
            filter=RankingFilter(by=data["by"], period=data["period"], order=data["order"]),
        )
        return Response(RankingConnectionSerializer(connection).data)


class MyPointsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        ledger = Point.objects.filter(user=request.user).order_by("-granted_at", "-id")
        total = ledger.aggregate(total=Sum("points"))["total"] or 0

        return Response({
            "total_points": total,
            "points": PointSerializer(ledger[:100], many=True).data,
        })
