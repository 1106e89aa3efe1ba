from rest_framework import serializers

from users.serializers import PublicUserSerializer
from .models import Point
from .ranking import RankingBy, RankingOrder, RankingPeriod


class RankingQuerySerializer(serializers.Serializer):
    first = serializers.IntegerField(required=False, min_value=1, max_value=100)
    after = serializers.CharField(required=False, allow_blank=False)
    by = serializers.ChoiceField(choices=RankingBy.choices, default=RankingBy.POINTS)
    period = serializers.ChoiceField(choices=RankingPeriod.choices, default=RankingPeriod.DAILY)
    order = serializers.ChoiceField(choices=RankingOrder.choices, default=RankingOrder.DESC)


class RankingEdgeSerializer(serializers.Serializer):
    node = PublicUserSerializer(read_only=True)
    score = serializers.IntegerField(read_only=True)
    cursor = serializers.CharField(read_only=True)


class PageInfoSerializer(serializers.Serializer):
    has_next_page = serializers.BooleanField(read_only=True)
    has_previous_page = serializers.BooleanField(read_only=True)
    start_cursor = serializers.CharField(read_only=True, allow_null=True)
    end_cursor = serializers.CharField(read_only=True, allow_null=True)


class RankingConnectionSerializer(serializers.Serializer):
    edges = RankingEdgeSerializer(many=True, read_only=True)
    page_info = PageInfoSerializer(read_only=True)
    total_count = serializers.IntegerField(read_only=True)


class PointSerializer(serializers.ModelSerializer):
    class Meta:
        model = Point
        fields = [
            'id',
            'description',
            'points',
            'kind',
            'question_id',
            'granted_at',
        ]
