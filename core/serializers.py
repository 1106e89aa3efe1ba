from rest_framework import serializers
from .models import ActivityEvent


class ActivityEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = ActivityEvent
        fields = ["id", "type", "payload", "triggered_at"]
        read_only_fields = fields
