from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'name',
            'avatar',
            'date_joined',
        ]


class PublicUserSerializer(serializers.ModelSerializer):
    """Fields safe to show on the leaderboard."""
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'display_name', 'avatar']
