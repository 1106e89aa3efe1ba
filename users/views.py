# users/views.py

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.contrib.auth import get_user_model

from .serializers import UserSerializer

User = get_user_model()


class UserViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Standard User API
    """
    queryset = User.objects.all()
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        # Users only see themselves through `me`; no directory listing
        if self.action == 'list':
            return User.objects.none()
        return super().get_queryset()

    @action(detail=False, methods=['get'])
    def me(self, request):
        """
        GET /api/users/me/
        Return current user info
        """
        serializer = self.get_serializer(request.user)
        return Response(serializer.data)

