import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated, IsAdminUser
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken

from core.constants import (
    EVENT_TYPE_LOGIN,
    EVENT_TYPE_IMPERSONATED,
    EVENT_TYPE_LOGOUT,
    EVENT_TYPE_LOGOUT_ALL,
    PAYLOAD_MACHINE,
    PAYLOAD_IMPERSONATOR_ID,
)
from core.services import ActivityService
from users.serializers import UserSerializer
from .serializers import SignupSerializer, LoginSerializer, LogoutSerializer

logger = logging.getLogger("dbplay.auth")
User = get_user_model()


def _token_pair(user):
    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


def _machine_name(request):
    return request.META.get("HTTP_USER_AGENT", "")


class SignupView(APIView):
    # allow unauthenticated
    permission_classes = []
    authentication_classes = []

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        if serializer.is_valid():
            user = serializer.save()
            return Response(
                {"message": "User created successfully", "username": user.username},
                status=status.HTTP_201_CREATED
            )
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class LoginView(APIView):
    """
    POST /api/auth/login/
    Email + password -> JWT pair. Emits a `login` activity event, which in
    turn grants the daily login points.
    """
    permission_classes = []
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if serializer.is_valid():
            user = serializer.validated_data['user']
            tokens = _token_pair(user)

            ActivityService().trigger_event(
                EVENT_TYPE_LOGIN,
                user.id,
                {PAYLOAD_MACHINE: _machine_name(request)},
            )

            return Response(tokens, status=status.HTTP_200_OK)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class LogoutView(APIView):
    """
    POST /api/auth/logout/
    Blacklists the given refresh token.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            token = RefreshToken(serializer.validated_data["refresh"])
            token.blacklist()
        except TokenError:
            return Response({"detail": "Invalid refresh token."}, status=status.HTTP_400_BAD_REQUEST)

        ActivityService().trigger_event(EVENT_TYPE_LOGOUT, request.user.id)
        return Response(status=status.HTTP_205_RESET_CONTENT)


class LogoutAllView(APIView):
    """
    POST /api/auth/logout-all/
    Blacklists every outstanding refresh token of the current user.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        revoked = 0
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            if created:
                revoked += 1

        logger.info(f"User {request.user.id} revoked {revoked} refresh tokens")
        ActivityService().trigger_event(EVENT_TYPE_LOGOUT_ALL, request.user.id)
        return Response({"revoked": revoked}, status=status.HTTP_200_OK)


class ImpersonateView(APIView):
    """
    POST /api/auth/impersonate/<user_id>/
    Staff only. Issues a token pair for another user and records an
    `impersonated` event on that user's log.
    """
    permission_classes = [IsAdminUser]

    def post(self, request, user_id):
        target = get_object_or_404(User, pk=user_id)
        tokens = _token_pair(target)

        logger.warning(f"User {request.user.id} impersonating user {target.id}")
        ActivityService().trigger_event(
            EVENT_TYPE_IMPERSONATED,
            target.id,
            {PAYLOAD_IMPERSONATOR_ID: request.user.id},
        )
        return Response(tokens, status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)
