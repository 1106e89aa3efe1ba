# authx/urls.py
from django.urls import path
from .views import SignupView, LoginView, LogoutView, LogoutAllView, ImpersonateView, MeView
from rest_framework_simplejwt.views import (
    TokenRefreshView,
    TokenVerifyView,
)

urlpatterns = [
    path("signup/", SignupView.as_view(), name="signup"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("logout-all/", LogoutAllView.as_view(), name="logout-all"),
    path("impersonate/<int:user_id>/", ImpersonateView.as_view(), name="impersonate"),
    path("me/", MeView.as_view(), name="me"),
    # JWT helpers
    path("jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("jwt/verify/", TokenVerifyView.as_view(), name="jwt-verify"),
]
