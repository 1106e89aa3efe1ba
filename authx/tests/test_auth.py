from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken

from core.models import ActivityEvent
from gamification.models import Point

User = get_user_model()


class AuthAPITestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username="judy",
            email="judy@example.com",
            password="s3cret-pass",
        )

    def login(self):
        return self.client.post(
            reverse("login"),
            {"email": "judy@example.com", "password": "s3cret-pass"},
            format="json",
            HTTP_USER_AGENT="pytest",
        )

    def test_login_returns_tokens_and_records_event(self):
        response = self.login()

        self.assertEqual(response.status_code, 200, response.data)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)

        event = ActivityEvent.objects.get(user=self.user, type="login")
        self.assertEqual(event.payload, {"machine": "pytest"})

    def test_daily_login_points_granted_once(self):
        self.login()
        self.login()

        self.assertEqual(ActivityEvent.objects.filter(user=self.user, type="login").count(), 2)
        ledger = Point.objects.filter(user=self.user)
        self.assertEqual(ledger.count(), 1)
        self.assertEqual(ledger.get().points, 20)

    def test_login_with_bad_password(self):
        response = self.client.post(
            reverse("login"),
            {"email": "judy@example.com", "password": "wrong"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(ActivityEvent.objects.exists())

    def test_logout(self):
        tokens = self.login().data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post(reverse("logout"), {"refresh": tokens["refresh"]}, format="json")

        self.assertEqual(response.status_code, 205)
        self.assertTrue(ActivityEvent.objects.filter(user=self.user, type="logout").exists())
        self.assertEqual(BlacklistedToken.objects.count(), 1)

        refreshed = self.client.post(reverse("jwt-refresh"), {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(refreshed.status_code, 401)

    def test_logout_with_invalid_token(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(reverse("logout"), {"refresh": "garbage"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertFalse(ActivityEvent.objects.filter(type="logout").exists())

    def test_logout_all(self):
        self.login()
        tokens = self.login().data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post(reverse("logout-all"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["revoked"], 2)
        self.assertTrue(ActivityEvent.objects.filter(user=self.user, type="logout_all").exists())

    def test_impersonate_requires_staff(self):
        other = User.objects.create_user(username="kim", email="kim@example.com", password="pass1234")
        self.client.force_authenticate(user=self.user)

        response = self.client.post(reverse("impersonate", args=[other.id]))
        self.assertEqual(response.status_code, 403)

        self.user.is_staff = True
        self.user.save()
        response = self.client.post(reverse("impersonate", args=[other.id]))

        self.assertEqual(response.status_code, 200)
        event = ActivityEvent.objects.get(user=other, type="impersonated")
        self.assertEqual(event.payload, {"impersonator_id": self.user.id})

    def test_signup(self):
        response = self.client.post(
            reverse("signup"),
            {"username": "leo", "email": "leo@example.com", "password": "another-pass", "name": "Leo"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(User.objects.get(username="leo").name, "Leo")
