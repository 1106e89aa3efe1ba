from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from gamification.models import Point

User = get_user_model()


class RankingAPITestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.users = [
            User.objects.create_user(
                username=f"player{i}",
                email=f"player{i}@example.com",
                password="pass1234",
                name=f"Player {i}",
            )
            for i in range(3)
        ]
        for points, user in zip((30, 90, 60), self.users):
            Point.objects.create(
                user=user, points=points, description="correct answer on question 1",
                kind="correct_answer", window_key="lifetime",
            )

        self.client.force_authenticate(user=self.users[0])
        self.ranking_url = reverse("ranking")

    def test_ranking_requires_auth(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(self.ranking_url)
        self.assertEqual(response.status_code, 401)

    def test_ranking_default_is_daily_points_desc(self):
        response = self.client.get(self.ranking_url)

        self.assertEqual(response.status_code, 200, response.data)
        self.assertEqual(response.data["total_count"], 3)
        self.assertEqual([e["score"] for e in response.data["edges"]], [90, 60, 30])
        self.assertEqual(response.data["edges"][0]["node"]["username"], "player1")
        self.assertEqual(response.data["edges"][0]["node"]["display_name"], "Player 1")
        self.assertNotIn("email", response.data["edges"][0]["node"])

    def test_ranking_cursor_pagination(self):
        first = self.client.get(self.ranking_url, {"first": 2})
        self.assertTrue(first.data["page_info"]["has_next_page"])

        second = self.client.get(
            self.ranking_url,
            {"first": 2, "after": first.data["page_info"]["end_cursor"]},
        )
        self.assertEqual([e["score"] for e in second.data["edges"]], [30])
        self.assertFalse(second.data["page_info"]["has_next_page"])

    def test_ranking_invalid_params(self):
        response = self.client.get(self.ranking_url, {"by": "karma"})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.data["success"])

        response = self.client.get(self.ranking_url, {"after": "%%%"})
        self.assertEqual(response.status_code, 400)

    def test_my_points(self):
        Point.objects.create(user=self.users[0], points=20, description="daily login", kind="daily_login", window_key="2026-10-19")

        response = self.client.get(reverse("my-points"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total_points"], 50)
        self.assertEqual(len(response.data["points"]), 2)
