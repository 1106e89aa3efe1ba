from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

User = get_user_model()


class UserAPITestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username="mona",
            email="mona@example.com",
            password="pass1234",
            name="Mona",
        )
        self.client.force_authenticate(user=self.user)

    def test_me(self):
        response = self.client.get("/api/users/me/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["username"], "mona")
        self.assertEqual(response.data["name"], "Mona")

    def test_no_directory_listing(self):
        User.objects.create_user(username="ned", email="ned@example.com", password="pass1234")

        response = self.client.get("/api/users/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, [])

    def test_display_name_falls_back_to_username(self):
        self.assertEqual(User(username="otto").display_name, "otto")
        self.assertEqual(self.user.display_name, "Mona")
