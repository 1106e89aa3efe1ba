# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Platform account. The reward engine only references users by id; the
    ranking API exposes the public fields below.
    """
    name = models.CharField(max_length=150, blank=True, default="")
    avatar = models.URLField(max_length=1024, blank=True, null=True)

    def __str__(self):
        return self.username

    @property
    def display_name(self):
        return self.name or self.username
