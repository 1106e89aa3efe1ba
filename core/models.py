from django.conf import settings
from django.db import models

from .constants import EVENT_TYPE_CHOICES
from . import datetime_utils


class ActivityEvent(models.Model):
    """
    Immutable, append-only log of what users do (logins, answer submissions).
    Source of truth for the points granter and the user's activity history.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="events",
    )

    # What happened? (e.g., 'login', 'submit_answer')
    type = models.CharField(max_length=32, choices=EVENT_TYPE_CHOICES, db_index=True)

    # Loosely-typed extra data, parsed once by core.payloads
    payload = models.JSONField(default=dict, blank=True)

    triggered_at = models.DateTimeField(default=datetime_utils.now, db_index=True)

    class Meta:
        ordering = ["-triggered_at"]
        indexes = [
            models.Index(fields=["type", "user"], name="core_activi_type_7c1f0e_idx"),
            models.Index(fields=["user", "-triggered_at"], name="core_activi_user_id_3b9d2a_idx"),
        ]

    def save(self, *args, **kwargs):
        if self.pk is not None and not kwargs.get("force_insert"):
            raise ValueError("ActivityEvent rows are immutable once created")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.user_id} - {self.type} - {self.triggered_at}"
