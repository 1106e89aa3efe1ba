from django.db import IntegrityError, models, transaction
from django.db.models import Q
from django.conf import settings

from core import datetime_utils
from .awards import AwardKind


class PointQuerySet(models.QuerySet):
    def exists_since(self, user_id, description, since=None):
        """Has `user_id` already been granted `description` (on/after `since`)?"""
        qs = self.filter(user_id=user_id, description=description)
        if since is not None:
            qs = qs.filter(granted_at__gte=since)
        return qs.exists()

    def description_exists(self, description):
        """Has anyone been granted `description`? Used for cross-user awards."""
        return self.filter(description=description).exists()

    def conflicting(self, user_id, award, window_key):
        """Rows that make `award` already granted in the `window_key` bucket."""
        conflict = Q(user_id=user_id, description=award.description, window_key=window_key)
        if award.kind == AwardKind.FIRST_PLACE:
            conflict |= Q(kind=AwardKind.FIRST_PLACE, description=award.description)
        return self.filter(conflict)

    def grant(self, user_id, award, granted_at):
        """
        Insert the ledger row for `award` unless an equivalent row exists.

        Returns the new Point, or None when a unique constraint reported the
        award as already granted. Any other integrity failure (unknown user,
        missing column value) is re-raised. Runs in a savepoint so a conflict
        leaves the surrounding transaction usable.
        """
        window_key = award.window_key(granted_at)
        try:
            with transaction.atomic():
                return self.create(
                    user_id=user_id,
                    kind=award.kind,
                    question_id=award.question_id,
                    description=award.description,
                    points=award.points,
                    granted_at=granted_at,
                    window_key=window_key,
                )
        except IntegrityError:
            if self.conflicting(user_id, award, window_key).exists():
                return None
            raise


class Point(models.Model):
    """
    Append-only reward ledger. Each row is one granted award, written only by
    the points granter; a user's score is the sum of their rows in a time
    window.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="points_ledger",
    )

    points = models.IntegerField()
    granted_at = models.DateTimeField(default=datetime_utils.now, db_index=True)

    # Idempotency key, e.g. "first attempt on question 42"
    description = models.CharField(max_length=255)

    kind = models.CharField(max_length=32, choices=AwardKind.choices)
    question_id = models.PositiveIntegerField(null=True, blank=True)

    # "lifetime", "2026-10-19", "2026-W43"
    window_key = models.CharField(max_length=32)

    objects = PointQuerySet.as_manager()

    class Meta:
        ordering = ["-granted_at"]
        indexes = [
            models.Index(fields=["user", "description"], name="gamificatio_user_id_1d4f6b_idx"),
            models.Index(fields=["granted_at", "user"], name="gamificatio_granted_9e03a7_idx"),  # Ranking window scan
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "description", "window_key"],
                name="unique_point_award_per_window",
            ),
            models.UniqueConstraint(
                fields=["description"],
                condition=Q(kind=AwardKind.FIRST_PLACE),
                name="unique_first_place_per_question",
            ),
        ]

    def save(self, *args, **kwargs):
        if self.pk is not None and not kwargs.get("force_insert"):
            raise ValueError("Point rows are immutable once granted")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.user_id} (+{self.points}): {self.description}"
