# questions/models.py
from django.db import models
from django.conf import settings

from core import datetime_utils


class Database(models.Model):
    """A sandbox schema that questions are answered against."""
    slug = models.SlugField(max_length=64, unique=True)
    description = models.CharField(max_length=255, blank=True, default="")
    schema = models.TextField(help_text="SQL schema loaded into the sandbox")
    relation_figure = models.CharField(max_length=1024, unique=True)

    def __str__(self):
        return self.slug


class Question(models.Model):
    DIFFICULTY_UNSPECIFIED = "unspecified"
    DIFFICULTY_EASY = "easy"
    DIFFICULTY_MEDIUM = "medium"
    DIFFICULTY_HARD = "hard"

    DIFFICULTY_CHOICES = [
        (DIFFICULTY_UNSPECIFIED, "Unspecified"),
        (DIFFICULTY_EASY, "Easy"),
        (DIFFICULTY_MEDIUM, "Medium"),
        (DIFFICULTY_HARD, "Hard"),
    ]

    database = models.ForeignKey(
        Database,
        on_delete=models.PROTECT,
        related_name="questions",
    )
    category = models.CharField(max_length=64, help_text="e.g. 'query'")
    difficulty = models.CharField(
        max_length=16,
        choices=DIFFICULTY_CHOICES,
        default=DIFFICULTY_MEDIUM,
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    reference_answer = models.TextField()

    def __str__(self):
        return self.title


class Submission(models.Model):
    """
    One graded answer attempt. The status is decided by the grading
    workflow before the row is written and never transitions afterwards.
    """
    STATUS_PENDING = "pending"
    STATUS_SUCCESS = "success"
    STATUS_FAILED = "failed"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_SUCCESS, "Success"),
        (STATUS_FAILED, "Failed"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="submissions",
    )
    question = models.ForeignKey(
        Question,
        on_delete=models.CASCADE,
        related_name="submissions",
    )

    submitted_code = models.TextField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, db_index=True)

    # {"columns": [...], "rows": [[...]], "match_answer": bool}
    query_result = models.JSONField(null=True, blank=True)
    error = models.TextField(null=True, blank=True)

    submitted_at = models.DateTimeField(default=datetime_utils.now, db_index=True)

    class Meta:
        ordering = ["-submitted_at"]
        indexes = [
            models.Index(fields=["user", "question"], name="questions_s_user_id_5e2c41_idx"),
            models.Index(fields=["question", "status", "submitted_at"], name="questions_s_questio_8a7d10_idx"),  # First place lookup
            models.Index(fields=["status", "submitted_at"], name="questions_s_status_c04b9e_idx"),  # Ranking window scan
        ]

    def save(self, *args, **kwargs):
        if self.pk is not None and not kwargs.get("force_insert"):
            raise ValueError("Submission rows are immutable once graded")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.user_id} -> Q{self.question_id} ({self.status})"
