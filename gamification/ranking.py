# gamification/ranking.py
"""
Leaderboard over a calendar window.

Scores are aggregated, sorted and limited in the database. Ties are broken by
user id so that a cursor (the last user id of a page) always resumes at the
same place. Read-only: concurrent grants may or may not be visible.
"""
import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import models
from django.db.models import Count, Q, Sum

from core import datetime_utils
from core.exceptions import InvalidCursorError
from questions.models import Submission
from .models import Point

logger = logging.getLogger("dbplay.ranking")

User = get_user_model()

CURSOR_PREFIX = "user:"


class RankingBy(models.TextChoices):
    POINTS = "points", "Points"
    COMPLETED_QUESTIONS = "completed_questions", "Completed questions"


class RankingPeriod(models.TextChoices):
    DAILY = "daily", "Daily"
    WEEKLY = "weekly", "Weekly"


class RankingOrder(models.TextChoices):
    ASC = "asc", "Ascending"
    DESC = "desc", "Descending"


@dataclass(frozen=True)
class RankingFilter:
    by: str = RankingBy.POINTS
    period: str = RankingPeriod.DAILY
    order: str = RankingOrder.DESC


@dataclass
class RankingEdge:
    node: object
    score: int
    cursor: str


@dataclass
class PageInfo:
    has_next_page: bool = False
    has_previous_page: bool = False
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None


@dataclass
class RankingConnection:
    edges: List[RankingEdge] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=PageInfo)
    total_count: int = 0


def encode_cursor(user_id: int) -> str:
    return base64.urlsafe_b64encode(f"{CURSOR_PREFIX}{user_id}".encode()).decode()


def decode_cursor(cursor: str) -> int:
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
    except (binascii.Error, UnicodeError, ValueError):
        raise InvalidCursorError()
    if not raw.startswith(CURSOR_PREFIX):
        raise InvalidCursorError()
    try:
        return int(raw[len(CURSOR_PREFIX):])
    except ValueError:
        raise InvalidCursorError()


class RankingService:
    def __init__(self, clock=None):
        self.clock = clock or datetime_utils.now

    def window_start(self, period):
        current = self.clock()
        if period == RankingPeriod.WEEKLY:
            return datetime_utils.start_of_week(current)
        # Daily, and anything unknown
        return datetime_utils.start_of_today(current)

    def user_scores(self, by, since):
        """values() queryset of {"user_id", "score"} for users with a score in the window."""
        if by == RankingBy.POINTS:
            return (
                Point.objects.filter(granted_at__gte=since)
                .order_by()
                .values("user_id")
                .annotate(score=Sum("points"))
            )
        if by == RankingBy.COMPLETED_QUESTIONS:
            return (
                Submission.objects.filter(status=Submission.STATUS_SUCCESS, submitted_at__gte=since)
                .order_by()
                .values("user_id")
                .annotate(score=Count("question_id", distinct=True))
            )
        raise ValueError(f"unsupported ranking type: {by}")

    def get_ranking(self, first=None, after=None, filter=None):
        filter = filter or RankingFilter()
        descending = filter.order == RankingOrder.DESC

        since = self.window_start(filter.period)
        scores = self.user_scores(filter.by, since)

        total_count = scores.count()

        limit = first if first is not None and first > 0 else settings.RANKING_DEFAULT_PAGE_SIZE

        ordered = scores.order_by("-score" if descending else "score", "user_id")

        has_previous_page = False
        if after:
            after_id = decode_cursor(after)
            anchor = scores.filter(user_id=after_id).values_list("score", flat=True).first()
            # An unknown cursor restarts from the top
            if anchor is not None:
                has_previous_page = True
                beyond = Q(score__lt=anchor) if descending else Q(score__gt=anchor)
                ordered = ordered.filter(beyond | Q(score=anchor, user_id__gt=after_id))

        rows = list(ordered[: limit + 1])
        has_next_page = len(rows) > limit
        rows = rows[:limit]

        users = User.objects.in_bulk([row["user_id"] for row in rows])

        edges = [
            RankingEdge(node=users[row["user_id"]], score=row["score"], cursor=encode_cursor(row["user_id"]))
            for row in rows
            if row["user_id"] in users
        ]

        page_info = PageInfo(
            has_next_page=has_next_page,
            has_previous_page=has_previous_page,
        )
        if edges:
            page_info.start_cursor = edges[0].cursor
            page_info.end_cursor = edges[-1].cursor

        logger.debug(
            f"ranking by={filter.by} period={filter.period} order={filter.order} "
            f"since={since.isoformat()} total={total_count} edges={len(edges)}"
        )
        return RankingConnection(edges=edges, page_info=page_info, total_count=total_count)
