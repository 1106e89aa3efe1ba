# gamification/awards.py
"""
Award variants granted by the points granter.

An Award is a kind plus, for per-question kinds, the question id. Its ledger
description, point value and idempotency window are derived from the kind, so
the granter and the ledger never exchange hand-formatted strings.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from django.db import models

from core import datetime_utils


class AwardKind(models.TextChoices):
    DAILY_LOGIN = "daily_login", "Daily login"
    WEEKLY_LOGIN = "weekly_login", "Weekly login"
    FIRST_ATTEMPT = "first_attempt", "First attempt"
    DAILY_ATTEMPT = "daily_attempt", "Daily attempt"
    CORRECT_ANSWER = "correct_answer", "Correct answer"
    FIRST_PLACE = "first_place", "First place"


class AwardWindow(models.TextChoices):
    LIFETIME = "lifetime", "Lifetime"
    DAY = "day", "Calendar day"
    WEEK = "week", "Trailing 7 days"


# kind -> (description template, points, window)
AWARD_TABLE = {
    AwardKind.DAILY_LOGIN: ("daily login", 20, AwardWindow.DAY),
    AwardKind.WEEKLY_LOGIN: ("weekly login", 50, AwardWindow.WEEK),
    AwardKind.FIRST_ATTEMPT: ("first attempt on question {question_id}", 30, AwardWindow.LIFETIME),
    AwardKind.DAILY_ATTEMPT: ("daily attempt", 30, AwardWindow.DAY),
    AwardKind.CORRECT_ANSWER: ("correct answer on question {question_id}", 60, AwardWindow.LIFETIME),
    AwardKind.FIRST_PLACE: ("first place on question {question_id}", 80, AwardWindow.LIFETIME),
}

PER_QUESTION_KINDS = frozenset({
    AwardKind.FIRST_ATTEMPT,
    AwardKind.CORRECT_ANSWER,
    AwardKind.FIRST_PLACE,
})

WEEKLY_LOGIN_DAYS = 7


@dataclass(frozen=True)
class Award:
    kind: AwardKind
    question_id: Optional[int] = None

    def __post_init__(self):
        if self.kind not in AWARD_TABLE:
            raise ValueError(f"{self.kind} is not a grantable award")
        if (self.kind in PER_QUESTION_KINDS) != (self.question_id is not None):
            raise ValueError(f"{self.kind} requires question_id iff it is per question")

    @classmethod
    def daily_login(cls):
        return cls(AwardKind.DAILY_LOGIN)

    @classmethod
    def weekly_login(cls):
        return cls(AwardKind.WEEKLY_LOGIN)

    @classmethod
    def first_attempt(cls, question_id: int):
        return cls(AwardKind.FIRST_ATTEMPT, question_id)

    @classmethod
    def daily_attempt(cls):
        return cls(AwardKind.DAILY_ATTEMPT)

    @classmethod
    def correct_answer(cls, question_id: int):
        return cls(AwardKind.CORRECT_ANSWER, question_id)

    @classmethod
    def first_place(cls, question_id: int):
        return cls(AwardKind.FIRST_PLACE, question_id)

    @property
    def description(self) -> str:
        template = AWARD_TABLE[self.kind][0]
        return template.format(question_id=self.question_id)

    @property
    def points(self) -> int:
        return AWARD_TABLE[self.kind][1]

    @property
    def window(self) -> AwardWindow:
        return AWARD_TABLE[self.kind][2]

    def window_start(self, current: datetime) -> Optional[datetime]:
        """Earliest granted_at that still counts as "already granted"."""
        if self.window == AwardWindow.DAY:
            return datetime_utils.start_of_today(current)
        if self.window == AwardWindow.WEEK:
            return datetime_utils.start_of_trailing_days(WEEKLY_LOGIN_DAYS, current)
        return None

    def window_key(self, granted_at: datetime) -> str:
        """
        Bucket label stored with the ledger row. Paired with the description
        it is unique per user, which makes a grant an insert-if-absent.
        """
        if self.window == AwardWindow.DAY:
            return datetime_utils.day_key(granted_at)
        if self.window == AwardWindow.WEEK:
            # Two weekly grants are at least 7 days apart, so never share an ISO week
            return datetime_utils.iso_week_key(granted_at)
        return AwardWindow.LIFETIME.value
