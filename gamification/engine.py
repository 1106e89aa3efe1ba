import logging

from django.db import DatabaseError, transaction

from core import analytics, datetime_utils
from core.constants import EVENT_TYPE_LOGIN, EVENT_TYPE_SUBMIT_ANSWER
from core.exceptions import NotFoundError
from core.models import ActivityEvent
from core.payloads import parse_payload
from questions.models import Submission
from .awards import Award, WEEKLY_LOGIN_DAYS
from .models import Point

logger = logging.getLogger("dbplay.gamification")


class _FirstPlaceLost(Exception):
    """Another submission became the earliest while we were inserting."""


class PointsGranter:
    """
    Decides whether an activity event earns the user points.

    Every grant_* method is idempotent: it returns False (not an error) when
    the award was already granted in its window or its condition does not
    hold, and True when a new ledger row was written.
    """

    def __init__(self, clock=None):
        self.clock = clock or datetime_utils.now

    def handle_event(self, event):
        if event.type == EVENT_TYPE_LOGIN:
            if self.grant_daily_login_points(event.user_id):
                logger.info(f"granted daily login points user_id={event.user_id}")
            return

        if event.type == EVENT_TYPE_SUBMIT_ANSWER:
            self._handle_submit_answer(event)
            return

        logger.debug(f"event type {event.type} not handled by points granter")

    def _handle_submit_answer(self, event):
        payload = parse_payload(event.type, event.payload)
        user_id = event.user_id
        question_id = payload.question_id

        try:
            submission = Submission.objects.get(pk=payload.submission_id)
        except Submission.DoesNotExist:
            raise NotFoundError(f"submission {payload.submission_id} not found")

        # Regardless of correctness
        if self.grant_first_attempt_points(user_id, question_id):
            logger.info(f"granted first attempt points user_id={user_id} question_id={question_id}")

        if self.grant_daily_attempt_points(user_id):
            logger.info(f"granted daily attempt points user_id={user_id}")

        if submission.status != Submission.STATUS_SUCCESS:
            return

        if self.grant_correct_answer_points(user_id, question_id):
            logger.info(f"granted correct answer points user_id={user_id} question_id={question_id}")

        if self.grant_first_place_points(user_id, question_id):
            logger.info(f"granted first place points user_id={user_id} question_id={question_id}")

    # -----------------------------
    # Login awards
    # -----------------------------
    def grant_daily_login_points(self, user_id):
        current = self.clock()
        award = Award.daily_login()
        today = award.window_start(current)

        if Point.objects.exists_since(user_id, award.description, today):
            return False

        has_login_today = ActivityEvent.objects.filter(
            type=EVENT_TYPE_LOGIN,
            user_id=user_id,
            triggered_at__gte=today,
        ).exists()
        if not has_login_today:
            return False

        return self._grant(user_id, award, current)

    def grant_weekly_login_points(self, user_id):
        current = self.clock()
        award = Award.weekly_login()
        window_start = award.window_start(current)

        if Point.objects.exists_since(user_id, award.description, window_start):
            return False

        login_times = ActivityEvent.objects.filter(
            type=EVENT_TYPE_LOGIN,
            user_id=user_id,
            triggered_at__gte=window_start,
        ).values_list("triggered_at", flat=True)

        # Time of day is irrelevant; several logins on one day count once
        distinct_days = {datetime_utils.start_of_day(t) for t in login_times}
        if len(distinct_days) != WEEKLY_LOGIN_DAYS:
            return False

        return self._grant(user_id, award, current)

    # -----------------------------
    # Answer awards
    # -----------------------------
    def grant_first_attempt_points(self, user_id, question_id):
        current = self.clock()
        award = Award.first_attempt(question_id)

        if Point.objects.exists_since(user_id, award.description):
            return False

        submission_count = Submission.objects.filter(
            user_id=user_id,
            question_id=question_id,
        ).count()
        if submission_count != 1:
            return False

        return self._grant(user_id, award, current)

    def grant_daily_attempt_points(self, user_id):
        current = self.clock()
        award = Award.daily_attempt()
        today = award.window_start(current)

        if Point.objects.exists_since(user_id, award.description, today):
            return False

        has_submitted_today = ActivityEvent.objects.filter(
            type=EVENT_TYPE_SUBMIT_ANSWER,
            user_id=user_id,
            triggered_at__gte=today,
        ).exists()
        if not has_submitted_today:
            return False

        return self._grant(user_id, award, current)

    def grant_correct_answer_points(self, user_id, question_id):
        current = self.clock()
        award = Award.correct_answer(question_id)

        if Point.objects.exists_since(user_id, award.description):
            return False

        has_successful_submission = Submission.objects.filter(
            user_id=user_id,
            question_id=question_id,
            status=Submission.STATUS_SUCCESS,
        ).exists()
        if not has_successful_submission:
            return False

        return self._grant(user_id, award, current)

    def grant_first_place_points(self, user_id, question_id):
        current = self.clock()
        award = Award.first_place(question_id)

        # Any user, not only this one
        if Point.objects.description_exists(award.description):
            return False

        if self._first_solver_id(question_id) != user_id:
            return False

        try:
            with transaction.atomic():
                point = self._insert(user_id, award, current)
                if point is None:
                    return False
                # A concurrent, earlier submission may have landed between the check and the insert
                if self._first_solver_id(question_id) != user_id:
                    raise _FirstPlaceLost()
        except _FirstPlaceLost:
            logger.info(f"first place on question {question_id} superseded for user_id={user_id}")
            return False

        self._on_granted(point)
        return True

    def _first_solver_id(self, question_id):
        """Owner of the earliest successful submission for the question, or None."""
        return (
            Submission.objects.filter(question_id=question_id, status=Submission.STATUS_SUCCESS)
            .order_by("submitted_at", "id")
            .values_list("user_id", flat=True)
            .first()
        )

    # -----------------------------
    # Ledger writes
    # -----------------------------
    def _grant(self, user_id, award, granted_at):
        point = self._insert(user_id, award, granted_at)
        if point is None:
            # Lost an insert race to a concurrent grant of the same award
            return False
        self._on_granted(point)
        return True

    def _insert(self, user_id, award, granted_at):
        try:
            return Point.objects.grant(user_id, award, granted_at)
        except DatabaseError as e:
            logger.error(f"failed to grant {award.description!r} to user_id={user_id}: {e}")
            analytics.track_exception(user_id, "failed to grant point", str(e))
            raise

    def _on_granted(self, point):
        analytics.track_point_granted(
            user_id=point.user_id,
            description=point.description,
            points=point.points,
            question_id=point.question_id,
        )
