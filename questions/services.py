# questions/services.py
import logging

from django.db.models import Count, Q

from core.constants import (
    EVENT_TYPE_SUBMIT_ANSWER,
    PAYLOAD_QUESTION_ID,
    PAYLOAD_STATUS,
    PAYLOAD_SUBMISSION_ID,
)
from core.exceptions import NotFoundError
from core.services import ActivityService
from .models import Question, Submission
from .sqlrunner import SqlRunner, SqlRunnerError

logger = logging.getLogger("dbplay.submission")


def compare_answer(answer, reference_answer):
    """An answer is correct when columns and rows match the reference exactly (order included)."""
    return answer.columns == reference_answer.columns and answer.rows == reference_answer.rows


class SubmissionService:
    """
    Grades an answer in the sandbox, stores the Submission and emits the
    submit_answer activity event that drives the points granter.
    """

    def __init__(self, sqlrunner=None, activity_service=None):
        self.sqlrunner = sqlrunner or SqlRunner()
        self.activity_service = activity_service or ActivityService()

    def submit_answer(self, user_id, question_id, answer):
        try:
            question = Question.objects.select_related("database").get(pk=question_id)
        except Question.DoesNotExist:
            raise NotFoundError("question not found")

        fields = {
            "user_id": user_id,
            "question": question,
            "submitted_code": answer,
        }

        try:
            result = self.run_answer(question.database.schema, answer, question.reference_answer)
        except SqlRunnerError as e:
            logger.info(f"answer execution failed user_id={user_id} question_id={question_id}: {e}")
            fields["error"] = str(e)
            fields["status"] = Submission.STATUS_FAILED
        else:
            fields["query_result"] = result
            fields["status"] = Submission.STATUS_SUCCESS if result["match_answer"] else Submission.STATUS_FAILED

        submission = Submission.objects.create(**fields)
        logger.info(f"submission {submission.id} saved status={submission.status}")

        self.activity_service.trigger_event(
            EVENT_TYPE_SUBMIT_ANSWER,
            user_id,
            {
                PAYLOAD_SUBMISSION_ID: submission.id,
                PAYLOAD_QUESTION_ID: question.id,
                PAYLOAD_STATUS: submission.status,
            },
        )
        return submission

    def run_answer(self, schema, answer, reference_answer):
        """
        Run the reference answer and the user's answer, and compare them.

        A failing reference answer is reported as an error like any other
        runner failure; the submission is then stored as failed.
        """
        reference = self.sqlrunner.query(schema, reference_answer)
        response = self.sqlrunner.query(schema, answer)

        result = response.to_dict()
        result["match_answer"] = compare_answer(response, reference)
        return result


def submission_statistics(user_id):
    """
    Attempted / solved question counts for a user, with solved counts
    broken down per difficulty.
    """
    submissions = Submission.objects.filter(user_id=user_id)
    attempted = submissions.order_by().values("question_id").distinct().count()

    solved_qs = submissions.filter(status=Submission.STATUS_SUCCESS)
    solved = solved_qs.order_by().values("question_id").distinct().count()

    totals = dict(
        Question.objects.values("difficulty").annotate(total=Count("id")).values_list("difficulty", "total")
    )
    solved_by = dict(
        Question.objects.filter(
            Q(submissions__user_id=user_id) & Q(submissions__status=Submission.STATUS_SUCCESS)
        )
        .values("difficulty")
        .annotate(solved=Count("id", distinct=True))
        .values_list("difficulty", "solved")
    )

    by_difficulty = [
        {
            "difficulty": difficulty,
            "total_questions": totals.get(difficulty, 0),
            "solved_questions": solved_by.get(difficulty, 0),
        }
        for difficulty, _label in Question.DIFFICULTY_CHOICES
    ]

    return {
        "total_questions": sum(totals.values()),
        "attempted_questions": attempted,
        "solved_questions": solved,
        "solved_question_by_difficulty": by_difficulty,
    }
