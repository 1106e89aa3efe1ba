# questions/views.py

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Question, Submission
from .serializers import (
    QuestionSerializer,
    SubmissionSerializer,
    SubmissionStatisticsSerializer,
    SubmitAnswerSerializer,
)
from .services import SubmissionService, submission_statistics


class QuestionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Question catalogue plus answer submission.
    """
    queryset = Question.objects.select_related("database").order_by("id")
    serializer_class = QuestionSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        qs = super().get_queryset()
        difficulty = self.request.query_params.get("difficulty")
        if difficulty:
            qs = qs.filter(difficulty=difficulty)
        return qs

    @action(detail=True, methods=["post"])
    def submit(self, request, pk=None):
        """
        POST /api/questions/<id>/submit/
        Grade the answer, store the submission and emit `submit_answer`.
        """
        serializer = SubmitAnswerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        submission = SubmissionService().submit_answer(
            request.user.id,
            int(pk),
            serializer.validated_data["answer"],
        )
        return Response(SubmissionSerializer(submission).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def submissions(self, request, pk=None):
        """
        GET /api/questions/<id>/submissions/
        The current user's attempts at this question.
        """
        question = self.get_object()
        qs = Submission.objects.filter(user=request.user, question=question).order_by("-submitted_at", "-id")
        return Response(SubmissionSerializer(qs, many=True).data)


class MyStatisticsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        stats = submission_statistics(request.user.id)
        return Response(SubmissionStatisticsSerializer(stats).data)
