from rest_framework import serializers
from .models import Database, Question, Submission


class DatabaseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Database
        fields = ["id", "slug", "description", "relation_figure"]


class QuestionSerializer(serializers.ModelSerializer):
    database = DatabaseSerializer(read_only=True)

    class Meta:
        model = Question
        # reference_answer stays server-side
        fields = ["id", "database", "category", "difficulty", "title", "description"]


class SubmitAnswerSerializer(serializers.Serializer):
    answer = serializers.CharField(trim_whitespace=True)


class SubmissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Submission
        fields = [
            "id",
            "question",
            "submitted_code",
            "status",
            "query_result",
            "error",
            "submitted_at",
        ]
        read_only_fields = fields


class DifficultyStatisticsSerializer(serializers.Serializer):
    difficulty = serializers.CharField()
    total_questions = serializers.IntegerField()
    solved_questions = serializers.IntegerField()


class SubmissionStatisticsSerializer(serializers.Serializer):
    total_questions = serializers.IntegerField()
    attempted_questions = serializers.IntegerField()
    solved_questions = serializers.IntegerField()
    solved_question_by_difficulty = DifficultyStatisticsSerializer(many=True)
