from django.contrib import admin
from .models import Database, Question, Submission


@admin.register(Database)
class DatabaseAdmin(admin.ModelAdmin):
    list_display = ('slug', 'description')
    search_fields = ('slug', 'description')


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ('title', 'database', 'category', 'difficulty')
    list_filter = ('difficulty', 'category', 'database')
    search_fields = ('title', 'description')


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ('user', 'question', 'status', 'submitted_at')
    list_filter = ('status', 'submitted_at')
    search_fields = ('user__username', 'question__title')
    readonly_fields = ('query_result', 'error')

    # Graded attempts are final
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
