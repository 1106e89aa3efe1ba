from django.contrib import admin
from .models import ActivityEvent


@admin.register(ActivityEvent)
class ActivityEventAdmin(admin.ModelAdmin):
    list_display = ('user', 'type', 'triggered_at')
    list_filter = ('type', 'triggered_at')
    search_fields = ('user__username',)
    readonly_fields = ('user', 'type', 'payload', 'triggered_at')

    def has_change_permission(self, request, obj=None):
        # Events are append-only
        return False
