from django.contrib import admin
from .models import Point


@admin.register(Point)
class PointAdmin(admin.ModelAdmin):
    list_display = ('user', 'description', 'points', 'kind', 'granted_at')
    list_filter = ('kind', 'granted_at')
    search_fields = ('user__username', 'description')
    readonly_fields = ('window_key',)

    # The ledger is written only by the points granter
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
