from django.contrib import admin
from .models import ScanRecord


@admin.register(ScanRecord)
class ScanRecordAdmin(admin.ModelAdmin):
    """Read-only admin for scan history."""

    list_display = ['user', 'value', 'confidence', 'operation', 'session', 'created_at']
    list_filter = ['operation', 'value', 'created_at']
    search_fields = ['user__email', 'text']
    readonly_fields = [
        'id', 'user', 'value', 'currency', 'confidence',
        'text', 'operation', 'session', 'created_at',
    ]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'session')
