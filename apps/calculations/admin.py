from django.contrib import admin
from apps.currency.formatting import format_rupiah
from apps.scans.models import ScanRecord
from .models import CalculationSession


class ScanRecordInline(admin.TabularInline):
    """Scans admitted into the session."""
    model = ScanRecord
    extra = 0
    fields = ['value', 'confidence', 'created_at']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(CalculationSession)
class CalculationSessionAdmin(admin.ModelAdmin):
    """Admin interface for calculation sessions. Totals are read-only."""

    list_display = [
        'owner',
        'total_display',
        'banknote_count',
        'is_completed',
        'created_at',
        'completed_at',
    ]
    list_filter = ['is_completed', 'created_at']
    search_fields = ['owner__email', 'note']
    readonly_fields = [
        'id', 'owner', 'total_amount', 'banknote_count', 'currency',
        'tallies', 'is_completed', 'created_at', 'updated_at', 'completed_at',
    ]
    inlines = [ScanRecordInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Session', {
            'fields': ('id', 'owner', 'is_completed', 'note')
        }),
        ('Totals', {
            'fields': ('total_amount', 'banknote_count', 'currency', 'tallies')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at', 'completed_at'),
            'classes': ('collapse',)
        }),
    )

    def total_display(self, obj):
        return format_rupiah(obj.total_amount)
    total_display.short_description = 'Total'
    total_display.admin_order_field = 'total_amount'

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('owner')
