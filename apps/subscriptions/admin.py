from django.contrib import admin
from .models import Subscription


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """Admin interface for Subscriptions."""

    list_display = [
        'user',
        'plan',
        'price',
        'expires_at',
        'is_active',
        'scans_today',
        'scan_counter_date',
    ]
    list_filter = ['plan', 'is_active', 'expires_at']
    search_fields = ['user__email', 'user__display_name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']

    fieldsets = (
        ('Plan', {
            'fields': ('user', 'plan', 'price', 'started_at', 'expires_at', 'is_active')
        }),
        ('Quota', {
            'fields': ('daily_scan_limit', 'scans_today', 'scan_counter_date')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['reset_scan_counters']

    @admin.action(description='Reset today\'s scan counter')
    def reset_scan_counters(self, request, queryset):
        count = queryset.update(scans_today=0)
        self.message_user(request, f"Reset scan counters for {count} subscription(s)")

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user')
