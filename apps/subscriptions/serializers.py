from rest_framework import serializers
from apps.currency.formatting import format_rupiah
from .models import Subscription, PlanType
from .plans import get_plan


class PlanSerializer(serializers.Serializer):
    """Read-only view of a catalogue plan."""

    key = serializers.CharField()
    name = serializers.CharField()
    price = serializers.IntegerField()
    price_formatted = serializers.CharField()
    duration_days = serializers.IntegerField(allow_null=True)
    daily_scan_limit = serializers.IntegerField(allow_null=True)
    features = serializers.ListField(child=serializers.CharField())


class SubscriptionSerializer(serializers.ModelSerializer):
    """Current subscription with today's quota usage."""

    plan_name = serializers.SerializerMethodField()
    price_formatted = serializers.SerializerMethodField()
    features = serializers.SerializerMethodField()
    is_subscription_active = serializers.SerializerMethodField()
    is_unlimited = serializers.SerializerMethodField()
    daily_scan_limit = serializers.SerializerMethodField()
    scans_today = serializers.SerializerMethodField()
    remaining_scans = serializers.SerializerMethodField()

    class Meta:
        model = Subscription
        fields = [
            'id',
            'plan',
            'plan_name',
            'price',
            'price_formatted',
            'features',
            'started_at',
            'expires_at',
            'is_active',
            'is_subscription_active',
            'is_unlimited',
            'daily_scan_limit',
            'scans_today',
            'remaining_scans',
        ]
        read_only_fields = fields

    def get_plan_name(self, obj):
        plan = get_plan(obj.plan)
        return plan.name if plan else obj.get_plan_display()

    def get_price_formatted(self, obj):
        return format_rupiah(obj.price)

    def get_features(self, obj):
        plan = get_plan(obj.plan)
        return plan.features if plan else []

    def get_is_subscription_active(self, obj):
        return obj.is_subscription_active()

    def get_is_unlimited(self, obj):
        return obj.is_unlimited()

    def get_daily_scan_limit(self, obj):
        return obj.effective_daily_limit()

    def get_scans_today(self, obj):
        return obj.scans_used_today()

    def get_remaining_scans(self, obj):
        return obj.remaining_scans()


class SubscribeSerializer(serializers.Serializer):
    plan = serializers.ChoiceField(choices=PlanType.choices)
