from django.conf import settings
from rest_framework import serializers
from apps.currency.formatting import format_rupiah
from .models import ScanRecord


class BanknoteImageSerializer(serializers.Serializer):
    """Multipart upload of one banknote photo."""

    image = serializers.ImageField()

    def validate_image(self, value):
        limit = settings.SCAN_TUNAI_MAX_IMAGE_BYTES
        if value.size > limit:
            raise serializers.ValidationError(
                f"Image is too large. Maximum size is {limit // (1024 * 1024)} MB."
            )
        return value


class ScanRecordSerializer(serializers.ModelSerializer):
    """Serializer for scan history entries."""

    value_formatted = serializers.SerializerMethodField()
    confidence = serializers.FloatField(read_only=True, allow_null=True)

    class Meta:
        model = ScanRecord
        fields = [
            'id',
            'value',
            'value_formatted',
            'currency',
            'text',
            'confidence',
            'operation',
            'session',
            'created_at',
        ]
        read_only_fields = fields

    def get_value_formatted(self, obj):
        return format_rupiah(obj.value)


class SingleScanResponseSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    value = serializers.IntegerField()
    value_formatted = serializers.CharField()
    currency = serializers.CharField()
    text = serializers.CharField()
    confidence = serializers.FloatField()
    remaining_scans = serializers.IntegerField(allow_null=True)
