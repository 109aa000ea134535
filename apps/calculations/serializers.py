from rest_framework import serializers
from .services import summarize_session


class TallySerializer(serializers.Serializer):
    value = serializers.IntegerField()
    count = serializers.IntegerField()
    formatted = serializers.CharField()
    text = serializers.CharField()


class CalculationSessionSerializer(serializers.Serializer):
    """Summary of a calculation session. Takes a CalculationSession instance."""

    session_id = serializers.UUIDField()
    total_amount = serializers.IntegerField()
    total_formatted = serializers.CharField()
    total_text = serializers.CharField()
    banknote_count = serializers.IntegerField()
    currency = serializers.CharField()
    tallies = TallySerializer(many=True)
    is_completed = serializers.BooleanField()
    note = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    completed_at = serializers.DateTimeField(allow_null=True)

    def to_representation(self, instance):
        return super().to_representation(summarize_session(instance))


class FinishSessionSerializer(serializers.Serializer):
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)


class AdmitResponseSerializer(serializers.Serializer):
    scanned_value = serializers.IntegerField()
    scanned_formatted = serializers.CharField()
    scanned_text = serializers.CharField()
    confidence = serializers.FloatField()
    remaining_scans = serializers.IntegerField(allow_null=True)
    session = CalculationSessionSerializer()
