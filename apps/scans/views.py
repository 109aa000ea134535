from rest_framework import status, generics, serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from apps.currency.exceptions import DetectionFailedError, DetectorUnavailableError
from apps.currency.formatting import format_rupiah
from apps.subscriptions.services import ScanLimitExceededError
from .serializers import (
    BanknoteImageSerializer,
    ScanRecordSerializer,
    SingleScanResponseSerializer,
)
from .services import scan_banknote, get_scan_history


# Response serializers for API documentation
class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class ScanLimitResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    limit = serializers.IntegerField()
    used = serializers.IntegerField()
    remaining = serializers.IntegerField()


def scan_limit_response(exc):
    """429 body for an exhausted daily allowance."""
    return Response({
        'error': str(exc),
        'limit': exc.limit,
        'used': exc.used,
        'remaining': 0,
    }, status=status.HTTP_429_TOO_MANY_REQUESTS)


class ScanPagination(PageNumberPagination):
    """Custom pagination for scan history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    request={'multipart/form-data': BanknoteImageSerializer},
    responses={
        200: SingleScanResponseSerializer,
        400: ErrorResponseSerializer,
        422: ErrorResponseSerializer,
        429: ScanLimitResponseSerializer,
        503: ErrorResponseSerializer,
    },
    description="Identify a single banknote from an uploaded photo.",
    tags=['scan'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def single_scan(request):
    """Scan one banknote."""
    serializer = BanknoteImageSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        outcome = scan_banknote(
            user=request.user,
            image=serializer.validated_data['image'],
        )
    except ScanLimitExceededError as e:
        return scan_limit_response(e)
    except DetectionFailedError as e:
        return Response({'error': str(e)}, status=status.HTTP_422_UNPROCESSABLE_ENTITY)
    except DetectorUnavailableError as e:
        return Response({'error': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    detection = outcome.detection
    return Response({
        'id': outcome.record.id,
        'value': detection.value,
        'value_formatted': format_rupiah(detection.value),
        'currency': detection.currency,
        'text': detection.text,
        'confidence': detection.confidence,
        'remaining_scans': outcome.quota.remaining,
    })


@extend_schema(tags=['scan'])
class ScanHistoryView(generics.ListAPIView):
    """Paginated single-scan history of the current user, newest first."""

    serializer_class = ScanRecordSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ScanPagination

    def get_queryset(self):
        return get_scan_history(user=self.request.user)
