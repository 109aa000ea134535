from rest_framework import status, generics, serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from apps.currency.exceptions import DetectionFailedError, DetectorUnavailableError
from apps.scans.serializers import BanknoteImageSerializer
from apps.scans.views import scan_limit_response, ScanLimitResponseSerializer
from apps.subscriptions.services import ScanLimitExceededError
from .serializers import (
    CalculationSessionSerializer,
    FinishSessionSerializer,
    AdmitResponseSerializer,
)
from .services import (
    start_session,
    get_session,
    scan_into_session,
    finalize_session,
    get_completed_sessions,
    SessionNotFoundError,
    SessionClosedError,
    SessionAlreadyCompletedError,
    InvalidDenominationError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class SessionPagination(PageNumberPagination):
    """Custom pagination for calculation history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    request=None,
    responses={201: CalculationSessionSerializer},
    description="Start a new, empty calculation session.",
    tags=['calculation'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def start(request):
    """Start a calculation session."""
    session = start_session(owner=request.user)
    return Response(CalculationSessionSerializer(session).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request={'multipart/form-data': BanknoteImageSerializer},
    responses={
        200: AdmitResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
        422: ErrorResponseSerializer,
        429: ScanLimitResponseSerializer,
        503: ErrorResponseSerializer,
    },
    description="Scan a banknote and add it to the session's running total.",
    tags=['calculation'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def add(request, session_id):
    """Add a scanned banknote to a session."""
    serializer = BanknoteImageSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = scan_into_session(
            session_id=session_id,
            owner=request.user,
            image=serializer.validated_data['image'],
        )
    except SessionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SessionClosedError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except InvalidDenominationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except ScanLimitExceededError as e:
        return scan_limit_response(e)
    except DetectionFailedError as e:
        return Response({'error': str(e)}, status=status.HTTP_422_UNPROCESSABLE_ENTITY)
    except DetectorUnavailableError as e:
        return Response({'error': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return Response({
        'scanned_value': result.value,
        'scanned_formatted': result.formatted,
        'scanned_text': result.text,
        'confidence': result.confidence,
        'remaining_scans': result.remaining_scans,
        'session': CalculationSessionSerializer(result.session).data,
    })


@extend_schema(
    request=FinishSessionSerializer,
    responses={
        200: CalculationSessionSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Finish a session, freezing its totals, with an optional note.",
    tags=['calculation'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def finish(request, session_id):
    """Finish a calculation session."""
    serializer = FinishSessionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        session = finalize_session(
            session_id=session_id,
            owner=request.user,
            note=serializer.validated_data.get('note'),
        )
    except SessionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SessionAlreadyCompletedError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response(CalculationSessionSerializer(session).data)


@extend_schema(
    responses={
        200: CalculationSessionSerializer,
        404: ErrorResponseSerializer,
    },
    description="Get the current state of a calculation session.",
    tags=['calculation'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def detail(request, session_id):
    """Get a calculation session."""
    try:
        session = get_session(session_id=session_id, owner=request.user)
    except SessionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(CalculationSessionSerializer(session).data)


@extend_schema(tags=['calculation'])
class CalculationHistoryView(generics.ListAPIView):
    """Paginated completed sessions of the current user, newest first."""

    serializer_class = CalculationSessionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SessionPagination

    def get_queryset(self):
        return get_completed_sessions(owner=self.request.user)
