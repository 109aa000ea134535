import logging

from django.conf import settings
from django.db import connection, DatabaseError
from django.http import JsonResponse
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

logger = logging.getLogger(__name__)

API_VERSION = settings.SPECTACULAR_SETTINGS['VERSION']


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Basic liveness probe."""
    return JsonResponse({
        'status': 'ok',
        'message': 'Scan Tunai API is running',
        'timestamp': timezone.now().isoformat(),
        'version': API_VERSION,
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check_detailed(request):
    """Readiness probe that also checks the database connection."""
    services = {'database': 'unknown'}
    healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        services['database'] = 'healthy'
    except DatabaseError as e:
        logger.error("Database health check failed: %s", e)
        services['database'] = 'unhealthy'
        healthy = False

    return JsonResponse({
        'status': 'ok' if healthy else 'degraded',
        'timestamp': timezone.now().isoformat(),
        'version': API_VERSION,
        'services': services,
    }, status=200 if healthy else 503)


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
