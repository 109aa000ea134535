import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.currency.detection import DetectionResult
from apps.subscriptions.services import get_or_create_subscription


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user with a free plan."""
    user = User.objects.create_user(
        email='scanner@example.com',
        password='TestPass123!',
        display_name='Scanner',
    )
    get_or_create_subscription(user=user)
    return user


@pytest.fixture
def other_user(db):
    """Create and return a second user."""
    return User.objects.create_user(
        email='someone@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def filename_detector(settings):
    """Detect the denomination from the upload name (note_50000.jpg)."""
    settings.SCAN_TUNAI_DETECTOR = 'apps.currency.tests.fakes.FilenameDetector'


@pytest.fixture
def detection():
    return DetectionResult(value=50000, confidence=92.5, text='lima puluh ribu rupiah')
