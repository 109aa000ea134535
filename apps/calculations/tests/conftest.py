import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.calculations.services import start_session
from apps.subscriptions.services import get_or_create_subscription


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user with a free plan."""
    user = User.objects.create_user(
        email='counter@example.com',
        password='TestPass123!',
        display_name='Counter',
    )
    get_or_create_subscription(user=user)
    return user


@pytest.fixture
def other_user(db):
    """Create and return a user who does not own the session."""
    return User.objects.create_user(
        email='intruder@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(other_user):
    """API client authenticated as ``other_user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def session(user):
    """An open, empty calculation session owned by ``user``."""
    return start_session(owner=user)


@pytest.fixture
def filename_detector(settings):
    """Detect the denomination from the upload name (note_50000.jpg)."""
    settings.SCAN_TUNAI_DETECTOR = 'apps.currency.tests.fakes.FilenameDetector'
