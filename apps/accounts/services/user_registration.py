"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.subscriptions.services import get_or_create_subscription
from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    phone_number: str = ""
) -> User:
    """
    Register a new user and give them the free plan.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name
        phone_number: Optional phone number

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is taken or creation fails
    """
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("Email is already registered")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            phone_number=phone_number,
        )
    except IntegrityError as e:
        raise UserRegistrationError(f"Registration failed: {str(e)}")

    get_or_create_subscription(user=user)

    logger.info("Registered user %s", user.id)
    return user
