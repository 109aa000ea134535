from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from apps.currency.formatting import format_rupiah
from .plans import get_plans
from .serializers import PlanSerializer, SubscriptionSerializer, SubscribeSerializer
from .services import (
    get_or_create_subscription,
    subscribe as subscribe_service,
    cancel_subscription as cancel_subscription_service,
    InvalidPlanError,
    PlanChangeError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class PaymentInfoSerializer(serializers.Serializer):
    message = serializers.CharField()
    amount = serializers.IntegerField()
    amount_formatted = serializers.CharField()


class SubscribeResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    subscription = SubscriptionSerializer()
    payment = PaymentInfoSerializer()


class CancelResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    subscription = SubscriptionSerializer()


@extend_schema(
    responses={200: PlanSerializer(many=True)},
    description="List the available subscription plans.",
    tags=['subscription'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def list_plans(request):
    """List all plans."""
    serializer = PlanSerializer(get_plans(), many=True)
    return Response(serializer.data)


@extend_schema(
    responses={200: SubscriptionSerializer},
    description="Get the current user's subscription and today's scan usage.",
    tags=['subscription'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_subscription(request):
    """Get current subscription."""
    subscription = get_or_create_subscription(user=request.user)
    return Response(SubscriptionSerializer(subscription).data)


@extend_schema(
    request=SubscribeSerializer,
    responses={
        200: SubscribeResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Subscribe to a paid plan. Payment is simulated.",
    tags=['subscription'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def subscribe(request):
    """Subscribe to a paid plan."""
    serializer = SubscribeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        subscription = subscribe_service(
            user=request.user,
            plan=serializer.validated_data['plan'],
        )
    except InvalidPlanError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    plan_data = SubscriptionSerializer(subscription).data
    return Response({
        'message': f"Subscribed to {plan_data['plan_name']}",
        'subscription': plan_data,
        'payment': {
            'message': 'Payment simulated successfully.',
            'amount': subscription.price,
            'amount_formatted': format_rupiah(subscription.price),
        },
    })


@extend_schema(
    request=None,
    responses={
        200: CancelResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Cancel the paid plan and return to the free plan.",
    tags=['subscription'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cancel(request):
    """Downgrade to the free plan."""
    try:
        subscription = cancel_subscription_service(user=request.user)
    except PlanChangeError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Subscription cancelled. You are now on the free plan.',
        'subscription': SubscriptionSerializer(subscription).data,
    })
