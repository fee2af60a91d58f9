from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.billing.money import format_amount
from apps.sellers.exceptions import SellerNotFoundError
from apps.store.exceptions import StoreError
from . import services
from .exceptions import PurchaseServiceError
from .serializers import (
    # Input serializers
    PurchaseFilterSerializer,
    SelectSellerInputSerializer,
    ChangeQuantityInputSerializer,
    SetQuantityInputSerializer,
    SavePurchaseInputSerializer,
    # Response serializers
    PurchaseSerializer,
    CartStateSerializer,
    ErrorSerializer,
)
from .session import TrackerSession


def cart_response(session, status_code=status.HTTP_200_OK):
    """Serialize the session's cart against the selected seller."""
    try:
        state = services.get_cart_state(session=session)
    except SellerNotFoundError as e:
        return Response({'error': f"Error loading cart: {e}"}, status=status.HTTP_404_NOT_FOUND)
    except StoreError as e:
        return Response({'error': f"Error loading cart: {e}"}, status=status.HTTP_502_BAD_GATEWAY)

    state['total_display'] = format_amount(state['total'])
    return Response(CartStateSerializer(state).data, status=status_code)


@extend_schema(
    parameters=[
        OpenApiParameter('seller', OpenApiTypes.STR, description='Seller id'),
        OpenApiParameter('billed', OpenApiTypes.BOOL, description='Billed flag'),
        OpenApiParameter('date_from', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('date_to', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    ],
    responses={200: PurchaseSerializer(many=True), 502: ErrorSerializer},
    description="List purchases, optionally filtered by seller, billed flag and dates.",
    tags=['purchases'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def purchase_list(request):
    """List purchases - thin HTTP handler."""
    filter_serializer = PurchaseFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    try:
        purchases = services.list_purchases()
    except StoreError as e:
        return Response({'error': f"Error loading purchases: {e}"}, status=status.HTTP_502_BAD_GATEWAY)

    purchases = services.filter_purchases(
        purchases,
        seller_id=params.get('seller'),
        billed=params.get('billed'),
        date_from=params.get('date_from'),
        date_to=params.get('date_to'),
    )
    return Response(PurchaseSerializer(purchases, many=True).data)


@extend_schema(
    responses={200: CartStateSerializer, 404: ErrorSerializer},
    description="Current seller, pending quantities, lines and total.",
    tags=['cart'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cart_state(request):
    return cart_response(TrackerSession.load(request))


@extend_schema(
    request=SelectSellerInputSerializer,
    responses={200: CartStateSerializer, 404: ErrorSerializer},
    description="Select a seller. The cart is cleared unless 'keep' is true.",
    tags=['cart'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_select(request):
    serializer = SelectSellerInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    session = TrackerSession.load(request)
    try:
        services.select_seller(
            session=session,
            seller_id=serializer.validated_data['seller_id'],
            keep_qty=serializer.validated_data['keep'],
        )
    except SellerNotFoundError as e:
        return Response({'error': f"Error selecting seller: {e}"}, status=status.HTTP_404_NOT_FOUND)
    except StoreError as e:
        return Response({'error': f"Error selecting seller: {e}"}, status=status.HTTP_502_BAD_GATEWAY)

    session.save(request)
    return cart_response(session)


@extend_schema(
    request=ChangeQuantityInputSerializer,
    responses={200: CartStateSerializer, 400: ErrorSerializer},
    description="Add a positive or negative step to an item's quantity (floored at 0).",
    tags=['cart'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_change(request):
    serializer = ChangeQuantityInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    session = TrackerSession.load(request)
    try:
        services.change_quantity(
            session=session,
            item_id=serializer.validated_data['item_id'],
            delta=serializer.validated_data['delta'],
        )
    except PurchaseServiceError as e:
        return Response({'error': f"Error changing quantity: {e}"}, status=status.HTTP_400_BAD_REQUEST)

    session.save(request)
    return cart_response(session)


@extend_schema(
    request=SetQuantityInputSerializer,
    responses={200: CartStateSerializer, 400: ErrorSerializer},
    description="Set an item's quantity from typed input; unparseable input becomes 0.",
    tags=['cart'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_set(request):
    serializer = SetQuantityInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    session = TrackerSession.load(request)
    try:
        services.set_quantity(
            session=session,
            item_id=serializer.validated_data['item_id'],
            value=serializer.validated_data['value'],
        )
    except PurchaseServiceError as e:
        return Response({'error': f"Error setting quantity: {e}"}, status=status.HTTP_400_BAD_REQUEST)

    session.save(request)
    return cart_response(session)


@extend_schema(
    request=None,
    responses={200: CartStateSerializer},
    tags=['cart'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_clear(request):
    session = TrackerSession.load(request)
    session.cart.clear()
    session.save(request)
    return cart_response(session)


@extend_schema(
    request=SavePurchaseInputSerializer,
    responses={
        201: PurchaseSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
        502: ErrorSerializer,
    },
    description="Save the cart as a purchase for the selected seller and clear the cart.",
    tags=['cart'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cart_save(request):
    """Save the cart as a purchase - thin HTTP handler."""
    serializer = SavePurchaseInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    session = TrackerSession.load(request)
    try:
        purchase = services.save_purchase(
            session=session,
            purchase_date=serializer.validated_data.get('date'),
        )
    except SellerNotFoundError as e:
        return Response({'error': f"Error saving purchase: {e}"}, status=status.HTTP_404_NOT_FOUND)
    except PurchaseServiceError as e:
        return Response({'error': f"Error saving purchase: {e}"}, status=status.HTTP_400_BAD_REQUEST)
    except StoreError as e:
        return Response({'error': f"Error saving purchase: {e}"}, status=status.HTTP_502_BAD_GATEWAY)

    session.save(request)
    return Response(PurchaseSerializer(purchase).data, status=status.HTTP_201_CREATED)
