from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema

from apps.analytics.exceptions import AnalyticsServiceError
from apps.purchases.session import TrackerSession
from apps.store.exceptions import StoreError
from . import services
from .exceptions import NoUnbilledPurchasesError, NothingToBillError
from .serializers import (
    GenerateBillInputSerializer,
    BillSerializer,
    BatchResultSerializer,
    ErrorSerializer,
)


@extend_schema(
    request=GenerateBillInputSerializer,
    responses={
        200: BillSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
        502: ErrorSerializer,
    },
    description="Generate a bill of unbilled purchases for a week, month or custom range.",
    tags=['billing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def generate_bill(request):
    """Generate a bill - thin HTTP handler."""
    serializer = GenerateBillInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    params = serializer.validated_data

    session = TrackerSession.load(request)
    try:
        bill = services.generate_bill(
            session=session,
            period=params['period'],
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )
    except AnalyticsServiceError as e:
        return Response({'error': f"Error generating bill: {e}"}, status=status.HTTP_400_BAD_REQUEST)
    except NoUnbilledPurchasesError as e:
        return Response({'error': f"Error generating bill: {e}"}, status=status.HTTP_404_NOT_FOUND)
    except StoreError as e:
        return Response(
            {'error': f"Error generating bill: {e}"},
            status=status.HTTP_502_BAD_GATEWAY
        )

    session.save(request)
    return Response(bill.to_dict())


@extend_schema(
    request=None,
    responses={
        200: BatchResultSerializer,
        400: ErrorSerializer,
        502: BatchResultSerializer,
    },
    description=(
        "Mark every purchase of the last generated bill as billed. "
        "Not atomic: on partial failure the failed purchases stay pending for a retry."
    ),
    tags=['billing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_billed(request):
    """Commit the last generated bill - thin HTTP handler."""
    session = TrackerSession.load(request)
    try:
        result = services.mark_as_billed(session=session)
    except NothingToBillError as e:
        return Response({'error': f"Error marking purchases as billed: {e}"}, status=status.HTTP_400_BAD_REQUEST)

    session.save(request)
    if not result.is_complete:
        return Response(result.to_dict(), status=status.HTTP_502_BAD_GATEWAY)
    return Response(result.to_dict())
