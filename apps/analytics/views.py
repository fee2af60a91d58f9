from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.store.exceptions import StoreError
from .analytics import AnalyticsQueries
from .serializers import (
    # Input serializers
    AsOfQuerySerializer,
    OverviewQuerySerializer,
    TopSellersQuerySerializer,
    DashboardQuerySerializer,
    # Response serializers
    HeaderStatsSerializer,
    BillsOverviewSerializer,
    SellerRankingSerializer,
    DashboardResponseSerializer,
    ErrorSerializer,
)

AS_OF_PARAMETER = OpenApiParameter(
    'as_of', OpenApiTypes.DATE, description='Reference day (YYYY-MM-DD), defaults to today'
)


def store_error_response(e):
    return Response({'error': f"Error loading analytics: {e}"}, status=status.HTTP_502_BAD_GATEWAY)


@extend_schema(
    parameters=[AS_OF_PARAMETER],
    responses={200: HeaderStatsSerializer, 502: ErrorSerializer},
    description="This week's, this month's and the unbilled purchase totals.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def header_stats(request):
    """Header statistics - thin HTTP handler."""
    query_serializer = AsOfQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = AnalyticsQueries.header_stats(today=params.get('as_of'))
    except StoreError as e:
        return store_error_response(e)

    return Response(HeaderStatsSerializer(data).data)


@extend_schema(
    parameters=[
        AS_OF_PARAMETER,
        OpenApiParameter('weeks', OpenApiTypes.INT, description='Recent weeks to include (1-52)'),
        OpenApiParameter('months', OpenApiTypes.INT, description='Recent months to include (1-24)'),
    ],
    responses={200: BillsOverviewSerializer, 502: ErrorSerializer},
    description="Unbilled total plus the most recent week and month totals, newest first.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def bills_overview(request):
    query_serializer = OverviewQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = AnalyticsQueries.bills_overview(
            today=params.get('as_of'),
            weeks=params['weeks'],
            months=params['months'],
        )
    except StoreError as e:
        return store_error_response(e)

    return Response(BillsOverviewSerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of results (1-100)'),
    ],
    responses={200: SellerRankingSerializer, 502: ErrorSerializer},
    description="Sellers ranked by total purchase value.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def top_sellers(request):
    query_serializer = TopSellersQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    try:
        results = AnalyticsQueries.top_sellers(limit=query_serializer.validated_data['limit'])
    except StoreError as e:
        return store_error_response(e)

    return Response({'results': results})


@extend_schema(
    responses={200: SellerRankingSerializer, 502: ErrorSerializer},
    description="Unbilled purchase total per seller, highest first.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unbilled_by_seller(request):
    try:
        results = AnalyticsQueries.unbilled_by_seller()
    except StoreError as e:
        return store_error_response(e)

    return Response({'results': results})


@extend_schema(
    parameters=[
        AS_OF_PARAMETER,
        OpenApiParameter('limit', OpenApiTypes.INT, description='Top sellers to include (1-100)'),
    ],
    responses={200: DashboardResponseSerializer, 502: ErrorSerializer},
    description="This week's total, top sellers and unbilled totals per seller.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Analytics dashboard - thin HTTP handler."""
    query_serializer = DashboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = AnalyticsQueries.dashboard(today=params.get('as_of'), limit=params['limit'])
    except StoreError as e:
        return store_error_response(e)

    return Response(DashboardResponseSerializer(data).data)
