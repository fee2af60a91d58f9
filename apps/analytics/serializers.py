"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    AsOfQuerySerializer - Reference day for "this week" / "this month"
    OverviewQuerySerializer - Reference day plus recent bucket counts
    TopSellersQuerySerializer - Ranking size

Response Serializers:
    HeaderStatsSerializer - Week, month and unbilled totals
    BillsOverviewSerializer - Totals plus recent weeks and months
    SellerTotalSerializer - One ranked seller
    DashboardResponseSerializer - Analytics screen summary
"""

from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class AsOfQuerySerializer(serializers.Serializer):
    """
    Validate the reference day.

    Query Parameters:
        as_of (date): Day whose week and month are "current"; defaults to today
    """

    as_of = serializers.DateField(required=False)


class OverviewQuerySerializer(AsOfQuerySerializer):
    """
    Query Parameters:
        as_of (date): Reference day
        weeks (int): Number of recent weeks (1-52)
        months (int): Number of recent months (1-24)
    """

    weeks = serializers.IntegerField(min_value=1, max_value=52, required=False, default=5)
    months = serializers.IntegerField(min_value=1, max_value=24, required=False, default=6)


class TopSellersQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for top sellers endpoint.

    Query Parameters:
        limit (int): Number of results to return (1-100)
    """

    limit = serializers.IntegerField(
        min_value=1,
        max_value=100,
        required=False,
        default=5,
        help_text='Number of results (1-100)'
    )


class DashboardQuerySerializer(AsOfQuerySerializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False, default=5)


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class HeaderStatsSerializer(serializers.Serializer):
    """Response serializer for header statistics."""
    week_start = serializers.DateField()
    week_end = serializers.DateField()
    month = serializers.CharField()
    week_total = serializers.IntegerField()
    month_total = serializers.IntegerField()
    unbilled_total = serializers.IntegerField()
    purchases_count = serializers.IntegerField()


class PeriodTotalSerializer(serializers.Serializer):
    """One week (``start—end``) or month (``YYYY-MM``) bucket."""
    period = serializers.CharField()
    total = serializers.IntegerField()


class BillsOverviewSerializer(serializers.Serializer):
    """Response serializer for the bills overview."""
    unbilled_total = serializers.IntegerField()
    week_total = serializers.IntegerField()
    purchases_count = serializers.IntegerField()
    recent_weeks = PeriodTotalSerializer(many=True)
    recent_months = PeriodTotalSerializer(many=True)


class SellerTotalSerializer(serializers.Serializer):
    seller_name = serializers.CharField()
    total = serializers.IntegerField()


class SellerRankingSerializer(serializers.Serializer):
    results = SellerTotalSerializer(many=True)


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for analytics dashboard."""
    week_start = serializers.DateField()
    week_end = serializers.DateField()
    week_total = serializers.IntegerField()
    top_sellers = SellerTotalSerializer(many=True)
    unbilled_by_seller = SellerTotalSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Error response serializer."""
    error = serializers.CharField()
