"""
Analytics Module
=================

This module provides the summary views shown next to the purchase and
billing screens. Every method reads the full purchase set from the store
and recomputes its figures; nothing is cached or persisted.

Classes:
    AnalyticsQueries: Static methods for header stats, bill overview,
        seller rankings and the analytics dashboard.

Key Features:
    - This week's / this month's purchase totals
    - Unbilled total, overall and per seller
    - Recent weeks and months (newest first)
    - Top sellers by total purchase value

Example:
    Getting header statistics::

        from apps.analytics.analytics import AnalyticsQueries

        stats = AnalyticsQueries.header_stats(today=date(2024, 1, 10))
        print(f"This week: {stats['week_total']}")
        print(f"Unbilled: {stats['unbilled_total']}")

Note:
    This module is read-only. All methods are static and return plain
    dictionaries suitable for JSON responses.
"""

from django.utils import timezone

from apps.purchases.services import list_purchases
from . import rollups
from .periods import month_key, week_end, week_start

RECENT_WEEKS = 5
RECENT_MONTHS = 6
TOP_SELLERS = 5


class AnalyticsQueries:
    """
    Read-side queries over the purchase collection.

    Methods:
        header_stats: Week, month and unbilled totals plus purchase count.
        bills_overview: Header figures plus recent week and month buckets.
        top_sellers: Sellers ranked by total purchase value.
        unbilled_by_seller: Unbilled total per seller, highest first.
        dashboard: This week's total, top sellers and unbilled by seller.

    Every method takes an optional ``store`` and, where "this week" or
    "this month" matters, an optional ``today`` (defaults to the local date).
    """

    @staticmethod
    def header_stats(today=None, store=None):
        """
        Figures for the page header.

        Returns:
            dict: A dictionary containing:
                - week_start / week_end (date): Current week bounds.
                - month (str): Current month key (YYYY-MM).
                - week_total (int): Purchases dated this week.
                - month_total (int): Purchases dated this month.
                - unbilled_total (int): All unbilled purchases.
                - purchases_count (int): All purchases.
        """
        today = today or timezone.localdate()
        purchases = list_purchases(store=store)

        return {
            'week_start': week_start(today),
            'week_end': week_end(today),
            'month': month_key(today),
            'week_total': rollups.total_of(rollups.purchases_in_week_of(purchases, today)),
            'month_total': rollups.total_of(rollups.purchases_in_month_of(purchases, today)),
            'unbilled_total': rollups.total_of(rollups.unbilled(purchases)),
            'purchases_count': len(purchases),
        }

    @staticmethod
    def bills_overview(today=None, store=None, weeks=RECENT_WEEKS, months=RECENT_MONTHS):
        """
        Summary shown on the bills screen.

        Buckets include billed and unbilled purchases alike.

        Returns:
            dict: unbilled_total, week_total, purchases_count,
            recent_weeks and recent_months (lists of {period, total},
            newest first).
        """
        today = today or timezone.localdate()
        purchases = list_purchases(store=store)

        return {
            'unbilled_total': rollups.total_of(rollups.unbilled(purchases)),
            'week_total': rollups.total_of(rollups.purchases_in_week_of(purchases, today)),
            'purchases_count': len(purchases),
            'recent_weeks': rollups.most_recent(rollups.bucket_by_week(purchases), weeks),
            'recent_months': rollups.most_recent(rollups.bucket_by_month(purchases), months),
        }

    @staticmethod
    def top_sellers(limit=TOP_SELLERS, store=None):
        """Sellers by total purchase value; ties keep first-seen order."""
        return rollups.top_sellers(list_purchases(store=store), limit=limit)

    @staticmethod
    def unbilled_by_seller(store=None):
        return rollups.unbilled_by_seller(list_purchases(store=store))

    @staticmethod
    def dashboard(today=None, store=None, limit=TOP_SELLERS):
        """
        Analytics screen data.

        Returns:
            dict: week_total (int), top_sellers (list), unbilled_by_seller (list).
        """
        today = today or timezone.localdate()
        purchases = list_purchases(store=store)

        return {
            'week_start': week_start(today),
            'week_end': week_end(today),
            'week_total': rollups.total_of(rollups.purchases_in_week_of(purchases, today)),
            'top_sellers': rollups.top_sellers(purchases, limit=limit),
            'unbilled_by_seller': rollups.unbilled_by_seller(purchases),
        }
