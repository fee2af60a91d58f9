"""
Service layer tests for billing app.

Tests cover:
- Period resolution when generating a bill
- Session bookkeeping of the last bill ids
- Non-atomic commit with partial failures
"""

import pytest
from datetime import date, datetime, timezone as dt_timezone

from apps.analytics.exceptions import InvalidPeriodError, InvalidDateRangeError
from apps.billing import services
from apps.billing.exceptions import NoUnbilledPurchasesError, NothingToBillError
from apps.store.models import Collection


TODAY = date(2024, 1, 10)  # Wednesday; week is 2024-01-08..2024-01-14


# =============================================================================
# Generate Bill Tests
# =============================================================================

@pytest.mark.django_db
class TestGenerateBill:

    def test_week_period(self, store, tracker_session, add_purchase):
        """Week bill covers Monday to Sunday of today."""
        in_week = add_purchase('2024-01-08')
        add_purchase('2024-01-15')
        add_purchase('2024-01-07')

        bill = services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)

        assert bill.date_from == '2024-01-08'
        assert bill.date_to == '2024-01-14'
        assert bill.purchase_ids == [in_week]
        assert tracker_session.last_bill_ids == [in_week]

    def test_month_period(self, store, tracker_session, add_purchase):
        add_purchase('2024-01-01')
        add_purchase('2024-01-31')
        add_purchase('2024-02-01')

        bill = services.generate_bill(session=tracker_session, period='month', today=TODAY, store=store)

        assert (bill.date_from, bill.date_to) == ('2024-01-01', '2024-01-31')
        assert len(bill.purchase_ids) == 2
        assert bill.grand_total == 200

    def test_custom_period(self, store, tracker_session, add_purchase):
        add_purchase('2023-12-30')

        bill = services.generate_bill(
            session=tracker_session,
            period='custom',
            date_from='2023-12-01',
            date_to='2023-12-31',
            today=TODAY,
            store=store,
        )

        assert len(bill.purchase_ids) == 1

    def test_custom_without_dates(self, store, tracker_session):
        with pytest.raises(InvalidPeriodError, match="Select custom dates"):
            services.generate_bill(session=tracker_session, period='custom', today=TODAY, store=store)

    def test_custom_reversed_range(self, store, tracker_session):
        with pytest.raises(InvalidDateRangeError):
            services.generate_bill(
                session=tracker_session,
                period='custom',
                date_from='2024-02-01',
                date_to='2024-01-01',
                today=TODAY,
                store=store,
            )

    def test_no_unbilled_purchases_keeps_previous_ids(self, store, tracker_session, add_purchase):
        add_purchase('2024-01-09', billed=True)
        tracker_session.last_bill_ids = ['previous']

        with pytest.raises(NoUnbilledPurchasesError):
            services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)

        assert tracker_session.last_bill_ids == ['previous']

    def test_new_bill_replaces_previous_ids(self, store, tracker_session, add_purchase):
        purchase_id = add_purchase('2024-01-09')
        tracker_session.last_bill_ids = ['previous']

        services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)

        assert tracker_session.last_bill_ids == [purchase_id]

    def test_generated_at_is_set(self, store, tracker_session, add_purchase):
        add_purchase('2024-01-09')

        bill = services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)

        assert bill.generated_at is not None


# =============================================================================
# Mark As Billed Tests
# =============================================================================

@pytest.mark.django_db
class TestMarkAsBilled:

    def test_marks_every_purchase(self, store, tracker_session, add_purchase):
        first = add_purchase('2024-01-08')
        second = add_purchase('2024-01-09')
        services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)
        now = datetime(2024, 1, 14, 18, 0, tzinfo=dt_timezone.utc)

        result = services.mark_as_billed(session=tracker_session, now=now, store=store)

        assert result.is_complete
        assert result.succeeded == [first, second]
        assert tracker_session.last_bill_ids == []
        for purchase_id in (first, second):
            record = store.get(Collection.PURCHASES, purchase_id)
            assert record['billed'] is True
            assert record['billedAt'] == now.isoformat()

    def test_billed_purchases_excluded_from_overlapping_run(self, store, tracker_session, add_purchase):
        add_purchase('2024-01-09')
        services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)
        services.mark_as_billed(session=tracker_session, store=store)

        with pytest.raises(NoUnbilledPurchasesError):
            services.generate_bill(session=tracker_session, period='month', today=TODAY, store=store)

    def test_nothing_to_bill(self, store, tracker_session):
        with pytest.raises(NothingToBillError, match="No purchases to mark as billed"):
            services.mark_as_billed(session=tracker_session, store=store)

    def test_partial_failure_keeps_failed_ids(
        self, store, tracker_session, add_purchase, flaky_store_factory
    ):
        """A failed update doesn't stop the loop or undo earlier updates."""
        first = add_purchase('2024-01-08')
        second = add_purchase('2024-01-09')
        third = add_purchase('2024-01-10')
        services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)

        result = services.mark_as_billed(
            session=tracker_session,
            store=flaky_store_factory([second]),
        )

        assert not result.is_complete
        assert result.succeeded == [first, third]
        assert result.failed == [second]
        assert 'connection lost' in result.to_dict()['failed'][0]['error']
        assert tracker_session.last_bill_ids == [second]
        assert store.get(Collection.PURCHASES, first)['billed'] is True
        assert store.get(Collection.PURCHASES, second)['billed'] is False

    def test_retry_after_partial_failure(
        self, store, tracker_session, add_purchase, flaky_store_factory
    ):
        first = add_purchase('2024-01-08')
        second = add_purchase('2024-01-09')
        services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)
        services.mark_as_billed(session=tracker_session, store=flaky_store_factory([second]))

        result = services.mark_as_billed(session=tracker_session, store=store)

        assert result.succeeded == [second]
        assert tracker_session.last_bill_ids == []
        assert store.get(Collection.PURCHASES, first)['billed'] is True
        assert store.get(Collection.PURCHASES, second)['billed'] is True

    def test_deleted_purchase_is_reported(self, store, tracker_session, add_purchase):
        purchase_id = add_purchase('2024-01-09')
        services.generate_bill(session=tracker_session, period='week', today=TODAY, store=store)
        store.delete(Collection.PURCHASES, purchase_id)

        result = services.mark_as_billed(session=tracker_session, store=store)

        assert result.failed == [purchase_id]
