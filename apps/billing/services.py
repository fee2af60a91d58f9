"""
Billing Services Module
========================

Generating a bill and committing it.

Functions:
    generate_bill: Resolve the period, aggregate unbilled purchases and
        remember the covered ids on the session.
    mark_as_billed: Flag the remembered purchases as billed.

Example:
    Bill last week's purchases::

        session = TrackerSession.load(request)
        bill = services.generate_bill(session=session, period='week')
        result = services.mark_as_billed(session=session)
        session.save(request)

Note:
    The commit is not atomic. Each purchase is updated with its own store
    call and nothing is rolled back; the returned BatchResult names the
    purchases that were and were not updated.
"""

import logging
from typing import Optional

from django.utils import timezone

from apps.analytics.periods import resolve_period
from apps.purchases.services import list_purchases
from apps.purchases.session import TrackerSession
from apps.store.batch import BatchResult
from apps.store.exceptions import StoreError
from apps.store.models import Collection
from apps.store.services import DocumentStore
from .aggregation import Bill, build_bill
from .exceptions import NothingToBillError

logger = logging.getLogger(__name__)


def generate_bill(
    *,
    session: TrackerSession,
    period: str = 'week',
    date_from=None,
    date_to=None,
    today=None,
    store: Optional[DocumentStore] = None
) -> Bill:
    """
    Build a bill for the chosen period.

    The ids of the billed purchases replace whatever the session held
    from a previous run. On failure the session is left unchanged.

    Args:
        session: The client's tracker session
        period: 'week', 'month' or 'custom'
        date_from: Start of a custom period
        date_to: End of a custom period
        today: Reference day for week/month, defaults to today

    Raises:
        InvalidPeriodError: Unknown period or custom without dates
        InvalidDateRangeError: Custom start after end
        NoUnbilledPurchasesError: Nothing to bill in range
        StoreError: If purchases can't be read
    """
    today = today or timezone.localdate()
    start, end = resolve_period(period, today, date_from, date_to)

    bill = build_bill(
        list_purchases(store=store),
        start.isoformat(),
        end.isoformat(),
        generated_at=timezone.now().isoformat(),
    )
    session.last_bill_ids = list(bill.purchase_ids)

    logger.info(
        "Bill generated for %s..%s: %d purchases, total %d",
        bill.date_from, bill.date_to, len(bill.purchase_ids), bill.grand_total
    )
    return bill


def mark_as_billed(
    *,
    session: TrackerSession,
    now=None,
    store: Optional[DocumentStore] = None
) -> BatchResult:
    """
    Set ``billed`` and ``billedAt`` on every purchase of the last bill.

    Updates run one at a time. A failed update is recorded and the loop
    moves on. Afterwards the session keeps only the ids that failed, so a
    retry touches just those.

    Raises:
        NothingToBillError: If no bill has been generated
    """
    if not session.last_bill_ids:
        raise NothingToBillError("No purchases to mark as billed")

    store = store or DocumentStore()
    billed_at = (now or timezone.now()).isoformat()
    result = BatchResult(action='mark_as_billed')

    for purchase_id in session.last_bill_ids:
        try:
            store.update(Collection.PURCHASES, purchase_id, {
                'billed': True,
                'billedAt': billed_at,
            })
        except StoreError as e:
            logger.warning("Failed to mark purchase %s as billed: %s", purchase_id, e)
            result.record_failure(purchase_id, e)
        else:
            result.record_success(purchase_id)

    session.last_bill_ids = result.failed
    logger.info(
        "Marked %d purchases as billed, %d failed",
        len(result.succeeded), len(result.failed)
    )
    return result
