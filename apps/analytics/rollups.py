"""
Period rollups over purchase lists.

Pure functions: each takes the full purchase list and recomputes from
scratch. Amounts are integers in the smallest currency unit.
"""

from .periods import month_key, week_end, week_label, week_start


def total_of(purchases):
    """Sum of ``qty * price`` over every line of every purchase."""
    return sum(purchase.total for purchase in purchases)


def purchases_between(purchases, date_from, date_to):
    """Purchases dated within ``[date_from, date_to]`` (ISO string compare)."""
    date_from, date_to = str(date_from), str(date_to)
    return [p for p in purchases if date_from <= p.date <= date_to]


def purchases_in_week_of(purchases, today):
    return purchases_between(
        purchases,
        week_start(today).isoformat(),
        week_end(today).isoformat()
    )


def purchases_in_month_of(purchases, today):
    key = month_key(today)
    return [p for p in purchases if p.date.startswith(key)]


def unbilled(purchases):
    return [p for p in purchases if not p.billed]


def bucket_by_week(purchases):
    """Map ``"weekStart—weekEnd"`` labels to the total of that week."""
    buckets = {}
    for purchase in purchases:
        key = week_label(purchase.date)
        buckets[key] = buckets.get(key, 0) + purchase.total
    return buckets


def bucket_by_month(purchases):
    """Map ``YYYY-MM`` keys to the total of that month."""
    buckets = {}
    for purchase in purchases:
        key = month_key(purchase.date)
        buckets[key] = buckets.get(key, 0) + purchase.total
    return buckets


def most_recent(buckets, limit):
    """
    The ``limit`` latest buckets, newest first.

    Week labels and month keys start with an ISO date, so sorting the
    keys as strings sorts them chronologically.
    """
    return [
        {'period': key, 'total': buckets[key]}
        for key in sorted(buckets, reverse=True)[:limit]
    ]


def totals_by_seller(purchases):
    """Map seller name to purchase total, in first-seen order."""
    totals = {}
    for purchase in purchases:
        totals[purchase.seller_name] = totals.get(purchase.seller_name, 0) + purchase.total
    return totals


def rank_sellers(totals, limit=None):
    """
    Sellers by total, highest first.

    Ties keep their first-seen order (sorted() is stable).
    """
    ranked = sorted(totals.items(), key=lambda x: x[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [{'seller_name': name, 'total': total} for name, total in ranked]


def top_sellers(purchases, limit=5):
    return rank_sellers(totals_by_seller(purchases), limit=limit)


def unbilled_by_seller(purchases):
    return rank_sellers(totals_by_seller(unbilled(purchases)))
