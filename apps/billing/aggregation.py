"""
Billing Aggregation
====================

Builds a bill from a purchase list and a date range. Pure computation:
the caller supplies the purchases and decides what to do with the result.

Algorithm:
    1. Keep unbilled purchases dated within [date_from, date_to]
       (ISO strings, so string comparison is chronological)
    2. Stop with NoUnbilledPurchasesError if nothing is left
    3. Group by seller id, then by item id; one line per purchase
       containing the item: (date, qty, qty * price)
    4. Sort each item's lines by date; item amount = sum of line amounts
    5. Seller total = sum of item amounts; grand total = sum of seller totals

All amounts are integers. Rounding happens only when formatting for display.

Example:
    >>> bill = build_bill(purchases, '2024-01-01', '2024-01-31')
    >>> bill.grand_total
    500
    >>> bill.as_nested()
    {'Seller A': {'Item 1': {'price': 100, 'dateWiseLines': '2024-01-02: 3, 2024-01-09: 2', 'itemAmount': 500}}}
"""

from dataclasses import dataclass, field
from typing import Optional

from .exceptions import NoUnbilledPurchasesError
from .money import format_amount


@dataclass
class BillLine:
    date: str
    qty: int
    amount: int


@dataclass
class BillItem:
    item_id: str
    name: str
    price: int
    lines: list[BillLine] = field(default_factory=list)

    @property
    def amount(self):
        return sum(line.amount for line in self.lines)

    @property
    def date_wise_lines(self):
        return ', '.join(f"{line.date}: {line.qty}" for line in self.lines)


@dataclass
class SellerBill:
    seller_id: str
    seller_name: str
    items: dict[str, BillItem] = field(default_factory=dict)

    @property
    def total(self):
        return sum(item.amount for item in self.items.values())


@dataclass
class Bill:
    date_from: str
    date_to: str
    sellers: dict[str, SellerBill] = field(default_factory=dict)
    purchase_ids: list[str] = field(default_factory=list)
    generated_at: Optional[str] = None

    @property
    def grand_total(self):
        return sum(seller.total for seller in self.sellers.values())

    def as_nested(self):
        """
        ``{sellerName: {itemName: {price, dateWiseLines, itemAmount}}}``.

        Sellers or items that share a display name are merged into one
        entry (first-seen price, lines re-sorted by date), so the nested
        amounts always add up to ``grand_total``.
        """
        merged = {}
        for seller in self.sellers.values():
            by_name = merged.setdefault(seller.seller_name, {})
            for item in seller.items.values():
                entry = by_name.get(item.name)
                if entry is None:
                    by_name[item.name] = BillItem(item.item_id, item.name, item.price, list(item.lines))
                else:
                    entry.lines = sorted(entry.lines + item.lines, key=lambda line: line.date)

        return {
            seller_name: {
                name: {
                    'price': item.price,
                    'dateWiseLines': item.date_wise_lines,
                    'itemAmount': item.amount,
                }
                for name, item in items.items()
            }
            for seller_name, items in merged.items()
        }

    def to_dict(self):
        return {
            'date_from': self.date_from,
            'date_to': self.date_to,
            'generated_at': self.generated_at,
            'grand_total': self.grand_total,
            'grand_total_display': format_amount(self.grand_total),
            'purchase_ids': list(self.purchase_ids),
            'sellers': [
                {
                    'seller_id': seller.seller_id,
                    'seller_name': seller.seller_name,
                    'total': seller.total,
                    'items': [
                        {
                            'item_id': item.item_id,
                            'name': item.name,
                            'price': item.price,
                            'date_wise_lines': item.date_wise_lines,
                            'item_amount': item.amount,
                        }
                        for item in seller.items.values()
                    ],
                }
                for seller in self.sellers.values()
            ],
            'bill': self.as_nested(),
        }


def select_billable(purchases, date_from, date_to):
    """Unbilled purchases dated within the inclusive range."""
    date_from, date_to = str(date_from), str(date_to)
    return [
        p for p in purchases
        if not p.billed and date_from <= p.date <= date_to
    ]


def build_bill(purchases, date_from, date_to, generated_at=None):
    """
    Aggregate unbilled purchases in ``[date_from, date_to]`` into a Bill.

    Args:
        purchases: Purchase records (billed ones are ignored)
        date_from: Inclusive start, ``date`` or ISO string
        date_to: Inclusive end, ``date`` or ISO string
        generated_at: Optional timestamp recorded on the bill

    Returns:
        Bill with per-seller, per-item lines and the covered purchase ids

    Raises:
        NoUnbilledPurchasesError: If no purchase qualifies
    """
    date_from, date_to = str(date_from), str(date_to)
    billable = select_billable(purchases, date_from, date_to)
    if not billable:
        raise NoUnbilledPurchasesError("No unbilled purchases in range")

    bill = Bill(
        date_from=date_from,
        date_to=date_to,
        purchase_ids=[p.id for p in billable],
        generated_at=generated_at,
    )

    for purchase in billable:
        seller = bill.sellers.setdefault(
            purchase.seller_id,
            SellerBill(seller_id=purchase.seller_id, seller_name=purchase.seller_name)
        )
        for line in purchase.items:
            item = seller.items.setdefault(
                line.item_id,
                BillItem(item_id=line.item_id, name=line.name, price=line.price)
            )
            item.lines.append(BillLine(date=purchase.date, qty=line.qty, amount=line.amount))

    for seller in bill.sellers.values():
        for item in seller.items.values():
            item.lines.sort(key=lambda line: line.date)

    return bill
