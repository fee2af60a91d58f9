"""
Cart Engine
============

Pending quantities for the currently selected seller, before anything is
saved. The cart only knows item ids and quantities; names and prices are
looked up in the seller's current item list whenever a total or the
purchase lines are computed.

Example:
    Building a purchase::

        cart = Cart()
        cart.change_qty(item.item_id, 1)
        cart.change_qty(item.item_id, 1)
        cart.set_qty(other.item_id, '3')

        total = cart.compute_total(seller.items)
        lines = cart.to_purchase_lines(seller.items)
"""

import re

from .domain import PurchaseLine

LEADING_INTEGER = re.compile(r'^\s*([+-]?\d+)')


def parse_quantity(value):
    """
    Parse a typed quantity the way a lenient number field does.

    Leading digits are used (``'3.9'`` -> 3, ``'12abc'`` -> 12), anything
    unparseable becomes 0 and negative results are floored to 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        return max(0, int(value))

    match = LEADING_INTEGER.match(str(value or ''))
    if not match:
        return 0
    return max(0, int(match.group(1)))


class Cart:
    """Mapping of item id to a non-negative quantity."""

    def __init__(self, quantities=None):
        self.quantities = {
            str(item_id): parse_quantity(qty)
            for item_id, qty in (quantities or {}).items()
        }

    def __len__(self):
        return len(self.quantities)

    def get_qty(self, item_id):
        return self.quantities.get(item_id, 0)

    def change_qty(self, item_id, delta):
        """Add ``delta`` (may be negative) and floor the result at 0."""
        qty = max(0, self.get_qty(item_id) + int(delta))
        self.quantities[item_id] = qty
        return qty

    def set_qty(self, item_id, value):
        qty = parse_quantity(value)
        self.quantities[item_id] = qty
        return qty

    def clear(self):
        self.quantities = {}

    def compute_total(self, seller_items):
        """
        Sum ``qty * price`` using the seller's current prices.

        Entries whose item no longer exists in ``seller_items`` contribute
        nothing.
        """
        prices = {item.item_id: item.price for item in seller_items}
        return sum(
            qty * prices[item_id]
            for item_id, qty in self.quantities.items()
            if item_id in prices
        )

    def to_purchase_lines(self, seller_items):
        """
        Build purchase lines for every positive quantity.

        Lines snapshot the item's current name and price. Unknown item ids
        are skipped. An empty list means there is nothing to save.
        """
        items = {item.item_id: item for item in seller_items}
        lines = []
        for item_id, qty in self.quantities.items():
            if qty <= 0 or item_id not in items:
                continue
            item = items[item_id]
            lines.append(PurchaseLine(
                item_id=item_id,
                name=item.name,
                price=item.price,
                qty=qty,
            ))
        return lines

    def to_dict(self):
        return dict(self.quantities)
