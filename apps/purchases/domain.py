"""Typed purchase structures built from stored documents."""

from dataclasses import dataclass, field
from typing import Optional

from apps.sellers.domain import coerce_int

TRUE_STRINGS = {'true', '1', 'yes'}


def coerce_bool(value):
    """Read a stored flag; strings such as ``"false"`` or ``"0"`` count as False."""
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


@dataclass
class PurchaseLine:
    """Snapshot of one item bought: name and price as they were at purchase time."""

    item_id: str
    name: str
    price: int
    qty: int

    @property
    def amount(self):
        return self.qty * self.price

    @classmethod
    def from_document(cls, data):
        data = data or {}
        return cls(
            item_id=str(data.get('itemId') or ''),
            name=data.get('name') or '',
            price=coerce_int(data.get('price')),
            qty=coerce_int(data.get('qty')),
        )

    def to_document(self):
        return {
            'itemId': self.item_id,
            'name': self.name,
            'price': self.price,
            'qty': self.qty,
        }


@dataclass
class Purchase:
    """Dated record of quantities bought from one seller."""

    id: Optional[str]
    seller_id: str
    seller_name: str
    date: str
    items: list[PurchaseLine] = field(default_factory=list)
    billed: bool = False
    created_at: Optional[str] = None
    billed_at: Optional[str] = None

    @property
    def total(self):
        return sum(line.amount for line in self.items)

    @classmethod
    def from_document(cls, record):
        record = record or {}
        return cls(
            id=record.get('id'),
            seller_id=str(record.get('sellerId') or ''),
            seller_name=record.get('sellerName') or '',
            date=str(record.get('date') or ''),
            items=[PurchaseLine.from_document(line) for line in (record.get('items') or [])],
            billed=coerce_bool(record.get('billed', False)),
            created_at=record.get('createdAt'),
            billed_at=record.get('billedAt'),
        )

    def to_document(self):
        document = {
            'sellerId': self.seller_id,
            'sellerName': self.seller_name,
            'date': self.date,
            'items': [line.to_document() for line in self.items],
            'billed': self.billed,
            'createdAt': self.created_at,
        }
        if self.billed_at:
            document['billedAt'] = self.billed_at
        return document
