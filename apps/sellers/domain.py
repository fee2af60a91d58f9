"""
Typed seller structures built from stored documents.

Stored documents are free-form, so every field is defaulted when a record
is read: ``items`` becomes an empty list, ``contact``, ``code`` and
``photo`` become empty strings, and prices are coerced to integers.
"""

from dataclasses import dataclass, field
from typing import Optional


def coerce_int(value, default=0):
    """
    Convert a stored numeric value to int, falling back to ``default``.

    Older documents may carry prices as strings or floats; floats are
    rounded to the nearest unit.
    """
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return default


@dataclass
class Item:
    """Catalog entry embedded in a seller."""

    item_id: str
    name: str
    price: int = 0
    code: str = ''
    photo: str = ''

    @classmethod
    def from_document(cls, data):
        data = data or {}
        return cls(
            item_id=str(data.get('itemId') or ''),
            name=data.get('name') or '',
            price=coerce_int(data.get('price')),
            code=data.get('code') or '',
            photo=data.get('photo') or '',
        )

    def to_document(self):
        return {
            'itemId': self.item_id,
            'name': self.name,
            'price': self.price,
            'code': self.code,
            'photo': self.photo,
        }


@dataclass
class Seller:
    """Supplier with an ordered catalog of items."""

    id: Optional[str]
    name: str
    contact: str = ''
    items: list[Item] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_document(cls, record):
        record = record or {}
        return cls(
            id=record.get('id'),
            name=record.get('name') or '',
            contact=record.get('contact') or '',
            items=[Item.from_document(item) for item in (record.get('items') or [])],
            created_at=record.get('createdAt'),
            updated_at=record.get('updatedAt'),
        )

    def to_document(self):
        document = {
            'name': self.name,
            'contact': self.contact,
            'items': [item.to_document() for item in self.items],
        }
        if self.created_at:
            document['createdAt'] = self.created_at
        if self.updated_at:
            document['updatedAt'] = self.updated_at
        return document

    def find_item(self, item_id):
        """Return the item with ``item_id`` or None if it no longer exists."""
        for item in self.items:
            if item.item_id == item_id:
                return item
        return None
