"""Seller management service - CRUD operations for sellers and their items."""

import logging
import uuid
from typing import Optional

from django.utils import timezone

from apps.store.batch import BatchResult
from apps.store.exceptions import DocumentNotFoundError, StoreError
from apps.store.models import Collection
from apps.store.services import DocumentStore
from .domain import Item, Seller, coerce_int
from .exceptions import (
    SellerNotFoundError,
    InvalidSellerNameError,
    InvalidItemError,
    NoItemsError,
)

logger = logging.getLogger(__name__)


EXAMPLE_SELLERS = [
    {
        'name': 'Seller A',
        'items': [
            {'name': 'Item 1', 'price': 110, 'code': 'A-1'},
            {'name': 'Item 2', 'price': 135, 'code': 'A-2'},
        ],
    },
    {
        'name': 'Seller B',
        'items': [
            {'name': 'Item 1', 'price': 220, 'code': 'B-1'},
            {'name': 'Item 2', 'price': 330, 'code': 'B-2'},
        ],
    },
]


def generate_item_id() -> str:
    return str(uuid.uuid4())


def list_sellers(*, store: Optional[DocumentStore] = None) -> list[Seller]:
    """Return all sellers, oldest first."""
    store = store or DocumentStore()
    return [Seller.from_document(record) for record in store.list(Collection.SELLERS)]


def get_seller(*, seller_id: str, store: Optional[DocumentStore] = None) -> Seller:
    """
    Retrieve a seller by id.

    Raises:
        SellerNotFoundError: If the seller doesn't exist
    """
    store = store or DocumentStore()
    try:
        record = store.get(Collection.SELLERS, seller_id)
    except DocumentNotFoundError:
        raise SellerNotFoundError("Seller not found")
    return Seller.from_document(record)


def build_items(raw_items: list[dict]) -> list[Item]:
    """
    Turn submitted item rows into Items.

    Rows without a name are skipped. An existing ``item_id`` is kept so
    purchases that reference the item stay linked after an edit; rows
    without one get a fresh id.

    Raises:
        InvalidItemError: If a price is negative or not a number, or an
            item_id appears on more than one row
        NoItemsError: If no named rows remain
    """
    items = []
    seen_ids = set()
    for row in raw_items or []:
        name = (row.get('name') or '').strip()
        if not name:
            continue

        price = row.get('price')
        if price is not None and price != '' and coerce_int(price, default=None) is None:
            raise InvalidItemError(f"Price of '{name}' must be a number")
        price = coerce_int(price)
        if price < 0:
            raise InvalidItemError(f"Price of '{name}' must not be negative")

        item_id = (row.get('item_id') or '').strip()
        if item_id in seen_ids:
            raise InvalidItemError(f"Item id '{item_id}' is used by more than one item")
        item_id = item_id or generate_item_id()
        seen_ids.add(item_id)

        items.append(Item(
            item_id=item_id,
            name=name,
            price=price,
            code=(row.get('code') or '').strip(),
            photo=row.get('photo') or '',
        ))

    if not items:
        raise NoItemsError("Please add at least one item")

    return items


def save_seller(
    *,
    name: str,
    items: list[dict],
    contact: str = '',
    seller_id: Optional[str] = None,
    store: Optional[DocumentStore] = None
) -> tuple[Seller, bool]:
    """
    Create a seller, or update an existing one.

    This operation:
    1. Validates the name and item rows (no store call on failure)
    2. Updates the seller when ``seller_id`` exists in the store
    3. Falls back to creating a new seller when the document is missing,
       including when it disappears between the lookup and the update

    Args:
        name: Seller name (required, stripped)
        items: Item rows with name, price, code, photo and optional item_id
        contact: Optional contact details
        seller_id: Id of the seller being edited, or None to create

    Returns:
        Tuple of (saved Seller, created flag)

    Raises:
        InvalidSellerNameError: If name is empty
        InvalidItemError: If an item row is invalid
        NoItemsError: If no named items were submitted
        StoreError: If the store write fails
    """
    store = store or DocumentStore()

    name = (name or '').strip()
    if not name:
        raise InvalidSellerNameError("Seller name is required")

    seller = Seller(
        id=None,
        name=name,
        contact=(contact or '').strip(),
        items=build_items(items),
        updated_at=timezone.now().isoformat(),
    )

    if seller_id:
        try:
            existing = store.get(Collection.SELLERS, seller_id)
            store.update(Collection.SELLERS, seller_id, seller.to_document())
        except DocumentNotFoundError:
            logger.info("Seller %s not found, creating new seller instead", seller_id)
        else:
            seller.id = seller_id
            seller.created_at = existing.get('createdAt')
            logger.info("Seller updated: %s (%s)", seller.name, seller_id)
            return seller, False

    seller.created_at = timezone.now().isoformat()
    seller.id = store.create(Collection.SELLERS, seller.to_document())
    logger.info("Seller created: %s (%s)", seller.name, seller.id)
    return seller, True


def delete_seller(*, seller_id: str, store: Optional[DocumentStore] = None) -> BatchResult:
    """
    Delete a seller and cascade to all of its purchases.

    The seller document is removed first, then each purchase one by one.
    There is no rollback: a failing purchase delete is recorded and the
    remaining purchases are still attempted.

    Returns:
        BatchResult with the seller as the first step

    Raises:
        SellerNotFoundError: If the seller doesn't exist
        StoreError: If deleting the seller document itself fails
    """
    from apps.purchases.services import list_purchases

    store = store or DocumentStore()
    get_seller(seller_id=seller_id, store=store)

    result = BatchResult(action='delete seller')
    store.delete(Collection.SELLERS, seller_id)
    result.record_success(seller_id)

    for purchase in list_purchases(store=store):
        if purchase.seller_id != seller_id:
            continue
        try:
            store.delete(Collection.PURCHASES, purchase.id)
        except StoreError as e:
            logger.warning("Could not delete purchase %s of seller %s: %s", purchase.id, seller_id, e)
            result.record_failure(purchase.id, e)
        else:
            result.record_success(purchase.id)

    logger.info(
        "Seller %s deleted with %d purchase(s), %d failure(s)",
        seller_id, len(result.succeeded) - 1, len(result.failed)
    )
    return result


def seed_example_sellers(*, store: Optional[DocumentStore] = None) -> bool:
    """
    Create two example sellers when the sellers collection is empty.

    Seeding is best effort: failures are logged and reported as False,
    never raised.

    Returns:
        True if the example sellers were created
    """
    store = store or DocumentStore()
    try:
        if store.list(Collection.SELLERS):
            return False

        now = timezone.now().isoformat()
        for example in EXAMPLE_SELLERS:
            store.create(Collection.SELLERS, {
                'name': example['name'],
                'contact': '',
                'items': [
                    {'itemId': generate_item_id(), 'photo': '', **item}
                    for item in example['items']
                ],
                'createdAt': now,
            })
    except StoreError:
        logger.exception("Error seeding example sellers")
        return False

    logger.info("Example data seeded successfully")
    return True
