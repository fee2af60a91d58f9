"""
Purchase Services Module
=========================

This module provides the business logic between the cart and the record
store: selecting a seller, reading the cart against the seller's current
catalog, and saving the cart as a purchase.

Functions:
    list_purchases: All purchases as typed records.
    filter_purchases: Purchases narrowed by seller, billed flag and dates.
    select_seller: Make a seller current for the session's cart.
    change_quantity, set_quantity: Edit pending quantities.
    get_cart_state: Cart quantities, lines and total for the current seller.
    save_purchase: Persist the cart as a dated purchase.

Example:
    Saving a purchase for the selected seller::

        from apps.purchases.session import TrackerSession
        from apps.purchases import services

        session = TrackerSession.load(request)
        seller = services.select_seller(session=session, seller_id=seller_id)
        session.cart.change_qty(seller.items[0].item_id, 2)
        purchase = services.save_purchase(session=session, purchase_date='2024-01-02')
        session.save(request)

Note:
    The session object is passed in explicitly; nothing here keeps state
    between calls.
"""

import logging
from datetime import date
from typing import Optional

from django.utils import timezone

from apps.sellers.domain import Seller
from apps.sellers.services import get_seller
from apps.store.models import Collection
from apps.store.services import DocumentStore
from .domain import Purchase
from .exceptions import NoSellerSelectedError, EmptyCartError, InvalidPurchaseDateError
from .session import TrackerSession

logger = logging.getLogger(__name__)


def list_purchases(*, store: Optional[DocumentStore] = None) -> list[Purchase]:
    """Return all purchases in store order."""
    store = store or DocumentStore()
    return [Purchase.from_document(record) for record in store.list(Collection.PURCHASES)]


def filter_purchases(
    purchases: list[Purchase],
    *,
    seller_id: Optional[str] = None,
    billed: Optional[bool] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None
) -> list[Purchase]:
    """
    Narrow a purchase list.

    Dates compare as ISO strings, which is the same as comparing them
    chronologically. All bounds are inclusive.
    """
    result = purchases
    if seller_id:
        result = [p for p in result if p.seller_id == seller_id]
    if billed is not None:
        result = [p for p in result if p.billed == billed]
    if date_from:
        result = [p for p in result if p.date >= str(date_from)]
    if date_to:
        result = [p for p in result if p.date <= str(date_to)]
    return result


def select_seller(
    *,
    session: TrackerSession,
    seller_id: str,
    keep_qty: bool = False,
    store: Optional[DocumentStore] = None
) -> Seller:
    """
    Make ``seller_id`` the session's current seller.

    The cart is emptied unless ``keep_qty`` is set. The session is left
    untouched when the seller does not exist.

    Raises:
        SellerNotFoundError: If the seller doesn't exist
    """
    seller = get_seller(seller_id=seller_id, store=store)
    session.select_seller(seller.id, keep_qty=keep_qty)
    return seller


def get_selected_seller(
    *,
    session: TrackerSession,
    store: Optional[DocumentStore] = None
) -> Seller:
    """
    Return the session's current seller, re-read from the store.

    Raises:
        NoSellerSelectedError: If no seller has been selected
        SellerNotFoundError: If the seller was deleted meanwhile
    """
    if not session.selected_seller_id:
        raise NoSellerSelectedError("Select a seller")
    return get_seller(seller_id=session.selected_seller_id, store=store)


def change_quantity(*, session: TrackerSession, item_id: str, delta: int) -> int:
    """Step an item's pending quantity; never goes below zero."""
    if not session.selected_seller_id:
        raise NoSellerSelectedError("Select a seller")
    return session.cart.change_qty(item_id, delta)


def set_quantity(*, session: TrackerSession, item_id: str, value) -> int:
    """Set an item's pending quantity from typed input."""
    if not session.selected_seller_id:
        raise NoSellerSelectedError("Select a seller")
    return session.cart.set_qty(item_id, value)


def get_cart_state(
    *,
    session: TrackerSession,
    store: Optional[DocumentStore] = None
) -> dict:
    """
    Describe the cart against the selected seller's current catalog.

    Returns:
        dict: A dictionary containing:
            - seller (Seller | None): The selected seller, if any.
            - quantities (dict): Item id to pending quantity.
            - lines (list[PurchaseLine]): Lines that would be saved.
            - total (int): Cart total in the smallest currency unit.
    """
    if not session.selected_seller_id:
        return {
            'seller': None,
            'quantities': session.cart.to_dict(),
            'lines': [],
            'total': 0,
        }

    seller = get_selected_seller(session=session, store=store)
    return {
        'seller': seller,
        'quantities': session.cart.to_dict(),
        'lines': session.cart.to_purchase_lines(seller.items),
        'total': session.cart.compute_total(seller.items),
    }


def save_purchase(
    *,
    session: TrackerSession,
    purchase_date=None,
    store: Optional[DocumentStore] = None
) -> Purchase:
    """
    Save the session's cart as a purchase.

    This operation:
    1. Re-reads the selected seller so prices and names are current
    2. Builds lines for positive quantities only
    3. Rejects an empty result before touching the store
    4. Creates the purchase (unbilled) and empties the cart

    Args:
        session: The client's tracker session
        purchase_date: ``date`` or ISO string; defaults to today

    Returns:
        The created Purchase

    Raises:
        NoSellerSelectedError: If no seller has been selected
        SellerNotFoundError: If the seller was deleted meanwhile
        EmptyCartError: If no quantity is positive
        InvalidPurchaseDateError: If the date is not ISO formatted
        StoreError: If the store write fails (cart is kept)
    """
    store = store or DocumentStore()
    seller = get_selected_seller(session=session, store=store)

    lines = session.cart.to_purchase_lines(seller.items)
    if not lines:
        raise EmptyCartError("No quantities selected")

    purchase = Purchase(
        id=None,
        seller_id=seller.id,
        seller_name=seller.name,
        date=normalize_date(purchase_date),
        items=lines,
        billed=False,
        created_at=timezone.now().isoformat(),
    )
    purchase.id = store.create(Collection.PURCHASES, purchase.to_document())

    session.cart.clear()
    logger.info(
        "Purchase saved: %s from %s on %s, total %d",
        purchase.id, seller.name, purchase.date, purchase.total
    )
    return purchase


def normalize_date(value) -> str:
    """Return ``value`` as an ISO date string, today when empty."""
    if not value:
        return timezone.localdate().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(str(value)).isoformat()
    except ValueError:
        raise InvalidPurchaseDateError(f"Invalid purchase date: {value}. Use YYYY-MM-DD")
