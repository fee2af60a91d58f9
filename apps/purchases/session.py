"""
Per-client tracker state.

The selected seller, the pending cart and the ids covered by the last
generated bill belong to one client. For an authenticated user they live
in that user's `TrackerState` row, so bearer-token clients that keep no
cookie see the same cart on every request. Anonymous requests fall back
to the Django session.
"""

from dataclasses import dataclass, field
from typing import Optional

from .cart import Cart
from .models import TrackerState

SESSION_KEY = 'purchase_tracker'


def _request_user(request):
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return user
    return None


@dataclass
class TrackerSession:
    selected_seller_id: Optional[str] = None
    cart: Cart = field(default_factory=Cart)
    last_bill_ids: list[str] = field(default_factory=list)

    def select_seller(self, seller_id, keep_qty=False):
        """Switch seller; the cart is emptied unless ``keep_qty`` is set."""
        self.selected_seller_id = seller_id
        if not keep_qty:
            self.cart.clear()

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            selected_seller_id=data.get('selected_seller_id'),
            cart=Cart(data.get('cart')),
            last_bill_ids=list(data.get('last_bill_ids') or []),
        )

    def to_dict(self):
        return {
            'selected_seller_id': self.selected_seller_id,
            'cart': self.cart.to_dict(),
            'last_bill_ids': list(self.last_bill_ids),
        }

    @classmethod
    def load(cls, request):
        user = _request_user(request)
        if user is None:
            return cls.from_dict(request.session.get(SESSION_KEY))

        state = TrackerState.objects.filter(user=user).first()
        return cls.from_dict(state.data if state else None)

    def save(self, request):
        user = _request_user(request)
        if user is None:
            request.session[SESSION_KEY] = self.to_dict()
            return

        TrackerState.objects.update_or_create(user=user, defaults={'data': self.to_dict()})
