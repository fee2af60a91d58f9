import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.purchases.domain import Purchase, PurchaseLine
from apps.store.models import Collection
from apps.store.services import DocumentStore


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def analytics_user(db):
    """Create the main analytics test user."""
    return User.objects.create_user(
        username='analytics_user',
        email='analytics_user@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def analytics_user_client(api_client, analytics_user):
    """Return API client authenticated as analytics user."""
    refresh = RefreshToken.for_user(analytics_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def store(db):
    return DocumentStore()


def make_purchase(purchase_id, date, total, seller_name='Seller A', billed=False):
    """Single-line purchase worth ``total``."""
    return Purchase(
        id=purchase_id,
        seller_id=seller_name.lower().replace(' ', '-'),
        seller_name=seller_name,
        date=date,
        items=[PurchaseLine(item_id='i1', name='Item 1', price=total, qty=1)],
        billed=billed,
    )


@pytest.fixture
def sample_purchases():
    """
    Purchases around Wednesday 2024-01-10.

    Week of 2024-01-08: 300 (A, unbilled) + 200 (B, billed)
    Earlier in January: 100 (A, billed)
    December 2023: 50 (B, unbilled)
    """
    return [
        make_purchase('p1', '2023-12-28', 50, seller_name='Seller B'),
        make_purchase('p2', '2024-01-03', 100, billed=True),
        make_purchase('p3', '2024-01-08', 300),
        make_purchase('p4', '2024-01-10', 200, seller_name='Seller B', billed=True),
    ]


@pytest.fixture
def stored_purchases(store, sample_purchases):
    """The sample purchases written to the store."""
    for purchase in sample_purchases:
        purchase.id = store.create(Collection.PURCHASES, purchase.to_document())
    return sample_purchases
