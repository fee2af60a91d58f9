import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.sellers.services import save_seller
from apps.store.models import Collection
from apps.store.services import DocumentStore


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def sellers_user(db):
    return User.objects.create_user(
        username='sellers_user',
        email='sellers_user@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def sellers_client(api_client, sellers_user):
    """Return API client authenticated as the sellers user."""
    refresh = RefreshToken.for_user(sellers_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def store(db):
    return DocumentStore()


@pytest.fixture
def seller(store):
    """Seller A with two priced items."""
    seller, _ = save_seller(
        name='Seller A',
        contact='+91 98765 43210',
        items=[
            {'name': 'Item 1', 'price': 110, 'code': 'A-1'},
            {'name': 'Item 2', 'price': 135, 'code': 'A-2'},
        ],
        store=store,
    )
    return seller


@pytest.fixture
def other_seller(store):
    seller, _ = save_seller(
        name='Seller B',
        items=[{'name': 'Item 1', 'price': 220, 'code': 'B-1'}],
        store=store,
    )
    return seller


@pytest.fixture
def add_purchase(store):
    """Factory writing a purchase for a seller straight to the store."""

    def _add(seller, date='2024-01-02', qty=1):
        item = seller.items[0]
        return store.create(Collection.PURCHASES, {
            'sellerId': seller.id,
            'sellerName': seller.name,
            'date': date,
            'items': [{'itemId': item.item_id, 'name': item.name, 'price': item.price, 'qty': qty}],
            'billed': False,
        })

    return _add
