import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.purchases.session import TrackerSession
from apps.store.exceptions import StoreError
from apps.store.models import Collection
from apps.store.services import DocumentStore


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def billing_user(db):
    return User.objects.create_user(
        username='billing_user',
        email='billing_user@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def billing_client(api_client, billing_user):
    """Return API client authenticated as the billing user."""
    refresh = RefreshToken.for_user(billing_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def store(db):
    return DocumentStore()


@pytest.fixture
def tracker_session():
    return TrackerSession()


@pytest.fixture
def add_purchase(store):
    """Factory writing a purchase document straight to the store."""

    def _add(date, seller_id='s1', seller_name='Seller A', items=None, billed=False):
        return store.create(Collection.PURCHASES, {
            'sellerId': seller_id,
            'sellerName': seller_name,
            'date': str(date),
            'items': items if items is not None else [
                {'itemId': 'i1', 'name': 'Item 1', 'price': 100, 'qty': 1},
            ],
            'billed': billed,
            'createdAt': f'{date}T10:00:00+00:00',
        })

    return _add


class FlakyStore(DocumentStore):
    """Store whose updates fail for a fixed set of ids."""

    def __init__(self, failing_ids):
        self.failing_ids = set(failing_ids)

    def update(self, collection, document_id, fields):
        if document_id in self.failing_ids:
            raise StoreError(f"Could not update {collection}/{document_id}: connection lost")
        super().update(collection, document_id, fields)


@pytest.fixture
def flaky_store_factory(db):
    return FlakyStore
