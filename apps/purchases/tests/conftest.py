import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.purchases.session import TrackerSession
from apps.sellers.services import save_seller
from apps.store.services import DocumentStore


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def purchases_user(db):
    return User.objects.create_user(
        username='purchases_user',
        email='purchases_user@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def purchases_client(api_client, purchases_user):
    """Return API client authenticated as the purchases user."""
    refresh = RefreshToken.for_user(purchases_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def store(db):
    return DocumentStore()


@pytest.fixture
def tracker_session():
    return TrackerSession()


@pytest.fixture
def seller_a(store):
    """Seller A: Item 1 at 110, Item 2 at 135."""
    seller, _ = save_seller(
        name='Seller A',
        items=[
            {'name': 'Item 1', 'price': 110, 'code': 'A-1'},
            {'name': 'Item 2', 'price': 135, 'code': 'A-2'},
        ],
        store=store,
    )
    return seller


@pytest.fixture
def seller_b(store):
    seller, _ = save_seller(
        name='Seller B',
        items=[{'name': 'Item 1', 'price': 220, 'code': 'B-1'}],
        store=store,
    )
    return seller
