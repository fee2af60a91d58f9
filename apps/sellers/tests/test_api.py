import pytest
from unittest.mock import patch
from django.urls import reverse
from rest_framework import status

from apps.store.exceptions import StoreError
from apps.store.models import Collection


# =============================================================================
# Seller List/Create Tests
# =============================================================================

@pytest.mark.django_db
class TestSellerList:
    """Tests for GET/POST /api/sellers/"""

    def test_list_sellers(self, sellers_client, seller, other_seller):
        response = sellers_client.get(reverse('sellers:seller-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [s['name'] for s in response.data] == ['Seller A', 'Seller B']
        assert response.data[0]['items'][0]['price'] == 110

    def test_list_empty(self, sellers_client):
        response = sellers_client.get(reverse('sellers:seller-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_create_seller(self, sellers_client, store):
        response = sellers_client.post(reverse('sellers:seller-list'), {
            'name': 'Seller C',
            'contact': 'c@example.com',
            'items': [
                {'name': 'Item 1', 'price': 50, 'code': 'C-1'},
                {'name': '', 'price': 99},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Seller C'
        assert len(response.data['items']) == 1
        assert store.get(Collection.SELLERS, response.data['id'])['contact'] == 'c@example.com'

    def test_create_without_name(self, sellers_client):
        response = sellers_client.post(reverse('sellers:seller-list'), {
            'name': '',
            'items': [{'name': 'Item 1', 'price': 10}],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Error saving seller: Seller name is required'

    def test_create_without_items(self, sellers_client):
        response = sellers_client.post(reverse('sellers:seller-list'), {
            'name': 'Seller C',
            'items': [],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Error saving seller: Please add at least one item'

    def test_create_negative_price(self, sellers_client):
        response = sellers_client.post(reverse('sellers:seller-list'), {
            'name': 'Seller C',
            'items': [{'name': 'Item 1', 'price': -5}],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_with_repeated_item_id(self, sellers_client, store):
        response = sellers_client.post(reverse('sellers:seller-list'), {
            'name': 'Seller C',
            'items': [
                {'item_id': 'dup', 'name': 'Item 1', 'price': 10},
                {'item_id': 'dup', 'name': 'Item 2', 'price': 20},
            ],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == "Error saving seller: Item id 'dup' is used by more than one item"
        assert store.list(Collection.SELLERS) == []

    def test_create_store_failure(self, sellers_client):
        with patch('apps.store.services.DocumentStore.create', side_effect=StoreError('down')):
            response = sellers_client.post(reverse('sellers:seller-list'), {
                'name': 'Seller C',
                'items': [{'name': 'Item 1', 'price': 1}],
            }, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['error'] == 'Error saving seller: down'

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('sellers:seller-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Seller Detail Tests
# =============================================================================

@pytest.mark.django_db
class TestSellerDetail:
    """Tests for GET/PUT/DELETE /api/sellers/{id}/"""

    def test_retrieve(self, sellers_client, seller):
        response = sellers_client.get(reverse('sellers:seller-detail', args=[seller.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == seller.id

    def test_retrieve_missing(self, sellers_client):
        response = sellers_client.get(reverse('sellers:seller-detail', args=['missing']))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Error loading seller: Seller not found'

    def test_update(self, sellers_client, seller):
        item_id = seller.items[0].item_id

        response = sellers_client.put(reverse('sellers:seller-detail', args=[seller.id]), {
            'name': 'Seller A (new)',
            'items': [{'item_id': item_id, 'name': 'Item 1', 'price': 115}],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == seller.id
        assert response.data['items'][0]['item_id'] == item_id
        assert response.data['items'][0]['price'] == 115

    def test_update_missing_creates(self, sellers_client):
        response = sellers_client.put(reverse('sellers:seller-detail', args=['missing']), {
            'name': 'Seller Z',
            'items': [{'name': 'Item 1', 'price': 1}],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['id'] != 'missing'

    def test_delete_cascades(self, sellers_client, store, seller, add_purchase):
        purchase_id = add_purchase(seller)

        response = sellers_client.delete(reverse('sellers:seller-detail', args=[seller.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['succeeded'] == [seller.id, purchase_id]
        assert store.list(Collection.PURCHASES) == []

    def test_delete_missing(self, sellers_client):
        response = sellers_client.delete(reverse('sellers:seller-detail', args=['missing']))

        assert response.status_code == status.HTTP_404_NOT_FOUND
