"""
Document store tests.

Tests cover:
- Payload sanitizing before writes
- CRUD semantics (merge on update, silent delete of missing ids)
- Error wrapping and collection validation
- Batch result bookkeeping
"""

import pytest
from datetime import date, datetime, timezone as dt_timezone
from unittest.mock import patch
from django.db import DatabaseError

from apps.store.batch import BatchResult
from apps.store.exceptions import DocumentNotFoundError, InvalidCollectionError, StoreError
from apps.store.models import Collection, StoredDocument
from apps.store.services import DocumentStore, sanitize_for_store


class TestSanitizeForStore:

    def test_drops_id_keys_at_every_level(self):
        payload = {'id': 'x', 'name': 'A', 'items': [{'id': 1, 'qty': 2}], 'meta': {'id': 3, 'k': 'v'}}

        assert sanitize_for_store(payload) == {
            'name': 'A',
            'items': [{'qty': 2}],
            'meta': {'k': 'v'},
        }

    def test_keeps_similar_keys(self):
        assert sanitize_for_store({'itemId': 'i1', 'sellerId': 's1'}) == {'itemId': 'i1', 'sellerId': 's1'}

    def test_dates_become_iso_strings(self):
        moment = datetime(2024, 1, 2, 10, 30, tzinfo=dt_timezone.utc)

        assert sanitize_for_store({'d': date(2024, 1, 2), 't': moment}) == {
            'd': '2024-01-02',
            't': '2024-01-02T10:30:00+00:00',
        }

    def test_scalars_pass_through(self):
        assert sanitize_for_store(None) is None
        assert sanitize_for_store([1, 'a', True, None, (2, 3)]) == [1, 'a', True, None, [2, 3]]


@pytest.mark.django_db
class TestDocumentStore:

    def test_create_and_get(self):
        store = DocumentStore()

        document_id = store.create(Collection.SELLERS, {'id': 'ignored', 'name': 'Seller A'})

        assert document_id != 'ignored'
        assert store.get(Collection.SELLERS, document_id) == {'id': document_id, 'name': 'Seller A'}

    def test_list_is_per_collection_in_creation_order(self):
        store = DocumentStore()
        first = store.create(Collection.PURCHASES, {'date': '2024-01-02'})
        second = store.create(Collection.PURCHASES, {'date': '2024-01-01'})
        store.create(Collection.SELLERS, {'name': 'Seller A'})

        assert [r['id'] for r in store.list(Collection.PURCHASES)] == [first, second]

    def test_list_accepts_plain_names(self):
        store = DocumentStore()
        store.create('sellers', {'name': 'Seller A'})

        assert len(store.list('sellers')) == 1

    def test_update_merges_shallowly(self):
        store = DocumentStore()
        document_id = store.create(Collection.PURCHASES, {'billed': False, 'date': '2024-01-02', 'items': [1]})

        store.update(Collection.PURCHASES, document_id, {'billed': True, 'items': [2]})

        assert store.get(Collection.PURCHASES, document_id) == {
            'id': document_id,
            'billed': True,
            'date': '2024-01-02',
            'items': [2],
        }

    def test_update_missing(self):
        with pytest.raises(DocumentNotFoundError, match="No document to update: sellers/nope"):
            DocumentStore().update(Collection.SELLERS, 'nope', {'name': 'x'})

    def test_get_missing(self):
        with pytest.raises(DocumentNotFoundError):
            DocumentStore().get(Collection.SELLERS, 'nope')

    def test_get_from_other_collection_is_missing(self):
        store = DocumentStore()
        document_id = store.create(Collection.SELLERS, {'name': 'Seller A'})

        with pytest.raises(DocumentNotFoundError):
            store.get(Collection.PURCHASES, document_id)

    def test_delete(self):
        store = DocumentStore()
        document_id = store.create(Collection.SELLERS, {'name': 'Seller A'})

        store.delete(Collection.SELLERS, document_id)

        assert not StoredDocument.objects.filter(id=document_id).exists()

    def test_delete_missing_is_silent(self):
        DocumentStore().delete(Collection.SELLERS, 'nope')

    def test_unknown_collection(self):
        with pytest.raises(InvalidCollectionError):
            DocumentStore().list('invoices')

    def test_database_errors_become_store_errors(self):
        with patch.object(StoredDocument.objects, 'create', side_effect=DatabaseError('disk full')):
            with pytest.raises(StoreError, match='disk full'):
                DocumentStore().create(Collection.SELLERS, {'name': 'Seller A'})


class TestBatchResult:

    def test_outcomes(self):
        result = BatchResult(action='mark_as_billed')
        result.record_success('p1')
        result.record_failure('p2', StoreError('down'))
        result.record_success('p3')

        assert result.succeeded == ['p1', 'p3']
        assert result.failed == ['p2']
        assert not result.is_complete
        assert result.to_dict() == {
            'action': 'mark_as_billed',
            'succeeded': ['p1', 'p3'],
            'failed': [{'id': 'p2', 'error': 'down'}],
            'is_complete': False,
        }

    def test_empty_batch_is_complete(self):
        assert BatchResult(action='noop').is_complete
