"""
Document Store Module
======================

This module provides the record store used by every other app. Documents
live in named collections and are addressed by opaque string ids that the
store assigns. Payloads are free-form JSON; typed structures are applied
by the callers at the read boundary.

Classes:
    DocumentStore: list/get/create/update/delete by collection and id.

Functions:
    sanitize_for_store: Prepare an outgoing payload for writing.

Example:
    Creating and reading back a seller::

        from apps.store.services import DocumentStore
        from apps.store.models import Collection

        store = DocumentStore()
        seller_id = store.create(Collection.SELLERS, {'name': 'Seller A', 'items': []})
        record = store.get(Collection.SELLERS, seller_id)
        print(record['id'], record['name'])

Note:
    Operations are sequential and never batched. There is no retry,
    timeout or caching; every read goes to the database.
"""

import logging
from datetime import date, datetime

from django.db import DatabaseError

from .exceptions import DocumentNotFoundError, InvalidCollectionError, StoreError
from .models import Collection, StoredDocument

logger = logging.getLogger(__name__)


def sanitize_for_store(obj):
    """
    Recursively clean a payload before it is written.

    - keys literally named ``id`` are dropped at every level
      (the store owns identifiers)
    - ``date``/``datetime`` values become ISO-8601 strings
    - lists and tuples are cleaned element by element
    - ``None``, numbers, strings and booleans pass through unchanged

    Example:
        >>> sanitize_for_store({'id': 'x', 'name': 'A', 'items': [{'id': 1, 'qty': 2}]})
        {'name': 'A', 'items': [{'qty': 2}]}
    """
    if obj is None:
        return None
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_store(value) for value in obj]
    if isinstance(obj, dict):
        return {
            key: sanitize_for_store(value)
            for key, value in obj.items()
            if key != 'id'
        }
    return obj


class DocumentStore:
    """
    Collection-keyed document store backed by the Django ORM.

    Methods:
        list: All records of a collection, oldest first.
        get: A single record by id.
        create: Insert a record and return its new id.
        update: Shallow-merge fields into an existing record.
        delete: Remove a record (missing ids are ignored).

    Every record returned carries its id under the ``id`` key, merged with
    the stored fields. Database errors are re-raised as StoreError.
    """

    def list(self, collection):
        collection = self._check_collection(collection)
        try:
            documents = StoredDocument.objects.filter(collection=collection)
            return [document.as_record() for document in documents]
        except DatabaseError as e:
            logger.error("Error listing %s: %s", collection, e)
            raise StoreError(f"Could not list {collection}: {e}") from e

    def get(self, collection, document_id):
        collection = self._check_collection(collection)
        return self._get_document(collection, document_id).as_record()

    def create(self, collection, fields):
        collection = self._check_collection(collection)
        try:
            document = StoredDocument.objects.create(
                collection=collection,
                data=sanitize_for_store(fields or {}),
            )
        except DatabaseError as e:
            logger.error("Error adding to %s: %s", collection, e)
            raise StoreError(f"Could not create document in {collection}: {e}") from e

        logger.info("Document written to %s with id %s", collection, document.id)
        return document.id

    def update(self, collection, document_id, fields):
        """
        Merge ``fields`` into the stored payload.

        Raises:
            DocumentNotFoundError: If the id does not exist in the collection.
            StoreError: On any database failure.
        """
        collection = self._check_collection(collection)
        document = self._get_document(
            collection,
            document_id,
            message=f"No document to update: {collection}/{document_id}"
        )
        document.data = {**(document.data or {}), **sanitize_for_store(fields or {})}
        try:
            document.save(update_fields=['data', 'updated_at'])
        except DatabaseError as e:
            logger.error("Error updating %s/%s: %s", collection, document_id, e)
            raise StoreError(f"Could not update {collection}/{document_id}: {e}") from e

    def delete(self, collection, document_id):
        collection = self._check_collection(collection)
        try:
            deleted, _ = StoredDocument.objects.filter(
                collection=collection,
                id=document_id
            ).delete()
        except DatabaseError as e:
            logger.error("Error deleting %s/%s: %s", collection, document_id, e)
            raise StoreError(f"Could not delete {collection}/{document_id}: {e}") from e

        if deleted:
            logger.info("Document deleted from %s: %s", collection, document_id)

    def _get_document(self, collection, document_id, message=None):
        try:
            return StoredDocument.objects.get(collection=collection, id=document_id)
        except StoredDocument.DoesNotExist:
            raise DocumentNotFoundError(
                message or f"Document not found: {collection}/{document_id}"
            )
        except DatabaseError as e:
            logger.error("Error reading %s/%s: %s", collection, document_id, e)
            raise StoreError(f"Could not read {collection}/{document_id}: {e}") from e

    @staticmethod
    def _check_collection(collection):
        if collection not in Collection.values:
            raise InvalidCollectionError(f"Unknown collection: {collection}")
        return str(collection)
