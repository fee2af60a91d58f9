from django.db import models
import uuid


def generate_document_id():
    """Opaque string identifier assigned by the store."""
    return uuid.uuid4().hex


class Collection(models.TextChoices):
    SELLERS = 'sellers', 'Sellers'
    PURCHASES = 'purchases', 'Purchases'
    BILLS = 'bills', 'Bills'


class StoredDocument(models.Model):
    """Schemaless document kept in a named collection."""

    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=generate_document_id,
        editable=False
    )
    collection = models.CharField(max_length=32, choices=Collection.choices)
    data = models.JSONField(default=dict, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'stored_documents'
        indexes = [
            models.Index(fields=['collection', 'created_at'], name='stored_docu_collect_3f1b2c_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.collection}/{self.id}"

    def as_record(self):
        """Return the payload with the document id merged in."""
        return {'id': self.id, **(self.data or {})}
