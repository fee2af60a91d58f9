# ==========================================
# apps/store/admin.py
# ==========================================

from django.contrib import admin
from .models import StoredDocument


@admin.register(StoredDocument)
class StoredDocumentAdmin(admin.ModelAdmin):
    """
    Admin interface for stored documents.

    Read-mostly view of the raw payloads, filterable by collection.
    Useful for inspecting sellers and purchases while debugging.
    """

    list_display = [
        'id',
        'collection',
        'get_summary',
        'created_at',
        'updated_at',
    ]

    list_filter = [
        'collection',
        'created_at',
    ]

    search_fields = [
        'id',
    ]

    readonly_fields = [
        'id',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_summary(self, obj):
        """Display seller name or purchase seller/date."""
        data = obj.data or {}
        if 'sellerName' in data:
            return f"{data.get('sellerName')} ({data.get('date', '?')})"
        return data.get('name', '—')
    get_summary.short_description = 'Summary'
