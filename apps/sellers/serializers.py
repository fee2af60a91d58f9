from rest_framework import serializers


# =============================================================================
# Input Serializers
# =============================================================================

class ItemInputSerializer(serializers.Serializer):
    """
    One submitted item row.

    Rows with an empty name are dropped by the service. ``price`` is kept
    as text here so the service reports non-numeric and negative prices
    with a single message style.
    """

    item_id = serializers.CharField(required=False, allow_blank=True, max_length=64)
    name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    price = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    code = serializers.CharField(required=False, allow_blank=True, max_length=50)
    photo = serializers.CharField(required=False, allow_blank=True)


class SellerInputSerializer(serializers.Serializer):
    """
    Validate input for creating or updating a seller.

    Fields:
        name (str): Seller name (required, non-empty after trimming)
        contact (str): Optional contact details
        items (list): Item rows, at least one with a name
    """

    name = serializers.CharField(allow_blank=True, max_length=200)
    contact = serializers.CharField(required=False, allow_blank=True, default='')
    items = ItemInputSerializer(many=True)


# =============================================================================
# Output Serializers
# =============================================================================

class ItemSerializer(serializers.Serializer):
    item_id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.IntegerField()
    code = serializers.CharField()
    photo = serializers.CharField()


class SellerSerializer(serializers.Serializer):
    """Seller with its ordered item catalog."""
    id = serializers.CharField()
    name = serializers.CharField()
    contact = serializers.CharField()
    items = ItemSerializer(many=True)
    created_at = serializers.CharField(allow_null=True)
    updated_at = serializers.CharField(allow_null=True)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
