from rest_framework import serializers

from apps.sellers.serializers import SellerSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for purchase filtering.

    Query Parameters:
        seller (str): Filter by seller id
        billed (bool): Filter by billed flag
        date_from (date): Filter purchases from this date
        date_to (date): Filter purchases to this date
    """

    seller = serializers.CharField(required=False)
    billed = serializers.BooleanField(required=False, allow_null=True, default=None)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class SelectSellerInputSerializer(serializers.Serializer):
    seller_id = serializers.CharField()
    keep = serializers.BooleanField(required=False, default=False)


class ChangeQuantityInputSerializer(serializers.Serializer):
    item_id = serializers.CharField()
    delta = serializers.IntegerField()


class SetQuantityInputSerializer(serializers.Serializer):
    """``value`` is free text; it is parsed leniently by the cart."""
    item_id = serializers.CharField()
    value = serializers.CharField(allow_blank=True, allow_null=True)


class SavePurchaseInputSerializer(serializers.Serializer):
    """Date defaults to today when omitted."""
    date = serializers.DateField(required=False, allow_null=True)


# =============================================================================
# Output Serializers
# =============================================================================

class PurchaseLineSerializer(serializers.Serializer):
    item_id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.IntegerField()
    qty = serializers.IntegerField()
    amount = serializers.IntegerField()


class PurchaseSerializer(serializers.Serializer):
    id = serializers.CharField()
    seller_id = serializers.CharField()
    seller_name = serializers.CharField()
    date = serializers.CharField()
    items = PurchaseLineSerializer(many=True)
    total = serializers.IntegerField()
    billed = serializers.BooleanField()
    created_at = serializers.CharField(allow_null=True)
    billed_at = serializers.CharField(allow_null=True)


class CartStateSerializer(serializers.Serializer):
    """Pending cart for the selected seller."""
    seller = SellerSerializer(allow_null=True)
    quantities = serializers.DictField(child=serializers.IntegerField())
    lines = PurchaseLineSerializer(many=True)
    total = serializers.IntegerField()
    total_display = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
