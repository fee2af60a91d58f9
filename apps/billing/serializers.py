from rest_framework import serializers

from apps.analytics.periods import VALID_PERIODS


# =============================================================================
# Input Serializers
# =============================================================================

class GenerateBillInputSerializer(serializers.Serializer):
    """
    Validate input for generating a bill.

    Fields:
        period (str): 'week', 'month' or 'custom'
        date_from (date): Start of a custom period
        date_to (date): End of a custom period

    Custom-period rules (both dates, start before end) are enforced by
    the service so the API and the service report the same messages.
    """

    period = serializers.ChoiceField(choices=VALID_PERIODS, default='week')
    date_from = serializers.DateField(required=False, allow_null=True)
    date_to = serializers.DateField(required=False, allow_null=True)


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class BillItemSerializer(serializers.Serializer):
    item_id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.IntegerField()
    date_wise_lines = serializers.CharField()
    item_amount = serializers.IntegerField()


class SellerBillSerializer(serializers.Serializer):
    seller_id = serializers.CharField()
    seller_name = serializers.CharField()
    total = serializers.IntegerField()
    items = BillItemSerializer(many=True)


class BillSerializer(serializers.Serializer):
    """Response serializer for a generated bill."""
    date_from = serializers.CharField()
    date_to = serializers.CharField()
    generated_at = serializers.CharField(allow_null=True)
    grand_total = serializers.IntegerField()
    grand_total_display = serializers.CharField()
    purchase_ids = serializers.ListField(child=serializers.CharField())
    sellers = SellerBillSerializer(many=True)
    bill = serializers.DictField(
        help_text='{sellerName: {itemName: {price, dateWiseLines, itemAmount}}}'
    )


class FailedStepSerializer(serializers.Serializer):
    id = serializers.CharField()
    error = serializers.CharField()


class BatchResultSerializer(serializers.Serializer):
    """Per-purchase outcome of a non-atomic multi-step write."""
    action = serializers.CharField()
    succeeded = serializers.ListField(child=serializers.CharField())
    failed = FailedStepSerializer(many=True)
    is_complete = serializers.BooleanField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
