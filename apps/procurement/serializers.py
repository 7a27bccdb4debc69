from rest_framework import serializers

from apps.core.serializers import StoredFileSerializer
from apps.currencies.constants import CurrencyCode

from .models import (
    ProcurementItem,
    TrackingStatus,
    ProcurementType,
    ProcurementQuote,
    QuoteStatus,
    ProcurementEvent,
)


def _active_files(obj):
    return StoredFileSerializer([f for f in obj.files.all() if f.active], many=True).data


def _username(user):
    return user.username if user is not None else None


class ProcurementQuoteSerializer(serializers.ModelSerializer):
    procurement_item_id = serializers.IntegerField(read_only=True)
    created_by = serializers.SerializerMethodField()
    modified_by = serializers.SerializerMethodField()
    files = serializers.SerializerMethodField()

    class Meta:
        model = ProcurementQuote
        fields = [
            'id',
            'procurement_item_id',
            'vendor_name',
            'vendor_contact',
            'quote_reference',
            'amount',
            'amount_cap',
            'amount_om',
            'currency',
            'exchange_rate',
            'amount_cap_cad',
            'amount_om_cad',
            'received_date',
            'expiry_date',
            'notes',
            'status',
            'selected',
            'created_by',
            'modified_by',
            'files',
            'active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_created_by(self, obj):
        return _username(obj.created_by)

    def get_modified_by(self, obj):
        return _username(obj.modified_by)

    def get_files(self, obj):
        return _active_files(obj)


class ProcurementItemSerializer(serializers.ModelSerializer):
    fiscal_year_id = serializers.IntegerField(read_only=True)
    category_id = serializers.IntegerField(read_only=True, allow_null=True)
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    current_status = serializers.CharField(read_only=True)
    spending_linked = serializers.SerializerMethodField()
    quotes = serializers.SerializerMethodField()

    class Meta:
        model = ProcurementItem
        fields = [
            'id',
            'fiscal_year_id',
            'purchase_requisition',
            'purchase_order',
            'name',
            'description',
            'vendor',
            'contract_number',
            'contract_start_date',
            'contract_end_date',
            'procurement_completed',
            'procurement_completed_date',
            'final_price',
            'final_price_currency',
            'final_price_exchange_rate',
            'final_price_cad',
            'quoted_price',
            'quoted_price_currency',
            'quoted_price_exchange_rate',
            'quoted_price_cad',
            'tracking_status',
            'procurement_type',
            'current_status',
            'category_id',
            'category_name',
            'spending_linked',
            'quotes',
            'active',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_spending_linked(self, obj):
        return any(item.active for item in obj.spending_items.all())

    def get_quotes(self, obj):
        active_quotes = obj.quotes.filter(active=True).select_related('created_by', 'modified_by')
        return ProcurementQuoteSerializer(active_quotes, many=True).data


class ProcurementItemCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    purchase_requisition = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    purchase_order = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    vendor = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    contract_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    contract_start_date = serializers.DateField(required=False, allow_null=True, default=None)
    contract_end_date = serializers.DateField(required=False, allow_null=True, default=None)
    procurement_completed = serializers.BooleanField(required=False, default=False)
    procurement_completed_date = serializers.DateField(required=False, allow_null=True, default=None)
    final_price = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True, default=None)
    final_price_currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False, default=CurrencyCode.CAD)
    final_price_exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True, default=None)
    quoted_price = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True, default=None)
    quoted_price_currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False, default=CurrencyCode.CAD)
    quoted_price_exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True, default=None)
    tracking_status = serializers.ChoiceField(choices=TrackingStatus.choices, required=False, default=TrackingStatus.ON_TRACK)
    procurement_type = serializers.ChoiceField(
        choices=ProcurementType.choices, required=False, default=ProcurementType.RC_INITIATED
    )
    category_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class ProcurementItemUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    purchase_requisition = serializers.CharField(max_length=100, required=False, allow_blank=True)
    purchase_order = serializers.CharField(max_length=100, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    vendor = serializers.CharField(max_length=200, required=False, allow_blank=True)
    contract_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    contract_start_date = serializers.DateField(required=False, allow_null=True)
    contract_end_date = serializers.DateField(required=False, allow_null=True)
    procurement_completed = serializers.BooleanField(required=False)
    procurement_completed_date = serializers.DateField(required=False, allow_null=True)
    final_price = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    final_price_currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    final_price_exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    quoted_price = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    quoted_price_currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    quoted_price_exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    tracking_status = serializers.ChoiceField(choices=TrackingStatus.choices, required=False)
    procurement_type = serializers.ChoiceField(choices=ProcurementType.choices, required=False)
    category_id = serializers.IntegerField(required=False, allow_null=True)
    version = serializers.IntegerField(required=False, min_value=0)


class ProcurementStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)


class SpendingLinkSerializer(serializers.Serializer):
    force = serializers.BooleanField(required=False, default=False)


class SpendingLinkResultSerializer(serializers.Serializer):
    procurement_item = ProcurementItemSerializer(read_only=True)
    spending_linked = serializers.BooleanField(read_only=True)
    has_warning = serializers.BooleanField(read_only=True)
    warning_message = serializers.CharField(read_only=True, allow_null=True)


class ProcurementQuoteCreateSerializer(serializers.Serializer):
    vendor_name = serializers.CharField(max_length=200, allow_blank=True)
    vendor_contact = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    quote_reference = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True, default=None)
    amount_cap = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True, default=None)
    amount_om = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True, default=None)
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False, default=CurrencyCode.CAD)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True, default=None)
    received_date = serializers.DateField(required=False, allow_null=True, default=None)
    expiry_date = serializers.DateField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    status = serializers.ChoiceField(choices=QuoteStatus.choices, required=False, default=QuoteStatus.PENDING)


class ProcurementQuoteUpdateSerializer(serializers.Serializer):
    vendor_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    vendor_contact = serializers.CharField(max_length=200, required=False, allow_blank=True)
    quote_reference = serializers.CharField(max_length=100, required=False, allow_blank=True)
    amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    amount_cap = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    amount_om = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    received_date = serializers.DateField(required=False, allow_null=True)
    expiry_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=QuoteStatus.choices, required=False)


class ProcurementEventSerializer(serializers.ModelSerializer):
    procurement_item_id = serializers.IntegerField(read_only=True)
    created_by = serializers.SerializerMethodField()
    files = serializers.SerializerMethodField()

    class Meta:
        model = ProcurementEvent
        fields = [
            'id',
            'procurement_item_id',
            'event_type',
            'event_date',
            'comment',
            'old_status',
            'new_status',
            'created_by',
            'files',
            'active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_created_by(self, obj):
        return _username(obj.created_by)

    def get_files(self, obj):
        return _active_files(obj)


class ProcurementEventWriteSerializer(serializers.Serializer):
    """Event types and statuses are checked by the service."""
    event_type = serializers.CharField(max_length=40, required=False, allow_blank=True)
    event_date = serializers.DateField(required=False, allow_null=True)
    comment = serializers.CharField(required=False, allow_blank=True)
    old_status = serializers.CharField(max_length=20, required=False, allow_blank=True)
    new_status = serializers.CharField(max_length=20, required=False, allow_blank=True)


class FileDescriptionSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=500, allow_blank=True)

