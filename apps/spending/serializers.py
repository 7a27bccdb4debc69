from rest_framework import serializers

from apps.core.serializers import StoredFileSerializer
from apps.currencies.constants import CurrencyCode
from apps.currencies.services import to_cad
from apps.fiscal_years.serializers import AllocationInputSerializer, AllocationSerializer

from .models import SpendingItem, SpendingStatus, SpendingEvent, SpendingEventType, SpendingInvoice


class SpendingItemSerializer(serializers.ModelSerializer):
    fiscal_year_id = serializers.IntegerField(read_only=True)
    category_id = serializers.IntegerField(read_only=True, allow_null=True)
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    procurement_item_id = serializers.IntegerField(read_only=True, allow_null=True)
    procurement_item_name = serializers.CharField(source='procurement_item.name', read_only=True, default=None)
    amount_cad = serializers.SerializerMethodField()
    allocations = AllocationSerializer(many=True, read_only=True)

    class Meta:
        model = SpendingItem
        fields = [
            'id',
            'fiscal_year_id',
            'name',
            'description',
            'vendor',
            'reference_number',
            'amount',
            'eco_amount',
            'amount_cad',
            'status',
            'currency',
            'exchange_rate',
            'category_id',
            'category_name',
            'procurement_item_id',
            'procurement_item_name',
            'allocations',
            'active',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_amount_cad(self, obj):
        value = to_cad(obj.amount, obj.currency, obj.exchange_rate)
        return str(value) if value is not None else None


class SpendingItemCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    vendor = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    reference_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True, default=None)
    eco_amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True, default=None)
    status = serializers.ChoiceField(choices=SpendingStatus.choices, required=False, default=SpendingStatus.DRAFT)
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False, default=CurrencyCode.CAD)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True, default=None)
    category_id = serializers.IntegerField(allow_null=True)
    allocations = AllocationInputSerializer(many=True)


class SpendingItemUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    vendor = serializers.CharField(max_length=200, required=False, allow_blank=True)
    reference_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    eco_amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    status = serializers.ChoiceField(choices=SpendingStatus.choices, required=False)
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    category_id = serializers.IntegerField(required=False, allow_null=True)
    allocations = AllocationInputSerializer(many=True, required=False)
    version = serializers.IntegerField(required=False, min_value=0)


class SpendingStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)


class AllocationsUpdateSerializer(serializers.Serializer):
    allocations = AllocationInputSerializer(many=True)


class SpendingEventSerializer(serializers.ModelSerializer):
    spending_item_id = serializers.IntegerField(read_only=True)
    created_by = serializers.SerializerMethodField()

    class Meta:
        model = SpendingEvent
        fields = [
            'id',
            'spending_item_id',
            'event_type',
            'event_date',
            'comment',
            'created_by',
            'active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_created_by(self, obj):
        return obj.created_by.username if obj.created_by_id else None


class SpendingEventWriteSerializer(serializers.Serializer):
    """Unknown event types are reported by the service."""
    event_type = serializers.CharField(max_length=40, required=False, allow_blank=True)
    event_date = serializers.DateField(required=False, allow_null=True)
    comment = serializers.CharField(required=False, allow_blank=True)


class SpendingInvoiceSerializer(serializers.ModelSerializer):
    spending_item_id = serializers.IntegerField(read_only=True)
    created_by = serializers.SerializerMethodField()
    modified_by = serializers.SerializerMethodField()
    files = serializers.SerializerMethodField()

    class Meta:
        model = SpendingInvoice
        fields = [
            'id',
            'spending_item_id',
            'invoice_number',
            'date_received',
            'date_processed',
            'comment',
            'amount',
            'currency',
            'exchange_rate',
            'amount_cad',
            'created_by',
            'modified_by',
            'files',
            'active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_created_by(self, obj):
        return obj.created_by.username if obj.created_by_id else None

    def get_modified_by(self, obj):
        return obj.modified_by.username if obj.modified_by_id else None

    def get_files(self, obj):
        active_files = [f for f in obj.files.all() if f.active]
        return StoredFileSerializer(active_files, many=True).data


class SpendingInvoiceCreateSerializer(serializers.Serializer):
    invoice_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    date_received = serializers.DateField(required=False, allow_null=True, default=None)
    date_processed = serializers.DateField(required=False, allow_null=True, default=None)
    comment = serializers.CharField(required=False, allow_blank=True, default='')
    amount = serializers.DecimalField(max_digits=15, decimal_places=2, allow_null=True)
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False, default=CurrencyCode.CAD)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True, default=None)


class SpendingInvoiceUpdateSerializer(serializers.Serializer):
    invoice_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    date_received = serializers.DateField(required=False, allow_null=True)
    date_processed = serializers.DateField(required=False, allow_null=True)
    comment = serializers.CharField(required=False, allow_blank=True)
    amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False)
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
