from rest_framework import serializers

from .models import FiscalYear, Money, Category, FundingType
from .services import can_delete_money


class FiscalYearSerializer(serializers.ModelSerializer):
    rc_id = serializers.IntegerField(source='responsibility_centre_id', read_only=True)

    class Meta:
        model = FiscalYear
        fields = [
            'id',
            'rc_id',
            'name',
            'description',
            'active',
            'show_search_box',
            'show_category_filter',
            'group_by_category',
            'on_target_min',
            'on_target_max',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class FiscalYearCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class FiscalYearUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50, required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    version = serializers.IntegerField(required=False, min_value=0)


class DisplaySettingsSerializer(serializers.Serializer):
    """On-target values outside the allowed range are clamped by the service."""
    show_search_box = serializers.BooleanField(required=False)
    show_category_filter = serializers.BooleanField(required=False)
    group_by_category = serializers.BooleanField(required=False)
    on_target_min = serializers.IntegerField(required=False)
    on_target_max = serializers.IntegerField(required=False)


class FiscalYearCloneSerializer(serializers.Serializer):
    new_name = serializers.CharField(max_length=50)


class FiscalYearCloneToRCSerializer(serializers.Serializer):
    target_rc_id = serializers.IntegerField()
    new_name = serializers.CharField(max_length=50)


class FiscalYearImportSerializer(serializers.Serializer):
    """An export document, optionally imported under another name."""
    data = serializers.DictField()
    new_name = serializers.CharField(max_length=50, required=False, allow_blank=True)


class MoneySerializer(serializers.ModelSerializer):
    fiscal_year_id = serializers.IntegerField(read_only=True)
    can_delete = serializers.SerializerMethodField()

    class Meta:
        model = Money
        fields = [
            'id',
            'fiscal_year_id',
            'code',
            'name',
            'description',
            'is_default',
            'display_order',
            'active',
            'can_delete',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_can_delete(self, obj):
        return can_delete_money(obj)


class MoneyCreateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=10)
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class MoneyUpdateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=10, required=False)
    name = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    active = serializers.BooleanField(required=False)
    version = serializers.IntegerField(required=False, min_value=0)


class ReorderSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class CategorySerializer(serializers.ModelSerializer):
    fiscal_year_id = serializers.IntegerField(read_only=True)
    allows_cap = serializers.BooleanField(read_only=True)
    allows_om = serializers.BooleanField(read_only=True)

    class Meta:
        model = Category
        fields = [
            'id',
            'fiscal_year_id',
            'name',
            'description',
            'is_default',
            'display_order',
            'funding_type',
            'allows_cap',
            'allows_om',
            'translation_key',
            'active',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CategoryCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    funding_type = serializers.ChoiceField(choices=FundingType.choices, required=False, default=FundingType.BOTH)


class CategoryUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    funding_type = serializers.ChoiceField(choices=FundingType.choices, required=False)
    active = serializers.BooleanField(required=False)
    version = serializers.IntegerField(required=False, min_value=0)


class AllocationInputSerializer(serializers.Serializer):
    """One money type's share of an item."""
    money_id = serializers.IntegerField()
    cap_amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, default=0)
    om_amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, default=0)


class OMAllocationInputSerializer(serializers.Serializer):
    money_id = serializers.IntegerField()
    om_amount = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, default=0)


class AllocationSerializer(serializers.Serializer):
    """Read-only view of an allocation row of any item type."""
    id = serializers.IntegerField(read_only=True)
    money_id = serializers.IntegerField(read_only=True)
    money_code = serializers.CharField(source='money.code', read_only=True)
    money_name = serializers.CharField(source='money.name', read_only=True)
    cap_amount = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True, default=0)
    om_amount = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)
