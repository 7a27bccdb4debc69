from rest_framework import serializers

from apps.currencies.constants import CurrencyCode
from apps.fiscal_years.serializers import AllocationInputSerializer, AllocationSerializer

from .models import FundingItem, FundingSource


class FundingItemSerializer(serializers.ModelSerializer):
    fiscal_year_id = serializers.IntegerField(read_only=True)
    category_id = serializers.IntegerField(read_only=True, allow_null=True)
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    allocations = AllocationSerializer(many=True, read_only=True)

    class Meta:
        model = FundingItem
        fields = [
            'id',
            'fiscal_year_id',
            'name',
            'description',
            'source',
            'comments',
            'currency',
            'exchange_rate',
            'category_id',
            'category_name',
            'allocations',
            'active',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class FundingItemCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    source = serializers.ChoiceField(choices=FundingSource.choices, required=False, default=FundingSource.BUSINESS_PLAN)
    comments = serializers.CharField(required=False, allow_blank=True, default='')
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False, default=CurrencyCode.CAD)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True, default=None)
    category_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    allocations = AllocationInputSerializer(many=True)


class FundingItemUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    source = serializers.ChoiceField(choices=FundingSource.choices, required=False)
    comments = serializers.CharField(required=False, allow_blank=True)
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    category_id = serializers.IntegerField(required=False, allow_null=True)
    active = serializers.BooleanField(required=False)
    allocations = AllocationInputSerializer(many=True, required=False)
    version = serializers.IntegerField(required=False, min_value=0)
