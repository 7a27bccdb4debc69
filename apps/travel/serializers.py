from rest_framework import serializers

from apps.currencies.constants import CurrencyCode
from apps.fiscal_years.serializers import OMAllocationInputSerializer, AllocationSerializer

from .models import TravelItem, TravelTraveller, ApprovalStatus


class TravelTravellerSerializer(serializers.ModelSerializer):
    travel_item_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = TravelTraveller
        fields = [
            'id',
            'travel_item_id',
            'name',
            'taac',
            'estimated_cost',
            'final_cost',
            'currency',
            'exchange_rate',
            'approval_status',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TravelTravellerWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=500, required=False, allow_blank=True)
    taac = serializers.CharField(max_length=100, required=False, allow_blank=True)
    estimated_cost = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    final_cost = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    approval_status = serializers.ChoiceField(choices=ApprovalStatus.choices, required=False)


class TravelItemSerializer(serializers.ModelSerializer):
    fiscal_year_id = serializers.IntegerField(read_only=True)
    travellers = TravelTravellerSerializer(many=True, read_only=True)
    allocations = AllocationSerializer(many=True, read_only=True)

    class Meta:
        model = TravelItem
        fields = [
            'id',
            'fiscal_year_id',
            'name',
            'description',
            'emap',
            'destination',
            'purpose',
            'status',
            'travel_type',
            'departure_date',
            'return_date',
            'travellers',
            'allocations',
            'active',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TravelItemCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    emap = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    destination = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    purpose = serializers.CharField(required=False, allow_blank=True, default='')
    status = serializers.CharField(max_length=20, required=False, allow_blank=True)
    travel_type = serializers.CharField(max_length=20, required=False, allow_blank=True)
    departure_date = serializers.DateField(required=False, allow_null=True, default=None)
    return_date = serializers.DateField(required=False, allow_null=True, default=None)
    travellers = TravelTravellerWriteSerializer(many=True, required=False)
    allocations = OMAllocationInputSerializer(many=True, required=False)


class TravelItemUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    emap = serializers.CharField(max_length=100, required=False, allow_blank=True)
    destination = serializers.CharField(max_length=500, required=False, allow_blank=True)
    purpose = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(max_length=20, required=False, allow_blank=True)
    travel_type = serializers.CharField(max_length=20, required=False, allow_blank=True)
    departure_date = serializers.DateField(required=False, allow_null=True)
    return_date = serializers.DateField(required=False, allow_null=True)
    allocations = OMAllocationInputSerializer(many=True, required=False)
    version = serializers.IntegerField(required=False, min_value=0)


class TravelStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)


class OMAllocationsUpdateSerializer(serializers.Serializer):
    allocations = OMAllocationInputSerializer(many=True)
