from rest_framework import serializers

from apps.currencies.constants import CurrencyCode
from apps.fiscal_years.serializers import OMAllocationInputSerializer, AllocationSerializer

from .models import TrainingItem, TrainingParticipant, ParticipantStatus


class TrainingParticipantSerializer(serializers.ModelSerializer):
    training_item_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = TrainingParticipant
        fields = [
            'id',
            'training_item_id',
            'name',
            'eco',
            'status',
            'estimated_cost',
            'estimated_currency',
            'estimated_exchange_rate',
            'final_cost',
            'final_currency',
            'final_exchange_rate',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TrainingParticipantWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=500, required=False, allow_blank=True)
    eco = serializers.CharField(max_length=100, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=ParticipantStatus.choices, required=False)
    estimated_cost = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    estimated_currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    estimated_exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)
    final_cost = serializers.DecimalField(max_digits=15, decimal_places=2, required=False, allow_null=True)
    final_currency = serializers.ChoiceField(choices=CurrencyCode.choices, required=False)
    final_exchange_rate = serializers.DecimalField(max_digits=12, decimal_places=6, required=False, allow_null=True)


class TrainingItemSerializer(serializers.ModelSerializer):
    fiscal_year_id = serializers.IntegerField(read_only=True)
    participants = TrainingParticipantSerializer(many=True, read_only=True)
    allocations = AllocationSerializer(many=True, read_only=True)

    class Meta:
        model = TrainingItem
        fields = [
            'id',
            'fiscal_year_id',
            'name',
            'description',
            'provider',
            'reference_number',
            'status',
            'training_type',
            'format',
            'start_date',
            'end_date',
            'location',
            'participants',
            'allocations',
            'active',
            'version',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TrainingItemCreateSerializer(serializers.Serializer):
    """Status, type and format are validated by the service."""
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    provider = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    reference_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    status = serializers.CharField(max_length=20, required=False, allow_blank=True)
    training_type = serializers.CharField(max_length=30, required=False, allow_blank=True)
    format = serializers.CharField(max_length=20, required=False, allow_blank=True)
    start_date = serializers.DateField(required=False, allow_null=True, default=None)
    end_date = serializers.DateField(required=False, allow_null=True, default=None)
    location = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    participants = TrainingParticipantWriteSerializer(many=True, required=False)
    allocations = OMAllocationInputSerializer(many=True, required=False)


class TrainingItemUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    provider = serializers.CharField(max_length=200, required=False, allow_blank=True)
    reference_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    status = serializers.CharField(max_length=20, required=False, allow_blank=True)
    training_type = serializers.CharField(max_length=30, required=False, allow_blank=True)
    format = serializers.CharField(max_length=20, required=False, allow_blank=True)
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)
    location = serializers.CharField(max_length=500, required=False, allow_blank=True)
    allocations = OMAllocationInputSerializer(many=True, required=False)
    version = serializers.IntegerField(required=False, min_value=0)


class TrainingStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)


class OMAllocationsUpdateSerializer(serializers.Serializer):
    allocations = OMAllocationInputSerializer(many=True)
