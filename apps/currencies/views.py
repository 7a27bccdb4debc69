from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .services import list_currencies, get_default_currency


class CurrencySerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField()
    symbol = serializers.CharField()
    is_default = serializers.BooleanField()


@extend_schema(
    responses={200: CurrencySerializer(many=True)},
    description="List supported currencies. The default currency (CAD) comes first.",
    tags=['currencies'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def currency_list(request):
    return Response(CurrencySerializer(list_currencies(), many=True).data)


@extend_schema(
    responses={200: CurrencySerializer},
    description="Get the default currency.",
    tags=['currencies'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def default_currency(request):
    return Response(CurrencySerializer(get_default_currency()).data)
