from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.audit.decorators import audited
from apps.core.query_params import int_query_param
from apps.rcs.permissions import HasRCWriteAccess

from .models import FundingItem
from .serializers import (
    FundingItemSerializer,
    FundingItemCreateSerializer,
    FundingItemUpdateSerializer,
)
from .services import (
    list_funding_items,
    get_funding_item,
    create_funding_item,
    update_funding_item,
    delete_funding_item,
)


class FundingItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for funding items of a fiscal year.

    list / retrieve: Read access
    create / update / destroy: Write access
    """

    queryset = FundingItem.objects.all()
    serializer_class = FundingItemSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return FundingItemCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return FundingItemUpdateSerializer
        return FundingItemSerializer

    @extend_schema(parameters=[OpenApiParameter('category_id', int, required=False)])
    def list(self, request, rc_id=None, fy_id=None):
        items = list_funding_items(
            rc_id=rc_id, fy_id=fy_id, user=request.user, category_id=int_query_param(request, 'category_id')
        )
        return Response(FundingItemSerializer(items, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, pk=None):
        item = get_funding_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(FundingItemSerializer(item).data)

    @audited('CREATE', 'FUNDING_ITEM')
    def create(self, request, rc_id=None, fy_id=None):
        serializer = FundingItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = create_funding_item(rc_id=rc_id, fy_id=fy_id, user=request.user, **serializer.validated_data)
        return Response(FundingItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'FUNDING_ITEM')
    def update(self, request, rc_id=None, fy_id=None, pk=None, partial=False):
        serializer = FundingItemUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        item = update_funding_item(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(FundingItemSerializer(item).data)

    @audited('DELETE', 'FUNDING_ITEM')
    def destroy(self, request, rc_id=None, fy_id=None, pk=None):
        delete_funding_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
