from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.audit.decorators import audited
from apps.fiscal_years.serializers import AllocationSerializer
from apps.rcs.permissions import HasRCWriteAccess

from .models import TravelItem
from .serializers import (
    TravelItemSerializer,
    TravelItemCreateSerializer,
    TravelItemUpdateSerializer,
    TravelStatusSerializer,
    OMAllocationsUpdateSerializer,
    TravelTravellerSerializer,
    TravelTravellerWriteSerializer,
)
from .services import (
    list_travel_items,
    get_travel_item,
    create_travel_item,
    update_travel_item,
    delete_travel_item,
    update_travel_status,
    get_travel_allocations,
    update_travel_allocations,
    list_travellers,
    add_traveller,
    update_traveller,
    delete_traveller,
)


class TravelItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for travel items of a fiscal year.

    list / retrieve: Read access
    create / update / destroy: Write access
    status: Change the travel status
    allocations: Get or replace OM allocations
    travellers: List, add, update and remove travellers
    """

    queryset = TravelItem.objects.all()
    serializer_class = TravelItemSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return TravelItemCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return TravelItemUpdateSerializer
        elif self.action == 'update_status':
            return TravelStatusSerializer
        elif self.action == 'update_allocations':
            return OMAllocationsUpdateSerializer
        elif self.action in ['add_traveller', 'update_traveller']:
            return TravelTravellerWriteSerializer
        return TravelItemSerializer

    def list(self, request, rc_id=None, fy_id=None):
        items = list_travel_items(rc_id=rc_id, fy_id=fy_id, user=request.user)
        return Response(TravelItemSerializer(items, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, pk=None):
        item = get_travel_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(TravelItemSerializer(item).data)

    @audited('CREATE', 'TRAVEL_ITEM')
    def create(self, request, rc_id=None, fy_id=None):
        serializer = TravelItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = create_travel_item(rc_id=rc_id, fy_id=fy_id, user=request.user, **serializer.validated_data)
        return Response(TravelItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'TRAVEL_ITEM')
    def update(self, request, rc_id=None, fy_id=None, pk=None, partial=False):
        serializer = TravelItemUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        item = update_travel_item(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(TravelItemSerializer(item).data)

    @audited('DELETE', 'TRAVEL_ITEM')
    def destroy(self, request, rc_id=None, fy_id=None, pk=None):
        delete_travel_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=TravelStatusSerializer, responses={200: TravelItemSerializer})
    @action(detail=True, methods=['put'], url_path='status')
    @audited('UPDATE_STATUS', 'TRAVEL_ITEM')
    def update_status(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = TravelStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = update_travel_status(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, status=serializer.validated_data['status']
        )
        return Response(TravelItemSerializer(item).data)

    @extend_schema(responses={200: AllocationSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def allocations(self, request, rc_id=None, fy_id=None, pk=None):
        allocations = get_travel_allocations(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(AllocationSerializer(allocations, many=True).data)

    @extend_schema(request=OMAllocationsUpdateSerializer, responses={200: AllocationSerializer(many=True)})
    @allocations.mapping.put
    @audited('UPDATE_ALLOCATIONS', 'TRAVEL_ITEM')
    def update_allocations(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = OMAllocationsUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        allocations = update_travel_allocations(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=pk,
            user=request.user,
            allocations=serializer.validated_data['allocations'],
        )
        return Response(AllocationSerializer(allocations, many=True).data)

    # =========================================================================
    # Travellers
    # =========================================================================

    @extend_schema(responses={200: TravelTravellerSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def travellers(self, request, rc_id=None, fy_id=None, pk=None):
        travellers = list_travellers(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(TravelTravellerSerializer(travellers, many=True).data)

    @extend_schema(request=TravelTravellerWriteSerializer, responses={201: TravelTravellerSerializer})
    @travellers.mapping.post
    @audited('ADD_TRAVELLER', 'TRAVEL_ITEM')
    def add_traveller(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = TravelTravellerWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        traveller = add_traveller(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(TravelTravellerSerializer(traveller).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=TravelTravellerWriteSerializer, responses={200: TravelTravellerSerializer})
    @action(detail=True, methods=['put'], url_path=r'travellers/(?P<traveller_id>\d+)')
    @audited('UPDATE_TRAVELLER', 'TRAVEL_ITEM')
    def update_traveller(self, request, rc_id=None, fy_id=None, pk=None, traveller_id=None):
        serializer = TravelTravellerWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        traveller = update_traveller(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=pk,
            traveller_id=traveller_id,
            user=request.user,
            **serializer.validated_data
        )
        return Response(TravelTravellerSerializer(traveller).data)

    @update_traveller.mapping.delete
    @audited('REMOVE_TRAVELLER', 'TRAVEL_ITEM')
    def remove_traveller(self, request, rc_id=None, fy_id=None, pk=None, traveller_id=None):
        delete_traveller(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, traveller_id=traveller_id, user=request.user
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
