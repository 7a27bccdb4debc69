from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.audit.decorators import audited
from apps.fiscal_years.serializers import AllocationSerializer
from apps.rcs.permissions import HasRCWriteAccess

from .models import TrainingItem
from .serializers import (
    TrainingItemSerializer,
    TrainingItemCreateSerializer,
    TrainingItemUpdateSerializer,
    TrainingStatusSerializer,
    OMAllocationsUpdateSerializer,
    TrainingParticipantSerializer,
    TrainingParticipantWriteSerializer,
)
from .services import (
    list_training_items,
    get_training_item,
    create_training_item,
    update_training_item,
    delete_training_item,
    update_training_status,
    get_training_allocations,
    update_training_allocations,
    list_participants,
    add_participant,
    update_participant,
    delete_participant,
)


class TrainingItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for training items of a fiscal year.

    list / retrieve: Read access
    create / update / destroy: Write access
    status: Change the training status
    allocations: Get or replace OM allocations
    participants: List, add, update and remove participants
    """

    queryset = TrainingItem.objects.all()
    serializer_class = TrainingItemSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return TrainingItemCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return TrainingItemUpdateSerializer
        elif self.action == 'update_status':
            return TrainingStatusSerializer
        elif self.action == 'update_allocations':
            return OMAllocationsUpdateSerializer
        elif self.action in ['add_participant', 'update_participant']:
            return TrainingParticipantWriteSerializer
        return TrainingItemSerializer

    def list(self, request, rc_id=None, fy_id=None):
        items = list_training_items(rc_id=rc_id, fy_id=fy_id, user=request.user)
        return Response(TrainingItemSerializer(items, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, pk=None):
        item = get_training_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(TrainingItemSerializer(item).data)

    @audited('CREATE', 'TRAINING_ITEM')
    def create(self, request, rc_id=None, fy_id=None):
        serializer = TrainingItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = create_training_item(rc_id=rc_id, fy_id=fy_id, user=request.user, **serializer.validated_data)
        return Response(TrainingItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'TRAINING_ITEM')
    def update(self, request, rc_id=None, fy_id=None, pk=None, partial=False):
        serializer = TrainingItemUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        item = update_training_item(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(TrainingItemSerializer(item).data)

    @audited('DELETE', 'TRAINING_ITEM')
    def destroy(self, request, rc_id=None, fy_id=None, pk=None):
        delete_training_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=TrainingStatusSerializer, responses={200: TrainingItemSerializer})
    @action(detail=True, methods=['put'], url_path='status')
    @audited('UPDATE_STATUS', 'TRAINING_ITEM')
    def update_status(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = TrainingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = update_training_status(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, status=serializer.validated_data['status']
        )
        return Response(TrainingItemSerializer(item).data)

    @extend_schema(responses={200: AllocationSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def allocations(self, request, rc_id=None, fy_id=None, pk=None):
        allocations = get_training_allocations(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(AllocationSerializer(allocations, many=True).data)

    @extend_schema(request=OMAllocationsUpdateSerializer, responses={200: AllocationSerializer(many=True)})
    @allocations.mapping.put
    @audited('UPDATE_ALLOCATIONS', 'TRAINING_ITEM')
    def update_allocations(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = OMAllocationsUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        allocations = update_training_allocations(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=pk,
            user=request.user,
            allocations=serializer.validated_data['allocations'],
        )
        return Response(AllocationSerializer(allocations, many=True).data)

    # =========================================================================
    # Participants
    # =========================================================================

    @extend_schema(responses={200: TrainingParticipantSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def participants(self, request, rc_id=None, fy_id=None, pk=None):
        participants = list_participants(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(TrainingParticipantSerializer(participants, many=True).data)

    @extend_schema(request=TrainingParticipantWriteSerializer, responses={201: TrainingParticipantSerializer})
    @participants.mapping.post
    @audited('ADD_PARTICIPANT', 'TRAINING_ITEM')
    def add_participant(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = TrainingParticipantWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        participant = add_participant(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(TrainingParticipantSerializer(participant).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=TrainingParticipantWriteSerializer, responses={200: TrainingParticipantSerializer})
    @action(detail=True, methods=['put'], url_path=r'participants/(?P<participant_id>\d+)')
    @audited('UPDATE_PARTICIPANT', 'TRAINING_ITEM')
    def update_participant(self, request, rc_id=None, fy_id=None, pk=None, participant_id=None):
        serializer = TrainingParticipantWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        participant = update_participant(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=pk,
            participant_id=participant_id,
            user=request.user,
            **serializer.validated_data
        )
        return Response(TrainingParticipantSerializer(participant).data)

    @update_participant.mapping.delete
    @audited('REMOVE_PARTICIPANT', 'TRAINING_ITEM')
    def remove_participant(self, request, rc_id=None, fy_id=None, pk=None, participant_id=None):
        delete_participant(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, participant_id=participant_id, user=request.user
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
