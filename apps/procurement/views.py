from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.audit.decorators import audited
from apps.core.files import blob_response
from apps.core.query_params import int_query_param
from apps.core.serializers import StoredFileSerializer, FileUploadSerializer
from apps.rcs.permissions import HasRCWriteAccess

from .models import ProcurementItem, ProcurementQuote, ProcurementEvent
from .serializers import (
    ProcurementItemSerializer,
    ProcurementItemCreateSerializer,
    ProcurementItemUpdateSerializer,
    ProcurementStatusSerializer,
    SpendingLinkSerializer,
    SpendingLinkResultSerializer,
    ProcurementQuoteSerializer,
    ProcurementQuoteCreateSerializer,
    ProcurementQuoteUpdateSerializer,
    ProcurementEventSerializer,
    ProcurementEventWriteSerializer,
    FileDescriptionSerializer,
)
from .services import (
    list_procurement_items,
    get_procurement_item,
    create_procurement_item,
    update_procurement_item,
    delete_procurement_item,
    request_status_change,
    toggle_spending_link,
    list_quotes,
    get_quote,
    create_quote,
    update_quote,
    delete_quote,
    select_quote,
    list_quote_files,
    get_quote_file,
    upload_quote_file,
    replace_quote_file,
    delete_quote_file,
    list_procurement_events,
    get_procurement_event,
    count_procurement_events,
    get_latest_procurement_event,
    create_procurement_event,
    update_procurement_event,
    delete_procurement_event,
    list_event_files,
    get_event_file,
    upload_event_file,
    update_event_file_description,
    delete_event_file,
)


class ProcurementItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for procurement items of a fiscal year.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list / retrieve: Active items, read access
    create / update / destroy: Write access; destroy is a soft delete
    status: Validate a requested status
    toggle-spending-link: Create or remove the linked spending item
    """

    queryset = ProcurementItem.objects.all()
    serializer_class = ProcurementItemSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return ProcurementItemCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return ProcurementItemUpdateSerializer
        elif self.action == 'update_status':
            return ProcurementStatusSerializer
        elif self.action == 'toggle_spending_link':
            return SpendingLinkSerializer
        return ProcurementItemSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, required=False),
            OpenApiParameter('search', str, required=False),
            OpenApiParameter('category_id', int, required=False),
        ]
    )
    def list(self, request, rc_id=None, fy_id=None):
        items = list_procurement_items(
            rc_id=rc_id,
            fy_id=fy_id,
            user=request.user,
            status=request.query_params.get('status'),
            search=request.query_params.get('search'),
            category_id=int_query_param(request, 'category_id'),
        )
        return Response(ProcurementItemSerializer(items, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, pk=None):
        item = get_procurement_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(ProcurementItemSerializer(item).data)

    @audited('CREATE', 'PROCUREMENT_ITEM')
    def create(self, request, rc_id=None, fy_id=None):
        serializer = ProcurementItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = create_procurement_item(rc_id=rc_id, fy_id=fy_id, user=request.user, **serializer.validated_data)
        return Response(ProcurementItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'PROCUREMENT_ITEM')
    def update(self, request, rc_id=None, fy_id=None, pk=None, partial=False):
        serializer = ProcurementItemUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        item = update_procurement_item(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(ProcurementItemSerializer(item).data)

    @audited('DELETE', 'PROCUREMENT_ITEM')
    def destroy(self, request, rc_id=None, fy_id=None, pk=None):
        delete_procurement_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ProcurementStatusSerializer, responses={200: ProcurementItemSerializer})
    @action(detail=True, methods=['put'], url_path='status')
    @audited('UPDATE_STATUS', 'PROCUREMENT_ITEM')
    def update_status(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = ProcurementStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = request_status_change(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, status=serializer.validated_data['status']
        )
        return Response(ProcurementItemSerializer(item).data)

    @extend_schema(request=SpendingLinkSerializer, responses={200: SpendingLinkResultSerializer, 409: SpendingLinkResultSerializer})
    @action(detail=True, methods=['post'], url_path='toggle-spending-link')
    @audited('TOGGLE_SPENDING_LINK', 'PROCUREMENT_ITEM')
    def toggle_spending_link(self, request, rc_id=None, fy_id=None, pk=None):
        """409 with a warning when the linked spending item was modified and force is not set."""
        serializer = SpendingLinkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = toggle_spending_link(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, force=serializer.validated_data['force']
        )
        response_status = status.HTTP_409_CONFLICT if result['has_warning'] else status.HTTP_200_OK
        return Response(SpendingLinkResultSerializer(result).data, status=response_status)


class ProcurementQuoteViewSet(viewsets.ModelViewSet):
    """
    Vendor quotes of a procurement item and their attached files.

    select marks one quote as chosen and rejects the previous choice.
    """

    queryset = ProcurementQuote.objects.all()
    serializer_class = ProcurementQuoteSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return ProcurementQuoteCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return ProcurementQuoteUpdateSerializer
        elif self.action in ['upload_file', 'replace_file']:
            return FileUploadSerializer
        return ProcurementQuoteSerializer

    def list(self, request, rc_id=None, fy_id=None, item_id=None):
        quotes = list_quotes(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user)
        return Response(ProcurementQuoteSerializer(quotes, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        quote = get_quote(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, user=request.user)
        return Response(ProcurementQuoteSerializer(quote).data)

    @audited('CREATE', 'PROCUREMENT_QUOTE')
    def create(self, request, rc_id=None, fy_id=None, item_id=None):
        serializer = ProcurementQuoteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        quote = create_quote(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user, **serializer.validated_data)
        return Response(ProcurementQuoteSerializer(quote).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'PROCUREMENT_QUOTE')
    def update(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, partial=False):
        serializer = ProcurementQuoteUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        quote = update_quote(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(ProcurementQuoteSerializer(quote).data)

    @audited('DELETE', 'PROCUREMENT_QUOTE')
    def destroy(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        delete_quote(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: ProcurementQuoteSerializer})
    @action(detail=True, methods=['post'])
    @audited('SELECT', 'PROCUREMENT_QUOTE')
    def select(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        quote = select_quote(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, user=request.user)
        return Response(ProcurementQuoteSerializer(quote).data)

    # =========================================================================
    # Files
    # =========================================================================

    @extend_schema(responses={200: StoredFileSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def files(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        stored = list_quote_files(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, user=request.user)
        return Response(StoredFileSerializer(stored, many=True).data)

    @extend_schema(request=FileUploadSerializer, responses={201: StoredFileSerializer})
    @files.mapping.post
    @audited('UPLOAD_FILE', 'PROCUREMENT_QUOTE_FILE')
    def upload_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        stored = upload_quote_file(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=item_id,
            quote_id=pk,
            user=request.user,
            uploaded_file=request.FILES.get('file'),
            description=request.data.get('description', ''),
        )
        return Response(StoredFileSerializer(stored).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: StoredFileSerializer})
    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)')
    def file_detail(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_quote_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, file_id=file_id, user=request.user
        )
        return Response(StoredFileSerializer(stored).data)

    @extend_schema(request=FileUploadSerializer, responses={200: StoredFileSerializer})
    @file_detail.mapping.put
    @audited('REPLACE_FILE', 'PROCUREMENT_QUOTE_FILE')
    def replace_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = replace_quote_file(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=item_id,
            quote_id=pk,
            file_id=file_id,
            user=request.user,
            uploaded_file=request.FILES.get('file'),
            description=request.data.get('description'),
        )
        return Response(StoredFileSerializer(stored).data)

    @file_detail.mapping.delete
    @audited('DELETE_FILE', 'PROCUREMENT_QUOTE_FILE')
    def delete_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        delete_quote_file(rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, file_id=file_id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)/download')
    def download_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_quote_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, file_id=file_id, user=request.user
        )
        return blob_response(stored)

    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)/view')
    def view_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_quote_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, quote_id=pk, file_id=file_id, user=request.user
        )
        return blob_response(stored, inline=True)


class ProcurementEventViewSet(viewsets.ModelViewSet):
    """
    Timeline of a procurement item.

    Events carrying a new_status drive the item's current status.
    destroy is a soft delete.
    """

    queryset = ProcurementEvent.objects.all()
    serializer_class = ProcurementEventSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return ProcurementEventWriteSerializer
        elif self.action == 'upload_file':
            return FileUploadSerializer
        elif self.action == 'update_file':
            return FileDescriptionSerializer
        return ProcurementEventSerializer

    @extend_schema(parameters=[OpenApiParameter('event_type', str, required=False)])
    def list(self, request, rc_id=None, fy_id=None, item_id=None):
        events = list_procurement_events(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=item_id,
            user=request.user,
            event_type=request.query_params.get('event_type'),
        )
        return Response(ProcurementEventSerializer(events, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        event = get_procurement_event(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, user=request.user)
        return Response(ProcurementEventSerializer(event).data)

    @audited('CREATE', 'PROCUREMENT_EVENT')
    def create(self, request, rc_id=None, fy_id=None, item_id=None):
        serializer = ProcurementEventWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = create_procurement_event(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user, **serializer.validated_data
        )
        return Response(ProcurementEventSerializer(event).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'PROCUREMENT_EVENT')
    def update(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, partial=False):
        serializer = ProcurementEventWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        event = update_procurement_event(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(ProcurementEventSerializer(event).data)

    @audited('DELETE', 'PROCUREMENT_EVENT')
    def destroy(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        delete_procurement_event(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def count(self, request, rc_id=None, fy_id=None, item_id=None):
        total = count_procurement_events(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user)
        return Response({'count': total})

    @action(detail=False, methods=['get'])
    def latest(self, request, rc_id=None, fy_id=None, item_id=None):
        """Most recent event, or 204 when the item has none."""
        event = get_latest_procurement_event(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user)
        if event is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(ProcurementEventSerializer(event).data)

    # =========================================================================
    # Files
    # =========================================================================

    @extend_schema(responses={200: StoredFileSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def files(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        stored = list_event_files(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, user=request.user)
        return Response(StoredFileSerializer(stored, many=True).data)

    @extend_schema(request=FileUploadSerializer, responses={201: StoredFileSerializer})
    @files.mapping.post
    @audited('UPLOAD_FILE', 'PROCUREMENT_EVENT_FILE')
    def upload_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        stored = upload_event_file(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=item_id,
            event_id=pk,
            user=request.user,
            uploaded_file=request.FILES.get('file'),
            description=request.data.get('description', ''),
        )
        return Response(StoredFileSerializer(stored).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: StoredFileSerializer})
    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)')
    def file_detail(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_event_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, file_id=file_id, user=request.user
        )
        return Response(StoredFileSerializer(stored).data)

    @extend_schema(request=FileDescriptionSerializer, responses={200: StoredFileSerializer})
    @file_detail.mapping.put
    @audited('UPDATE_FILE', 'PROCUREMENT_EVENT_FILE')
    def update_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        serializer = FileDescriptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        stored = update_event_file_description(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=item_id,
            event_id=pk,
            file_id=file_id,
            user=request.user,
            description=serializer.validated_data['description'],
        )
        return Response(StoredFileSerializer(stored).data)

    @file_detail.mapping.delete
    @audited('DELETE_FILE', 'PROCUREMENT_EVENT_FILE')
    def delete_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        delete_event_file(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, file_id=file_id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)/download')
    def download_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_event_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, file_id=file_id, user=request.user
        )
        return blob_response(stored)

    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)/view')
    def view_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_event_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, file_id=file_id, user=request.user
        )
        return blob_response(stored, inline=True)
