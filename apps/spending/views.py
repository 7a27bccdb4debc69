from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.audit.decorators import audited
from apps.core.files import blob_response
from apps.core.query_params import int_query_param
from apps.core.serializers import StoredFileSerializer, FileUploadSerializer
from apps.fiscal_years.serializers import AllocationSerializer
from apps.rcs.permissions import HasRCWriteAccess

from .models import SpendingItem, SpendingEvent, SpendingInvoice
from .serializers import (
    SpendingItemSerializer,
    SpendingItemCreateSerializer,
    SpendingItemUpdateSerializer,
    SpendingStatusSerializer,
    AllocationsUpdateSerializer,
    SpendingEventSerializer,
    SpendingEventWriteSerializer,
    SpendingInvoiceSerializer,
    SpendingInvoiceCreateSerializer,
    SpendingInvoiceUpdateSerializer,
)
from .services import (
    list_spending_items,
    get_spending_item,
    create_spending_item,
    update_spending_item,
    delete_spending_item,
    update_spending_status,
    get_spending_allocations,
    update_spending_allocations,
    list_spending_events,
    get_spending_event,
    count_spending_events,
    get_latest_spending_event,
    create_spending_event,
    update_spending_event,
    delete_spending_event,
    list_invoices,
    get_invoice,
    create_invoice,
    update_invoice,
    delete_invoice,
    list_invoice_files,
    get_invoice_file,
    upload_invoice_file,
    replace_invoice_file,
    delete_invoice_file,
)


class SpendingItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for spending items of a fiscal year.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list / retrieve: Active items, read access
    create / update / destroy: Write access; destroy is a soft delete
    status: Change the spending status
    allocations: Get or replace money allocations
    """

    queryset = SpendingItem.objects.all()
    serializer_class = SpendingItemSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return SpendingItemCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return SpendingItemUpdateSerializer
        elif self.action == 'update_status':
            return SpendingStatusSerializer
        elif self.action == 'update_allocations':
            return AllocationsUpdateSerializer
        return SpendingItemSerializer

    @extend_schema(parameters=[OpenApiParameter('category_id', int, required=False)])
    def list(self, request, rc_id=None, fy_id=None):
        items = list_spending_items(
            rc_id=rc_id, fy_id=fy_id, user=request.user, category_id=int_query_param(request, 'category_id')
        )
        return Response(SpendingItemSerializer(items, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, pk=None):
        item = get_spending_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(SpendingItemSerializer(item).data)

    @audited('CREATE', 'SPENDING_ITEM')
    def create(self, request, rc_id=None, fy_id=None):
        serializer = SpendingItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = create_spending_item(rc_id=rc_id, fy_id=fy_id, user=request.user, **serializer.validated_data)
        return Response(SpendingItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'SPENDING_ITEM')
    def update(self, request, rc_id=None, fy_id=None, pk=None, partial=False):
        serializer = SpendingItemUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        item = update_spending_item(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(SpendingItemSerializer(item).data)

    @audited('DELETE', 'SPENDING_ITEM')
    def destroy(self, request, rc_id=None, fy_id=None, pk=None):
        delete_spending_item(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SpendingStatusSerializer, responses={200: SpendingItemSerializer})
    @action(detail=True, methods=['put'], url_path='status')
    @audited('UPDATE_STATUS', 'SPENDING_ITEM')
    def update_status(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = SpendingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = update_spending_status(
            rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user, status=serializer.validated_data['status']
        )
        return Response(SpendingItemSerializer(item).data)

    @extend_schema(responses={200: AllocationSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def allocations(self, request, rc_id=None, fy_id=None, pk=None):
        allocations = get_spending_allocations(rc_id=rc_id, fy_id=fy_id, item_id=pk, user=request.user)
        return Response(AllocationSerializer(allocations, many=True).data)

    @extend_schema(request=AllocationsUpdateSerializer, responses={200: AllocationSerializer(many=True)})
    @allocations.mapping.put
    @audited('UPDATE_ALLOCATIONS', 'SPENDING_ITEM')
    def update_allocations(self, request, rc_id=None, fy_id=None, pk=None):
        serializer = AllocationsUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        allocations = update_spending_allocations(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=pk,
            user=request.user,
            allocations=serializer.validated_data['allocations'],
        )
        return Response(AllocationSerializer(allocations, many=True).data)


class SpendingEventViewSet(viewsets.ModelViewSet):
    """
    Tracking events of a spending item.

    destroy is a soft delete. count and latest summarize the timeline.
    """

    queryset = SpendingEvent.objects.all()
    serializer_class = SpendingEventSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return SpendingEventWriteSerializer
        return SpendingEventSerializer

    def list(self, request, rc_id=None, fy_id=None, item_id=None):
        events = list_spending_events(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user)
        return Response(SpendingEventSerializer(events, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        event = get_spending_event(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, user=request.user)
        return Response(SpendingEventSerializer(event).data)

    @audited('CREATE', 'SPENDING_EVENT')
    def create(self, request, rc_id=None, fy_id=None, item_id=None):
        serializer = SpendingEventWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = create_spending_event(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user, **serializer.validated_data
        )
        return Response(SpendingEventSerializer(event).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'SPENDING_EVENT')
    def update(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, partial=False):
        serializer = SpendingEventWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        event = update_spending_event(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(SpendingEventSerializer(event).data)

    @audited('DELETE', 'SPENDING_EVENT')
    def destroy(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        delete_spending_event(rc_id=rc_id, fy_id=fy_id, item_id=item_id, event_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def count(self, request, rc_id=None, fy_id=None, item_id=None):
        total = count_spending_events(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user)
        return Response({'count': total})

    @action(detail=False, methods=['get'])
    def latest(self, request, rc_id=None, fy_id=None, item_id=None):
        """Most recent event, or 204 when the item has none."""
        event = get_latest_spending_event(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user)
        if event is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(SpendingEventSerializer(event).data)


class SpendingInvoiceViewSet(viewsets.ModelViewSet):
    """
    Invoices of a spending item and their attached files.

    Files are stored in the database and served through download (attachment)
    and view (inline) routes.
    """

    queryset = SpendingInvoice.objects.all()
    serializer_class = SpendingInvoiceSerializer
    permission_classes = [IsAuthenticated, HasRCWriteAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return SpendingInvoiceCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return SpendingInvoiceUpdateSerializer
        elif self.action in ['upload_file', 'replace_file']:
            return FileUploadSerializer
        return SpendingInvoiceSerializer

    def list(self, request, rc_id=None, fy_id=None, item_id=None):
        invoices = list_invoices(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user)
        return Response(SpendingInvoiceSerializer(invoices, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        invoice = get_invoice(rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=pk, user=request.user)
        return Response(SpendingInvoiceSerializer(invoice).data)

    @audited('CREATE', 'SPENDING_INVOICE')
    def create(self, request, rc_id=None, fy_id=None, item_id=None):
        serializer = SpendingInvoiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invoice = create_invoice(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=request.user, **serializer.validated_data
        )
        return Response(SpendingInvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'SPENDING_INVOICE')
    def update(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, partial=False):
        serializer = SpendingInvoiceUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        invoice = update_invoice(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(SpendingInvoiceSerializer(invoice).data)

    @audited('DELETE', 'SPENDING_INVOICE')
    def destroy(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        delete_invoice(rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # =========================================================================
    # Files
    # =========================================================================

    @extend_schema(responses={200: StoredFileSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def files(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        stored = list_invoice_files(rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=pk, user=request.user)
        return Response(StoredFileSerializer(stored, many=True).data)

    @extend_schema(request=FileUploadSerializer, responses={201: StoredFileSerializer})
    @files.mapping.post
    @audited('UPLOAD_FILE', 'SPENDING_INVOICE_FILE')
    def upload_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None):
        stored = upload_invoice_file(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=item_id,
            invoice_id=pk,
            user=request.user,
            uploaded_file=request.FILES.get('file'),
            description=request.data.get('description', ''),
        )
        return Response(StoredFileSerializer(stored).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: StoredFileSerializer})
    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)')
    def file_detail(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_invoice_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=pk, file_id=file_id, user=request.user
        )
        return Response(StoredFileSerializer(stored).data)

    @extend_schema(request=FileUploadSerializer, responses={200: StoredFileSerializer})
    @file_detail.mapping.put
    @audited('REPLACE_FILE', 'SPENDING_INVOICE_FILE')
    def replace_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = replace_invoice_file(
            rc_id=rc_id,
            fy_id=fy_id,
            item_id=item_id,
            invoice_id=pk,
            file_id=file_id,
            user=request.user,
            uploaded_file=request.FILES.get('file'),
            description=request.data.get('description'),
        )
        return Response(StoredFileSerializer(stored).data)

    @file_detail.mapping.delete
    @audited('DELETE_FILE', 'SPENDING_INVOICE_FILE')
    def delete_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        delete_invoice_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=pk, file_id=file_id, user=request.user
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)/download')
    def download_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_invoice_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=pk, file_id=file_id, user=request.user
        )
        return blob_response(stored)

    @action(detail=True, methods=['get'], url_path=r'files/(?P<file_id>\d+)/view')
    def view_file(self, request, rc_id=None, fy_id=None, item_id=None, pk=None, file_id=None):
        stored = get_invoice_file(
            rc_id=rc_id, fy_id=fy_id, item_id=item_id, invoice_id=pk, file_id=file_id, user=request.user
        )
        return blob_response(stored, inline=True)
