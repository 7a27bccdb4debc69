from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema

from apps.audit.decorators import audited
from apps.rcs.permissions import HasRCReadAccess

from .models import FiscalYear, Money, Category
from .serializers import (
    FiscalYearSerializer,
    FiscalYearCreateSerializer,
    FiscalYearUpdateSerializer,
    DisplaySettingsSerializer,
    FiscalYearCloneSerializer,
    FiscalYearCloneToRCSerializer,
    FiscalYearImportSerializer,
    MoneySerializer,
    MoneyCreateSerializer,
    MoneyUpdateSerializer,
    ReorderSerializer,
    CategorySerializer,
    CategoryCreateSerializer,
    CategoryUpdateSerializer,
)
from .services import (
    list_fiscal_years,
    get_fiscal_year,
    create_fiscal_year,
    update_fiscal_year,
    delete_fiscal_year,
    update_display_settings,
    toggle_active_status,
    clone_fiscal_year,
    clone_fiscal_year_to_rc,
    export_fiscal_year,
    import_fiscal_year,
    list_monies,
    get_money,
    create_money,
    update_money,
    delete_money,
    reorder_monies,
    list_categories,
    get_category,
    create_category,
    update_category,
    delete_category,
    reorder_categories,
    ensure_defaults,
)


class FiscalYearViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the fiscal years of a Responsibility Centre.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list / retrieve: Read access
    create / update / destroy: Write access
    display_settings / toggle_active: Owner only
    clone: Copy the fiscal year within the RC
    clone_to_rc: Copy the fiscal year into another RC
    export: JSON document of the fiscal year tree (read access)
    import: Create a fiscal year from such a document (write access)
    """

    queryset = FiscalYear.objects.all()
    serializer_class = FiscalYearSerializer
    permission_classes = [IsAuthenticated, HasRCReadAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return FiscalYearCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return FiscalYearUpdateSerializer
        elif self.action == 'display_settings':
            return DisplaySettingsSerializer
        elif self.action == 'clone':
            return FiscalYearCloneSerializer
        elif self.action == 'clone_to_rc':
            return FiscalYearCloneToRCSerializer
        elif self.action == 'import_document':
            return FiscalYearImportSerializer
        return FiscalYearSerializer

    def list(self, request, rc_id=None):
        fiscal_years = list_fiscal_years(rc_id=rc_id, user=request.user)
        return Response(FiscalYearSerializer(fiscal_years, many=True).data)

    def retrieve(self, request, rc_id=None, pk=None):
        fiscal_year = get_fiscal_year(rc_id=rc_id, fy_id=pk, user=request.user)
        return Response(FiscalYearSerializer(fiscal_year).data)

    @audited('CREATE', 'FISCAL_YEAR')
    def create(self, request, rc_id=None):
        """Create a fiscal year with its default money and categories."""
        serializer = FiscalYearCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        fiscal_year = create_fiscal_year(rc_id=rc_id, user=request.user, **serializer.validated_data)
        return Response(FiscalYearSerializer(fiscal_year).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'FISCAL_YEAR')
    def update(self, request, rc_id=None, pk=None, partial=False):
        serializer = FiscalYearUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        fiscal_year = update_fiscal_year(rc_id=rc_id, fy_id=pk, user=request.user, **serializer.validated_data)
        return Response(FiscalYearSerializer(fiscal_year).data)

    @audited('DELETE', 'FISCAL_YEAR')
    def destroy(self, request, rc_id=None, pk=None):
        delete_fiscal_year(rc_id=rc_id, fy_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=DisplaySettingsSerializer, responses={200: FiscalYearSerializer})
    @action(detail=True, methods=['put', 'patch'], url_path='display-settings')
    @audited('UPDATE_DISPLAY_SETTINGS', 'FISCAL_YEAR')
    def display_settings(self, request, rc_id=None, pk=None):
        """Update search box, category filter, grouping and on-target thresholds."""
        serializer = DisplaySettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        fiscal_year = update_display_settings(rc_id=rc_id, fy_id=pk, user=request.user, **serializer.validated_data)
        return Response(FiscalYearSerializer(fiscal_year).data)

    @extend_schema(request=None, responses={200: FiscalYearSerializer})
    @action(detail=True, methods=['post', 'put'], url_path='toggle-active')
    @audited('TOGGLE_ACTIVE', 'FISCAL_YEAR')
    def toggle_active(self, request, rc_id=None, pk=None):
        fiscal_year = toggle_active_status(rc_id=rc_id, fy_id=pk, user=request.user)
        return Response(FiscalYearSerializer(fiscal_year).data)

    @extend_schema(request=FiscalYearCloneSerializer, responses={201: FiscalYearSerializer})
    @action(detail=True, methods=['post'])
    @audited('CLONE', 'FISCAL_YEAR')
    def clone(self, request, rc_id=None, pk=None):
        """Deep-clone the fiscal year within the same RC."""
        serializer = FiscalYearCloneSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        clone = clone_fiscal_year(
            rc_id=rc_id,
            fy_id=pk,
            user=request.user,
            new_name=serializer.validated_data['new_name'],
        )
        return Response(FiscalYearSerializer(clone).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=FiscalYearCloneToRCSerializer, responses={201: FiscalYearSerializer})
    @action(detail=True, methods=['post'], url_path='clone-to-rc')
    @audited('CLONE', 'FISCAL_YEAR')
    def clone_to_rc(self, request, rc_id=None, pk=None):
        """Deep-clone the fiscal year into another RC the user can write to."""
        serializer = FiscalYearCloneToRCSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        clone = clone_fiscal_year_to_rc(
            source_rc_id=rc_id,
            fy_id=pk,
            target_rc_id=serializer.validated_data['target_rc_id'],
            user=request.user,
            new_name=serializer.validated_data['new_name'],
        )
        return Response(FiscalYearSerializer(clone).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: OpenApiTypes.OBJECT})
    @action(detail=True, methods=['get'])
    def export(self, request, rc_id=None, pk=None):
        """Export the fiscal year with all of its items as JSON."""
        document = export_fiscal_year(rc_id=rc_id, fy_id=pk, user=request.user)
        return Response(document)

    @extend_schema(request=FiscalYearImportSerializer, responses={201: FiscalYearSerializer})
    @action(detail=False, methods=['post'], url_path='import', url_name='import')
    @audited('IMPORT', 'FISCAL_YEAR')
    def import_document(self, request, rc_id=None):
        """Create a fiscal year in this RC from an export document."""
        serializer = FiscalYearImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        fiscal_year = import_fiscal_year(
            rc_id=rc_id,
            user=request.user,
            data=serializer.validated_data['data'],
            new_name=serializer.validated_data.get('new_name'),
        )
        return Response(FiscalYearSerializer(fiscal_year).data, status=status.HTTP_201_CREATED)


class MoneyViewSet(viewsets.ModelViewSet):
    """
    Money types of a fiscal year.

    Anyone with read access can list them; changes are for owners only.
    """

    queryset = Money.objects.all()
    serializer_class = MoneySerializer
    permission_classes = [IsAuthenticated, HasRCReadAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return MoneyCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return MoneyUpdateSerializer
        elif self.action == 'reorder':
            return ReorderSerializer
        return MoneySerializer

    def list(self, request, rc_id=None, fy_id=None):
        monies = list_monies(rc_id=rc_id, fy_id=fy_id, user=request.user)
        return Response(MoneySerializer(monies, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, pk=None):
        money = get_money(rc_id=rc_id, fy_id=fy_id, money_id=pk, user=request.user)
        return Response(MoneySerializer(money).data)

    @audited('CREATE', 'MONEY')
    def create(self, request, rc_id=None, fy_id=None):
        serializer = MoneyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        money = create_money(rc_id=rc_id, fy_id=fy_id, user=request.user, **serializer.validated_data)
        return Response(MoneySerializer(money).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'MONEY')
    def update(self, request, rc_id=None, fy_id=None, pk=None, partial=False):
        serializer = MoneyUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        money = update_money(
            rc_id=rc_id, fy_id=fy_id, money_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(MoneySerializer(money).data)

    @audited('DELETE', 'MONEY')
    def destroy(self, request, rc_id=None, fy_id=None, pk=None):
        delete_money(rc_id=rc_id, fy_id=fy_id, money_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ReorderSerializer, responses={200: MoneySerializer(many=True)})
    @action(detail=False, methods=['put', 'post'])
    @audited('REORDER', 'MONEY')
    def reorder(self, request, rc_id=None, fy_id=None):
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        monies = reorder_monies(
            rc_id=rc_id, fy_id=fy_id, user=request.user, money_ids=serializer.validated_data['ids']
        )
        return Response(MoneySerializer(monies, many=True).data)


class CategoryViewSet(viewsets.ModelViewSet):
    """
    Categories of a fiscal year.

    Custom categories can be managed by anyone with write access; default
    categories are read-only.
    """

    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [IsAuthenticated, HasRCReadAccess]

    def get_serializer_class(self):
        if self.action == 'create':
            return CategoryCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return CategoryUpdateSerializer
        elif self.action == 'reorder':
            return ReorderSerializer
        return CategorySerializer

    def list(self, request, rc_id=None, fy_id=None):
        categories = list_categories(rc_id=rc_id, fy_id=fy_id, user=request.user)
        return Response(CategorySerializer(categories, many=True).data)

    def retrieve(self, request, rc_id=None, fy_id=None, pk=None):
        category = get_category(rc_id=rc_id, fy_id=fy_id, category_id=pk, user=request.user)
        return Response(CategorySerializer(category).data)

    @audited('CREATE', 'CATEGORY')
    def create(self, request, rc_id=None, fy_id=None):
        serializer = CategoryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = create_category(rc_id=rc_id, fy_id=fy_id, user=request.user, **serializer.validated_data)
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    @audited('UPDATE', 'CATEGORY')
    def update(self, request, rc_id=None, fy_id=None, pk=None, partial=False):
        serializer = CategoryUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        category = update_category(
            rc_id=rc_id, fy_id=fy_id, category_id=pk, user=request.user, **serializer.validated_data
        )
        return Response(CategorySerializer(category).data)

    @audited('DELETE', 'CATEGORY')
    def destroy(self, request, rc_id=None, fy_id=None, pk=None):
        delete_category(rc_id=rc_id, fy_id=fy_id, category_id=pk, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ReorderSerializer, responses={200: CategorySerializer(many=True)})
    @action(detail=False, methods=['put', 'post'])
    @audited('REORDER', 'CATEGORY')
    def reorder(self, request, rc_id=None, fy_id=None):
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        categories = reorder_categories(
            rc_id=rc_id, fy_id=fy_id, user=request.user, category_ids=serializer.validated_data['ids']
        )
        return Response(CategorySerializer(categories, many=True).data)

    @extend_schema(request=None, responses={200: CategorySerializer(many=True)})
    @action(detail=False, methods=['post'], url_path='ensure-defaults')
    @audited('ENSURE_DEFAULTS', 'CATEGORY')
    def ensure_defaults(self, request, rc_id=None, fy_id=None):
        """Recreate any default category that is missing."""
        categories = ensure_defaults(rc_id=rc_id, fy_id=fy_id, user=request.user)
        return Response(CategorySerializer(categories, many=True).data)
