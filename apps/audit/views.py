from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from .serializers import AuditEventSerializer
from .services import list_rc_audit_events, list_fiscal_year_audit_events


class AuditPagination(PageNumberPagination):
    """Pagination for audit history."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 500


def _paginated(request, queryset):
    paginator = AuditPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = AuditEventSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    responses={200: AuditEventSerializer(many=True)},
    description="Audit history of a Responsibility Centre, newest first. Owners only.",
    tags=['audit'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def rc_audit_events(request, rc_id):
    """List audit events of an RC."""
    return _paginated(request, list_rc_audit_events(rc_id=rc_id, user=request.user))


@extend_schema(
    responses={200: AuditEventSerializer(many=True)},
    description="Audit history of one fiscal year, newest first. Owners only.",
    tags=['audit'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def fiscal_year_audit_events(request, rc_id, fy_id):
    """List audit events of a fiscal year."""
    return _paginated(
        request,
        list_fiscal_year_audit_events(rc_id=rc_id, fy_id=fy_id, user=request.user),
    )
