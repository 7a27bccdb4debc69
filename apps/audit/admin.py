from django.contrib import admin
from .models import AuditEvent


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    """Read-only view of the audit trail."""

    list_display = ['created_at', 'username', 'action', 'entity_type', 'entity_name', 'rc_name', 'outcome']
    list_filter = ['outcome', 'action', 'entity_type']
    search_fields = ['username', 'entity_name', 'rc_name', 'fiscal_year_name']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
