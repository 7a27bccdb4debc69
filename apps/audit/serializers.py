from rest_framework import serializers
from .models import AuditEvent


class AuditEventSerializer(serializers.ModelSerializer):
    """Read-only audit event."""

    class Meta:
        model = AuditEvent
        fields = [
            'id',
            'username',
            'action',
            'entity_type',
            'entity_id',
            'entity_name',
            'rc_id',
            'rc_name',
            'fiscal_year_id',
            'fiscal_year_name',
            'parameters',
            'http_method',
            'endpoint',
            'user_agent',
            'ip_address',
            'outcome',
            'error_message',
            'cloned_from_audit_id',
            'created_at',
        ]
        read_only_fields = fields
