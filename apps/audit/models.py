from django.db import models
from django.utils import timezone


class AuditOutcome(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    SUCCESS = 'SUCCESS', 'Success'
    FAILURE = 'FAILURE', 'Failure'


class AuditEvent(models.Model):
    """
    Immutable record of a mutating API call.

    Context is denormalized (ids and names, no foreign keys) so events
    survive deletion of the entities they describe.
    """

    username = models.CharField(max_length=150)
    action = models.CharField(max_length=50)
    entity_type = models.CharField(max_length=50)
    entity_id = models.BigIntegerField(null=True, blank=True)
    entity_name = models.CharField(max_length=255, blank=True)

    # Location in the RC / FY hierarchy
    rc_id = models.BigIntegerField(null=True, blank=True)
    rc_name = models.CharField(max_length=100, blank=True)
    fiscal_year_id = models.BigIntegerField(null=True, blank=True)
    fiscal_year_name = models.CharField(max_length=50, blank=True)

    # Request details
    parameters = models.TextField(blank=True)
    http_method = models.CharField(max_length=10, blank=True)
    endpoint = models.CharField(max_length=500, blank=True)
    user_agent = models.CharField(max_length=500, blank=True)
    ip_address = models.CharField(max_length=45, blank=True)

    outcome = models.CharField(
        max_length=10, choices=AuditOutcome.choices, default=AuditOutcome.PENDING
    )
    error_message = models.TextField(blank=True)
    cloned_from_audit_id = models.BigIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'audit_events'
        indexes = [
            models.Index(fields=['rc_id', 'created_at']),
            models.Index(fields=['rc_id', 'fiscal_year_id', 'created_at']),
            models.Index(fields=['username']),
        ]
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.username} {self.action} {self.entity_type} [{self.outcome}]"
