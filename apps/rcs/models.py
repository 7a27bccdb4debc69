from django.conf import settings
from django.db import models

from apps.core.models import VersionedModel


class AccessLevel(models.TextChoices):
    OWNER = 'OWNER', 'Owner'
    READ_WRITE = 'READ_WRITE', 'Read / Write'
    READ_ONLY = 'READ_ONLY', 'Read only'


# Higher rank wins when several grants apply to the same user
ACCESS_LEVEL_RANK = {
    AccessLevel.OWNER: 3,
    AccessLevel.READ_WRITE: 2,
    AccessLevel.READ_ONLY: 1,
}


class PrincipalType(models.TextChoices):
    USER = 'USER', 'User'
    GROUP = 'GROUP', 'Group'
    DISTRIBUTION_LIST = 'DISTRIBUTION_LIST', 'Distribution list'


class ResponsibilityCentre(VersionedModel):
    """Organizational budget unit owned by one user and optionally shared."""

    name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=500, blank=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='owned_rcs'
    )
    active = models.BooleanField(default=True)
    training_include_in_summary = models.BooleanField(default=True)
    travel_include_in_summary = models.BooleanField(default=True)

    class Meta:
        db_table = 'responsibility_centres'
        indexes = [
            models.Index(fields=['owner', 'name']),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def is_demo(self):
        return self.name == settings.DEMO_RC_NAME


class RCAccess(VersionedModel):
    """
    Grant of an access level on a Responsibility Centre.

    A grant targets either a known user (user FK set) or a directory
    principal identified only by principal_identifier (username, LDAP group
    or distribution list).
    """

    responsibility_centre = models.ForeignKey(
        ResponsibilityCentre, on_delete=models.CASCADE, related_name='access_grants'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='rc_access_grants',
    )
    principal_identifier = models.CharField(max_length=255)
    principal_display_name = models.CharField(max_length=255, blank=True)
    principal_type = models.CharField(
        max_length=20, choices=PrincipalType.choices, default=PrincipalType.USER
    )
    access_level = models.CharField(max_length=20, choices=AccessLevel.choices)
    granted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    granted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'rc_access'
        unique_together = [['responsibility_centre', 'principal_identifier', 'principal_type']]
        indexes = [
            models.Index(fields=['principal_identifier']),
            models.Index(fields=['user']),
        ]
        ordering = ['granted_at']

    def __str__(self):
        return f"{self.principal_identifier} ({self.access_level}) on {self.responsibility_centre.name}"

    @property
    def rank(self):
        return ACCESS_LEVEL_RANK[self.access_level]
