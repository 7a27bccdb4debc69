"""
Abstract building blocks shared by the myRC domain models.
"""
from django.db import models

from config.exceptions import ServiceConflict


class TimestampedModel(models.Model):
    """Adds created_at / updated_at columns."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class StaleObjectError(ServiceConflict):
    """Raised when a row changed after it was read."""

    def __init__(self, message="This record was modified by another user. Reload and try again."):
        super().__init__(message)


class VersionedModel(TimestampedModel):
    """
    Timestamps plus an optimistic-locking version counter.

    The version starts at 0 and is bumped on every save of an existing row.
    The bump only succeeds while the stored version still matches the one
    this instance was loaded with; otherwise StaleObjectError is raised.
    Partial saves (update_fields) always include the version and updated_at.
    """

    version = models.PositiveIntegerField(default=0)

    class Meta:
        abstract = True

    def check_version(self, expected):
        """Compare a client-supplied version with the loaded one; None skips the check."""
        if expected is not None and expected != self.version:
            raise StaleObjectError()

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            current = self.version or 0
            bumped = type(self)._default_manager.filter(pk=self.pk, version=current).update(version=current + 1)
            if not bumped:
                raise StaleObjectError()
            self.version = current + 1
            update_fields = kwargs.get('update_fields')
            if update_fields is not None:
                kwargs['update_fields'] = set(update_fields) | {'version', 'updated_at'}
        super().save(*args, **kwargs)


class StoredFile(TimestampedModel):
    """
    Attachment kept in the database.

    Concrete subclasses add the foreign key to their owner.
    """

    file_name = models.CharField(max_length=255)
    content_type = models.CharField(max_length=100)
    file_size = models.BigIntegerField()
    content = models.BinaryField()
    description = models.CharField(max_length=500, blank=True)
    active = models.BooleanField(default=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def __str__(self):
        return self.file_name
