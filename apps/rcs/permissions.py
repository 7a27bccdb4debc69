"""
DRF permission classes for routes nested under a Responsibility Centre.

The RC id is read from the ``rc_id`` URL kwarg. An unknown RC passes the
check so the view can answer 404.
"""
from rest_framework.permissions import BasePermission

from apps.rcs.models import ResponsibilityCentre
from apps.rcs.services import permissions as rc_permissions


def _rc_from_view(view):
    rc_id = view.kwargs.get('rc_id')
    if rc_id is None:
        return None
    return ResponsibilityCentre.objects.select_related('owner').filter(id=rc_id).first()


class HasRCReadAccess(BasePermission):
    """
    Permission: user must be able to read the RC (any access level, or Demo).

    Usage:
        class FiscalYearViewSet(viewsets.ModelViewSet):
            permission_classes = [IsAuthenticated, HasRCReadAccess]
    """

    message = rc_permissions.NO_ACCESS_MESSAGE

    def has_permission(self, request, view):
        rc = _rc_from_view(view)
        if rc is None:
            return True
        return rc_permissions.has_access(rc=rc, user=request.user)


class HasRCWriteAccess(BasePermission):
    """
    Permission: user must hold READ_WRITE or OWNER on the RC.

    Safe methods only need read access.
    """

    message = rc_permissions.NO_WRITE_ACCESS_MESSAGE

    def has_permission(self, request, view):
        rc = _rc_from_view(view)
        if rc is None:
            return True
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return rc_permissions.has_access(rc=rc, user=request.user)
        return rc_permissions.has_write_access(rc=rc, user=request.user)


class IsRCOwner(BasePermission):
    """
    Permission: user must be an owner of the RC.

    Usage:
        @permission_classes([IsAuthenticated, IsRCOwner])
        def rc_audit_events(request, rc_id):
            ...
    """

    message = 'Only owners can perform this action'

    def has_permission(self, request, view):
        rc = _rc_from_view(view)
        if rc is None:
            return True
        return rc_permissions.is_owner(rc=rc, user=request.user)
