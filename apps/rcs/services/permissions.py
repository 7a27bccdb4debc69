"""
Access level resolution for Responsibility Centres.

Every access decision in the project goes through this module:

* The RC's original owner always has OWNER access.
* Otherwise the highest level across all grants that match the user wins.
  A grant matches when it points at the user row, names the username as a
  USER principal, or names one of the user's directory groups or
  distribution lists.
* The Demo RC is readable by everybody.
"""

from typing import Iterable, Optional

from django.db.models import Q

from apps.rcs.models import (
    ResponsibilityCentre,
    RCAccess,
    AccessLevel,
    PrincipalType,
    ACCESS_LEVEL_RANK,
)

from .exceptions import RCNotFoundError, RCAccessDeniedError

NO_ACCESS_MESSAGE = "User does not have access to this Responsibility Centre"
NO_WRITE_ACCESS_MESSAGE = "User does not have write access to this Responsibility Centre"

GROUP_PRINCIPAL_TYPES = [PrincipalType.GROUP, PrincipalType.DISTRIBUTION_LIST]


def get_rc(rc_id, *, for_update=False) -> ResponsibilityCentre:
    """Fetch an RC by id or raise RCNotFoundError."""
    queryset = ResponsibilityCentre.objects.select_related('owner')
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(id=rc_id)
    except ResponsibilityCentre.DoesNotExist:
        raise RCNotFoundError("Responsibility Centre not found")


def grants_matching(*, user=None, username: str = None, groups: Iterable[str] = ()):
    """
    Q object selecting the grants that apply to a principal.

    A username that has no user row is matched by principal identifier only.
    """
    if user is not None:
        username = user.username
        groups = list(groups) + list(user.directory_groups or [])

    conditions = []
    if user is not None:
        conditions.append(Q(user=user))
    if username:
        conditions.append(Q(principal_type=PrincipalType.USER, principal_identifier=username))
    groups = [g for g in groups if g]
    if groups:
        conditions.append(Q(principal_type__in=GROUP_PRINCIPAL_TYPES, principal_identifier__in=groups))

    if not conditions:
        return Q(pk__in=[])
    condition = conditions[0]
    for extra in conditions[1:]:
        condition |= extra
    return condition


def get_effective_access_level(
    *,
    rc: ResponsibilityCentre,
    user=None,
    username: str = None,
    groups: Iterable[str] = (),
) -> Optional[str]:
    """
    Resolve the access level a principal holds on an RC.

    Args:
        rc: Responsibility Centre
        user: User instance, if the principal is a known user
        username: Username for principals without a user row
        groups: Extra group / distribution list identifiers

    Returns:
        AccessLevel value, or None when nothing grants access
    """
    if user is not None and rc.owner_id == user.pk:
        return AccessLevel.OWNER
    if user is None and username and rc.owner.username == username:
        return AccessLevel.OWNER

    levels = (
        RCAccess.objects
        .filter(responsibility_centre=rc)
        .filter(grants_matching(user=user, username=username, groups=groups))
        .values_list('access_level', flat=True)
    )
    best = None
    for level in levels:
        if best is None or ACCESS_LEVEL_RANK[level] > ACCESS_LEVEL_RANK[best]:
            best = level
    return best


def has_access(*, rc: ResponsibilityCentre, user) -> bool:
    if rc.is_demo:
        return True
    return get_effective_access_level(rc=rc, user=user) is not None


def has_write_access(*, rc: ResponsibilityCentre, user) -> bool:
    level = get_effective_access_level(rc=rc, user=user)
    return level in (AccessLevel.OWNER, AccessLevel.READ_WRITE)


def can_edit_content(*, rc: ResponsibilityCentre, user) -> bool:
    """Content editing (items, categories) needs READ_WRITE or OWNER."""
    return has_write_access(rc=rc, user=user)


def is_owner(*, rc: ResponsibilityCentre, user) -> bool:
    return get_effective_access_level(rc=rc, user=user) == AccessLevel.OWNER


def get_visible_access_level(*, rc: ResponsibilityCentre, user) -> Optional[str]:
    """Access level as shown to the user; the Demo RC always reads READ_ONLY."""
    if rc.is_demo:
        return AccessLevel.READ_ONLY
    return get_effective_access_level(rc=rc, user=user)


def count_effective_owners(rc: ResponsibilityCentre) -> int:
    """OWNER grants, plus the original owner when they hold no explicit OWNER grant."""
    owner_grants = RCAccess.objects.filter(
        responsibility_centre=rc, access_level=AccessLevel.OWNER
    )
    count = owner_grants.count()
    original_owner_listed = owner_grants.filter(
        Q(user_id=rc.owner_id)
        | Q(principal_type=PrincipalType.USER, principal_identifier=rc.owner.username)
    ).exists()
    if not original_owner_listed:
        count += 1
    return count


def require_read_access(*, rc_id, user, message: str = NO_ACCESS_MESSAGE) -> ResponsibilityCentre:
    """Return the RC if the user can read it, else raise."""
    rc = get_rc(rc_id)
    if not has_access(rc=rc, user=user):
        raise RCAccessDeniedError(message)
    return rc


def require_write_access(*, rc_id, user, message: str = NO_WRITE_ACCESS_MESSAGE) -> ResponsibilityCentre:
    """Return the RC if the user holds READ_WRITE or OWNER, else raise."""
    rc = get_rc(rc_id)
    if not has_write_access(rc=rc, user=user):
        raise RCAccessDeniedError(message)
    return rc


def require_owner(*, rc_id, user, message: str, for_update=False) -> ResponsibilityCentre:
    """Return the RC if the user owns it, else raise with the given message."""
    rc = get_rc(rc_id, for_update=for_update)
    if not is_owner(rc=rc, user=user):
        raise RCAccessDeniedError(message)
    return rc
