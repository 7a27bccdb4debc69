"""
Sharing service for Responsibility Centres.

Owners grant, change and revoke access for users, LDAP groups and
distribution lists. Ownership rules:

* The original owner's access can never be reduced or revoked.
* An RC always keeps at least one effective owner.
* The Demo RC cannot be re-shared.
"""

import logging
from typing import List

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from apps.accounts.services.directory import find_directory_user
from apps.rcs.models import RCAccess, AccessLevel, PrincipalType, ResponsibilityCentre

from .exceptions import (
    RCServiceError,
    RCAccessDeniedError,
    PermissionNotFoundError,
    DemoRCModificationError,
    PrincipalNotFoundError,
    DuplicateGrantError,
    InvalidPermissionChangeError,
)
from .permissions import get_rc, is_owner, count_effective_owners

User = get_user_model()
logger = logging.getLogger(__name__)

ORIGINAL_OWNER_CHANGE_MESSAGE = "Cannot change access level for the original RC owner"
LAST_OWNER_MESSAGE = "Cannot remove the last owner from an RC"


def _validate_level(access_level: str) -> str:
    if access_level not in AccessLevel.values:
        raise RCServiceError(f"Invalid access level: {access_level}")
    return access_level


def _require_owner_of(rc: ResponsibilityCentre, user, message: str) -> None:
    if not is_owner(rc=rc, user=user):
        raise RCAccessDeniedError(message)


def _reject_demo(rc: ResponsibilityCentre) -> None:
    if rc.is_demo:
        raise DemoRCModificationError("Cannot modify permissions for Demo RC")


def _is_original_owner_grant(access: RCAccess) -> bool:
    rc = access.responsibility_centre
    if access.user_id is not None:
        return access.user_id == rc.owner_id
    return (
        access.principal_type == PrincipalType.USER
        and access.principal_identifier.lower() == rc.owner.username.lower()
    )


def _is_own_grant(access: RCAccess, user) -> bool:
    if access.user_id is not None:
        return access.user_id == user.pk
    return (
        access.principal_type == PrincipalType.USER
        and access.principal_identifier.lower() == user.username.lower()
    )


def _get_access_for_update(*, rc_id, access_id) -> RCAccess:
    try:
        return (
            RCAccess.objects
            .select_for_update()
            .select_related('responsibility_centre__owner')
            .get(id=access_id, responsibility_centre_id=rc_id)
        )
    except RCAccess.DoesNotExist:
        raise PermissionNotFoundError("Permission not found")


def get_permissions_for_rc(*, rc_id, user) -> List[RCAccess]:
    """
    List all grants on an RC (owner only).

    The original owner is always listed first. When they hold no explicit
    OWNER grant a synthetic, unsaved entry is returned for them.

    Raises:
        RCNotFoundError: If the RC does not exist
        RCAccessDeniedError: If the user is not an owner
    """
    rc = get_rc(rc_id)
    _require_owner_of(rc, user, "Only owners can view RC permissions")

    grants = list(
        RCAccess.objects
        .filter(responsibility_centre=rc)
        .select_related('user', 'granted_by', 'responsibility_centre__owner')
        .order_by('granted_at', 'id')
    )

    owner_listed = any(
        g.access_level == AccessLevel.OWNER and _is_original_owner_grant(g) for g in grants
    )
    if not owner_listed:
        synthetic = RCAccess(
            responsibility_centre=rc,
            user=rc.owner,
            principal_identifier=rc.owner.username,
            principal_display_name=rc.owner.get_display_name(),
            principal_type=PrincipalType.USER,
            access_level=AccessLevel.OWNER,
        )
        synthetic.granted_at = rc.created_at
        grants.insert(0, synthetic)

    return grants


@transaction.atomic
def grant_user_access(
    *,
    rc_id,
    principal_identifier: str,
    access_level: str,
    granted_by
) -> RCAccess:
    """
    Grant a user access to an RC (owner only).

    Args:
        rc_id: Responsibility Centre id
        principal_identifier: Username, or a directory identifier matched case-insensitively
        access_level: OWNER, READ_WRITE or READ_ONLY
        granted_by: Owner performing the grant

    Returns:
        Created RCAccess

    Raises:
        RCAccessDeniedError: If granted_by is not an owner
        DemoRCModificationError: If the RC is the Demo RC
        PrincipalNotFoundError: If the user is unknown
        DuplicateGrantError: If the user already has a grant
        InvalidPermissionChangeError: If the original owner would be downgraded
    """
    rc = get_rc(rc_id, for_update=True)
    _require_owner_of(rc, granted_by, "Only owners can grant permissions")
    _reject_demo(rc)
    _validate_level(access_level)

    identifier = (principal_identifier or '').strip()
    target = User.objects.filter(username=identifier).first() if identifier else None
    if target is None:
        return _grant_directory_user(rc, identifier, access_level, granted_by)

    if target.pk == rc.owner_id and access_level != AccessLevel.OWNER:
        raise InvalidPermissionChangeError(ORIGINAL_OWNER_CHANGE_MESSAGE)

    _reject_duplicate_user_grant(
        rc,
        Q(user=target) | Q(principal_type=PrincipalType.USER, principal_identifier__iexact=target.username),
        target.username,
        access_level,
    )

    access = RCAccess.objects.create(
        responsibility_centre=rc,
        user=target,
        principal_identifier=target.username,
        principal_display_name=target.get_display_name(),
        principal_type=PrincipalType.USER,
        access_level=access_level,
        granted_by=granted_by,
    )
    logger.info(
        "User %s granted %s access on RC %s to user %s",
        granted_by.username, access_level, rc.id, target.username,
    )
    return access


def _reject_duplicate_user_grant(rc: ResponsibilityCentre, match: Q, identifier: str, access_level: str) -> None:
    existing = RCAccess.objects.filter(responsibility_centre=rc).filter(match).first()
    if existing is None:
        return
    if existing.access_level == access_level:
        raise DuplicateGrantError(f"User '{identifier}' already has {access_level} access to this RC.")
    raise DuplicateGrantError(
        f"User '{identifier}' already has {existing.access_level} access to this RC. "
        "Use update to change the access level."
    )


def _grant_directory_user(rc: ResponsibilityCentre, identifier: str, access_level: str, granted_by) -> RCAccess:
    """Store a principal-only USER grant for an identifier resolved through the directory."""
    entry = find_directory_user(identifier)
    if entry is None:
        raise PrincipalNotFoundError(f"User not found: {identifier}")

    name = entry['identifier']
    if rc.owner.username.lower() == name.lower() and access_level != AccessLevel.OWNER:
        raise InvalidPermissionChangeError(ORIGINAL_OWNER_CHANGE_MESSAGE)

    _reject_duplicate_user_grant(
        rc,
        Q(user__username__iexact=name) | Q(principal_type=PrincipalType.USER, principal_identifier__iexact=name),
        name,
        access_level,
    )

    access = RCAccess.objects.create(
        responsibility_centre=rc,
        principal_identifier=name,
        principal_display_name=entry['display_name'] or name,
        principal_type=PrincipalType.USER,
        access_level=access_level,
        granted_by=granted_by,
    )
    logger.info(
        "User %s granted %s access on RC %s to directory user %s",
        granted_by.username, access_level, rc.id, name,
    )
    return access


@transaction.atomic
def grant_group_access(
    *,
    rc_id,
    principal_identifier: str,
    principal_type: str,
    access_level: str,
    granted_by,
    principal_display_name: str = ''
) -> RCAccess:
    """
    Grant an LDAP group or distribution list access to an RC (owner only).

    Raises:
        RCAccessDeniedError: If granted_by is not an owner
        DemoRCModificationError: If the RC is the Demo RC
        RCServiceError: If principal_type is USER or the identifier is empty
        DuplicateGrantError: If the principal already has a grant
    """
    rc = get_rc(rc_id, for_update=True)
    _require_owner_of(rc, granted_by, "Only owners can grant permissions")
    _reject_demo(rc)
    _validate_level(access_level)

    if principal_type == PrincipalType.USER:
        raise RCServiceError("Use the user access grant for user principals")
    if principal_type not in PrincipalType.values:
        raise RCServiceError(f"Invalid principal type: {principal_type}")

    identifier = (principal_identifier or '').strip()
    if not identifier:
        raise RCServiceError("Principal identifier is required")

    label = 'Group' if principal_type == PrincipalType.GROUP else 'Distribution list'
    existing = RCAccess.objects.filter(
        responsibility_centre=rc,
        principal_type=principal_type,
        principal_identifier=identifier,
    ).first()
    if existing is not None:
        if existing.access_level == access_level:
            raise DuplicateGrantError(
                f"{label} '{identifier}' already has {access_level} access to this RC."
            )
        raise DuplicateGrantError(
            f"{label} '{identifier}' already has {existing.access_level} access to this RC. "
            "Use update to change the access level."
        )

    access = RCAccess.objects.create(
        responsibility_centre=rc,
        principal_identifier=identifier,
        principal_display_name=principal_display_name or identifier,
        principal_type=principal_type,
        access_level=access_level,
        granted_by=granted_by,
    )
    logger.info(
        "User %s granted %s access on RC %s to %s %s",
        granted_by.username, access_level, rc.id, principal_type, identifier,
    )
    return access


@transaction.atomic
def update_permission(*, rc_id, access_id, access_level: str, user) -> RCAccess:
    """
    Change the access level of a grant (owner only).

    Raises:
        PermissionNotFoundError: If the grant does not exist on this RC
        RCAccessDeniedError: If user is not an owner
        DemoRCModificationError: If the RC is the Demo RC
        InvalidPermissionChangeError: If the change breaks ownership rules
    """
    access = _get_access_for_update(rc_id=rc_id, access_id=access_id)
    rc = access.responsibility_centre
    _require_owner_of(rc, user, "Only owners can update permissions")
    _reject_demo(rc)
    _validate_level(access_level)

    if _is_original_owner_grant(access):
        raise InvalidPermissionChangeError(ORIGINAL_OWNER_CHANGE_MESSAGE)

    if access.access_level == AccessLevel.OWNER and access_level != AccessLevel.OWNER:
        owners = count_effective_owners(rc)
        if _is_own_grant(access, user) and owners <= 1:
            raise InvalidPermissionChangeError(
                "Cannot demote your own owner permissions when you are the sole owner. "
                "Grant owner access to another user first."
            )
        if owners <= 1:
            raise InvalidPermissionChangeError(LAST_OWNER_MESSAGE)

    previous = access.access_level
    access.access_level = access_level
    access.save(update_fields=['access_level'])
    logger.info(
        "User %s changed access of %s on RC %s from %s to %s",
        user.username, access.principal_identifier, rc.id, previous, access_level,
    )
    return access


@transaction.atomic
def revoke_access(*, rc_id, access_id, user) -> None:
    """
    Remove a grant (owner only).

    Raises:
        PermissionNotFoundError: If the grant does not exist on this RC
        RCAccessDeniedError: If user is not an owner
        DemoRCModificationError: If the RC is the Demo RC
        InvalidPermissionChangeError: If the revoke breaks ownership rules
    """
    access = _get_access_for_update(rc_id=rc_id, access_id=access_id)
    rc = access.responsibility_centre
    _require_owner_of(rc, user, "Only owners can revoke permissions")
    _reject_demo(rc)

    if _is_original_owner_grant(access):
        raise InvalidPermissionChangeError("Cannot revoke access for the original RC owner")

    if access.access_level == AccessLevel.OWNER:
        owners = count_effective_owners(rc)
        if _is_own_grant(access, user) and owners <= 1:
            raise InvalidPermissionChangeError(
                "Cannot remove your own owner permissions when you are the sole owner. "
                "Grant owner access to another user first."
            )
        if owners <= 1:
            raise InvalidPermissionChangeError(LAST_OWNER_MESSAGE)

    logger.info(
        "User %s revoked %s access of %s on RC %s",
        user.username, access.access_level, access.principal_identifier, rc.id,
    )
    access.delete()
