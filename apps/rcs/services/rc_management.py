"""
Responsibility Centre management service.

Listing, CRUD and cloning of Responsibility Centres. Each returned RC carries
an ``access_level`` attribute holding the level the requesting user sees.
"""

import logging
from typing import List

from django.conf import settings
from django.db import transaction

from apps.accounts.models import User
from apps.rcs.models import ResponsibilityCentre, RCAccess, AccessLevel

from .exceptions import RCServiceError, RCNotFoundError, RCAccessDeniedError, DuplicateRCNameError
from .permissions import (
    get_rc,
    grants_matching,
    get_effective_access_level,
    is_owner,
)

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A Responsibility Centre with this name already exists. RC names must be unique."


def _with_level(rc: ResponsibilityCentre, level: str) -> ResponsibilityCentre:
    rc.access_level = level
    return rc


def _check_unique_name(name: str, exclude_id=None) -> None:
    queryset = ResponsibilityCentre.objects.filter(name=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateRCNameError(DUPLICATE_NAME_MESSAGE)


def list_user_responsibility_centres(*, user: User) -> List[ResponsibilityCentre]:
    """
    List every RC the user can see.

    Order: owned RCs, RCs granted directly, RCs granted through a directory
    group or distribution list, then the Demo RC. Each RC appears once with
    the first level found.
    """
    seen = {}

    for rc in ResponsibilityCentre.objects.filter(owner=user).select_related('owner'):
        seen[rc.id] = _with_level(rc, AccessLevel.READ_ONLY if rc.is_demo else AccessLevel.OWNER)

    grants = (
        RCAccess.objects
        .filter(grants_matching(user=user))
        .select_related('responsibility_centre__owner')
    )
    direct = [g for g in grants if g.user_id == user.pk]
    by_principal = [g for g in grants if g.user_id != user.pk]

    for group in (direct, by_principal):
        best = {}
        for grant in group:
            rc_id = grant.responsibility_centre_id
            if rc_id in seen:
                continue
            if rc_id not in best or grant.rank > best[rc_id].rank:
                best[rc_id] = grant
        for grant in sorted(best.values(), key=lambda g: g.responsibility_centre.name):
            seen[grant.responsibility_centre_id] = _with_level(grant.responsibility_centre, grant.access_level)

    demo = ResponsibilityCentre.objects.filter(name=settings.DEMO_RC_NAME).select_related('owner').first()
    if demo is not None and demo.id not in seen:
        seen[demo.id] = _with_level(demo, AccessLevel.READ_ONLY)

    return list(seen.values())


@transaction.atomic
def create_responsibility_centre(
    *,
    user: User,
    name: str,
    description: str = ''
) -> ResponsibilityCentre:
    """
    Create an RC owned by the user.

    Raises:
        DuplicateRCNameError: If the name is already used
    """
    name = (name or '').strip()
    _check_unique_name(name)

    rc = ResponsibilityCentre.objects.create(
        name=name,
        description=description or '',
        owner=user,
    )
    logger.info("User %s created Responsibility Centre %s (%s)", user.username, rc.name, rc.id)
    return _with_level(rc, AccessLevel.OWNER)


def get_responsibility_centre(*, rc_id, user: User) -> ResponsibilityCentre:
    """
    Get an RC with the user's access level.

    Raises:
        RCNotFoundError: If the RC does not exist or is not visible
    """
    rc = get_rc(rc_id)

    if rc.is_demo:
        return _with_level(rc, AccessLevel.READ_ONLY)

    level = get_effective_access_level(rc=rc, user=user)
    if level is None:
        raise RCNotFoundError("Responsibility Centre not found")
    return _with_level(rc, level)


@transaction.atomic
def update_responsibility_centre(*, rc_id, user: User, **fields) -> ResponsibilityCentre:
    """
    Update name, description or summary flags of an RC (owner only).

    Raises:
        RCNotFoundError: If the RC does not exist
        RCAccessDeniedError: If the user is not an owner
        DuplicateRCNameError: If the new name is taken
    """
    rc = get_rc(rc_id, for_update=True)
    if not is_owner(rc=rc, user=user):
        raise RCAccessDeniedError("Only the owner can update this RC")

    rc.check_version(fields.get('version'))

    if 'name' in fields and fields['name'] is not None:
        name = fields['name'].strip()
        _check_unique_name(name, exclude_id=rc.id)
        rc.name = name

    for field in ('description', 'active', 'training_include_in_summary', 'travel_include_in_summary'):
        if field in fields and fields[field] is not None:
            setattr(rc, field, fields[field])

    rc.save()
    return _with_level(rc, AccessLevel.OWNER)


@transaction.atomic
def delete_responsibility_centre(*, rc_id, user: User) -> None:
    """
    Delete an RC and everything beneath it (owner only).

    Raises:
        RCNotFoundError: If the RC does not exist
        RCAccessDeniedError: If the user is not an owner
    """
    rc = get_rc(rc_id, for_update=True)
    if not is_owner(rc=rc, user=user):
        raise RCAccessDeniedError("Only the owner can delete this RC")

    logger.info("User %s deleted Responsibility Centre %s (%s)", user.username, rc.name, rc.id)
    rc.delete()


@transaction.atomic
def clone_responsibility_centre(*, rc_id, user: User, new_name: str) -> ResponsibilityCentre:
    """
    Deep-clone an RC into a new RC owned by the user.

    Every fiscal year is cloned under its original name together with its
    contents. RC-level audit history is copied as well.

    Raises:
        RCNotFoundError: If the source RC does not exist
        RCAccessDeniedError: If the user cannot see the source RC
        DuplicateRCNameError: If new_name is taken
    """
    from apps.audit.services import clone_audit_events_for_rc
    from apps.fiscal_years.services.cloning import deep_clone_fiscal_year

    source = get_rc(rc_id)
    if not source.is_demo and get_effective_access_level(rc=source, user=user) is None:
        raise RCAccessDeniedError("User does not have access to clone this RC")

    new_name = (new_name or '').strip()
    if not new_name:
        raise RCServiceError("Name is required")
    _check_unique_name(new_name)

    clone = ResponsibilityCentre.objects.create(
        name=new_name,
        description=source.description,
        owner=user,
        active=source.active,
        training_include_in_summary=source.training_include_in_summary,
        travel_include_in_summary=source.travel_include_in_summary,
    )

    for fiscal_year in source.fiscal_years.all().order_by('id'):
        deep_clone_fiscal_year(source=fiscal_year, target_rc=clone, new_name=fiscal_year.name)

    clone_audit_events_for_rc(source_rc=source, target_rc=clone)

    logger.info(
        "User %s cloned Responsibility Centre %s (%s) to %s (%s)",
        user.username, source.name, source.id, clone.name, clone.id,
    )
    return _with_level(clone, AccessLevel.OWNER)
