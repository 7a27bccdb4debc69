"""
Fiscal year management service.

Creating a fiscal year also seeds its default money (AB) and the default
categories. Name uniqueness is enforced per Responsibility Centre.
"""

import logging
from typing import List

from django.db import transaction

from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear, ON_TARGET_LIMIT
from apps.rcs.services import permissions as rc_permissions

from .category_management import ensure_default_categories
from .exceptions import (
    FiscalYearServiceError,
    DuplicateFiscalYearError,
    InvalidDisplaySettingsError,
)
from .lookups import (
    get_fiscal_year_for_read,
    get_fiscal_year_for_write,
    get_fiscal_year_for_owner,
)
from .money_management import ensure_default_money

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A Fiscal Year with this name already exists for this Responsibility Centre"
OWNER_SETTINGS_MESSAGE = "Only owners can change fiscal year settings"

UPDATABLE_FIELDS = ('description',)
DISPLAY_SETTING_FIELDS = ('show_search_box', 'show_category_filter', 'group_by_category')


def _clean_name(name) -> str:
    name = (name or '').strip()
    if not name:
        raise FiscalYearServiceError("Fiscal Year name is required")
    return name


def check_unique_name(rc, name: str, exclude_id=None) -> None:
    queryset = FiscalYear.objects.filter(responsibility_centre=rc, name=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateFiscalYearError(DUPLICATE_NAME_MESSAGE)


def _clamp(value: int) -> int:
    return max(-ON_TARGET_LIMIT, min(ON_TARGET_LIMIT, int(value)))


def list_fiscal_years(*, rc_id, user: User) -> List[FiscalYear]:
    """List fiscal years of an RC the user can read."""
    rc = rc_permissions.require_read_access(rc_id=rc_id, user=user)
    return list(rc.fiscal_years.all())


def get_fiscal_year(*, rc_id, fy_id, user: User) -> FiscalYear:
    return get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)


@transaction.atomic
def create_fiscal_year(*, rc_id, user: User, name: str, description: str = '') -> FiscalYear:
    """
    Create a fiscal year with its default money and categories.

    Args:
        rc_id: Responsibility Centre id
        user: Requesting user (needs READ_WRITE or OWNER)
        name: Fiscal year name, unique within the RC
        description: Optional description

    Returns:
        The created FiscalYear

    Raises:
        RCAccessDeniedError: If the user cannot write to the RC
        DuplicateFiscalYearError: If the name is already used in the RC
    """
    rc = rc_permissions.require_write_access(rc_id=rc_id, user=user)
    name = _clean_name(name)
    check_unique_name(rc, name)

    fiscal_year = FiscalYear.objects.create(
        responsibility_centre=rc,
        name=name,
        description=description or '',
    )
    ensure_default_money(fiscal_year)
    ensure_default_categories(fiscal_year)

    logger.info(
        "User %s created Fiscal Year %s (%s) in RC %s",
        user.username, fiscal_year.name, fiscal_year.id, rc.id,
    )
    return fiscal_year


@transaction.atomic
def update_fiscal_year(*, rc_id, fy_id, user: User, **fields) -> FiscalYear:
    """
    Update name or description. The active flag is changed by toggle_active_status.

    Raises:
        DuplicateFiscalYearError: If the new name is already used in the RC
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    fiscal_year.check_version(fields.get('version'))

    if fields.get('name') is not None:
        name = _clean_name(fields['name'])
        check_unique_name(fiscal_year.responsibility_centre, name, exclude_id=fiscal_year.id)
        fiscal_year.name = name

    for field in UPDATABLE_FIELDS:
        if fields.get(field) is not None:
            setattr(fiscal_year, field, fields[field])

    fiscal_year.save()
    return fiscal_year


@transaction.atomic
def delete_fiscal_year(*, rc_id, fy_id, user: User) -> None:
    """Delete a fiscal year and everything it contains."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    logger.info("User %s deleted Fiscal Year %s (%s)", user.username, fiscal_year.name, fiscal_year.id)
    fiscal_year.delete()


@transaction.atomic
def update_display_settings(*, rc_id, fy_id, user: User, **settings) -> FiscalYear:
    """
    Update how the fiscal year is displayed (owner only).

    On-target thresholds are clamped to [-100, 100] and the minimum must not
    exceed the maximum.

    Raises:
        FiscalYearAccessDeniedError: If the user is not an owner
        InvalidDisplaySettingsError: If on_target_min > on_target_max
    """
    fiscal_year = get_fiscal_year_for_owner(
        rc_id=rc_id, fy_id=fy_id, user=user, message=OWNER_SETTINGS_MESSAGE
    )

    for field in DISPLAY_SETTING_FIELDS:
        if settings.get(field) is not None:
            setattr(fiscal_year, field, settings[field])

    if settings.get('on_target_min') is not None:
        fiscal_year.on_target_min = _clamp(settings['on_target_min'])
    if settings.get('on_target_max') is not None:
        fiscal_year.on_target_max = _clamp(settings['on_target_max'])

    if fiscal_year.on_target_min > fiscal_year.on_target_max:
        raise InvalidDisplaySettingsError("On-target minimum cannot be greater than maximum")

    fiscal_year.save()
    return fiscal_year


@transaction.atomic
def toggle_active_status(*, rc_id, fy_id, user: User) -> FiscalYear:
    """Flip the active flag (owner only). Inactive fiscal years are read-only."""
    fiscal_year = get_fiscal_year_for_owner(
        rc_id=rc_id, fy_id=fy_id, user=user, message=OWNER_SETTINGS_MESSAGE
    )
    fiscal_year.active = not fiscal_year.active
    fiscal_year.save(update_fields=['active'])

    logger.info(
        "User %s set Fiscal Year %s (%s) active=%s",
        user.username, fiscal_year.name, fiscal_year.id, fiscal_year.active,
    )
    return fiscal_year
