"""
Fiscal year lookups shared by every app nested under a fiscal year.
"""

from apps.fiscal_years.models import FiscalYear
from apps.rcs.services import permissions as rc_permissions

from .exceptions import FiscalYearNotFoundError, FiscalYearAccessDeniedError

FISCAL_YEAR_NOT_FOUND_MESSAGE = "Fiscal Year not found"


def _get_in_rc(rc, fy_id) -> FiscalYear:
    try:
        return FiscalYear.objects.select_related('responsibility_centre').get(
            id=fy_id, responsibility_centre=rc
        )
    except FiscalYear.DoesNotExist:
        raise FiscalYearNotFoundError(FISCAL_YEAR_NOT_FOUND_MESSAGE)


def get_fiscal_year_for_read(*, rc_id, fy_id, user) -> FiscalYear:
    """
    Fetch a fiscal year the user can read.

    Raises:
        RCNotFoundError: If the RC does not exist
        RCAccessDeniedError: If the user cannot read the RC
        FiscalYearNotFoundError: If the FY does not belong to the RC
    """
    rc = rc_permissions.require_read_access(rc_id=rc_id, user=user)
    return _get_in_rc(rc, fy_id)


def get_fiscal_year_for_write(*, rc_id, fy_id, user) -> FiscalYear:
    """Fetch a fiscal year the user can edit (READ_WRITE or OWNER)."""
    rc = rc_permissions.require_write_access(rc_id=rc_id, user=user)
    return _get_in_rc(rc, fy_id)


def get_fiscal_year_for_owner(*, rc_id, fy_id, user, message: str) -> FiscalYear:
    """Fetch a fiscal year of an RC the user owns."""
    rc = rc_permissions.get_rc(rc_id)
    if not rc_permissions.is_owner(rc=rc, user=user):
        raise FiscalYearAccessDeniedError(message)
    return _get_in_rc(rc, fy_id)
