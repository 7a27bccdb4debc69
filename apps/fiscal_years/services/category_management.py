"""
Category management service.

Categories group items within a fiscal year and restrict which of the CAP
and OM amounts may be used. Default categories are seeded for every fiscal
year and cannot be edited or deleted.
"""

import logging
from typing import List, Sequence

from django.db import transaction

from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear, Category, FundingType

from .exceptions import (
    FiscalYearServiceError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    DefaultCategoryError,
)
from .lookups import get_fiscal_year_for_read, get_fiscal_year_for_write

logger = logging.getLogger(__name__)

# (name, description, funding type, translation key)
DEFAULT_CATEGORIES = (
    ('Compute', 'Compute resources and servers', FundingType.BOTH, 'category.compute'),
    ('GPUs', 'Graphics processing units', FundingType.BOTH, 'category.gpus'),
    ('Storage', 'Data storage', FundingType.BOTH, 'category.storage'),
    ('Software Licenses', 'Software licences and subscriptions', FundingType.OM_ONLY, 'category.softwareLicenses'),
    ('Small Procurement', 'Small purchases', FundingType.OM_ONLY, 'category.smallProcurement'),
    ('Contractors', 'Contracted services', FundingType.OM_ONLY, 'category.contractors'),
)


def ensure_default_categories(fiscal_year: FiscalYear) -> List[Category]:
    """Create any default category missing from the fiscal year."""
    existing = set(fiscal_year.categories.values_list('name', flat=True))
    created = []
    for position, (name, description, funding_type, key) in enumerate(DEFAULT_CATEGORIES):
        if name in existing:
            continue
        created.append(Category.objects.create(
            fiscal_year=fiscal_year,
            name=name,
            description=description,
            is_default=True,
            display_order=position,
            funding_type=funding_type,
            translation_key=key,
        ))
    return created


def _check_unique_name(fiscal_year, name, exclude_id=None) -> None:
    queryset = Category.objects.filter(fiscal_year=fiscal_year, name=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateCategoryError("A category with this name already exists for this fiscal year")


def _get_category(fiscal_year, category_id) -> Category:
    try:
        return Category.objects.get(id=category_id, fiscal_year=fiscal_year)
    except Category.DoesNotExist:
        raise CategoryNotFoundError("Category not found")


def resolve_category(fiscal_year: FiscalYear, category_id):
    """
    Category of a fiscal year for an item payload.

    None leaves the category unset; -1 also means "no category" so clients
    can clear it on update.
    """
    if category_id is None or int(category_id) == -1:
        return None
    return _get_category(fiscal_year, category_id)


def list_categories(*, rc_id, fy_id, user: User) -> List[Category]:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return list(fiscal_year.categories.all())


def get_category(*, rc_id, fy_id, category_id, user: User) -> Category:
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)
    return _get_category(fiscal_year, category_id)


@transaction.atomic
def create_category(
    *,
    rc_id,
    fy_id,
    user: User,
    name: str,
    description: str = '',
    funding_type: str = FundingType.BOTH
) -> Category:
    """
    Create a custom category.

    Raises:
        RCAccessDeniedError: If the user cannot write to the RC
        DuplicateCategoryError: If the name is already used in the fiscal year
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    name = (name or '').strip()
    if not name:
        raise FiscalYearServiceError("Category name is required")
    _check_unique_name(fiscal_year, name)

    last = fiscal_year.categories.order_by('-display_order').first()
    category = Category.objects.create(
        fiscal_year=fiscal_year,
        name=name,
        description=description or '',
        funding_type=funding_type or FundingType.BOTH,
        display_order=(last.display_order + 1) if last else 0,
    )
    logger.info("User %s created category %s in Fiscal Year %s", user.username, name, fiscal_year.id)
    return category


@transaction.atomic
def update_category(*, rc_id, fy_id, category_id, user: User, **fields) -> Category:
    """
    Update a custom category.

    Raises:
        DefaultCategoryError: If the category is a default one
    """
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    category = _get_category(fiscal_year, category_id)
    if category.is_default:
        raise DefaultCategoryError("Default categories cannot be modified")
    category.check_version(fields.get('version'))

    if fields.get('name') is not None:
        name = fields['name'].strip()
        if not name:
            raise FiscalYearServiceError("Category name is required")
        _check_unique_name(fiscal_year, name, exclude_id=category.id)
        category.name = name

    for field in ('description', 'funding_type', 'active'):
        if fields.get(field) is not None:
            setattr(category, field, fields[field])

    category.save()
    return category


@transaction.atomic
def delete_category(*, rc_id, fy_id, category_id, user: User) -> None:
    """Delete a custom category. Items in it keep existing without a category."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    category = _get_category(fiscal_year, category_id)
    if category.is_default:
        raise DefaultCategoryError("Default categories cannot be deleted")

    logger.info("User %s deleted category %s from Fiscal Year %s", user.username, category.name, fiscal_year.id)
    category.delete()


@transaction.atomic
def reorder_categories(*, rc_id, fy_id, user: User, category_ids: Sequence[int]) -> List[Category]:
    """Set display order from the position of each id in category_ids."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    categories = {category.id: category for category in fiscal_year.categories.all()}
    for position, category_id in enumerate(category_ids):
        category = categories.get(category_id)
        if category is None:
            raise CategoryNotFoundError("Category not found")
        if category.display_order != position:
            category.display_order = position
            category.save(update_fields=['display_order'])
    return list(fiscal_year.categories.all())


@transaction.atomic
def ensure_defaults(*, rc_id, fy_id, user: User) -> List[Category]:
    """Restore missing default categories and return the full list."""
    fiscal_year = get_fiscal_year_for_write(rc_id=rc_id, fy_id=fy_id, user=user)
    ensure_default_categories(fiscal_year)
    return list(fiscal_year.categories.all())
