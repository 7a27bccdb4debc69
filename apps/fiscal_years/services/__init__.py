"""
Fiscal year services layer.

Fiscal years, their money types and categories, deep cloning, and
export / import as JSON documents.
"""

from .exceptions import (
    FiscalYearServiceError,
    FiscalYearNotFoundError,
    FiscalYearAccessDeniedError,
    DuplicateFiscalYearError,
    InvalidDisplaySettingsError,
    MoneyNotFoundError,
    DuplicateMoneyError,
    MoneyProtectedError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    DefaultCategoryError,
)

from .lookups import (
    get_fiscal_year_for_read,
    get_fiscal_year_for_write,
    get_fiscal_year_for_owner,
)

from .fiscal_year_management import (
    list_fiscal_years,
    get_fiscal_year,
    create_fiscal_year,
    update_fiscal_year,
    delete_fiscal_year,
    update_display_settings,
    toggle_active_status,
)

from .money_management import (
    list_monies,
    get_money,
    create_money,
    update_money,
    delete_money,
    reorder_monies,
    ensure_default_money,
    is_money_in_use,
    can_delete_money,
)

from .category_management import (
    list_categories,
    get_category,
    create_category,
    update_category,
    delete_category,
    reorder_categories,
    ensure_defaults,
    ensure_default_categories,
    resolve_category,
)

from .cloning import (
    clone_fiscal_year,
    clone_fiscal_year_to_rc,
    deep_clone_fiscal_year,
)

from .transfer import (
    export_fiscal_year,
    import_fiscal_year,
)


__all__ = [
    # Exceptions
    'FiscalYearServiceError',
    'FiscalYearNotFoundError',
    'FiscalYearAccessDeniedError',
    'DuplicateFiscalYearError',
    'InvalidDisplaySettingsError',
    'MoneyNotFoundError',
    'DuplicateMoneyError',
    'MoneyProtectedError',
    'CategoryNotFoundError',
    'DuplicateCategoryError',
    'DefaultCategoryError',

    # Lookups
    'get_fiscal_year_for_read',
    'get_fiscal_year_for_write',
    'get_fiscal_year_for_owner',

    # Fiscal years
    'list_fiscal_years',
    'get_fiscal_year',
    'create_fiscal_year',
    'update_fiscal_year',
    'delete_fiscal_year',
    'update_display_settings',
    'toggle_active_status',

    # Money types
    'list_monies',
    'get_money',
    'create_money',
    'update_money',
    'delete_money',
    'reorder_monies',
    'ensure_default_money',
    'is_money_in_use',
    'can_delete_money',

    # Categories
    'list_categories',
    'get_category',
    'create_category',
    'update_category',
    'delete_category',
    'reorder_categories',
    'ensure_defaults',
    'ensure_default_categories',
    'resolve_category',

    # Cloning
    'clone_fiscal_year',
    'clone_fiscal_year_to_rc',
    'deep_clone_fiscal_year',

    # Export / import
    'export_fiscal_year',
    'import_fiscal_year',
]
