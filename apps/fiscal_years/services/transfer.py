"""
Export and import of fiscal years.

An export is a JSON document holding one fiscal year and the same tree a
deep clone copies: money types, categories, procurement (quotes, events,
files), funding, spending (allocations, events, invoices, files), training
and travel. Rows keep their source ids so that references between them
(money, category, procurement item) can be remapped on import. User
references are not exported; imported rows are created by the importer.

Importing a document creates a new fiscal year in the target RC.
"""

import logging

from django.apps import apps
from django.core.exceptions import ValidationError
from django.db import DataError, IntegrityError, transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.fiscal_years.models import FiscalYear
from apps.rcs.services import permissions as rc_permissions

from .category_management import ensure_default_categories
from .cloning import _copied_fields, _clean_name
from .exceptions import FiscalYearServiceError
from .fiscal_year_management import check_unique_name
from .lookups import get_fiscal_year_for_read
from .money_management import ensure_default_money

logger = logging.getLogger(__name__)

EXPORT_FORMAT = 'myrc.fiscal-year'
EXPORT_FORMAT_VERSION = 1


class _Node:
    """One level of the exported tree: a model hanging off its parent row."""

    def __init__(self, key, model, parent_field, children=(), remaps=None, registers=None):
        self.key = key
        self.model_label = model
        self.parent_field = parent_field
        self.children = children
        # attname -> id map the value is translated through on import
        self.remaps = remaps or {}
        # id map the imported rows are registered in
        self.registers = registers

    @property
    def model(self):
        return apps.get_model(self.model_label)


def _allocations(model, owner_field):
    return _Node('allocations', model, owner_field, remaps={'money_id': 'money'})


def _tree():
    return (
        _Node('monies', 'fiscal_years.Money', 'fiscal_year', registers='money'),
        _Node('categories', 'fiscal_years.Category', 'fiscal_year', registers='category'),
        _Node(
            'procurement_items', 'procurement.ProcurementItem', 'fiscal_year',
            remaps={'category_id': 'category'},
            registers='procurement',
            children=(
                _Node('quotes', 'procurement.ProcurementQuote', 'procurement_item', children=(
                    _Node('files', 'procurement.ProcurementQuoteFile', 'quote'),
                )),
                _Node('events', 'procurement.ProcurementEvent', 'procurement_item', children=(
                    _Node('files', 'procurement.ProcurementEventFile', 'event'),
                )),
            ),
        ),
        _Node(
            'funding_items', 'funding.FundingItem', 'fiscal_year',
            remaps={'category_id': 'category'},
            children=(
                _allocations('funding.MoneyAllocation', 'funding_item'),
            ),
        ),
        _Node(
            'spending_items', 'spending.SpendingItem', 'fiscal_year',
            remaps={'category_id': 'category', 'procurement_item_id': 'procurement'},
            children=(
                _allocations('spending.SpendingMoneyAllocation', 'spending_item'),
                _Node('events', 'spending.SpendingEvent', 'spending_item'),
                _Node('invoices', 'spending.SpendingInvoice', 'spending_item', children=(
                    _Node('files', 'spending.SpendingInvoiceFile', 'invoice'),
                )),
            ),
        ),
        _Node('training_items', 'training.TrainingItem', 'fiscal_year', children=(
            _Node('participants', 'training.TrainingParticipant', 'training_item'),
            _allocations('training.TrainingMoneyAllocation', 'training_item'),
        )),
        _Node('travel_items', 'travel.TravelItem', 'fiscal_year', children=(
            _Node('travellers', 'travel.TravelTraveller', 'travel_item'),
            _allocations('travel.TravelMoneyAllocation', 'travel_item'),
        )),
    )


# =============================================================================
# Export
# =============================================================================

def _export_value(field, instance):
    value = field.value_from_object(instance)
    if value is None or isinstance(value, (bool, int, str)):
        return value
    # Decimals, dates and binary content travel as strings
    return field.value_to_string(instance)


def _export_row(instance, node=None) -> dict:
    remapped = node.remaps if node is not None else {}
    row = {'id': instance.pk}
    for field in _copied_fields(type(instance)):
        if field.is_relation and field.attname not in remapped:
            continue
        row[field.attname] = _export_value(field, instance)
    return row


def _export_children(nodes, parent) -> dict:
    exported = {}
    for node in nodes:
        rows = node.model.objects.filter(**{node.parent_field: parent}).order_by('id')
        exported[node.key] = [
            {**_export_row(row, node), **_export_children(node.children, row)}
            for row in rows
        ]
    return exported


def export_fiscal_year(*, rc_id, fy_id, user: User) -> dict:
    """
    Serialize a fiscal year and everything in it as a JSON-ready dict.

    Raises:
        RCNotFoundError: If the RC does not exist
        RCAccessDeniedError: If the user cannot read the RC
        FiscalYearNotFoundError: If the fiscal year is not in the RC
    """
    fiscal_year = get_fiscal_year_for_read(rc_id=rc_id, fy_id=fy_id, user=user)

    document = {
        'format': EXPORT_FORMAT,
        'format_version': EXPORT_FORMAT_VERSION,
        'exported_at': timezone.now().isoformat(),
        'source_rc_id': fiscal_year.responsibility_centre_id,
        'fiscal_year': {**_export_row(fiscal_year), **_export_children(_tree(), fiscal_year)},
    }
    logger.info("User %s exported Fiscal Year %s", user.username, fiscal_year.id)
    return document


# =============================================================================
# Import
# =============================================================================

def _invalid(message: str) -> FiscalYearServiceError:
    return FiscalYearServiceError(f"Invalid fiscal year import: {message}")


def _import_values(model, row) -> dict:
    if not isinstance(row, dict):
        raise _invalid(f"{model.__name__} entries must be objects")

    values = {}
    for field in _copied_fields(model):
        if field.is_relation or field.attname not in row:
            continue
        try:
            value = field.to_python(row[field.attname])
        except ValidationError:
            raise _invalid(f"bad value for {model.__name__}.{field.name}")
        if value is not None and field.choices and value not in {choice for choice, _ in field.flatchoices}:
            raise _invalid(f"bad value for {model.__name__}.{field.name}")
        values[field.attname] = value
    return values


def _mapped_id(id_maps: dict, kind: str, old_id):
    if old_id is None:
        return None
    try:
        return id_maps[kind][old_id]
    except (KeyError, TypeError):
        raise _invalid(f"unknown {kind} reference {old_id}")


def _import_children(nodes, parent, row: dict, id_maps: dict, user: User) -> int:
    created = 0
    for node in nodes:
        model = node.model
        entries = row.get(node.key, [])
        if not isinstance(entries, list):
            raise _invalid(f"'{node.key}' must be a list")

        field_names = {field.name for field in model._meta.concrete_fields}
        for entry in entries:
            values = _import_values(model, entry)
            values[f'{node.parent_field}_id'] = parent.id
            for attname, kind in node.remaps.items():
                values[attname] = _mapped_id(id_maps, kind, entry.get(attname))
            if 'created_by' in field_names:
                values['created_by_id'] = user.pk

            instance = model.objects.create(**values)
            created += 1
            if node.registers:
                id_maps[node.registers][entry.get('id')] = instance.id
            created += _import_children(node.children, instance, entry, id_maps, user)
    return created


def _fiscal_year_row(data) -> dict:
    if not isinstance(data, dict):
        raise _invalid("document must be an object")
    if data.get('format') != EXPORT_FORMAT:
        raise _invalid("not a fiscal year export")
    if data.get('format_version') != EXPORT_FORMAT_VERSION:
        raise _invalid(f"unsupported format version {data.get('format_version')}")
    row = data.get('fiscal_year')
    if not isinstance(row, dict):
        raise _invalid("missing fiscal year")
    return row


@transaction.atomic
def import_fiscal_year(*, rc_id, user: User, data, new_name: str = None) -> FiscalYear:
    """
    Create a fiscal year in an RC from an export document.

    The fiscal year keeps its exported name unless new_name is given. Any
    default money or category missing from the document is added.

    Raises:
        RCNotFoundError: If the RC does not exist
        RCAccessDeniedError: If the user cannot write to the RC
        DuplicateFiscalYearError: If the name is already used in the RC
        FiscalYearServiceError: If the document is malformed
    """
    rc = rc_permissions.require_write_access(rc_id=rc_id, user=user)
    row = _fiscal_year_row(data)

    name = _clean_name(new_name or row.get('name'))
    check_unique_name(rc, name)

    id_maps = {'money': {}, 'category': {}, 'procurement': {}}
    try:
        with transaction.atomic():
            values = _import_values(FiscalYear, row)
            values.update(responsibility_centre_id=rc.id, name=name)
            fiscal_year = FiscalYear.objects.create(**values)
            created = _import_children(_tree(), fiscal_year, row, id_maps, user)
    except (IntegrityError, DataError):
        raise _invalid("rows conflict with each other")

    ensure_default_money(fiscal_year)
    ensure_default_categories(fiscal_year)

    logger.info(
        "User %s imported Fiscal Year %s into RC %s (%d rows)",
        user.username, fiscal_year.id, rc.id, created,
    )
    return fiscal_year
