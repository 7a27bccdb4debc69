import pytest
from decimal import Decimal
from apps.audit.models import AuditEvent
from apps.fiscal_years.models import FiscalYear
from apps.fiscal_years.services import (
    clone_fiscal_year,
    deep_clone_fiscal_year,
    FiscalYearServiceError,
    DuplicateFiscalYearError,
)
from apps.funding.models import FundingItem
from apps.procurement.models import ProcurementItem, ProcurementStatus
from apps.spending.models import SpendingItem
from apps.training.models import TrainingItem, TrainingMoneyAllocation
from apps.travel.models import TravelItem, TravelMoneyAllocation


@pytest.mark.django_db
class TestDeepClone:
    """Tests for deep cloning a fiscal year."""

    def test_copies_structure(self, populated_fiscal_year, other_rc):
        """Monies, categories and every item kind are copied into the clone."""
        clone = deep_clone_fiscal_year(source=populated_fiscal_year, target_rc=other_rc, new_name='Copy')

        assert clone.responsibility_centre == other_rc
        assert clone.version == 0
        assert sorted(clone.monies.values_list('code', flat=True)) == ['AB', 'OA']
        assert clone.categories.count() == populated_fiscal_year.categories.count()
        assert FundingItem.objects.filter(fiscal_year=clone).count() == 1
        assert ProcurementItem.objects.filter(fiscal_year=clone).count() == 1
        assert TrainingItem.objects.get(fiscal_year=clone).participants.count() == 1
        assert TravelItem.objects.get(fiscal_year=clone).travellers.count() == 1

    def test_remaps_references(self, populated_fiscal_year, other_rc):
        """Copied rows point at the clone's money, category and procurement item."""
        clone = deep_clone_fiscal_year(source=populated_fiscal_year, target_rc=other_rc, new_name='Copy')

        spending = SpendingItem.objects.get(fiscal_year=clone, name='Server Spend')
        assert spending.category.fiscal_year == clone
        assert spending.procurement_item.fiscal_year == clone
        allocation = spending.allocations.get()
        assert allocation.money.fiscal_year == clone
        assert allocation.om_amount == Decimal('250.00')

        funding = FundingItem.objects.get(fiscal_year=clone)
        assert funding.category.name == 'Travel Support'
        assert funding.category.fiscal_year == clone

    def test_copies_children_and_files(self, populated_fiscal_year, other_rc):
        """Quotes, events, invoices and their files come along."""
        clone = deep_clone_fiscal_year(source=populated_fiscal_year, target_rc=other_rc, new_name='Copy')

        procurement = ProcurementItem.objects.get(fiscal_year=clone)
        assert procurement.current_status == ProcurementStatus.PENDING_QUOTES
        assert bytes(procurement.quotes.get().files.get().content) == b'pdf'

        spending = SpendingItem.objects.get(fiscal_year=clone, name='Server Spend')
        assert spending.events.count() == 1
        assert spending.invoices.get().files.get().file_name == 'inv.png'

    def test_keeps_inactive_rows(self, populated_fiscal_year, other_rc):
        """Soft-deleted rows are copied with their flag."""
        clone = deep_clone_fiscal_year(source=populated_fiscal_year, target_rc=other_rc, new_name='Copy')

        retired = SpendingItem.objects.get(fiscal_year=clone, name='Retired Spend')
        assert retired.active is False

    def test_copies_audit_history(self, populated_fiscal_year, other_rc):
        """The fiscal year's audit events are copied onto the clone."""
        clone = deep_clone_fiscal_year(source=populated_fiscal_year, target_rc=other_rc, new_name='Copy')

        copied = AuditEvent.objects.get(fiscal_year_id=clone.id)
        assert copied.rc_id == other_rc.id
        assert copied.cloned_from_audit_id is not None

    def test_source_untouched(self, populated_fiscal_year, other_rc):
        """Cloning does not modify the source."""
        deep_clone_fiscal_year(source=populated_fiscal_year, target_rc=other_rc, new_name='Copy')

        assert SpendingItem.objects.filter(fiscal_year=populated_fiscal_year).count() == 2
        assert TrainingMoneyAllocation.objects.filter(training_item__fiscal_year=populated_fiscal_year).count() == 1
        assert TravelMoneyAllocation.objects.count() == 2


@pytest.mark.django_db
class TestCloneFiscalYear:
    """Tests for cloning within an RC."""

    def test_blank_name(self, fiscal_year, fy_editor):
        """The new name is required."""
        with pytest.raises(FiscalYearServiceError, match='New fiscal year name is required'):
            clone_fiscal_year(
                rc_id=fiscal_year.responsibility_centre_id, fy_id=fiscal_year.id, user=fy_editor, new_name=' ',
            )

    def test_duplicate_name(self, fiscal_year, fy_editor):
        """The new name must be unused in the RC."""
        with pytest.raises(DuplicateFiscalYearError):
            clone_fiscal_year(
                rc_id=fiscal_year.responsibility_centre_id, fy_id=fiscal_year.id,
                user=fy_editor, new_name='FY 2025-2026',
            )

    def test_clone_in_place(self, fiscal_year, fy_editor):
        """The clone lands in the same RC."""
        clone = clone_fiscal_year(
            rc_id=fiscal_year.responsibility_centre_id, fy_id=fiscal_year.id, user=fy_editor, new_name='Next',
        )

        assert FiscalYear.objects.filter(responsibility_centre=fiscal_year.responsibility_centre).count() == 2
        assert clone.monies.get(code='AB').is_default is True

    def test_viewer_clones_in_place(self, fiscal_year, fy_viewer):
        """Read access to the source is enough to clone within its RC."""
        clone = clone_fiscal_year(
            rc_id=fiscal_year.responsibility_centre_id, fy_id=fiscal_year.id, user=fy_viewer, new_name='Viewer Copy',
        )

        assert clone.responsibility_centre_id == fiscal_year.responsibility_centre_id
        assert clone.name == 'Viewer Copy'
