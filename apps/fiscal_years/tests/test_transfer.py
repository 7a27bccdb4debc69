import copy

import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.audit.models import AuditEvent
from apps.fiscal_years.models import FiscalYear, Money
from apps.fiscal_years.services import (
    export_fiscal_year,
    import_fiscal_year,
    FiscalYearServiceError,
    DuplicateFiscalYearError,
)
from apps.fiscal_years.services.category_management import DEFAULT_CATEGORIES
from apps.funding.models import FundingItem
from apps.procurement.models import ProcurementItem, ProcurementQuote
from apps.rcs.services import RCAccessDeniedError
from apps.spending.models import SpendingItem
from apps.training.models import TrainingItem
from apps.travel.models import TravelItem


def fy_url(name, rc_id, **kwargs):
    return reverse(f'fiscal_years:{name}', kwargs={'rc_id': rc_id, **kwargs})


def _export(fiscal_year, user):
    return export_fiscal_year(rc_id=fiscal_year.responsibility_centre_id, fy_id=fiscal_year.id, user=user)


# =============================================================================
# Export
# =============================================================================

@pytest.mark.django_db
class TestExportFiscalYear:
    """Tests for exporting a fiscal year as a JSON document."""

    def test_document_holds_tree(self, populated_fiscal_year, fy_owner, extra_money):
        """Every item kind is exported under the fiscal year."""
        document = _export(populated_fiscal_year, fy_owner)

        assert document['format'] == 'myrc.fiscal-year'
        assert document['format_version'] == 1
        assert document['source_rc_id'] == populated_fiscal_year.responsibility_centre_id

        exported = document['fiscal_year']
        assert exported['name'] == 'FY 2025-2026'
        assert sorted(money['code'] for money in exported['monies']) == ['AB', 'OA']
        assert [item['name'] for item in exported['funding_items']] == ['Base Funding']
        assert [item['name'] for item in exported['training_items']] == ['Kubernetes Course']
        assert exported['training_items'][0]['participants'][0]['name'] == 'Alex'
        assert exported['travel_items'][0]['travellers'][0]['name'] == 'Sam'

        spending = next(item for item in exported['spending_items'] if item['name'] == 'Server Spend')
        allocation = spending['allocations'][0]
        assert allocation['money_id'] == extra_money.id
        assert allocation['om_amount'] == '250.00'
        assert spending['invoices'][0]['invoice_number'] == 'INV-7'

    def test_files_and_references(self, populated_fiscal_year, fy_owner):
        """File content is base64 text and user references are left out."""
        document = _export(populated_fiscal_year, fy_owner)

        procurement = document['fiscal_year']['procurement_items'][0]
        quote = procurement['quotes'][0]
        assert quote['files'][0]['content'] == 'cGRm'
        assert 'created_by_id' not in quote
        assert 'procurement_item_id' not in quote
        assert procurement['category_id'] is not None

    def test_viewer_exports(self, fiscal_year, fy_viewer):
        """Read access is enough to export."""
        document = _export(fiscal_year, fy_viewer)

        assert document['fiscal_year']['name'] == 'FY 2025-2026'

    def test_outsider_denied(self, fiscal_year, fy_outsider):
        """Users without access cannot export."""
        with pytest.raises(RCAccessDeniedError):
            _export(fiscal_year, fy_outsider)


# =============================================================================
# Import
# =============================================================================

@pytest.mark.django_db
class TestImportFiscalYear:
    """Tests for creating a fiscal year from an export document."""

    def test_round_trip(self, populated_fiscal_year, fy_owner, fy_editor, other_rc):
        """An exported fiscal year is rebuilt in another RC with references remapped."""
        document = _export(populated_fiscal_year, fy_owner)

        imported = import_fiscal_year(rc_id=other_rc.id, user=fy_editor, data=document)

        assert imported.responsibility_centre == other_rc
        assert imported.name == 'FY 2025-2026'
        assert imported.version == 0
        assert sorted(imported.monies.values_list('code', flat=True)) == ['AB', 'OA']
        assert imported.categories.count() == populated_fiscal_year.categories.count()

        spending = SpendingItem.objects.get(fiscal_year=imported, name='Server Spend')
        assert spending.category.fiscal_year == imported
        assert spending.procurement_item.fiscal_year == imported
        allocation = spending.allocations.get()
        assert allocation.money.fiscal_year == imported
        assert allocation.money.code == 'OA'
        assert allocation.om_amount == Decimal('250.00')
        assert bytes(spending.invoices.get().files.get().content) == b'png'

        assert not SpendingItem.objects.get(fiscal_year=imported, name='Retired Spend').active
        assert FundingItem.objects.get(fiscal_year=imported).category.name == 'Travel Support'
        assert TrainingItem.objects.get(fiscal_year=imported).participants.count() == 1
        assert TravelItem.objects.get(fiscal_year=imported).allocations.get().money.code == 'AB'

    def test_importer_owns_rows(self, populated_fiscal_year, fy_owner, fy_editor, other_rc):
        """Imported rows are stamped with the importer and carry no audit history."""
        document = _export(populated_fiscal_year, fy_owner)

        imported = import_fiscal_year(rc_id=other_rc.id, user=fy_editor, data=document)

        quote = ProcurementQuote.objects.get(procurement_item__fiscal_year=imported)
        assert quote.created_by == fy_editor
        assert quote.amount == Decimal('500.00')
        assert bytes(quote.files.get().content) == b'pdf'
        assert not AuditEvent.objects.filter(fiscal_year_id=imported.id).exists()

    def test_new_name_in_same_rc(self, populated_fiscal_year, fy_owner):
        """A new name lets a document be imported next to its source."""
        document = _export(populated_fiscal_year, fy_owner)

        imported = import_fiscal_year(
            rc_id=populated_fiscal_year.responsibility_centre_id,
            user=fy_owner,
            data=document,
            new_name='  FY Restored  ',
        )

        assert imported.name == 'FY Restored'
        assert ProcurementItem.objects.filter(fiscal_year=imported).count() == 1

    def test_duplicate_name(self, fiscal_year, fy_owner):
        """The exported name must be free in the target RC."""
        document = _export(fiscal_year, fy_owner)

        with pytest.raises(DuplicateFiscalYearError):
            import_fiscal_year(rc_id=fiscal_year.responsibility_centre_id, user=fy_owner, data=document)

    def test_viewer_cannot_import(self, fiscal_year, fy_owner, fy_viewer):
        """Importing needs write access on the target RC."""
        document = _export(fiscal_year, fy_owner)

        with pytest.raises(RCAccessDeniedError):
            import_fiscal_year(
                rc_id=fiscal_year.responsibility_centre_id, user=fy_viewer, data=document, new_name='Copy',
            )

    def test_rejects_other_documents(self, fy_rc, fy_owner):
        """Only fiscal year exports are accepted."""
        with pytest.raises(FiscalYearServiceError, match='not a fiscal year export'):
            import_fiscal_year(rc_id=fy_rc.id, user=fy_owner, data={'format': 'spreadsheet'})

    def test_unknown_money_reference(self, populated_fiscal_year, fy_owner, fy_editor, other_rc):
        """Allocations must point at a money in the document; nothing is created otherwise."""
        document = copy.deepcopy(_export(populated_fiscal_year, fy_owner))
        document['fiscal_year']['travel_items'][0]['allocations'][0]['money_id'] = 999999

        with pytest.raises(FiscalYearServiceError, match='unknown money reference 999999'):
            import_fiscal_year(rc_id=other_rc.id, user=fy_editor, data=document)
        assert not FiscalYear.objects.filter(responsibility_centre=other_rc).exists()

    def test_bad_choice_value(self, populated_fiscal_year, fy_owner, fy_editor, other_rc):
        """Values outside a field's choices are rejected."""
        document = copy.deepcopy(_export(populated_fiscal_year, fy_owner))
        document['fiscal_year']['procurement_items'][0]['tracking_status'] = 'LOST'

        with pytest.raises(FiscalYearServiceError, match='ProcurementItem.tracking_status'):
            import_fiscal_year(rc_id=other_rc.id, user=fy_editor, data=document)

    def test_defaults_added(self, fy_rc, fy_owner):
        """A document without monies or categories still gets AB and the default categories."""
        document = {
            'format': 'myrc.fiscal-year',
            'format_version': 1,
            'fiscal_year': {'name': 'FY Bare', 'description': 'Hand written'},
        }

        imported = import_fiscal_year(rc_id=fy_rc.id, user=fy_owner, data=document)

        assert imported.description == 'Hand written'
        assert list(imported.monies.values_list('code', flat=True)) == [Money.DEFAULT_CODE]
        assert imported.categories.count() == len(DEFAULT_CATEGORIES)


# =============================================================================
# Endpoints
# =============================================================================

@pytest.mark.django_db
class TestTransferEndpoints:
    """Tests for GET .../fiscal-years/{id}/export/ and POST .../fiscal-years/import/"""

    def test_export(self, viewer_client, populated_fiscal_year):
        """Readers download the export document."""
        response = viewer_client.get(
            fy_url('fiscal-year-export', populated_fiscal_year.responsibility_centre_id, pk=populated_fiscal_year.id)
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['fiscal_year']['name'] == 'FY 2025-2026'
        assert len(response.data['fiscal_year']['spending_items']) == 2

    def test_import(self, owner_client, editor_client, populated_fiscal_year, other_rc):
        """An exported document posted to another RC creates the fiscal year there."""
        exported = owner_client.get(
            fy_url('fiscal-year-export', populated_fiscal_year.responsibility_centre_id, pk=populated_fiscal_year.id)
        )

        response = editor_client.post(
            fy_url('fiscal-year-import', other_rc.id),
            {'data': exported.json(), 'new_name': 'FY Imported'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['rc_id'] == other_rc.id
        assert response.data['name'] == 'FY Imported'
        assert SpendingItem.objects.filter(fiscal_year_id=response.data['id']).count() == 2

        event = AuditEvent.objects.get(action='IMPORT', entity_type='FISCAL_YEAR')
        assert event.outcome == 'SUCCESS'
        assert event.entity_id == response.data['id']
        assert event.fiscal_year_name == 'FY Imported'

    def test_viewer_import_denied(self, owner_client, viewer_client, fiscal_year):
        """READ_ONLY users cannot import into the RC."""
        exported = owner_client.get(
            fy_url('fiscal-year-export', fiscal_year.responsibility_centre_id, pk=fiscal_year.id)
        )

        response = viewer_client.post(
            fy_url('fiscal-year-import', fiscal_year.responsibility_centre_id),
            {'data': exported.json(), 'new_name': 'Viewer Import'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_import_requires_document(self, owner_client, fy_rc):
        """The data field is required."""
        response = owner_client.post(fy_url('fiscal-year-import', fy_rc.id), {'new_name': 'Empty'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
