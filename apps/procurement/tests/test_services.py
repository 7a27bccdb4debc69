import datetime
import pytest
from decimal import Decimal
from django.core.files.uploadedfile import SimpleUploadedFile
from apps.procurement.models import (
    ProcurementItem,
    ProcurementQuote,
    ProcurementEvent,
    ProcurementEventType,
    ProcurementStatus,
    QuoteStatus,
    TrackingStatus,
)
from apps.procurement.services import (
    list_procurement_items,
    create_procurement_item,
    update_procurement_item,
    delete_procurement_item,
    request_status_change,
    toggle_spending_link,
    create_quote,
    update_quote,
    select_quote,
    delete_quote,
    upload_quote_file,
    create_procurement_event,
    update_procurement_event,
    list_procurement_events,
    upload_event_file,
    update_event_file_description,
    ProcurementServiceError,
    ProcurementItemNotFoundError,
    DuplicatePurchaseRequisitionError,
    InvalidProcurementStatusError,
    SpendingLinkError,
)
from apps.procurement.services.spending_link import MODIFIED_WARNING
from apps.spending.models import SpendingItem
from config.exceptions import ServiceValidationError


def _scope(item):
    return {'rc_id': item.fiscal_year.responsibility_centre_id, 'fy_id': item.fiscal_year_id}


# =============================================================================
# Procurement items
# =============================================================================

@pytest.mark.django_db
class TestCreateProcurementItem:
    """Tests for create_procurement_item service."""

    def test_creates_with_cad_prices(self, proc_owner, proc_fy):
        """Foreign prices are converted to CAD."""
        item = create_procurement_item(
            rc_id=proc_fy.responsibility_centre_id,
            fy_id=proc_fy.id,
            user=proc_owner,
            name=' Tape Library ',
            purchase_requisition=' PR-500 ',
            final_price=Decimal('1000.00'),
            final_price_currency='USD',
            final_price_exchange_rate=Decimal('1.400000'),
        )

        assert item.name == 'Tape Library'
        assert item.purchase_requisition == 'PR-500'
        assert item.final_price_cad == Decimal('1400.00')
        assert item.tracking_status == TrackingStatus.ON_TRACK
        assert item.current_status == ProcurementStatus.DRAFT

    def test_duplicate_pr(self, proc_owner, procurement_item):
        """PR numbers are unique among active items."""
        with pytest.raises(DuplicatePurchaseRequisitionError):
            create_procurement_item(user=proc_owner, name='Again', purchase_requisition='PR-100', **_scope(procurement_item))

    def test_pr_of_deleted_item_reusable(self, proc_owner, procurement_item):
        """Deleted items release their PR number."""
        procurement_item.active = False
        procurement_item.save()

        item = create_procurement_item(user=proc_owner, name='Again', purchase_requisition='PR-100', **_scope(procurement_item))

        assert item.purchase_requisition == 'PR-100'

    def test_blank_name(self, proc_owner, proc_fy):
        """Names are required."""
        with pytest.raises(ProcurementServiceError):
            create_procurement_item(rc_id=proc_fy.responsibility_centre_id, fy_id=proc_fy.id, user=proc_owner, name='')


@pytest.mark.django_db
class TestProcurementItemQueries:
    """Tests for listing and status handling."""

    def test_search(self, proc_viewer, procurement_item, second_item):
        """Search matches name, PR or PO."""
        by_po = list_procurement_items(user=proc_viewer, search='po-200', **_scope(procurement_item))
        by_pr = list_procurement_items(user=proc_viewer, search='PR-101', **_scope(procurement_item))

        assert by_po == [procurement_item]
        assert by_pr == [second_item]

    def test_filter_by_derived_status(self, proc_viewer, procurement_event, second_item):
        """The status filter uses the event-derived status."""
        item = procurement_event.procurement_item

        pending = list_procurement_items(user=proc_viewer, status='pending_quotes', **_scope(item))
        drafts = list_procurement_items(user=proc_viewer, status='DRAFT', **_scope(item))

        assert pending == [item]
        assert drafts == [second_item]

    def test_invalid_status_filter(self, proc_viewer, procurement_item):
        """Unknown statuses are rejected."""
        with pytest.raises(InvalidProcurementStatusError):
            list_procurement_items(user=proc_viewer, status='LOST', **_scope(procurement_item))

    def test_status_request_does_not_store(self, proc_owner, procurement_item):
        """The status endpoint validates without changing the item."""
        item = request_status_change(
            item_id=procurement_item.id, user=proc_owner, status='APPROVED', **_scope(procurement_item)
        )

        assert item.current_status == ProcurementStatus.DRAFT
        assert not ProcurementEvent.objects.filter(procurement_item=procurement_item).exists()

    def test_update_clears_category(self, proc_owner, procurement_item):
        """A category id of -1 clears the category."""
        item = update_procurement_item(
            item_id=procurement_item.id, user=proc_owner, category_id=-1, vendor='New Vendor', **_scope(procurement_item)
        )

        assert item.category is None
        assert item.vendor == 'New Vendor'

    def test_update_duplicate_pr(self, proc_owner, procurement_item, second_item):
        """Updating onto another item's PR is rejected."""
        with pytest.raises(DuplicatePurchaseRequisitionError):
            update_procurement_item(
                item_id=second_item.id, user=proc_owner, purchase_requisition='PR-100', **_scope(second_item)
            )


@pytest.mark.django_db
class TestDeleteProcurementItem:
    """Tests for delete_procurement_item service."""

    def test_cascades_soft_delete(self, proc_owner, quote_file, event_file):
        """Quotes, events, files and linked spending are deactivated."""
        item = quote_file.quote.procurement_item
        toggle_spending_link(item_id=item.id, user=proc_owner, **_scope(item))

        delete_procurement_item(item_id=item.id, user=proc_owner, **_scope(item))

        item.refresh_from_db()
        quote_file.refresh_from_db()
        event_file.refresh_from_db()
        assert item.active is False
        assert quote_file.active is False
        assert event_file.active is False
        assert not ProcurementQuote.objects.filter(procurement_item=item, active=True).exists()
        assert not SpendingItem.objects.filter(procurement_item=item, active=True).exists()

    def test_deleted_item_not_found(self, proc_owner, procurement_item):
        """Deleted items cannot be deleted again."""
        delete_procurement_item(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))

        with pytest.raises(ProcurementItemNotFoundError):
            delete_procurement_item(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))


# =============================================================================
# Spending link
# =============================================================================

@pytest.mark.django_db
class TestToggleSpendingLink:
    """Tests for toggle_spending_link service."""

    def test_creates_spending_item(self, proc_owner, procurement_item):
        """Linking creates a draft spending item from the quoted price."""
        result = toggle_spending_link(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))

        spending = SpendingItem.objects.get(procurement_item=procurement_item)
        assert result['spending_linked'] is True
        assert result['has_warning'] is False
        assert spending.name == 'Object Storage Expansion'
        assert spending.amount == Decimal('25000.00')
        assert spending.reference_number == 'PO-200'
        assert spending.category == procurement_item.category
        assert spending.allocations.count() == 1

    def test_prefers_final_price(self, proc_owner, procurement_item):
        """The final price wins over the quoted price."""
        procurement_item.final_price = Decimal('23000.00')
        procurement_item.save()

        toggle_spending_link(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))

        assert SpendingItem.objects.get(procurement_item=procurement_item).amount == Decimal('23000.00')

    def test_unlinks_untouched_item(self, proc_owner, procurement_item):
        """A second toggle removes an unmodified spending item."""
        toggle_spending_link(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))
        result = toggle_spending_link(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))

        assert result['spending_linked'] is False
        assert not SpendingItem.objects.filter(procurement_item=procurement_item, active=True).exists()

    def test_warns_when_modified(self, proc_owner, procurement_item):
        """Modified spending items need force to unlink."""
        toggle_spending_link(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))
        spending = SpendingItem.objects.get(procurement_item=procurement_item)
        spending.vendor = 'Edited'
        spending.save()

        result = toggle_spending_link(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))

        assert result['has_warning'] is True
        assert result['warning_message'] == MODIFIED_WARNING
        assert SpendingItem.objects.get(id=spending.id).active is True

        forced = toggle_spending_link(item_id=procurement_item.id, user=proc_owner, force=True, **_scope(procurement_item))
        assert forced['spending_linked'] is False

    def test_cancelled_item(self, proc_owner, procurement_item):
        """Cancelled items cannot be linked."""
        procurement_item.tracking_status = TrackingStatus.CANCELLED
        procurement_item.save()

        with pytest.raises(SpendingLinkError):
            toggle_spending_link(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))


# =============================================================================
# Quotes
# =============================================================================

@pytest.mark.django_db
class TestQuotes:
    """Tests for quote services."""

    def test_create_converts_to_cad(self, proc_owner, procurement_item):
        """CAP and OM amounts get CAD equivalents."""
        created = create_quote(
            item_id=procurement_item.id,
            user=proc_owner,
            vendor_name='Initech',
            amount_cap=Decimal('100.00'),
            amount_om=Decimal('10.00'),
            currency='EUR',
            exchange_rate=Decimal('1.500000'),
            **_scope(procurement_item),
        )

        assert created.status == QuoteStatus.PENDING
        assert created.amount_cap_cad == Decimal('150.00')
        assert created.amount_om_cad == Decimal('15.00')

    def test_vendor_required(self, proc_owner, procurement_item):
        """Vendor names are required."""
        with pytest.raises(ProcurementServiceError, match='Vendor name is required'):
            create_quote(item_id=procurement_item.id, user=proc_owner, vendor_name='  ', **_scope(procurement_item))

    def test_update(self, proc_owner, quote):
        """Updates refresh the CAD amounts."""
        item = quote.procurement_item
        updated = update_quote(
            item_id=item.id, quote_id=quote.id, user=proc_owner, amount_cap=Decimal('20000.00'), **_scope(item)
        )

        assert updated.amount_cap_cad == Decimal('20000.00')

    def test_select_rejects_previous(self, proc_owner, quote, other_quote):
        """Selecting a quote rejects the previous selection."""
        item = quote.procurement_item
        select_quote(item_id=item.id, quote_id=quote.id, user=proc_owner, **_scope(item))
        select_quote(item_id=item.id, quote_id=other_quote.id, user=proc_owner, **_scope(item))

        quote.refresh_from_db()
        other_quote.refresh_from_db()
        assert quote.selected is False
        assert quote.status == QuoteStatus.REJECTED
        assert other_quote.selected is True
        assert other_quote.status == QuoteStatus.SELECTED

    def test_delete_clears_selection(self, proc_owner, quote):
        """Deleted quotes are no longer selected."""
        item = quote.procurement_item
        select_quote(item_id=item.id, quote_id=quote.id, user=proc_owner, **_scope(item))
        delete_quote(item_id=item.id, quote_id=quote.id, user=proc_owner, **_scope(item))

        quote.refresh_from_db()
        assert quote.active is False
        assert quote.selected is False

    def test_quote_files_are_restricted(self, proc_owner, quote):
        """Quote attachments must be documents, images or spreadsheets."""
        item = quote.procurement_item
        upload = SimpleUploadedFile('archive.zip', b'PK', content_type='application/zip')

        with pytest.raises(ServiceValidationError):
            upload_quote_file(item_id=item.id, quote_id=quote.id, user=proc_owner, uploaded_file=upload, **_scope(item))


# =============================================================================
# Events
# =============================================================================

@pytest.mark.django_db
class TestProcurementEvents:
    """Tests for procurement event services."""

    def test_new_status_fills_old_status(self, proc_owner, procurement_event):
        """old_status defaults to the status before the event."""
        item = procurement_event.procurement_item
        event = create_procurement_event(
            item_id=item.id,
            user=proc_owner,
            event_type='package_sent_to_procurement',
            event_date=datetime.date(2025, 6, 1),
            new_status='UNDER_REVIEW',
            **_scope(item),
        )

        assert event.event_type == ProcurementEventType.PACKAGE_SENT_TO_PROCUREMENT
        assert event.old_status == ProcurementStatus.PENDING_QUOTES
        assert ProcurementItem.objects.get(id=item.id).current_status == ProcurementStatus.UNDER_REVIEW

    def test_event_without_status(self, proc_owner, procurement_item):
        """Events without a new status leave the status alone."""
        event = create_procurement_event(item_id=procurement_item.id, user=proc_owner, **_scope(procurement_item))

        assert event.event_type == ProcurementEventType.NOT_STARTED
        assert event.old_status == ''
        assert procurement_item.current_status == ProcurementStatus.DRAFT

    def test_invalid_event_type(self, proc_owner, procurement_item):
        """Unknown event types are rejected."""
        with pytest.raises(InvalidProcurementStatusError):
            create_procurement_event(
                item_id=procurement_item.id, user=proc_owner, event_type='TELEPORTED', **_scope(procurement_item)
            )

    def test_invalid_new_status(self, proc_owner, procurement_item):
        """Unknown statuses are rejected."""
        with pytest.raises(InvalidProcurementStatusError):
            create_procurement_event(
                item_id=procurement_item.id, user=proc_owner, new_status='DONE', **_scope(procurement_item)
            )

    def test_filter_by_type(self, proc_viewer, proc_owner, procurement_event):
        """Events can be filtered by type."""
        item = procurement_event.procurement_item
        ProcurementEvent.objects.create(
            procurement_item=item, event_type=ProcurementEventType.PAUSED, created_by=proc_owner,
        )

        events = list_procurement_events(item_id=item.id, user=proc_viewer, event_type='quote', **_scope(item))

        assert events == [procurement_event]

    def test_update_event(self, proc_owner, procurement_event):
        """Updating the new status moves the derived status."""
        item = procurement_event.procurement_item
        update_procurement_event(
            item_id=item.id, event_id=procurement_event.id, user=proc_owner, new_status='QUOTES_RECEIVED', **_scope(item)
        )

        assert ProcurementItem.objects.get(id=item.id).current_status == ProcurementStatus.QUOTES_RECEIVED

    def test_event_files_accept_any_type(self, proc_owner, procurement_event):
        """Event attachments are not type-restricted."""
        item = procurement_event.procurement_item
        upload = SimpleUploadedFile('archive.zip', b'PK', content_type='application/zip')

        stored = upload_event_file(
            item_id=item.id, event_id=procurement_event.id, user=proc_owner, uploaded_file=upload, **_scope(item)
        )

        assert stored.content_type == 'application/zip'

    def test_update_file_description(self, proc_owner, event_file):
        """File descriptions can be edited."""
        event = event_file.event
        item = event.procurement_item
        stored = update_event_file_description(
            item_id=item.id, event_id=event.id, file_id=event_file.id, user=proc_owner,
            description='Meeting notes', **_scope(item),
        )

        assert stored.description == 'Meeting notes'
