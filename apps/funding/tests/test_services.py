import re
import pytest
from decimal import Decimal
from apps.fiscal_years.models import FiscalYear, Money
from apps.fiscal_years.services import FiscalYearServiceError, MoneyNotFoundError
from apps.fiscal_years.services.allocations import NO_AMOUNT_MESSAGE
from apps.currencies.exceptions import InvalidExchangeRateError
from apps.funding.models import FundingItem, FundingSource
from apps.funding.services import (
    list_funding_items,
    get_funding_item,
    create_funding_item,
    update_funding_item,
    delete_funding_item,
    FundingServiceError,
    FundingItemNotFoundError,
    DuplicateFundingItemError,
)
from apps.rcs.services import RCAccessDeniedError


def _amounts(item):
    return {a.money.code: (a.cap_amount, a.om_amount) for a in item.allocations.all()}


# =============================================================================
# Create
# =============================================================================

@pytest.mark.django_db
class TestCreateFundingItem:
    """Tests for create_funding_item service."""

    def test_creates_with_allocations(self, funding_owner, funding_fy, ab_money, oa_money):
        """Every money of the fiscal year gets an allocation row."""
        item = create_funding_item(
            rc_id=funding_fy.responsibility_centre_id,
            fy_id=funding_fy.id,
            user=funding_owner,
            name='  Ops Budget ',
            allocations=[{'money_id': ab_money.id, 'cap_amount': '100.00', 'om_amount': '50.00'}],
        )

        assert item.name == 'Ops Budget'
        assert item.source == FundingSource.BUSINESS_PLAN
        assert item.currency == 'CAD'
        assert item.exchange_rate is None
        assert _amounts(item) == {
            'AB': (Decimal('100.00'), Decimal('50.00')),
            'OA': (Decimal('0.00'), Decimal('0.00')),
        }

    def test_requires_an_amount(self, funding_owner, funding_fy, ab_money):
        """All-zero allocations are rejected."""
        with pytest.raises(FiscalYearServiceError, match=re.escape(NO_AMOUNT_MESSAGE)):
            create_funding_item(
                rc_id=funding_fy.responsibility_centre_id,
                fy_id=funding_fy.id,
                user=funding_owner,
                name='Empty',
                allocations=[{'money_id': ab_money.id, 'cap_amount': 0, 'om_amount': 0}],
            )

    def test_negative_amount(self, funding_owner, funding_fy, ab_money):
        """Negative amounts are rejected."""
        with pytest.raises(FiscalYearServiceError, match='cannot be negative'):
            create_funding_item(
                rc_id=funding_fy.responsibility_centre_id,
                fy_id=funding_fy.id,
                user=funding_owner,
                name='Negative',
                allocations=[{'money_id': ab_money.id, 'cap_amount': '-1'}],
            )

    def test_money_from_other_fiscal_year(self, funding_owner, funding_fy, funding_rc):
        """Monies must belong to the same fiscal year."""
        other = FiscalYear.objects.create(responsibility_centre=funding_rc, name='FY 2026-2027')
        foreign = Money.objects.create(fiscal_year=other, code='AB', name='A-Base', is_default=True)

        with pytest.raises(MoneyNotFoundError):
            create_funding_item(
                rc_id=funding_fy.responsibility_centre_id,
                fy_id=funding_fy.id,
                user=funding_owner,
                name='Foreign',
                allocations=[{'money_id': foreign.id, 'cap_amount': '10'}],
            )

    def test_blank_name(self, funding_owner, funding_fy, ab_money):
        """Blank names are rejected."""
        with pytest.raises(FundingServiceError, match='name is required'):
            create_funding_item(
                rc_id=funding_fy.responsibility_centre_id,
                fy_id=funding_fy.id,
                user=funding_owner,
                name='   ',
                allocations=[{'money_id': ab_money.id, 'cap_amount': '10'}],
            )

    def test_duplicate_name(self, funding_owner, funding_item, ab_money):
        """Names are unique within a fiscal year."""
        with pytest.raises(DuplicateFundingItemError):
            create_funding_item(
                rc_id=funding_item.fiscal_year.responsibility_centre_id,
                fy_id=funding_item.fiscal_year_id,
                user=funding_owner,
                name='Base Budget',
                allocations=[{'money_id': ab_money.id, 'cap_amount': '10'}],
            )

    def test_foreign_currency_needs_rate(self, funding_owner, funding_fy, ab_money):
        """Non-CAD items require an exchange rate."""
        with pytest.raises(InvalidExchangeRateError):
            create_funding_item(
                rc_id=funding_fy.responsibility_centre_id,
                fy_id=funding_fy.id,
                user=funding_owner,
                name='US Grant',
                currency='USD',
                allocations=[{'money_id': ab_money.id, 'cap_amount': '10'}],
            )

    def test_foreign_currency_with_rate(self, funding_owner, funding_fy, ab_money):
        """A positive rate is stored with the currency."""
        item = create_funding_item(
            rc_id=funding_fy.responsibility_centre_id,
            fy_id=funding_fy.id,
            user=funding_owner,
            name='US Grant',
            currency='usd',
            exchange_rate=Decimal('1.350000'),
            allocations=[{'money_id': ab_money.id, 'om_amount': '10'}],
        )

        assert item.currency == 'USD'
        assert item.exchange_rate == Decimal('1.350000')

    def test_category_blocks_cap(self, funding_owner, funding_fy, ab_money, licenses_category):
        """OM-only categories reject CAP amounts."""
        with pytest.raises(FiscalYearServiceError, match='does not allow CAP'):
            create_funding_item(
                rc_id=funding_fy.responsibility_centre_id,
                fy_id=funding_fy.id,
                user=funding_owner,
                name='Licences',
                category_id=licenses_category.id,
                allocations=[{'money_id': ab_money.id, 'cap_amount': '10'}],
            )

    def test_viewer_denied(self, funding_viewer, funding_fy, ab_money):
        """Read-only users cannot create funding."""
        with pytest.raises(RCAccessDeniedError):
            create_funding_item(
                rc_id=funding_fy.responsibility_centre_id,
                fy_id=funding_fy.id,
                user=funding_viewer,
                name='Nope',
                allocations=[{'money_id': ab_money.id, 'cap_amount': '10'}],
            )


# =============================================================================
# Read
# =============================================================================

@pytest.mark.django_db
class TestReadFundingItems:
    """Tests for list_funding_items and get_funding_item services."""

    def test_viewer_lists(self, funding_viewer, funding_item):
        """Readers list the fiscal year's funding."""
        items = list_funding_items(
            rc_id=funding_item.fiscal_year.responsibility_centre_id,
            fy_id=funding_item.fiscal_year_id,
            user=funding_viewer,
        )

        assert [item.name for item in items] == ['Base Budget']

    def test_filter_by_category(self, funding_owner, funding_item, compute_category):
        """The category filter narrows the list."""
        FundingItem.objects.create(fiscal_year=funding_item.fiscal_year, name='Compute Grant', category=compute_category)

        items = list_funding_items(
            rc_id=funding_item.fiscal_year.responsibility_centre_id,
            fy_id=funding_item.fiscal_year_id,
            user=funding_owner,
            category_id=compute_category.id,
        )

        assert [item.name for item in items] == ['Compute Grant']

    def test_outsider_denied(self, funding_outsider, funding_item):
        """Users without access cannot list."""
        with pytest.raises(RCAccessDeniedError):
            list_funding_items(
                rc_id=funding_item.fiscal_year.responsibility_centre_id,
                fy_id=funding_item.fiscal_year_id,
                user=funding_outsider,
            )

    def test_get_unknown(self, funding_owner, funding_fy):
        """Unknown ids raise not found."""
        with pytest.raises(FundingItemNotFoundError):
            get_funding_item(
                rc_id=funding_fy.responsibility_centre_id, fy_id=funding_fy.id, item_id=99999, user=funding_owner,
            )


# =============================================================================
# Update / Delete
# =============================================================================

@pytest.mark.django_db
class TestUpdateFundingItem:
    """Tests for update_funding_item service."""

    def _update(self, item, user, **fields):
        return update_funding_item(
            rc_id=item.fiscal_year.responsibility_centre_id,
            fy_id=item.fiscal_year_id,
            item_id=item.id,
            user=user,
            **fields,
        )

    def test_updates_fields_and_bumps_version(self, funding_owner, funding_item):
        """Field updates bump the version."""
        item = self._update(funding_item, funding_owner, name='Renamed', source=FundingSource.ON_RAMP)

        assert item.name == 'Renamed'
        assert item.source == FundingSource.ON_RAMP
        assert item.version == funding_item.version + 1

    def test_allocations_upserted(self, funding_owner, funding_item, ab_money):
        """Monies missing from the payload keep their amounts."""
        item = self._update(
            funding_item, funding_owner,
            allocations=[{'money_id': ab_money.id, 'cap_amount': '1.00', 'om_amount': '2.00'}],
        )

        assert _amounts(item) == {
            'AB': (Decimal('1.00'), Decimal('2.00')),
            'OA': (Decimal('0.00'), Decimal('750.00')),
        }

    def test_category_cleared(self, funding_owner, funding_item, compute_category):
        """A category id of -1 clears the category."""
        funding_item.category = compute_category
        funding_item.save()

        item = self._update(funding_item, funding_owner, category_id=-1)

        assert item.category is None

    def test_duplicate_rename(self, funding_owner, funding_item):
        """Renaming onto another item's name is rejected."""
        FundingItem.objects.create(fiscal_year=funding_item.fiscal_year, name='Other')

        with pytest.raises(DuplicateFundingItemError):
            self._update(funding_item, funding_owner, name='Other')

    def test_keeps_own_name(self, funding_owner, funding_item):
        """Saving an unchanged name is allowed."""
        item = self._update(funding_item, funding_owner, name='Base Budget', comments='checked')

        assert item.comments == 'checked'


@pytest.mark.django_db
class TestDeleteFundingItem:
    """Tests for delete_funding_item service."""

    def test_hard_deletes(self, funding_owner, funding_item):
        """Funding items and their allocations are removed."""
        delete_funding_item(
            rc_id=funding_item.fiscal_year.responsibility_centre_id,
            fy_id=funding_item.fiscal_year_id,
            item_id=funding_item.id,
            user=funding_owner,
        )

        assert not FundingItem.objects.filter(id=funding_item.id).exists()

    def test_viewer_denied(self, funding_viewer, funding_item):
        """Read-only users cannot delete."""
        with pytest.raises(RCAccessDeniedError):
            delete_funding_item(
                rc_id=funding_item.fiscal_year.responsibility_centre_id,
                fy_id=funding_item.fiscal_year_id,
                item_id=funding_item.id,
                user=funding_viewer,
            )
