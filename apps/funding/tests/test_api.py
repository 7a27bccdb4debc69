import pytest
from django.urls import reverse
from rest_framework import status
from apps.audit.models import AuditEvent
from apps.funding.models import FundingItem


def funding_url(name, fiscal_year, **kwargs):
    return reverse(
        f'funding:{name}',
        kwargs={'rc_id': fiscal_year.responsibility_centre_id, 'fy_id': fiscal_year.id, **kwargs},
    )


# =============================================================================
# Funding Item Tests
# =============================================================================

@pytest.mark.django_db
class TestFundingItemList:
    """Tests for GET /api/responsibility-centres/{rc_id}/fiscal-years/{fy_id}/funding-items/"""

    def test_viewer_lists(self, viewer_client, funding_item):
        """Readers see items with their allocations."""
        response = viewer_client.get(funding_url('funding-item-list', funding_item.fiscal_year))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        codes = [a['money_code'] for a in response.data[0]['allocations']]
        assert sorted(codes) == ['AB', 'OA']

    def test_category_filter(self, owner_client, funding_item, compute_category):
        """The category_id query parameter filters items."""
        FundingItem.objects.create(fiscal_year=funding_item.fiscal_year, name='GPU Grant', category=compute_category)

        response = owner_client.get(
            funding_url('funding-item-list', funding_item.fiscal_year), {'category_id': compute_category.id}
        )

        assert response.status_code == status.HTTP_200_OK
        assert [item['name'] for item in response.data] == ['GPU Grant']
        assert response.data[0]['category_name'] == 'Compute'

    def test_outsider_denied(self, outsider_client, funding_item):
        """Users without access are rejected."""
        response = outsider_client.get(funding_url('funding-item-list', funding_item.fiscal_year))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_requires_auth(self, api_client, funding_fy):
        """Anonymous requests are rejected."""
        response = api_client.get(funding_url('funding-item-list', funding_fy))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestFundingItemCreate:
    """Tests for POST /api/responsibility-centres/{rc_id}/fiscal-years/{fy_id}/funding-items/"""

    def test_owner_creates(self, owner_client, funding_fy, ab_money):
        """Owners create funding and the request is audited."""
        response = owner_client.post(
            funding_url('funding-item-list', funding_fy),
            {
                'name': 'Ops Budget',
                'source': 'ON_RAMP',
                'allocations': [{'money_id': ab_money.id, 'cap_amount': '1500.00', 'om_amount': '0'}],
            },
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Ops Budget'
        assert response.data['source'] == 'ON_RAMP'
        assert response.data['allocations'][0]['cap_amount'] == '1500.00'

        event = AuditEvent.objects.get(entity_type='FUNDING_ITEM', action='CREATE')
        assert event.outcome == 'SUCCESS'

    def test_zero_allocations(self, owner_client, funding_fy, ab_money):
        """Allocations must carry an amount."""
        response = owner_client.post(
            funding_url('funding-item-list', funding_fy),
            {'name': 'Empty', 'allocations': [{'money_id': ab_money.id}]},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'greater than $0.00' in response.data['error']

    def test_missing_allocations(self, owner_client, funding_fy):
        """The allocations field is required."""
        response = owner_client.post(funding_url('funding-item-list', funding_fy), {'name': 'Empty'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'allocations' in response.data['details']

    def test_viewer_denied(self, viewer_client, funding_fy, ab_money):
        """Read-only users cannot create funding."""
        response = viewer_client.post(
            funding_url('funding-item-list', funding_fy),
            {'name': 'Nope', 'allocations': [{'money_id': ab_money.id, 'cap_amount': '1'}]},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_duplicate(self, owner_client, funding_item, ab_money):
        """Duplicate names return 400."""
        response = owner_client.post(
            funding_url('funding-item-list', funding_item.fiscal_year),
            {'name': 'Base Budget', 'allocations': [{'money_id': ab_money.id, 'cap_amount': '1'}]},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already exists' in response.data['error']


@pytest.mark.django_db
class TestFundingItemDetail:
    """Tests for GET/PATCH/DELETE /api/responsibility-centres/{rc_id}/fiscal-years/{fy_id}/funding-items/{id}/"""

    def test_retrieve(self, viewer_client, funding_item):
        """Readers retrieve a single item."""
        response = viewer_client.get(funding_url('funding-item-detail', funding_item.fiscal_year, pk=funding_item.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['description'] == 'Annual base'

    def test_retrieve_unknown(self, owner_client, funding_fy):
        """Unknown ids return 404."""
        response = owner_client.get(funding_url('funding-item-detail', funding_fy, pk=99999))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch(self, owner_client, funding_item, oa_money):
        """Partial updates change only the given fields."""
        response = owner_client.patch(
            funding_url('funding-item-detail', funding_item.fiscal_year, pk=funding_item.id),
            {'comments': 'Confirmed', 'allocations': [{'money_id': oa_money.id, 'om_amount': '900.00'}]},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['comments'] == 'Confirmed'
        assert response.data['name'] == 'Base Budget'
        amounts = {a['money_code']: a['om_amount'] for a in response.data['allocations']}
        assert amounts == {'AB': '2000.00', 'OA': '900.00'}

    def test_patch_viewer_denied(self, viewer_client, funding_item):
        """Read-only users cannot update."""
        response = viewer_client.patch(
            funding_url('funding-item-detail', funding_item.fiscal_year, pk=funding_item.id),
            {'comments': 'x'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete(self, owner_client, funding_item):
        """Owners delete items."""
        response = owner_client.delete(funding_url('funding-item-detail', funding_item.fiscal_year, pk=funding_item.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not FundingItem.objects.filter(id=funding_item.id).exists()
