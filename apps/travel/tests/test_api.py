import pytest
from django.urls import reverse
from rest_framework import status
from apps.audit.models import AuditEvent
from apps.travel.models import TravelTraveller


def travel_url(name, fiscal_year, **kwargs):
    return reverse(
        f'travel:{name}',
        kwargs={'rc_id': fiscal_year.responsibility_centre_id, 'fy_id': fiscal_year.id, **kwargs},
    )


# =============================================================================
# Travel Item Tests
# =============================================================================

@pytest.mark.django_db
class TestTravelItemApi:
    """Tests for /api/responsibility-centres/{rc_id}/fiscal-years/{fy_id}/travel-items/"""

    def test_list(self, viewer_client, travel_item, traveller):
        """Readers see items with travellers."""
        response = viewer_client.get(travel_url('travel-item-list', travel_item.fiscal_year))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['destination'] == 'Geneva'
        assert response.data[0]['travellers'][0]['currency'] == 'EUR'

    def test_create(self, editor_client, travel_fy):
        """Editors create items; the action is audited."""
        response = editor_client.post(
            travel_url('travel-item-list', travel_fy),
            {'name': 'Halifax Summit', 'travel_type': 'DOMESTIC', 'departure_date': '2025-10-02'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['departure_date'] == '2025-10-02'
        assert AuditEvent.objects.filter(entity_type='TRAVEL_ITEM', action='CREATE', outcome='SUCCESS').exists()

    def test_create_viewer_denied(self, viewer_client, travel_fy):
        """READ_ONLY users cannot create items."""
        response = viewer_client.post(travel_url('travel-item-list', travel_fy), {'name': 'Nope'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_status(self, editor_client, travel_item):
        """The status action changes the status."""
        response = editor_client.put(
            travel_url('travel-item-update-status', travel_item.fiscal_year, pk=travel_item.id),
            {'status': 'APPROVED'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'APPROVED'

    def test_delete(self, owner_client, travel_item):
        """Owners delete items."""
        response = owner_client.delete(travel_url('travel-item-detail', travel_item.fiscal_year, pk=travel_item.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT

        response = owner_client.get(travel_url('travel-item-detail', travel_item.fiscal_year, pk=travel_item.id))
        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Traveller Tests
# =============================================================================

@pytest.mark.django_db
class TestTravellersApi:
    """Tests for .../travel-items/{id}/travellers/"""

    def test_add(self, editor_client, travel_item):
        """Editors add travellers."""
        response = editor_client.post(
            travel_url('travel-item-travellers', travel_item.fiscal_year, pk=travel_item.id),
            {'name': 'Robin', 'taac': 'TAAC-900', 'estimated_cost': '1250.00'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['approval_status'] == 'PLANNED'
        assert response.data['exchange_rate'] is None

    def test_add_invalid_approval_status(self, editor_client, travel_item):
        """Approval statuses outside the TAAC workflow fail validation."""
        response = editor_client.post(
            travel_url('travel-item-travellers', travel_item.fiscal_year, pk=travel_item.id),
            {'name': 'Robin', 'approval_status': 'WAITING'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'approval_status' in response.data['details']

    def test_update(self, owner_client, traveller):
        """Owners update a traveller."""
        item = traveller.travel_item
        response = owner_client.put(
            travel_url('travel-item-update-traveller', item.fiscal_year, pk=item.id, traveller_id=traveller.id),
            {'approval_status': 'TAAC_FINAL_SUBMITTED'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['approval_status'] == 'TAAC_FINAL_SUBMITTED'

    def test_remove_viewer_denied(self, viewer_client, traveller):
        """READ_ONLY users cannot remove travellers."""
        item = traveller.travel_item
        response = viewer_client.delete(
            travel_url('travel-item-update-traveller', item.fiscal_year, pk=item.id, traveller_id=traveller.id)
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert TravelTraveller.objects.filter(id=traveller.id).exists()

    def test_remove(self, owner_client, traveller):
        """Owners remove a traveller."""
        item = traveller.travel_item
        response = owner_client.delete(
            travel_url('travel-item-update-traveller', item.fiscal_year, pk=item.id, traveller_id=traveller.id)
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
