"""
Traveller service for travel items.
"""

import logging
from typing import List

from django.db import transaction

from apps.accounts.models import User
from apps.currencies.services import validate_currency
from apps.fiscal_years.services import get_fiscal_year_for_read, get_fiscal_year_for_write
from apps.travel.models import TravelTraveller, ApprovalStatus

from .exceptions import TravelServiceError, TravellerNotFoundError
from .items import get_active_travel_item, validate_choice

logger = logging.getLogger(__name__)

COST_FIELDS = ('estimated_cost', 'final_cost')


def _apply(traveller, payload: dict, *, creating: bool) -> None:
    if creating or payload.get('name') is not None:
        name = (payload.get('name') or '').strip()
        if not name:
            raise TravelServiceError("Traveller name is required")
        traveller.name = name

    if payload.get('taac') is not None:
        traveller.taac = payload['taac']
    if payload.get('approval_status'):
        traveller.approval_status = validate_choice(ApprovalStatus, payload['approval_status'], 'approval status')

    for field in COST_FIELDS:
        if field in payload:
            setattr(traveller, field, payload[field])

    if creating or 'currency' in payload or 'exchange_rate' in payload:
        traveller.currency, traveller.exchange_rate = validate_currency(
            payload.get('currency', traveller.currency),
            payload.get('exchange_rate', traveller.exchange_rate),
        )


def build_traveller(item, payload: dict) -> TravelTraveller:
    traveller = TravelTraveller(travel_item=item)
    _apply(traveller, payload, creating=True)
    return traveller


def _item_for(*, rc_id, fy_id, item_id, user, write=False):
    lookup = get_fiscal_year_for_write if write else get_fiscal_year_for_read
    fiscal_year = lookup(rc_id=rc_id, fy_id=fy_id, user=user)
    return get_active_travel_item(fiscal_year, item_id)


def _get_traveller(item, traveller_id) -> TravelTraveller:
    try:
        return item.travellers.get(id=traveller_id)
    except TravelTraveller.DoesNotExist:
        raise TravellerNotFoundError("Traveller not found")


def list_travellers(*, rc_id, fy_id, item_id, user: User) -> List[TravelTraveller]:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user)
    return list(item.travellers.all())


@transaction.atomic
def add_traveller(*, rc_id, fy_id, item_id, user: User, **payload) -> TravelTraveller:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=True)
    traveller = build_traveller(item, payload)
    traveller.save()
    logger.info("User %s added traveller %s to travel item %s", user.username, traveller.name, item.id)
    return traveller


@transaction.atomic
def update_traveller(*, rc_id, fy_id, item_id, traveller_id, user: User, **payload) -> TravelTraveller:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=True)
    traveller = _get_traveller(item, traveller_id)
    _apply(traveller, payload, creating=False)
    traveller.save()
    return traveller


@transaction.atomic
def delete_traveller(*, rc_id, fy_id, item_id, traveller_id, user: User) -> None:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=True)
    traveller = _get_traveller(item, traveller_id)
    traveller.delete()
    logger.info("User %s removed traveller %s from travel item %s", user.username, traveller_id, item.id)
