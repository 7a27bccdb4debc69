"""
Training participant service.
"""

import logging
from typing import List

from django.db import transaction

from apps.accounts.models import User
from apps.currencies.services import validate_currency
from apps.fiscal_years.services import get_fiscal_year_for_read, get_fiscal_year_for_write
from apps.training.models import TrainingParticipant, ParticipantStatus

from .exceptions import TrainingServiceError, ParticipantNotFoundError
from .items import get_active_training_item, validate_choice

logger = logging.getLogger(__name__)

COST_FIELDS = ('estimated_cost', 'final_cost')
# cost prefix -> (currency field, exchange rate field)
CURRENCY_FIELDS = {
    'estimated': ('estimated_currency', 'estimated_exchange_rate'),
    'final': ('final_currency', 'final_exchange_rate'),
}


def _apply(participant, payload: dict, *, creating: bool) -> None:
    if creating or payload.get('name') is not None:
        name = (payload.get('name') or '').strip()
        if not name:
            raise TrainingServiceError("Participant name is required")
        participant.name = name

    if payload.get('eco') is not None:
        participant.eco = payload['eco']
    if payload.get('status'):
        participant.status = validate_choice(ParticipantStatus, payload['status'], 'participant status')

    for field in COST_FIELDS:
        if field in payload:
            setattr(participant, field, payload[field])

    for currency_field, rate_field in CURRENCY_FIELDS.values():
        if creating or currency_field in payload or rate_field in payload:
            currency, rate = validate_currency(
                payload.get(currency_field, getattr(participant, currency_field)),
                payload.get(rate_field, getattr(participant, rate_field)),
            )
            setattr(participant, currency_field, currency)
            setattr(participant, rate_field, rate)


def build_participant(item, payload: dict) -> TrainingParticipant:
    """Unsaved participant of an item built from an API payload."""
    participant = TrainingParticipant(training_item=item)
    _apply(participant, payload, creating=True)
    return participant


def _item_for(*, rc_id, fy_id, item_id, user, write=False):
    lookup = get_fiscal_year_for_write if write else get_fiscal_year_for_read
    fiscal_year = lookup(rc_id=rc_id, fy_id=fy_id, user=user)
    return get_active_training_item(fiscal_year, item_id)


def _get_participant(item, participant_id) -> TrainingParticipant:
    try:
        return item.participants.get(id=participant_id)
    except TrainingParticipant.DoesNotExist:
        raise ParticipantNotFoundError("Participant not found")


def list_participants(*, rc_id, fy_id, item_id, user: User) -> List[TrainingParticipant]:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user)
    return list(item.participants.all())


@transaction.atomic
def add_participant(*, rc_id, fy_id, item_id, user: User, **payload) -> TrainingParticipant:
    """
    Add a participant to a training item.

    Raises:
        TrainingServiceError: If the name is missing
        CurrencyError: If a currency or exchange rate is invalid
    """
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=True)
    participant = build_participant(item, payload)
    participant.save()
    logger.info("User %s added participant %s to training item %s", user.username, participant.name, item.id)
    return participant


@transaction.atomic
def update_participant(*, rc_id, fy_id, item_id, participant_id, user: User, **payload) -> TrainingParticipant:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=True)
    participant = _get_participant(item, participant_id)
    _apply(participant, payload, creating=False)
    participant.save()
    return participant


@transaction.atomic
def delete_participant(*, rc_id, fy_id, item_id, participant_id, user: User) -> None:
    item = _item_for(rc_id=rc_id, fy_id=fy_id, item_id=item_id, user=user, write=True)
    participant = _get_participant(item, participant_id)
    participant.delete()
    logger.info("User %s removed participant %s from training item %s", user.username, participant_id, item.id)
