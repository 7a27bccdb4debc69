"""
Training services layer.
"""

from .exceptions import (
    TrainingServiceError,
    TrainingItemNotFoundError,
    ParticipantNotFoundError,
    DuplicateTrainingItemError,
    InvalidTrainingValueError,
)

from .items import (
    list_training_items,
    get_training_item,
    create_training_item,
    update_training_item,
    delete_training_item,
    update_training_status,
    get_training_allocations,
    update_training_allocations,
)

from .participants import (
    list_participants,
    add_participant,
    update_participant,
    delete_participant,
)


__all__ = [
    # Exceptions
    'TrainingServiceError',
    'TrainingItemNotFoundError',
    'ParticipantNotFoundError',
    'DuplicateTrainingItemError',
    'InvalidTrainingValueError',

    # Training items
    'list_training_items',
    'get_training_item',
    'create_training_item',
    'update_training_item',
    'delete_training_item',
    'update_training_status',
    'get_training_allocations',
    'update_training_allocations',

    # Participants
    'list_participants',
    'add_participant',
    'update_participant',
    'delete_participant',
]
