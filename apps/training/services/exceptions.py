"""
Custom exceptions for training services.
"""

from config.exceptions import ServiceError, ServiceNotFound


class TrainingServiceError(ServiceError):
    """Base exception for training service errors."""
    pass


class TrainingItemNotFoundError(TrainingServiceError):
    status_code = ServiceNotFound.status_code


class ParticipantNotFoundError(TrainingServiceError):
    status_code = ServiceNotFound.status_code


class DuplicateTrainingItemError(TrainingServiceError):
    """Raised when a training item name is already used in the fiscal year."""
    pass


class InvalidTrainingValueError(TrainingServiceError):
    """Raised when a status, type or format is not recognised."""
    pass
