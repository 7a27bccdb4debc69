"""
Custom exceptions for travel services.
"""

from config.exceptions import ServiceError, ServiceNotFound


class TravelServiceError(ServiceError):
    """Base exception for travel service errors."""
    pass


class TravelItemNotFoundError(TravelServiceError):
    status_code = ServiceNotFound.status_code


class TravellerNotFoundError(TravelServiceError):
    status_code = ServiceNotFound.status_code


class DuplicateTravelItemError(TravelServiceError):
    pass


class InvalidTravelValueError(TravelServiceError):
    """Raised when a status, travel type or approval status is not recognised."""
    pass
