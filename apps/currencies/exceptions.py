"""
Domain exceptions for currencies app.
"""
from config.exceptions import ServiceValidationError


class CurrencyError(ServiceValidationError):
    """Base exception for currency validation errors."""
    pass


class InvalidCurrencyError(CurrencyError):
    """Raised when a currency code is not supported."""
    pass


class InvalidExchangeRateError(CurrencyError):
    """Raised when a foreign currency amount lacks a usable exchange rate."""
    pass
