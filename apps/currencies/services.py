"""
Currency catalogue and validation.

Amounts are entered in their original currency. Anything other than CAD
must carry a positive exchange rate to CAD; CAD amounts never store one.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, Tuple
import re

from .constants import CurrencyCode, CURRENCY_SYMBOLS, DEFAULT_CURRENCY, CURRENCY_CODE_PATTERN
from .exceptions import InvalidCurrencyError, InvalidExchangeRateError

CENT = Decimal('0.01')


def _describe(code: str) -> dict:
    currency = CurrencyCode(code)
    return {
        'code': currency.value,
        'name': currency.label,
        'symbol': CURRENCY_SYMBOLS[currency],
        'is_default': currency == DEFAULT_CURRENCY,
    }


def list_currencies() -> list:
    """All supported currencies, default first."""
    codes = [DEFAULT_CURRENCY] + [c for c in CurrencyCode if c != DEFAULT_CURRENCY]
    return [_describe(code) for code in codes]


def get_default_currency() -> dict:
    return _describe(DEFAULT_CURRENCY)


def validate_currency(currency: Optional[str], exchange_rate=None) -> Tuple[str, Optional[Decimal]]:
    """
    Normalize a currency code and its exchange rate.

    Args:
        currency: ISO code; empty means the default currency
        exchange_rate: Rate to CAD, required for non-CAD currencies

    Returns:
        Tuple of (currency code, exchange rate or None for CAD)

    Raises:
        InvalidCurrencyError: If the code is not supported
        InvalidExchangeRateError: If a non-CAD rate is missing or not positive
    """
    code = (currency or DEFAULT_CURRENCY).strip().upper()
    if not re.match(CURRENCY_CODE_PATTERN, code) or code not in CurrencyCode.values:
        raise InvalidCurrencyError(f"Invalid currency: {currency}")

    if code == DEFAULT_CURRENCY:
        return code, None

    if exchange_rate in (None, ''):
        raise InvalidExchangeRateError("Exchange rate is required for non-CAD currencies")
    try:
        rate = Decimal(str(exchange_rate))
    except (InvalidOperation, ValueError):
        raise InvalidExchangeRateError("Exchange rate must be greater than zero")
    if rate <= 0:
        raise InvalidExchangeRateError("Exchange rate must be greater than zero")
    return code, rate


def to_cad(amount, currency: str, exchange_rate=None) -> Optional[Decimal]:
    """Convert an amount to CAD, rounded to cents. None stays None."""
    if amount is None:
        return None
    amount = Decimal(str(amount))
    if currency == DEFAULT_CURRENCY or exchange_rate is None:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    return (amount * Decimal(str(exchange_rate))).quantize(CENT, rounding=ROUND_HALF_UP)
