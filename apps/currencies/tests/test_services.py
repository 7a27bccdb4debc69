from decimal import Decimal

import pytest
from apps.currencies.services import validate_currency, to_cad, list_currencies
from apps.currencies.exceptions import InvalidCurrencyError, InvalidExchangeRateError


class TestValidateCurrency:
    """Tests for currency and exchange rate validation."""

    def test_blank_defaults_to_cad(self):
        """No currency means CAD with no rate."""
        assert validate_currency(None) == ('CAD', None)
        assert validate_currency('') == ('CAD', None)

    def test_cad_drops_rate(self):
        """CAD never stores an exchange rate."""
        assert validate_currency('CAD', '1.5') == ('CAD', None)

    def test_lowercase_code(self):
        """Codes are normalized to upper case."""
        assert validate_currency('usd', '1.35') == ('USD', Decimal('1.35'))

    def test_unknown_code(self):
        """Unsupported codes are rejected."""
        with pytest.raises(InvalidCurrencyError, match='Invalid currency: JPY'):
            validate_currency('JPY', '0.01')

    def test_malformed_code(self):
        """Codes must be three letters."""
        with pytest.raises(InvalidCurrencyError):
            validate_currency('US', '1.3')

    def test_foreign_requires_rate(self):
        """Non-CAD amounts need a rate."""
        with pytest.raises(InvalidExchangeRateError, match='required'):
            validate_currency('EUR')

    @pytest.mark.parametrize('rate', ['0', '-1.2', 'abc'])
    def test_rate_must_be_positive(self, rate):
        """Zero, negative and non-numeric rates are rejected."""
        with pytest.raises(InvalidExchangeRateError, match='greater than zero'):
            validate_currency('EUR', rate)


class TestToCad:
    """Tests for CAD conversion."""

    def test_none_stays_none(self):
        """Missing amounts are not converted."""
        assert to_cad(None, 'USD', Decimal('1.3')) is None

    def test_cad_rounds_to_cents(self):
        """CAD amounts are only rounded."""
        assert to_cad('10.005', 'CAD') == Decimal('10.01')

    def test_foreign_converted(self):
        """Foreign amounts are multiplied by the rate."""
        assert to_cad(Decimal('100.00'), 'USD', Decimal('1.3579')) == Decimal('135.79')


def test_default_currency_listed_first():
    """CAD leads the catalogue and is flagged default."""
    currencies = list_currencies()

    assert currencies[0]['code'] == 'CAD'
    assert currencies[0]['is_default'] is True
    assert not any(c['is_default'] for c in currencies[1:])
