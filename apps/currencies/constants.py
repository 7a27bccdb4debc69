from django.db import models


class CurrencyCode(models.TextChoices):
    CAD = 'CAD', 'Canadian Dollar'
    USD = 'USD', 'US Dollar'
    EUR = 'EUR', 'Euro'
    GBP = 'GBP', 'Pound Sterling'
    AUD = 'AUD', 'Australian Dollar'
    NZD = 'NZD', 'New Zealand Dollar'


CURRENCY_SYMBOLS = {
    CurrencyCode.CAD: '$',
    CurrencyCode.USD: '$',
    CurrencyCode.EUR: '€',
    CurrencyCode.GBP: '£',
    CurrencyCode.AUD: 'A$',
    CurrencyCode.NZD: 'NZ$',
}

DEFAULT_CURRENCY = CurrencyCode.CAD

CURRENCY_CODE_PATTERN = r'^[A-Z]{3}$'
