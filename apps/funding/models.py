from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import TimestampedModel, VersionedModel
from apps.currencies.constants import CurrencyCode, DEFAULT_CURRENCY


class FundingSource(models.TextChoices):
    BUSINESS_PLAN = 'BUSINESS_PLAN', 'Business Plan'
    ON_RAMP = 'ON_RAMP', 'On-Ramp'
    APPROVED_DEFICIT = 'APPROVED_DEFICIT', 'Approved Deficit'


class FundingItem(VersionedModel):
    """Money made available to a fiscal year, split across money types."""

    fiscal_year = models.ForeignKey(
        'fiscal_years.FiscalYear', on_delete=models.CASCADE, related_name='funding_items'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    source = models.CharField(
        max_length=20, choices=FundingSource.choices, default=FundingSource.BUSINESS_PLAN
    )
    comments = models.TextField(blank=True)
    currency = models.CharField(max_length=3, choices=CurrencyCode.choices, default=DEFAULT_CURRENCY)
    exchange_rate = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True)
    category = models.ForeignKey(
        'fiscal_years.Category',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='funding_items',
    )
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'funding_items'
        unique_together = [['fiscal_year', 'name']]
        ordering = ['name']

    def __str__(self):
        return self.name


class MoneyAllocation(TimestampedModel):
    """CAP / OM amounts of one funding item drawn from one money type."""

    funding_item = models.ForeignKey(FundingItem, on_delete=models.CASCADE, related_name='allocations')
    money = models.ForeignKey(
        'fiscal_years.Money', on_delete=models.CASCADE, related_name='funding_allocations'
    )
    cap_amount = models.DecimalField(
        max_digits=15, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    om_amount = models.DecimalField(
        max_digits=15, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )

    class Meta:
        db_table = 'funding_money_allocations'
        unique_together = [['funding_item', 'money']]

    def __str__(self):
        return f"{self.funding_item.name} / {self.money.code}"
