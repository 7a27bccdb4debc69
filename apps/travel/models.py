from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import TimestampedModel, VersionedModel
from apps.currencies.constants import CurrencyCode, DEFAULT_CURRENCY


class TravelStatus(models.TextChoices):
    PLANNED = 'PLANNED', 'Planned'
    APPROVED = 'APPROVED', 'Approved'
    IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class TravelType(models.TextChoices):
    DOMESTIC = 'DOMESTIC', 'Domestic'
    NORTH_AMERICA = 'NORTH_AMERICA', 'North America'
    INTERNATIONAL = 'INTERNATIONAL', 'International'
    LOCAL = 'LOCAL', 'Local'


class ApprovalStatus(models.TextChoices):
    PLANNED = 'PLANNED', 'Planned'
    TAAC_ESTIMATE_SUBMITTED = 'TAAC_ESTIMATE_SUBMITTED', 'TAAC Estimate Submitted'
    TAAC_ESTIMATE_APPROVED = 'TAAC_ESTIMATE_APPROVED', 'TAAC Estimate Approved'
    TAAC_FINAL_SUBMITTED = 'TAAC_FINAL_SUBMITTED', 'TAAC Final Submitted'
    TAAC_FINAL_APPROVED = 'TAAC_FINAL_APPROVED', 'TAAC Final Approved'
    CANCELLED = 'CANCELLED', 'Cancelled'


class TravelItem(VersionedModel):
    """A trip taken by one or more travellers."""

    fiscal_year = models.ForeignKey(
        'fiscal_years.FiscalYear', on_delete=models.CASCADE, related_name='travel_items'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    emap = models.CharField(max_length=100, blank=True)
    destination = models.CharField(max_length=500, blank=True)
    purpose = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=TravelStatus.choices, default=TravelStatus.PLANNED)
    travel_type = models.CharField(max_length=20, choices=TravelType.choices, default=TravelType.DOMESTIC)
    departure_date = models.DateField(null=True, blank=True)
    return_date = models.DateField(null=True, blank=True)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'travel_items'
        ordering = ['name']
        unique_together = [['fiscal_year', 'name']]

    def __str__(self):
        return self.name


class TravelTraveller(VersionedModel):
    travel_item = models.ForeignKey(TravelItem, on_delete=models.CASCADE, related_name='travellers')
    name = models.CharField(max_length=500)
    taac = models.CharField(max_length=100, blank=True)
    estimated_cost = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    final_cost = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, choices=CurrencyCode.choices, default=DEFAULT_CURRENCY)
    exchange_rate = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True)
    approval_status = models.CharField(
        max_length=30, choices=ApprovalStatus.choices, default=ApprovalStatus.PLANNED
    )

    class Meta:
        db_table = 'travel_travellers'
        ordering = ['name', 'id']

    def __str__(self):
        return self.name


class TravelMoneyAllocation(TimestampedModel):
    """OM amount of one travel item drawn from one money type."""

    travel_item = models.ForeignKey(TravelItem, on_delete=models.CASCADE, related_name='allocations')
    money = models.ForeignKey(
        'fiscal_years.Money', on_delete=models.CASCADE, related_name='travel_allocations'
    )
    om_amount = models.DecimalField(
        max_digits=15, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )

    class Meta:
        db_table = 'travel_money_allocations'
        unique_together = [['travel_item', 'money']]

    def __str__(self):
        return f"{self.travel_item.name} / {self.money.code}"
