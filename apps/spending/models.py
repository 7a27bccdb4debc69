from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.core.models import TimestampedModel, VersionedModel, StoredFile
from apps.currencies.constants import CurrencyCode, DEFAULT_CURRENCY


class SpendingStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    PENDING = 'PENDING', 'Pending'
    APPROVED = 'APPROVED', 'Approved'
    COMMITTED = 'COMMITTED', 'Committed'
    PAID = 'PAID', 'Paid'
    CANCELLED = 'CANCELLED', 'Cancelled'


class SpendingItem(VersionedModel):
    """Money spent, or about to be spent, within a fiscal year."""

    fiscal_year = models.ForeignKey(
        'fiscal_years.FiscalYear', on_delete=models.CASCADE, related_name='spending_items'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    vendor = models.CharField(max_length=200, blank=True)
    reference_number = models.CharField(max_length=100, blank=True)
    amount = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    eco_amount = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    status = models.CharField(max_length=20, choices=SpendingStatus.choices, default=SpendingStatus.DRAFT)
    currency = models.CharField(max_length=3, choices=CurrencyCode.choices, default=DEFAULT_CURRENCY)
    exchange_rate = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True)
    category = models.ForeignKey(
        'fiscal_years.Category',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='spending_items',
    )
    procurement_item = models.ForeignKey(
        'procurement.ProcurementItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='spending_items',
    )
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'spending_items'
        ordering = ['name']

    def __str__(self):
        return self.name


class SpendingMoneyAllocation(TimestampedModel):
    """CAP / OM amounts of one spending item drawn from one money type."""

    spending_item = models.ForeignKey(SpendingItem, on_delete=models.CASCADE, related_name='allocations')
    money = models.ForeignKey(
        'fiscal_years.Money', on_delete=models.CASCADE, related_name='spending_allocations'
    )
    cap_amount = models.DecimalField(
        max_digits=15, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    om_amount = models.DecimalField(
        max_digits=15, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )

    class Meta:
        db_table = 'spending_money_allocations'
        unique_together = [['spending_item', 'money']]

    def __str__(self):
        return f"{self.spending_item.name} / {self.money.code}"


class SpendingEventType(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ECO_REQUESTED = 'ECO_REQUESTED', 'ECO Requested'
    ECO_RECEIVED = 'ECO_RECEIVED', 'ECO Received'
    EXTERNAL_APPROVAL_REQUESTED = 'EXTERNAL_APPROVAL_REQUESTED', 'External Approval Requested'
    EXTERNAL_APPROVAL_RECEIVED = 'EXTERNAL_APPROVAL_RECEIVED', 'External Approval Received'
    SECTION_32_PROVIDED = 'SECTION_32_PROVIDED', 'Section 32 Provided'
    RECEIVED_GOODS_SERVICES = 'RECEIVED_GOODS_SERVICES', 'Received Goods/Services'
    SECTION_34_PROVIDED = 'SECTION_34_PROVIDED', 'Section 34 Provided'
    CREDIT_CARD_CLEARED = 'CREDIT_CARD_CLEARED', 'Credit Card Cleared'
    CANCELLED = 'CANCELLED', 'Cancelled'
    ON_HOLD = 'ON_HOLD', 'On Hold'


class SpendingEvent(TimestampedModel):
    """Timeline entry of a spending item."""

    spending_item = models.ForeignKey(SpendingItem, on_delete=models.CASCADE, related_name='events')
    event_type = models.CharField(
        max_length=40, choices=SpendingEventType.choices, default=SpendingEventType.PENDING
    )
    event_date = models.DateField(default=timezone.localdate)
    comment = models.TextField(blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'spending_events'
        ordering = ['-event_date', '-created_at']

    def __str__(self):
        return f"{self.event_type} ({self.event_date})"


class SpendingInvoice(TimestampedModel):
    """Invoice received against a spending item."""

    spending_item = models.ForeignKey(SpendingItem, on_delete=models.CASCADE, related_name='invoices')
    invoice_number = models.CharField(max_length=100, blank=True)
    date_received = models.DateField(null=True, blank=True)
    date_processed = models.DateField(null=True, blank=True)
    comment = models.TextField(blank=True)
    amount = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, choices=CurrencyCode.choices, default=DEFAULT_CURRENCY)
    exchange_rate = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True)
    amount_cad = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    modified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'spending_invoices'
        ordering = ['-date_received', '-created_at']

    def __str__(self):
        return self.invoice_number or f"Invoice {self.pk}"


class SpendingInvoiceFile(StoredFile):
    invoice = models.ForeignKey(SpendingInvoice, on_delete=models.CASCADE, related_name='files')

    class Meta(StoredFile.Meta):
        db_table = 'spending_invoice_files'
