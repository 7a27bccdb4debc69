from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.models import TimestampedModel, VersionedModel, StoredFile
from apps.currencies.constants import CurrencyCode, DEFAULT_CURRENCY


class ProcurementStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    PENDING_QUOTES = 'PENDING_QUOTES', 'Pending Quotes'
    QUOTES_RECEIVED = 'QUOTES_RECEIVED', 'Quotes Received'
    UNDER_REVIEW = 'UNDER_REVIEW', 'Under Review'
    APPROVED = 'APPROVED', 'Approved'
    PO_ISSUED = 'PO_ISSUED', 'PO Issued'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class TrackingStatus(models.TextChoices):
    PLANNING = 'PLANNING', 'Planning'
    ON_TRACK = 'ON_TRACK', 'On Track'
    AT_RISK = 'AT_RISK', 'At Risk'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class ProcurementType(models.TextChoices):
    RC_INITIATED = 'RC_INITIATED', 'RC Initiated'
    CENTRALLY_MANAGED = 'CENTRALLY_MANAGED', 'Centrally Managed'


def _money_field(**kwargs):
    return models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True, **kwargs)


def _rate_field():
    return models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True)


def _currency_field():
    return models.CharField(max_length=3, choices=CurrencyCode.choices, default=DEFAULT_CURRENCY)


class ProcurementItem(VersionedModel):
    """
    A purchase being procured within a fiscal year.

    The workflow status is not stored here; it is the new_status of the most
    recent event that carries one.
    """

    fiscal_year = models.ForeignKey(
        'fiscal_years.FiscalYear', on_delete=models.CASCADE, related_name='procurement_items'
    )
    purchase_requisition = models.CharField(max_length=100, blank=True)
    purchase_order = models.CharField(max_length=100, blank=True)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    vendor = models.CharField(max_length=200, blank=True)
    contract_number = models.CharField(max_length=100, blank=True)
    contract_start_date = models.DateField(null=True, blank=True)
    contract_end_date = models.DateField(null=True, blank=True)
    procurement_completed = models.BooleanField(default=False)
    procurement_completed_date = models.DateField(null=True, blank=True)

    final_price = _money_field()
    final_price_currency = _currency_field()
    final_price_exchange_rate = _rate_field()
    final_price_cad = _money_field()
    quoted_price = _money_field()
    quoted_price_currency = _currency_field()
    quoted_price_exchange_rate = _rate_field()
    quoted_price_cad = _money_field()

    tracking_status = models.CharField(
        max_length=20, choices=TrackingStatus.choices, default=TrackingStatus.ON_TRACK
    )
    procurement_type = models.CharField(
        max_length=20, choices=ProcurementType.choices, default=ProcurementType.RC_INITIATED
    )
    category = models.ForeignKey(
        'fiscal_years.Category',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='procurement_items',
    )
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'procurement_items'
        ordering = ['name']
        indexes = [
            models.Index(fields=['fiscal_year', 'purchase_requisition'], name='proc_item_fy_pr_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def current_status(self):
        """new_status of the latest active event that has one, else DRAFT."""
        event = (
            self.events.filter(active=True)
            .exclude(new_status='')
            .order_by('-event_date', '-created_at', '-id')
            .first()
        )
        return event.new_status if event else ProcurementStatus.DRAFT


class QuoteStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    UNDER_REVIEW = 'UNDER_REVIEW', 'Under Review'
    SELECTED = 'SELECTED', 'Selected'
    REJECTED = 'REJECTED', 'Rejected'


class ProcurementQuote(TimestampedModel):
    """Vendor quote received for a procurement item."""

    procurement_item = models.ForeignKey(ProcurementItem, on_delete=models.CASCADE, related_name='quotes')
    vendor_name = models.CharField(max_length=200)
    vendor_contact = models.CharField(max_length=200, blank=True)
    quote_reference = models.CharField(max_length=100, blank=True)
    amount = _money_field()
    amount_cap = _money_field()
    amount_om = _money_field()
    currency = _currency_field()
    exchange_rate = _rate_field()
    amount_cap_cad = _money_field()
    amount_om_cad = _money_field()
    received_date = models.DateField(null=True, blank=True)
    expiry_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=QuoteStatus.choices, default=QuoteStatus.PENDING)
    selected = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    modified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'procurement_quotes'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.vendor_name} ({self.procurement_item.name})"


class ProcurementQuoteFile(StoredFile):
    quote = models.ForeignKey(ProcurementQuote, on_delete=models.CASCADE, related_name='files')

    class Meta(StoredFile.Meta):
        db_table = 'procurement_quote_files'


class ProcurementEventType(models.TextChoices):
    NOT_STARTED = 'NOT_STARTED', 'Not Started'
    QUOTE = 'QUOTE', 'Quote'
    SAM_ACKNOWLEDGEMENT_REQUESTED = 'SAM_ACKNOWLEDGEMENT_REQUESTED', 'SAM Acknowledgement Requested'
    SAM_ACKNOWLEDGEMENT_RECEIVED = 'SAM_ACKNOWLEDGEMENT_RECEIVED', 'SAM Acknowledgement Received'
    PACKAGE_SENT_TO_PROCUREMENT = 'PACKAGE_SENT_TO_PROCUREMENT', 'Package Sent to Procurement'
    ACKNOWLEDGED_BY_PROCUREMENT = 'ACKNOWLEDGED_BY_PROCUREMENT', 'Acknowledged by Procurement'
    PAUSED = 'PAUSED', 'Paused'
    CANCELLED = 'CANCELLED', 'Cancelled'
    CONTRACT_AWARDED = 'CONTRACT_AWARDED', 'Contract Awarded'
    GOODS_RECEIVED = 'GOODS_RECEIVED', 'Goods Received'
    FULL_INVOICE_RECEIVED = 'FULL_INVOICE_RECEIVED', 'Full Invoice Received'
    PARTIAL_INVOICE_RECEIVED = 'PARTIAL_INVOICE_RECEIVED', 'Partial Invoice Received'
    MONTHLY_INVOICE_RECEIVED = 'MONTHLY_INVOICE_RECEIVED', 'Monthly Invoice Received'
    FULL_INVOICE_SIGNED = 'FULL_INVOICE_SIGNED', 'Full Invoice Signed'
    PARTIAL_INVOICE_SIGNED = 'PARTIAL_INVOICE_SIGNED', 'Partial Invoice Signed'
    MONTHLY_INVOICE_SIGNED = 'MONTHLY_INVOICE_SIGNED', 'Monthly Invoice Signed'
    CONTRACT_AMENDED = 'CONTRACT_AMENDED', 'Contract Amended'


class ProcurementEvent(TimestampedModel):
    """Timeline entry of a procurement item."""

    procurement_item = models.ForeignKey(ProcurementItem, on_delete=models.CASCADE, related_name='events')
    event_type = models.CharField(
        max_length=40, choices=ProcurementEventType.choices, default=ProcurementEventType.NOT_STARTED
    )
    event_date = models.DateField(default=timezone.localdate)
    comment = models.TextField(blank=True)
    old_status = models.CharField(max_length=20, choices=ProcurementStatus.choices, blank=True)
    new_status = models.CharField(max_length=20, choices=ProcurementStatus.choices, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'procurement_events'
        ordering = ['-event_date', '-created_at']

    def __str__(self):
        return f"{self.event_type} ({self.event_date})"


class ProcurementEventFile(StoredFile):
    event = models.ForeignKey(ProcurementEvent, on_delete=models.CASCADE, related_name='files')

    class Meta(StoredFile.Meta):
        db_table = 'procurement_event_files'
