from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import TimestampedModel, VersionedModel
from apps.currencies.constants import CurrencyCode, DEFAULT_CURRENCY


class TrainingStatus(models.TextChoices):
    PLANNED = 'PLANNED', 'Planned'
    APPROVED = 'APPROVED', 'Approved'
    IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class TrainingType(models.TextChoices):
    COURSE_TRAINING = 'COURSE_TRAINING', 'Course / Training'
    CONFERENCE_REGISTRATION = 'CONFERENCE_REGISTRATION', 'Conference Registration'
    OTHER = 'OTHER', 'Other'


class TrainingFormat(models.TextChoices):
    IN_PERSON = 'IN_PERSON', 'In Person'
    ONLINE = 'ONLINE', 'Online'


class ParticipantStatus(models.TextChoices):
    PLANNED = 'PLANNED', 'Planned'
    ECO_CREATED = 'ECO_CREATED', 'ECO Created'
    REGISTERED = 'REGISTERED', 'Registered'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class TrainingItem(VersionedModel):
    """A course or conference attended by one or more participants."""

    fiscal_year = models.ForeignKey(
        'fiscal_years.FiscalYear', on_delete=models.CASCADE, related_name='training_items'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    provider = models.CharField(max_length=200, blank=True)
    reference_number = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=20, choices=TrainingStatus.choices, default=TrainingStatus.PLANNED)
    training_type = models.CharField(max_length=30, choices=TrainingType.choices, default=TrainingType.OTHER)
    format = models.CharField(max_length=20, choices=TrainingFormat.choices, default=TrainingFormat.IN_PERSON)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    location = models.CharField(max_length=500, blank=True)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'training_items'
        ordering = ['name']
        unique_together = [['fiscal_year', 'name']]

    def __str__(self):
        return self.name


class TrainingParticipant(VersionedModel):
    """Employee attending a training item; estimated and final costs carry their own currency."""

    training_item = models.ForeignKey(TrainingItem, on_delete=models.CASCADE, related_name='participants')
    name = models.CharField(max_length=500)
    eco = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=20, choices=ParticipantStatus.choices, default=ParticipantStatus.PLANNED)
    estimated_cost = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    estimated_currency = models.CharField(max_length=3, choices=CurrencyCode.choices, default=DEFAULT_CURRENCY)
    estimated_exchange_rate = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True)
    final_cost = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    final_currency = models.CharField(max_length=3, choices=CurrencyCode.choices, default=DEFAULT_CURRENCY)
    final_exchange_rate = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True)

    class Meta:
        db_table = 'training_participants'
        ordering = ['name', 'id']

    def __str__(self):
        return self.name


class TrainingMoneyAllocation(TimestampedModel):
    """OM amount of one training item drawn from one money type."""

    training_item = models.ForeignKey(TrainingItem, on_delete=models.CASCADE, related_name='allocations')
    money = models.ForeignKey(
        'fiscal_years.Money', on_delete=models.CASCADE, related_name='training_allocations'
    )
    om_amount = models.DecimalField(
        max_digits=15, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )

    class Meta:
        db_table = 'training_money_allocations'
        unique_together = [['training_item', 'money']]

    def __str__(self):
        return f"{self.training_item.name} / {self.money.code}"
