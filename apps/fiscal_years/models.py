from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

from apps.core.models import VersionedModel

ON_TARGET_LIMIT = 100


class FiscalYear(VersionedModel):
    """Budgeting period of a Responsibility Centre."""

    responsibility_centre = models.ForeignKey(
        'rcs.ResponsibilityCentre', on_delete=models.CASCADE, related_name='fiscal_years'
    )
    name = models.CharField(max_length=50)
    description = models.CharField(max_length=500, blank=True)
    active = models.BooleanField(default=True)

    # Display settings
    show_search_box = models.BooleanField(default=True)
    show_category_filter = models.BooleanField(default=True)
    group_by_category = models.BooleanField(default=False)
    on_target_min = models.IntegerField(
        default=-2,
        validators=[MinValueValidator(-ON_TARGET_LIMIT), MaxValueValidator(ON_TARGET_LIMIT)],
    )
    on_target_max = models.IntegerField(
        default=2,
        validators=[MinValueValidator(-ON_TARGET_LIMIT), MaxValueValidator(ON_TARGET_LIMIT)],
    )

    class Meta:
        db_table = 'fiscal_years'
        unique_together = [['responsibility_centre', 'name']]
        ordering = ['name']

    def __str__(self):
        return f"{self.responsibility_centre.name} / {self.name}"


class Money(VersionedModel):
    """Funding envelope within a fiscal year, split into CAP and OM amounts."""

    DEFAULT_CODE = 'AB'

    fiscal_year = models.ForeignKey(FiscalYear, on_delete=models.CASCADE, related_name='monies')
    code = models.CharField(max_length=10)
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)
    is_default = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'monies'
        unique_together = [['fiscal_year', 'code']]
        ordering = ['display_order', 'code']

    def __str__(self):
        return f"{self.code} - {self.name}"


class FundingType(models.TextChoices):
    CAP_ONLY = 'CAP_ONLY', 'Capital only'
    OM_ONLY = 'OM_ONLY', 'O&M only'
    BOTH = 'BOTH', 'Capital and O&M'


class Category(VersionedModel):
    """Grouping for funding, spending and procurement items."""

    fiscal_year = models.ForeignKey(FiscalYear, on_delete=models.CASCADE, related_name='categories')
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)
    is_default = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)
    funding_type = models.CharField(
        max_length=10, choices=FundingType.choices, default=FundingType.BOTH
    )
    translation_key = models.CharField(max_length=100, blank=True)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = 'categories'
        unique_together = [['fiscal_year', 'name']]
        ordering = ['display_order', 'name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name

    @property
    def allows_cap(self):
        return self.funding_type in (FundingType.CAP_ONLY, FundingType.BOTH)

    @property
    def allows_om(self):
        return self.funding_type in (FundingType.OM_ONLY, FundingType.BOTH)
