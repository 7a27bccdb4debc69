from django.contrib import admin

from .models import FundingItem, MoneyAllocation


class MoneyAllocationInline(admin.TabularInline):
    model = MoneyAllocation
    extra = 0


@admin.register(FundingItem)
class FundingItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'fiscal_year', 'source', 'category', 'currency', 'active']
    list_filter = ['source', 'currency', 'active']
    search_fields = ['name', 'description']
    inlines = [MoneyAllocationInline]
