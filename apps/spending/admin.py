from django.contrib import admin

from .models import SpendingItem, SpendingMoneyAllocation, SpendingEvent, SpendingInvoice


class SpendingMoneyAllocationInline(admin.TabularInline):
    model = SpendingMoneyAllocation
    extra = 0


class SpendingEventInline(admin.TabularInline):
    model = SpendingEvent
    extra = 0
    fields = ['event_type', 'event_date', 'comment', 'active']


@admin.register(SpendingItem)
class SpendingItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'fiscal_year', 'status', 'vendor', 'amount', 'currency', 'active']
    list_filter = ['status', 'currency', 'active']
    search_fields = ['name', 'vendor', 'reference_number']
    inlines = [SpendingMoneyAllocationInline, SpendingEventInline]


@admin.register(SpendingInvoice)
class SpendingInvoiceAdmin(admin.ModelAdmin):
    list_display = ['invoice_number', 'spending_item', 'amount', 'currency', 'amount_cad', 'active']
    list_filter = ['currency', 'active']
    search_fields = ['invoice_number', 'spending_item__name']
