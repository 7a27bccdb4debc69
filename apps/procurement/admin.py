from django.contrib import admin

from .models import ProcurementItem, ProcurementQuote, ProcurementEvent


class ProcurementQuoteInline(admin.TabularInline):
    model = ProcurementQuote
    extra = 0
    fields = ['vendor_name', 'amount', 'currency', 'status', 'selected', 'active']


class ProcurementEventInline(admin.TabularInline):
    model = ProcurementEvent
    extra = 0
    fields = ['event_type', 'event_date', 'old_status', 'new_status', 'active']


@admin.register(ProcurementItem)
class ProcurementItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'fiscal_year', 'purchase_requisition', 'purchase_order', 'tracking_status', 'active']
    list_filter = ['tracking_status', 'procurement_type', 'active']
    search_fields = ['name', 'purchase_requisition', 'purchase_order', 'vendor']
    inlines = [ProcurementQuoteInline, ProcurementEventInline]
