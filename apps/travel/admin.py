from django.contrib import admin

from .models import TravelItem, TravelTraveller, TravelMoneyAllocation


class TravelTravellerInline(admin.TabularInline):
    model = TravelTraveller
    extra = 0
    fields = ['name', 'taac', 'approval_status', 'estimated_cost', 'final_cost', 'currency']


class TravelMoneyAllocationInline(admin.TabularInline):
    model = TravelMoneyAllocation
    extra = 0


@admin.register(TravelItem)
class TravelItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'fiscal_year', 'status', 'travel_type', 'destination', 'departure_date']
    list_filter = ['status', 'travel_type']
    search_fields = ['name', 'emap', 'destination']
    inlines = [TravelTravellerInline, TravelMoneyAllocationInline]
