from django.contrib import admin

from .models import FiscalYear, Money, Category


class MoneyInline(admin.TabularInline):
    model = Money
    extra = 0
    fields = ['code', 'name', 'is_default', 'display_order', 'active']


class CategoryInline(admin.TabularInline):
    model = Category
    extra = 0
    fields = ['name', 'funding_type', 'is_default', 'display_order', 'active']


@admin.register(FiscalYear)
class FiscalYearAdmin(admin.ModelAdmin):
    list_display = ['name', 'responsibility_centre', 'active', 'group_by_category', 'updated_at']
    list_filter = ['active']
    search_fields = ['name', 'responsibility_centre__name']
    readonly_fields = ['version', 'created_at', 'updated_at']
    inlines = [MoneyInline, CategoryInline]
