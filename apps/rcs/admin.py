from django.contrib import admin
from .models import ResponsibilityCentre, RCAccess


class RCAccessInline(admin.TabularInline):
    model = RCAccess
    fk_name = 'responsibility_centre'
    extra = 0
    fields = ['principal_type', 'principal_identifier', 'principal_display_name', 'access_level', 'granted_by']
    raw_id_fields = ['granted_by']


@admin.register(ResponsibilityCentre)
class ResponsibilityCentreAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'active', 'created_at']
    list_filter = ['active']
    search_fields = ['name', 'description', 'owner__username']
    raw_id_fields = ['owner']
    inlines = [RCAccessInline]


@admin.register(RCAccess)
class RCAccessAdmin(admin.ModelAdmin):
    list_display = ['responsibility_centre', 'principal_type', 'principal_identifier', 'access_level', 'granted_at']
    list_filter = ['principal_type', 'access_level']
    search_fields = ['principal_identifier', 'principal_display_name', 'responsibility_centre__name']
    raw_id_fields = ['responsibility_centre', 'user', 'granted_by']
