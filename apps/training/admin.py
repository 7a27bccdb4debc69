from django.contrib import admin

from .models import TrainingItem, TrainingParticipant, TrainingMoneyAllocation


class TrainingParticipantInline(admin.TabularInline):
    model = TrainingParticipant
    extra = 0
    fields = ['name', 'eco', 'status', 'estimated_cost', 'final_cost']


class TrainingMoneyAllocationInline(admin.TabularInline):
    model = TrainingMoneyAllocation
    extra = 0


@admin.register(TrainingItem)
class TrainingItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'fiscal_year', 'status', 'training_type', 'format', 'start_date']
    list_filter = ['status', 'training_type', 'format']
    search_fields = ['name', 'provider', 'reference_number']
    inlines = [TrainingParticipantInline, TrainingMoneyAllocationInline]
