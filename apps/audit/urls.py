from django.urls import path
from . import views

app_name = 'audit'

urlpatterns = [
    # GET /api/responsibility-centres/{rc_id}/audit/                       - RC audit history
    # GET /api/responsibility-centres/{rc_id}/audit/fiscal-years/{fy_id}/  - FY audit history
    path('', views.rc_audit_events, name='rc-events'),
    path('fiscal-years/<int:fy_id>/', views.fiscal_year_audit_events, name='fiscal-year-events'),
]
