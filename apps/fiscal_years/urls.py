from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'fiscal_years'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.FiscalYearViewSet, basename='fiscal-year')

money_router = DefaultRouter()
money_router.register(r'', views.MoneyViewSet, basename='money')

category_router = DefaultRouter()
category_router.register(r'', views.CategoryViewSet, basename='category')

urlpatterns = [
    # Fiscal Year ViewSet routes
    # GET    /fiscal-years/                        - List fiscal years
    # POST   /fiscal-years/                        - Create fiscal year
    # GET    /fiscal-years/{id}/                   - Get fiscal year
    # PUT    /fiscal-years/{id}/                   - Update fiscal year
    # DELETE /fiscal-years/{id}/                   - Delete fiscal year
    # PUT    /fiscal-years/{id}/display-settings/  - Display settings (owner)
    # POST   /fiscal-years/{id}/toggle-active/     - Toggle active (owner)
    # POST   /fiscal-years/{id}/clone/             - Clone within the RC
    # POST   /fiscal-years/{id}/clone-to-rc/       - Clone into another RC
    # GET    /fiscal-years/{id}/export/            - Export as JSON
    # POST   /fiscal-years/import/                 - Import an export

    # Money types
    # GET/POST          /fiscal-years/{fy_id}/monies/
    # GET/PUT/DELETE    /fiscal-years/{fy_id}/monies/{id}/
    # PUT               /fiscal-years/{fy_id}/monies/reorder/
    path('<int:fy_id>/monies/', include(money_router.urls)),

    # Categories
    # GET/POST          /fiscal-years/{fy_id}/categories/
    # GET/PUT/DELETE    /fiscal-years/{fy_id}/categories/{id}/
    # PUT               /fiscal-years/{fy_id}/categories/reorder/
    # POST              /fiscal-years/{fy_id}/categories/ensure-defaults/
    path('<int:fy_id>/categories/', include(category_router.urls)),

    # Include router URLs
    path('', include(router.urls)),
]
