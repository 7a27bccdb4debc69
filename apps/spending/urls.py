from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'spending'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.SpendingItemViewSet, basename='spending-item')

event_router = DefaultRouter()
event_router.register(r'', views.SpendingEventViewSet, basename='spending-event')

invoice_router = DefaultRouter()
invoice_router.register(r'', views.SpendingInvoiceViewSet, basename='spending-invoice')

urlpatterns = [
    # Spending Item ViewSet routes
    # GET    /spending-items/?category_id=        - List active spending items
    # POST   /spending-items/                     - Create spending item
    # GET    /spending-items/{id}/                - Get spending item
    # PUT    /spending-items/{id}/                - Update spending item
    # DELETE /spending-items/{id}/                - Soft delete
    # PUT    /spending-items/{id}/status/         - Update status
    # GET    /spending-items/{id}/allocations/    - Money allocations
    # PUT    /spending-items/{id}/allocations/    - Replace money allocations

    # Events
    # GET/POST          /spending-items/{item_id}/events/
    # GET               /spending-items/{item_id}/events/count/
    # GET               /spending-items/{item_id}/events/latest/
    # GET/PUT/DELETE    /spending-items/{item_id}/events/{id}/
    path('<int:item_id>/events/', include(event_router.urls)),

    # Invoices and invoice files
    # GET/POST          /spending-items/{item_id}/invoices/
    # GET/PUT/DELETE    /spending-items/{item_id}/invoices/{id}/
    # GET/POST          /spending-items/{item_id}/invoices/{id}/files/
    # GET/PUT/DELETE    /spending-items/{item_id}/invoices/{id}/files/{file_id}/
    # GET               /spending-items/{item_id}/invoices/{id}/files/{file_id}/download/
    # GET               /spending-items/{item_id}/invoices/{id}/files/{file_id}/view/
    path('<int:item_id>/invoices/', include(invoice_router.urls)),

    # Include router URLs
    path('', include(router.urls)),
]
