from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'procurement'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.ProcurementItemViewSet, basename='procurement-item')

quote_router = DefaultRouter()
quote_router.register(r'', views.ProcurementQuoteViewSet, basename='procurement-quote')

event_router = DefaultRouter()
event_router.register(r'', views.ProcurementEventViewSet, basename='procurement-event')

urlpatterns = [
    # Procurement Item ViewSet routes
    # GET    /procurement-items/?status=&search=&category_id=  - List active items
    # POST   /procurement-items/                               - Create item
    # GET    /procurement-items/{id}/                          - Get item
    # PUT    /procurement-items/{id}/                          - Update item
    # DELETE /procurement-items/{id}/                          - Soft delete with quotes and events
    # PUT    /procurement-items/{id}/status/                   - Validate a status
    # POST   /procurement-items/{id}/toggle-spending-link/     - Link or unlink spending

    # Quotes and quote files
    # GET/POST          /procurement-items/{item_id}/quotes/
    # GET/PUT/DELETE    /procurement-items/{item_id}/quotes/{id}/
    # POST              /procurement-items/{item_id}/quotes/{id}/select/
    # GET/POST          /procurement-items/{item_id}/quotes/{id}/files/
    # GET/PUT/DELETE    /procurement-items/{item_id}/quotes/{id}/files/{file_id}/
    # GET               /procurement-items/{item_id}/quotes/{id}/files/{file_id}/download/
    # GET               /procurement-items/{item_id}/quotes/{id}/files/{file_id}/view/
    path('<int:item_id>/quotes/', include(quote_router.urls)),

    # Events and event files
    # GET/POST          /procurement-items/{item_id}/events/?event_type=
    # GET               /procurement-items/{item_id}/events/count/
    # GET               /procurement-items/{item_id}/events/latest/
    # GET/PUT/DELETE    /procurement-items/{item_id}/events/{id}/
    # GET/POST          /procurement-items/{item_id}/events/{id}/files/
    # GET/PUT/DELETE    /procurement-items/{item_id}/events/{id}/files/{file_id}/
    path('<int:item_id>/events/', include(event_router.urls)),

    # Include router URLs
    path('', include(router.urls)),
]
