from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'travel'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.TravelItemViewSet, basename='travel-item')

urlpatterns = [
    # Travel Item ViewSet routes
    # GET    /travel-items/                                 - List travel items
    # POST   /travel-items/                                 - Create travel item
    # GET    /travel-items/{id}/                            - Get travel item
    # PUT    /travel-items/{id}/                            - Update travel item
    # DELETE /travel-items/{id}/                            - Delete travel item
    # PUT    /travel-items/{id}/status/                     - Update status
    # GET    /travel-items/{id}/allocations/                - OM allocations
    # PUT    /travel-items/{id}/allocations/                - Replace OM allocations
    # GET    /travel-items/{id}/travellers/                 - List travellers
    # POST   /travel-items/{id}/travellers/                 - Add traveller
    # PUT    /travel-items/{id}/travellers/{traveller_id}/  - Update traveller
    # DELETE /travel-items/{id}/travellers/{traveller_id}/  - Remove traveller

    # Include router URLs
    path('', include(router.urls)),
]
