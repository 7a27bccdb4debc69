from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'funding'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.FundingItemViewSet, basename='funding-item')

urlpatterns = [
    # Funding Item ViewSet routes
    # GET    /funding-items/?category_id=   - List funding items
    # POST   /funding-items/                - Create funding item
    # GET    /funding-items/{id}/           - Get funding item
    # PUT    /funding-items/{id}/           - Update funding item
    # DELETE /funding-items/{id}/           - Delete funding item

    # Include router URLs
    path('', include(router.urls)),
]
