from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'training'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.TrainingItemViewSet, basename='training-item')

urlpatterns = [
    # Training Item ViewSet routes
    # GET    /training-items/                                   - List training items
    # POST   /training-items/                                   - Create training item
    # GET    /training-items/{id}/                              - Get training item
    # PUT    /training-items/{id}/                              - Update training item
    # DELETE /training-items/{id}/                              - Delete training item
    # PUT    /training-items/{id}/status/                       - Update status
    # GET    /training-items/{id}/allocations/                  - OM allocations
    # PUT    /training-items/{id}/allocations/                  - Replace OM allocations
    # GET    /training-items/{id}/participants/                 - List participants
    # POST   /training-items/{id}/participants/                 - Add participant
    # PUT    /training-items/{id}/participants/{participant_id}/ - Update participant
    # DELETE /training-items/{id}/participants/{participant_id}/ - Remove participant

    # Include router URLs
    path('', include(router.urls)),
]
