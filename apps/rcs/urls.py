from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'rcs'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.ResponsibilityCentreViewSet, basename='rc')

urlpatterns = [
    # Responsibility Centre ViewSet routes
    # GET    /api/responsibility-centres/              - List visible RCs
    # POST   /api/responsibility-centres/              - Create RC
    # GET    /api/responsibility-centres/{id}/         - Get RC
    # PUT    /api/responsibility-centres/{id}/         - Update RC (owner)
    # PATCH  /api/responsibility-centres/{id}/         - Partial update (owner)
    # DELETE /api/responsibility-centres/{id}/         - Delete RC (owner)
    # POST   /api/responsibility-centres/{id}/clone/   - Deep clone

    # Sharing
    path('<int:rc_id>/access/', views.access_list, name='access-list'),
    path('<int:rc_id>/access/me/', views.my_access, name='access-me'),
    path('<int:rc_id>/access/users/', views.grant_user, name='access-grant-user'),
    path('<int:rc_id>/access/groups/', views.grant_group, name='access-grant-group'),
    path('<int:rc_id>/access/<int:access_id>/', views.access_detail, name='access-detail'),

    # Include router URLs
    path('', include(router.urls)),
]
