"""
URL configuration for myRC.

Every domain resource hangs off its Responsibility Centre and Fiscal Year:
    /api/responsibility-centres/{rc_id}/fiscal-years/{fy_id}/<resource>/
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

RC_PREFIX = 'api/responsibility-centres/<int:rc_id>/'
FY_PREFIX = RC_PREFIX + 'fiscal-years/<int:fy_id>/'

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Reference data
    path('api/currencies/', include('apps.currencies.urls')),

    # Responsibility Centres and sharing
    path('api/responsibility-centres/', include('apps.rcs.urls')),
    path(RC_PREFIX + 'audit/', include('apps.audit.urls')),
    path(RC_PREFIX + 'fiscal-years/', include('apps.fiscal_years.urls')),

    # Fiscal year contents
    path(FY_PREFIX + 'funding-items/', include('apps.funding.urls')),
    path(FY_PREFIX + 'spending-items/', include('apps.spending.urls')),
    path(FY_PREFIX + 'procurement-items/', include('apps.procurement.urls')),
    path(FY_PREFIX + 'training-items/', include('apps.training.urls')),
    path(FY_PREFIX + 'travel-items/', include('apps.travel.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
