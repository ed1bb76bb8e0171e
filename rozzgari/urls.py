from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from core.views import HealthCheckView

schema_view = get_schema_view(
    openapi.Info(
        title="Rozzgari API",
        default_version='v1',
        description="API for the Rozzgari local-services marketplace",
    ),
    public=True,
)

urlpatterns = [
    path('', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('admin/', admin.site.urls),
    path('api/auth/', include('apps.users.auth_urls')),
    path('api/users/', include('apps.users.urls')),
    path('api/services/', include('apps.catalog.urls')),
    path('api/jobs/', include('apps.jobs.urls')),
    path('api/reviews/', include('apps.reviews.urls')),
    path('api/messages/', include('apps.messaging.urls')),
    path('api/health/', HealthCheckView.as_view(), name='health'),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = 'core.handlers.route_not_found'
