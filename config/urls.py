"""
URL configuration for academy-back project
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from django.views.generic import RedirectView
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)

from attendance.urls import report_urlpatterns
from classes.urls import class_urlpatterns, court_urlpatterns, schedule_urlpatterns, session_urlpatterns


@require_http_methods(["GET"])
def health_view(request):
    """Health check: process up and database reachable. No auth required."""
    from django.db import connection
    try:
        connection.ensure_connection()
        db_state = 'ok'
    except Exception as e:
        db_state = f'error: {str(e)[:80]}'
    code = 200 if db_state == 'ok' else 503
    return JsonResponse({'status': 'ok' if code == 200 else 'degraded', 'db': db_state, 'service': 'academy-back'}, status=code)


@require_http_methods(["GET"])
def api_root(request):
    """Root endpoint - API information"""
    return JsonResponse({
        'name': 'Academy Management API',
        'version': '1.0.0',
        'endpoints': {
            'health': '/api/health/',
            'auth': '/api/auth/',
            'students': '/api/students/',
            'coaches': '/api/coaches/',
            'courts': '/api/courts/',
            'classes': '/api/classes/',
            'sessions': '/api/sessions/',
            'attendance': '/api/attendance/',
            'reports': '/api/reports/',
            'docs': '/api/docs/',
            'schema': '/api/schema/',
        }
    })


urlpatterns = [
    path('', api_root, name='api-root'),
    path('admin', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api/', api_root),
    path('api/health/', health_view, name='api-health'),

    # API Schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # API endpoints
    path('api/auth/', include('accounts.urls')),
    path('api/students/', include('students.urls')),
    path('api/coaches/', include('coaches.urls')),
    path('api/courts/', include((court_urlpatterns, 'courts'))),
    path('api/classes/', include((class_urlpatterns, 'classes'))),
    path('api/sessions/', include((session_urlpatterns, 'sessions'))),
    path('api/attendance/', include('attendance.urls')),
    path('api/reports/', include((report_urlpatterns, 'reports'))),
    path('api/schedule/', include((schedule_urlpatterns, 'schedule'))),
    path('api/notifications/', include('notifications.urls')),
]
