"""
URL configuration for the weather dashboard project.

Routes:
- GET / -> home
- /weather/embed/ -> dashboard HTML fragment
- /api/v1/weather-dashboard/data/ -> refresh endpoint
- /metrics -> Prometheus metrics (django_prometheus)
- /api/schema/ -> OpenAPI schema
- /api/docs/ -> Swagger UI
- /api/redoc/ -> ReDoc
"""

from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from .views import home

urlpatterns = [
    path("", home, name="home"),
    path("", include("django_prometheus.urls")),
    path("", include("weather_dashboard.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path(
        "api/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
