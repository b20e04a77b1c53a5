"""
URL configuration for Resolver API tests.

Used as ROOT_URLCONF in test settings via @pytest.mark.urls.
"""

from django.urls import include, path

urlpatterns = [
    path("api/resolver/", include("resolver.api.urls")),
]
