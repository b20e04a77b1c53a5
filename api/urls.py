"""
Resolver API URLs.

Include this in your project's urlpatterns:

    path('api/resolver/', include('resolver.api.urls')),
"""

from rest_framework.routers import DefaultRouter

from .views import BomEntryViewSet, OrderViewSet, TransformationViewSet

router = DefaultRouter()
router.register("transformations", TransformationViewSet)
router.register("orders", OrderViewSet)
router.register("bom-entries", BomEntryViewSet)

urlpatterns = router.urls
