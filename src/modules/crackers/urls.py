"""Cracker URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.crackers.views import CrackerViewSet

router = SimpleRouter(trailing_slash=False)
router.register("crackers", CrackerViewSet, basename="cracker")

urlpatterns = router.urls
