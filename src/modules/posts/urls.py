"""Post URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.posts.views import PostViewSet

router = DefaultRouter(trailing_slash=True)
router.register("posts", PostViewSet, basename="post")

urlpatterns = router.urls
