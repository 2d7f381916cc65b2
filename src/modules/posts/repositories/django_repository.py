"""Django ORM implementation of the Post repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import models, transaction

from modules.posts.models import Post, PostComment
from modules.posts.repositories.interfaces import IPostRepository

logger = structlog.get_logger(__name__)


class PostDjangoRepository(IPostRepository):
    """Concrete Post repository backed by Django ORM.

    Look-ups return ``None`` / ``False`` for missing or non-integer ids.
    """

    def get_by_id(self, id: int) -> Optional[Post]:
        try:
            return Post.objects.prefetch_related("comments").filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Post]":
        queryset = Post.objects.prefetch_related("comments")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Post) -> Post:
        is_new = entity._state.adding
        entity.save()
        logger.info("post.saved", post_id=entity.pk, is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        try:
            deleted, _ = Post.objects.filter(id=id).delete()
        except (TypeError, ValueError):
            return False
        return bool(deleted)

    def list_comments(self, post_id: int) -> List[PostComment]:
        return list(PostComment.objects.filter(post_id=post_id))

    @transaction.atomic
    def add_comment(self, post: Post, review: str) -> PostComment:
        comment = PostComment.objects.create(post=post, review=review)
        logger.info("post.comment_added", post_id=post.pk, comment_id=comment.pk)
        return comment

    @transaction.atomic
    def delete_comment(self, post_id: int, comment_id: int) -> bool:
        try:
            deleted, _ = PostComment.objects.filter(
                post_id=post_id, id=comment_id
            ).delete()
        except (TypeError, ValueError):
            return False
        return bool(deleted)
