"""Post service layer (Use Cases).

Posts and their comments are plain CRUD; the only rule is that a comment
is always addressed through the post it belongs to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import structlog
from django.db import transaction

from modules.posts.exceptions import PostCommentNotFound, PostNotFound
from modules.posts.models import Post

if TYPE_CHECKING:
    from modules.posts.dtos import CreateCommentDTO, CreatePostDTO, UpdatePostDTO
    from modules.posts.models import PostComment
    from modules.posts.repositories.interfaces import IPostRepository

logger = structlog.get_logger(__name__)


class PostService:
    """Application service for Post use-cases.

    Receives an ``IPostRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IPostRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def list_posts(self, filters: Optional[Dict[str, Any]] = None) -> Iterable[Post]:
        return self._repo.list(filters)

    def get_post(self, id: int) -> Post:
        """Raises:
        PostNotFound: if the post does not exist.
        """
        post = self._repo.get_by_id(id)
        if not post:
            raise PostNotFound(f"Post {id} not found.")
        return post

    @transaction.atomic
    def create_post(self, dto: CreatePostDTO) -> Post:
        post = self._repo.save(Post(title=dto.title, content=dto.content))
        logger.info("post.created", post_id=post.pk)
        return post

    @transaction.atomic
    def update_post(self, id: int, dto: UpdatePostDTO) -> Post:
        post = self.get_post(id)
        for field in ("title", "content"):
            value = getattr(dto, field)
            if value is not None:
                setattr(post, field, value)
        post = self._repo.save(post)
        logger.info("post.updated", post_id=post.pk)
        return post

    @transaction.atomic
    def delete_post(self, id: int) -> None:
        """Delete a post together with its comments."""
        post = self.get_post(id)
        self._repo.delete(post.pk)
        logger.info("post.deleted", post_id=post.pk)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def list_comments(self, post_id: int) -> List[PostComment]:
        post = self.get_post(post_id)
        return self._repo.list_comments(post.pk)

    @transaction.atomic
    def add_comment(self, post_id: int, dto: CreateCommentDTO) -> PostComment:
        post = self.get_post(post_id)
        return self._repo.add_comment(post, dto.review)

    @transaction.atomic
    def delete_comment(self, post_id: int, comment_id: int) -> None:
        """Raises:
        PostNotFound: the post does not exist.
        PostCommentNotFound: the comment does not exist on this post.
        """
        post = self.get_post(post_id)
        if not self._repo.delete_comment(post.pk, comment_id):
            raise PostCommentNotFound(
                f"Comment {comment_id} not found on post {post.pk}."
            )
        logger.info("post.comment_deleted", post_id=post.pk, comment_id=comment_id)
