"""Post repository interface.

Extends ``IRepository[Post]`` with the comment operations; comments are
only ever reached through their post.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.posts.models import Post, PostComment


class IPostRepository(IRepository["Post"]):
    @abstractmethod
    def save(self, entity: Post) -> Post:
        """Insert or update the post row."""

    @abstractmethod
    def list_comments(self, post_id: int) -> List[PostComment]:
        """Comments on the post, oldest first."""

    @abstractmethod
    def add_comment(self, post: Post, review: str) -> PostComment:
        """Attach a new comment to ``post``."""

    @abstractmethod
    def delete_comment(self, post_id: int, comment_id: int) -> bool:
        """Delete the comment. Returns ``False`` if it was not found."""
