"""Post domain exceptions.

Raised by ``PostService``; the views translate them into 404 responses.
"""

from __future__ import annotations


class PostNotFound(Exception):
    """The requested post does not exist."""


class PostCommentNotFound(Exception):
    """The comment does not exist or belongs to another post."""
