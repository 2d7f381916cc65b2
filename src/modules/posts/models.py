"""Post and PostComment models.

A post owns its comments: deleting the post deletes every comment on it.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import TimeStampedModel


class Post(TimeStampedModel):
    title = models.CharField(max_length=255)
    content = models.TextField(blank=True, default="")

    class Meta:
        db_table = "posts"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.title} (#{self.pk})"


class PostComment(TimeStampedModel):
    """A review left on a post."""

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    review = models.TextField()

    class Meta:
        db_table = "post_comments"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"Comment #{self.pk} on post #{self.post_id}"
