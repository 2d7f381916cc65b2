"""Post DRF serializers for API output and schema generation."""

from __future__ import annotations

from rest_framework import serializers

from modules.posts.models import Post, PostComment


class PostCommentSerializer(serializers.ModelSerializer):
    class Meta:
        model = PostComment
        fields = ["id", "post", "review", "created_at"]
        read_only_fields = ["id", "post", "created_at"]


class PostSerializer(serializers.ModelSerializer):
    """Post with its comments nested, oldest first."""

    comments = PostCommentSerializer(many=True, read_only=True)

    class Meta:
        model = Post
        fields = ["id", "title", "content", "comments", "created_at", "updated_at"]
        read_only_fields = ["id", "comments", "created_at", "updated_at"]
