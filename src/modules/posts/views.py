"""Post API views.

Exposes ``PostService`` via a DRF ViewSet; comments are nested under
their post (``/posts/{pk}/comments/``).
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.posts.dtos import CreateCommentDTO, CreatePostDTO, UpdatePostDTO
from modules.posts.exceptions import PostCommentNotFound, PostNotFound
from modules.posts.models import Post
from modules.posts.repositories.django_repository import PostDjangoRepository
from modules.posts.serializers import PostCommentSerializer, PostSerializer
from modules.posts.services import PostService

NOT_FOUND = {"detail": "Post not found."}


class PostViewSet(GenericViewSet):
    """ViewSet for Post and PostComment operations.

    Uses ``PostService`` with ``PostDjangoRepository``.
    """

    queryset = Post.objects.all()
    serializer_class = PostSerializer
    search_fields = ["title", "content"]
    ordering_fields = ["id", "title", "created_at"]
    ordering = ["id"]
    filter_backends = [SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = PostService(repository=PostDjangoRepository())

    def get_queryset(self):
        return self._service.list_posts()

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/posts/"""
        posts = self.filter_queryset(self.get_queryset())
        return Response(PostSerializer(posts, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/posts/{pk}/"""
        try:
            post = self._service.get_post(pk)
        except PostNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(PostSerializer(post).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/posts/"""
        try:
            dto = CreatePostDTO.model_validate(dict(request.data.items()))
        except (PydanticValidationError, AttributeError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        post = self._service.create_post(dto)
        return Response(PostSerializer(post).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/posts/{pk}/

        Replaces the post: ``title`` is required, an omitted ``content``
        becomes empty.
        """
        return self._update(request, pk, partial=False)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/posts/{pk}/"""
        return self._update(request, pk, partial=True)

    def _update(self, request: Request, pk: str | None, partial: bool) -> Response:
        try:
            data = dict(request.data.items())
            if partial:
                dto = UpdatePostDTO.model_validate(data)
            else:
                replacement = CreatePostDTO.model_validate(data)
                dto = UpdatePostDTO(
                    title=replacement.title, content=replacement.content
                )
        except (PydanticValidationError, AttributeError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            post = self._service.update_post(pk, dto)
        except PostNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(PostSerializer(post).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/posts/{pk}/"""
        try:
            self._service.delete_post(pk)
        except PostNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get", "post"], url_path="comments")
    def comments(self, request: Request, pk: str | None = None) -> Response:
        """GET/POST /api/v1/posts/{pk}/comments/"""
        if request.method == "GET":
            try:
                comments = self._service.list_comments(pk)
            except PostNotFound:
                return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
            return Response(PostCommentSerializer(comments, many=True).data)

        try:
            dto = CreateCommentDTO.model_validate(dict(request.data.items()))
        except (PydanticValidationError, AttributeError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            comment = self._service.add_comment(pk, dto)
        except PostNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(
            PostCommentSerializer(comment).data, status=status.HTTP_201_CREATED
        )

    @action(
        detail=True,
        methods=["delete"],
        url_path=r"comments/(?P<comment_id>[^/.]+)",
    )
    def delete_comment(
        self, request: Request, pk: str | None = None, comment_id: str | None = None
    ) -> Response:
        """DELETE /api/v1/posts/{pk}/comments/{comment_id}/"""
        try:
            self._service.delete_comment(pk, comment_id)
        except PostNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except PostCommentNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
