"""Post DTOs for the Service Layer.

Immutable Pydantic v2 models built by the views from request bodies and
passed to ``PostService``.  Blank titles and reviews are rejected here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


def _not_blank(value: str, label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{label} must not be blank.")
    return value.strip()


class CreatePostDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    content: str = ""

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v, "Title")


class UpdatePostDTO(BaseModel):
    """Only supplied fields are changed."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    content: str | None = None

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, v: str | None) -> str | None:
        return v if v is None else _not_blank(v, "Title")


class CreateCommentDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    review: str

    @field_validator("review")
    @classmethod
    def review_must_not_be_blank(cls, v: str) -> str:
        return _not_blank(v, "Review")
