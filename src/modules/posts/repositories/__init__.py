from modules.posts.repositories.django_repository import PostDjangoRepository
from modules.posts.repositories.interfaces import IPostRepository

__all__ = ["IPostRepository", "PostDjangoRepository"]
