from .repo import RepositoryRead, TagRead

__all__ = ["RepositoryRead", "TagRead"]
