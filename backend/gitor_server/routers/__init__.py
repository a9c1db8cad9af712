from . import repos

__all__ = ["repos"]
