# Test data factories

from .api import auth_header, repo_name, repo_query
from .git import add_commit, add_remote

__all__ = [
    # API factories
    "repo_name",
    "repo_query",
    "auth_header",
    # Git content factories
    "add_commit",
    "add_remote",
]
