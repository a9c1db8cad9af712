from .auth import TokenValidator, decode_token, encode_token
from .git_server import GitRepoManager, Repository, Tag

__all__ = [
    "TokenValidator",
    "decode_token",
    "encode_token",
    "GitRepoManager",
    "Repository",
    "Tag",
]
