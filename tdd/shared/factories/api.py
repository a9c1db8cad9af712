"""
API request factories.

These factories create names, query parameters and headers suitable for
requests against the repository routes.
"""
import base64
from typing import Any

from faker import Faker

fake = Faker()


def repo_name(prefix: str | None = None) -> str:
    """Random repository name that satisfies the name rules."""
    word = fake.unique.word().lower()
    return f"{prefix}-{word}" if prefix else f"{word}-repo"


def repo_query(name: str) -> dict[str, Any]:
    """Query parameters for the single-repository routes."""
    return {"repoName": name}


def auth_header(token: str) -> dict[str, str]:
    """Authorization header carrying a token the way clients send it."""
    return {"Authorization": base64.b64encode(token.encode()).decode()}
