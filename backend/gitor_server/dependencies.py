"""
FastAPI dependencies.

Services are built once by the application factory and kept on app.state;
handlers receive them through these functions.
"""

from fastapi import Depends, Header, HTTPException, Request

from gitor_server.services.auth import TokenValidator
from gitor_server.services.git_server import GitRepoManager


def get_repo_manager(request: Request) -> GitRepoManager:
    return request.app.state.repo_manager


def get_token_validator(request: Request) -> TokenValidator:
    return request.app.state.token_validator


async def require_token(
    authorization: str | None = Header(None),
    validator: TokenValidator = Depends(get_token_validator),
) -> None:
    """Reject the request unless it carries a whitelisted token."""
    if not validator.validate(authorization):
        raise HTTPException(status_code=401, detail="Unauthorized")
