"""
Root conftest.py - Shared fixtures for all test types.

This file is automatically loaded by pytest and provides:
- A temporary repository root and a matching server config
- The FastAPI application and async HTTP clients
- Common test utilities
"""
import os
import pwd
import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Add backend, cli and tdd to path for imports
project_path = Path(__file__).parent.parent
sys.path.insert(0, str(project_path / "backend"))
sys.path.insert(0, str(project_path / "cli"))
sys.path.insert(0, str(Path(__file__).parent))

from gitor_server.config import ServerConfig
from gitor_server.main import create_app
from gitor_server.services.auth import encode_token
from gitor_server.services.git_server import GitRepoManager

TEST_TOKEN = "test-secret-token"
OTHER_TOKEN = "second-secret-token"
SSH_ADDRESS = "git.example.com"
SSH_PORT = 2222
SSH_USER = "git"


def current_user() -> str:
    """Name of the user running the tests; chown to it needs no privileges."""
    return pwd.getpwuid(os.getuid()).pw_name


# -----------------------------------------------------------------------------
# Config and Service Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def repos_dir(tmp_path) -> Path:
    """Empty repository root for a single test."""
    path = tmp_path / "repositories"
    path.mkdir()
    return path.resolve()


@pytest.fixture
def server_config(repos_dir) -> ServerConfig:
    """Server config pointing at the temporary repository root."""
    return ServerConfig(
        repositories_path=repos_dir,
        token_whitelist=frozenset({TEST_TOKEN, OTHER_TOKEN}),
        ssh_address=SSH_ADDRESS,
        ssh_port=SSH_PORT,
        ssh_user=SSH_USER,
        repo_owner=current_user(),
    )


@pytest.fixture
def repo_manager(server_config) -> GitRepoManager:
    return GitRepoManager(server_config)


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def app(server_config):
    return create_app(server_config)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": encode_token(TEST_TOKEN)}


@pytest_asyncio.fixture
async def client(app, auth_headers) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client that sends a valid token with every request."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=auth_headers) as ac:
        yield ac


@pytest_asyncio.fixture
async def anonymous_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client without an Authorization header."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# -----------------------------------------------------------------------------
# Marker-based fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _mark_test(request):
    """Automatically apply markers based on test location."""
    if "unit" in str(request.fspath):
        request.applymarker(pytest.mark.unit)
    elif "integration" in str(request.fspath):
        request.applymarker(pytest.mark.integration)
