import logging

from fastapi import FastAPI

from gitor_server import __version__
from gitor_server.config import ServerConfig, load_config
from gitor_server.routers import repos
from gitor_server.services.auth import TokenValidator
from gitor_server.services.git_server import GitRepoManager

logger = logging.getLogger(__name__)


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """
    Build the Gitor application.

    The configuration is loaded from disk when not given. It is never
    reloaded; every service receives the same immutable instance.
    """
    if config is None:
        config = load_config()

    if not config.token_whitelist:
        logger.warning("Token whitelist is empty, every request will be rejected")

    app = FastAPI(
        title=config.app_name,
        description="Manage bare git repositories on a remote server",
        version=__version__,
    )
    app.state.config = config
    app.state.repo_manager = GitRepoManager(config)
    app.state.token_validator = TokenValidator(config.token_whitelist)

    app.include_router(repos.router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "app": config.app_name}

    logger.info(f"Serving repositories from {config.repositories_path}")
    return app
