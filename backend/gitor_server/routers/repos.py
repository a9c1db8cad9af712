"""
Repository management endpoints.

Every route requires a whitelisted token; the check runs before query
validation and before any filesystem access.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from gitor_server.dependencies import get_repo_manager, require_token
from gitor_server.exceptions import OwnershipError
from gitor_server.schemas import RepositoryRead
from gitor_server.services.git_server import REPO_NAME_PATTERN, GitRepoManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["repositories"], dependencies=[Depends(require_token)])


def repo_name_query(
    repo_name: str = Query(..., alias="repoName", min_length=1, pattern=REPO_NAME_PATTERN),
) -> str:
    return repo_name


@router.get("/get_repositories", response_model=list[str])
async def list_repositories(
    search: str | None = Query(None),
    repo_manager: GitRepoManager = Depends(get_repo_manager),
):
    """List repository names, optionally filtered by a substring."""
    try:
        return repo_manager.list_repos(search)
    except OSError as e:
        logger.exception("Failed to list repositories")
        raise HTTPException(status_code=500, detail=f"Failed to list repositories: {e}")


@router.get("/get_repository", response_model=RepositoryRead)
async def get_repository(
    repo_name: str = Depends(repo_name_query),
    repo_manager: GitRepoManager = Depends(get_repo_manager),
):
    """Get branches, remotes and tags of a repository."""
    try:
        repository = repo_manager.inspect_repo(repo_name)
    except Exception as e:
        logger.exception(f"Failed to read repository {repo_name}")
        raise HTTPException(status_code=500, detail=f"Git error: {e}")

    if repository is None:
        raise HTTPException(status_code=404, detail="Repository not found")
    return RepositoryRead.model_validate(repository)


@router.get("/new_repository", response_model=RepositoryRead)
async def new_repository(
    repo_name: str = Depends(repo_name_query),
    repo_manager: GitRepoManager = Depends(get_repo_manager),
):
    """
    Create a bare repository with an origin remote pointing at this server.

    Push to it with the URL listed in Remotes:
        git remote add origin <url>
        git push origin --all
    """
    try:
        repository = repo_manager.create_repo(repo_name)
    except OwnershipError as e:
        # The repository exists at this point; it is not rolled back
        logger.error(f"Repository {repo_name} created but not handed over: {e}")
        raise HTTPException(status_code=500, detail=f"Repository created, but {e}")
    except Exception as e:
        logger.exception(f"Failed to create repository {repo_name}")
        raise HTTPException(status_code=500, detail=f"Failed to create repository: {e}")

    return RepositoryRead.model_validate(repository)


@router.get("/delete_repository", response_model=str)
async def delete_repository(
    repo_name: str = Depends(repo_name_query),
    repo_manager: GitRepoManager = Depends(get_repo_manager),
):
    """Delete a repository. Confirmation is the client's job."""
    try:
        deleted = repo_manager.delete_repo(repo_name)
    except OSError as e:
        logger.exception(f"Failed to delete repository {repo_name}")
        raise HTTPException(status_code=500, detail=f"Failed to delete repository: {e}")

    if not deleted:
        raise HTTPException(status_code=404, detail="Repository not found")
    return f"{repo_name} has been deleted"
