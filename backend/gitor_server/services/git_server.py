"""
Git server service - manages the bare repositories under the repository root.

Every repository lives at ``<repositories_path>/<name>.git``. Nothing about a
repository is cached: each call reads the current state from disk, and
concurrent calls on the same name are not coordinated.
"""

import logging
import os
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from dulwich.repo import Repo as DulwichRepo

from gitor_server.config import ServerConfig
from gitor_server.exceptions import OwnershipError

logger = logging.getLogger(__name__)

REPO_SUFFIX = ".git"
BRANCH_PREFIX = b"refs/heads/"
TAG_PREFIX = b"refs/tags/"
ORIGIN = "origin"

# Names never contain a path separator, so they cannot escape the root
REPO_NAME_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._-]*$"
_REPO_NAME_RE = re.compile(REPO_NAME_PATTERN)


@dataclass
class Tag:
    hash: str
    name: str


@dataclass
class Repository:
    """Snapshot of a repository as found on disk."""
    name: str
    branches: list[str] = field(default_factory=list)
    remotes: list[str] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)


def format_remote(name: str, urls: list[str]) -> list[str]:
    """
    Render a remote as the lines shown to clients.

    A remote with a URL renders as two tab separated lines,
    ``origin\\t<url> (fetch)`` and ``origin\\t<url> (push)``. A remote
    without any URL renders as its bare name.
    """
    if not urls:
        return [name]
    text = f"{name}\t{urls[0]} (fetch)\n{name}\t{urls[0]} (push)"
    return text.split("\n")


class GitRepoManager:
    """Manages the bare git repositories served by Gitor."""

    def __init__(self, config: ServerConfig):
        self.config = config
        self.repos_dir = config.repositories_path

    def get_repo_path(self, name: str) -> Path:
        """Get the path to a bare repo."""
        if not _REPO_NAME_RE.fullmatch(name):
            raise ValueError(f"Invalid repository name: {name!r}")
        return self.repos_dir / f"{name}{REPO_SUFFIX}"

    def repo_exists(self, name: str) -> bool:
        """Check if a repo exists."""
        return self.get_repo_path(name).exists()

    def remote_url(self, repo_path: Path) -> str:
        """SSH URL under which the server exposes a repository."""
        return (
            f"ssh://{self.config.ssh_user}@{self.config.ssh_address}:"
            f"{self.config.ssh_port}{repo_path.as_posix()}"
        )

    def list_repos(self, search: str | None = None) -> list[str]:
        """
        List repository names, optionally filtered by a substring.

        Every directory under the root counts; the ``.git`` suffix is
        stripped from its name, and the search only matches what is left,
        so a search for ".git" matches nothing. Entries come back in
        directory listing order.
        """
        names = []
        for path in self.repos_dir.iterdir():
            if not path.is_dir():
                continue
            name = path.name.removesuffix(REPO_SUFFIX)
            if search and search not in name:
                continue
            names.append(name)
        return names

    def inspect_repo(self, name: str) -> Repository | None:
        """
        Read branches, tags and remotes of a repository.

        Returns:
            The repository snapshot, or None if no such repository exists.
            Failures to read an existing repository propagate.
        """
        repo_path = self.get_repo_path(name)
        if not repo_path.exists():
            return None

        repository = Repository(name=name)
        with DulwichRepo(str(repo_path)) as repo:
            refs = repo.get_refs()
            for ref_name, sha in refs.items():
                if ref_name.startswith(BRANCH_PREFIX):
                    repository.branches.append(ref_name[len(BRANCH_PREFIX):].decode("utf-8"))
                elif ref_name.startswith(TAG_PREFIX):
                    repository.tags.append(Tag(
                        hash=sha.decode("ascii"),
                        name=ref_name[len(TAG_PREFIX):].decode("utf-8"),
                    ))
            # get_refs has no stable order; sort for a deterministic snapshot
            repository.branches.sort()
            repository.tags.sort(key=lambda tag: tag.name)

            config = repo.get_config()
            for section in config.sections():
                if len(section) != 2 or section[0] != b"remote":
                    continue
                remote_name = section[1].decode("utf-8")
                try:
                    urls = [config.get(section, b"url").decode("utf-8")]
                except KeyError:
                    urls = []
                repository.remotes.extend(format_remote(remote_name, urls))

        return repository

    def create_repo(self, name: str) -> Repository:
        """
        Create a new bare repository with an ``origin`` remote.

        Initialization fails if anything already exists at the target path.
        The ownership step runs after the repository is complete; if it
        fails, the repository is left in place and OwnershipError is raised.
        """
        repo_path = self.get_repo_path(name)
        url = self.remote_url(repo_path)

        repo = DulwichRepo.init_bare(str(repo_path), mkdir=True)
        try:
            config = repo.get_config()
            # Only a URL; no fetch refspecs
            config.set((b"remote", ORIGIN.encode()), b"url", url.encode("utf-8"))
            config.write_to_path()
        finally:
            repo.close()
        logger.info(f"Created repository {name} at {repo_path}")

        if self.config.fix_ownership:
            self.fix_ownership(repo_path)

        return Repository(name=name, remotes=format_remote(ORIGIN, [url]))

    def fix_ownership(self, repo_path: Path) -> None:
        """Recursively hand a repository tree to the configured owner."""
        import pwd

        owner = self.config.owner
        try:
            entry = pwd.getpwnam(owner)
        except KeyError:
            raise OwnershipError(repo_path, owner, "no such user")

        try:
            os.chown(repo_path, entry.pw_uid, entry.pw_gid)
            for root, dirs, files in os.walk(repo_path):
                for child in dirs + files:
                    os.chown(os.path.join(root, child), entry.pw_uid, entry.pw_gid)
        except OSError as e:
            raise OwnershipError(repo_path, owner, str(e)) from e

    def delete_repo(self, name: str) -> bool:
        """
        Delete a repository and everything under it.

        Returns:
            True if the repository was removed, False if it did not exist.
        """
        repo_path = self.get_repo_path(name)
        if not repo_path.exists():
            return False
        shutil.rmtree(repo_path)
        logger.info(f"Deleted repository {name}")
        return True
