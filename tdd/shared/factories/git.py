"""
Git content factories.

Writes objects and refs straight into a bare repository with dulwich, so
tests can give repositories branches and tags without a working tree.
"""
from pathlib import Path

from dulwich.objects import Blob, Commit, Tree
from dulwich.repo import Repo


def add_commit(
    repo_path: Path,
    branch: str = "main",
    message: str = "Initial commit",
    tag: str | None = None,
) -> str:
    """Create a one-file commit on a branch and return its SHA.

    If tag is given, a lightweight tag pointing at the commit is created too.
    """
    with Repo(str(repo_path)) as repo:
        blob = Blob.from_string(f"# {message}\n".encode())
        tree = Tree()
        tree.add(b"README.md", 0o100644, blob.id)

        commit = Commit()
        commit.tree = tree.id
        commit.author = commit.committer = b"Test <test@test.com>"
        commit.author_time = commit.commit_time = 1700000000
        commit.author_timezone = commit.commit_timezone = 0
        commit.encoding = b"UTF-8"
        commit.message = message.encode()

        for obj in (blob, tree, commit):
            repo.object_store.add_object(obj)

        repo.refs[f"refs/heads/{branch}".encode()] = commit.id
        if tag:
            repo.refs[f"refs/tags/{tag}".encode()] = commit.id

        return commit.id.decode("ascii")


def add_remote(repo_path: Path, name: str, url: str | None = None) -> None:
    """Add a remote section to a repository's config."""
    with Repo(str(repo_path)) as repo:
        config = repo.get_config()
        section = (b"remote", name.encode())
        if url:
            config.set(section, b"url", url.encode())
        else:
            config.set(section, b"fetch", f"+refs/heads/*:refs/remotes/{name}/*".encode())
        config.write_to_path()
