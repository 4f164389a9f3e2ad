"""
Git operations for reading workbook snapshots from repository history.
Reads blobs at a revision and lists spreadsheets changed between revisions.
"""
import logging
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence, Union

from git import Repo
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from celldiff.exceptions import SnapshotSourceError, SnapshotUnavailable
from celldiff.sources.base import SnapshotSource

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ('*.xlsx', '*.xlsm')


def open_repo(repo_path: Union[str, Path]) -> Repo:
    """
    Open a git repository.

    Raises:
        SnapshotSourceError: If the path is not a git repository
    """
    try:
        return Repo(repo_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise SnapshotSourceError(f"Not a git repository: {repo_path} ({e})")


class GitRevisionSource(SnapshotSource):
    """
    Reads files as they were at one git revision.

    Equivalent to `git show <revision>:<path>`, through GitPython.
    """

    def __init__(self, repo_path: Union[str, Path], revision: str, repo: Optional[Repo] = None):
        self.revision = revision
        self.repo = repo if repo is not None else open_repo(repo_path)

        try:
            self.commit = self.repo.commit(revision)
        except (BadName, BadObject, ValueError, GitCommandError) as e:
            raise SnapshotSourceError(f"Unknown revision {revision!r}: {e}")

        logger.debug(f"Git source at {self.commit.hexsha[:12]} ({revision})")

    def read(self, path: str) -> bytes:
        try:
            blob = self.commit.tree / _tree_path(path)
        except KeyError:
            raise SnapshotUnavailable(path, self.describe())

        if blob.type != 'blob':
            raise SnapshotUnavailable(path, self.describe())

        return blob.data_stream.read()

    def describe(self) -> str:
        return self.revision


def _tree_path(path: str) -> str:
    """Repository-relative POSIX path as used in git trees."""
    return str(PurePosixPath(path.replace('\\', '/'))).lstrip('/')


def list_changed_workbooks(
    repo_path: Union[str, Path],
    base: str,
    head: str,
    patterns: Sequence[str] = DEFAULT_PATTERNS,
) -> List[str]:
    """
    List spreadsheet paths that differ between two revisions.

    Added, removed, modified and renamed files are included; a rename lists
    both the old and the new path.

    Args:
        repo_path: Path inside the repository
        base: Base revision
        head: Head revision
        patterns: Filename glob patterns to keep

    Returns:
        Sorted list of repository-relative paths
    """
    repo = open_repo(repo_path)
    try:
        base_commit = repo.commit(base)
        head_commit = repo.commit(head)
    except (BadName, BadObject, ValueError, GitCommandError) as e:
        raise SnapshotSourceError(f"Unknown revision: {e}")

    paths = set()
    for change in base_commit.diff(head_commit):
        for path in (change.a_path, change.b_path):
            if path and any(fnmatch(PurePosixPath(path).name.lower(), p) for p in patterns):
                paths.add(path)

    logger.info(f"{len(paths)} spreadsheet(s) changed between {base} and {head}")
    return sorted(paths)
