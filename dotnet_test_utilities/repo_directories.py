"""Locate the repository under test and the tool binary built from it."""

import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from dotnet_test_utilities.config import HarnessConfig

log = logging.getLogger(__name__)

REPO_ROOT_MARKERS = (".git", "global.json")
DOTNET_EXECUTABLE = "dotnet.exe" if sys.platform == "win32" else "dotnet"


class RepoRootNotFoundError(Exception):
    """Raised when no ancestor directory looks like a repository root."""


class DotnetNotFoundError(Exception):
    """Raised when the tool binary under test cannot be located."""


@dataclass(frozen=True, kw_only=True)
class RepoDirectories:
    """Well-known directories of the repository under test."""

    repo_root: Path
    dotnet_under_test: Path
    test_working_folder: Path

    @classmethod
    def discover(
        cls, config: HarnessConfig, start: Path | None = None
    ) -> "RepoDirectories":
        """Resolve directories from configuration, falling back to discovery.

        Args:
            config: Harness configuration with optional explicit locations
            start: Directory to search upwards from (defaults to the cwd)

        Raises:
            RepoRootNotFoundError: If the repository root cannot be found
            DotnetNotFoundError: If no tool binary can be found

        """
        repo_root = config.repo_root or find_repo_root(start or Path.cwd())
        dotnet = config.dotnet_under_test or find_dotnet(repo_root)
        working_folder = config.working_folder or repo_root / "artifacts" / "tmp"

        log.info(
            "Resolved repository directories: repo_root=%s, dotnet=%s, "
            "working_folder=%s",
            repo_root,
            dotnet,
            working_folder,
        )
        return cls(
            repo_root=repo_root,
            dotnet_under_test=dotnet,
            test_working_folder=working_folder,
        )


def find_repo_root(start: Path) -> Path:
    """Return the closest ancestor of ``start`` containing a root marker."""
    start = start.resolve()
    for directory in (start, *start.parents):
        if any((directory / marker).exists() for marker in REPO_ROOT_MARKERS):
            return directory

    raise RepoRootNotFoundError(
        f"No repository root found above '{start}' (looked for {REPO_ROOT_MARKERS})"
    )


def find_dotnet(repo_root: Path) -> Path:
    """Prefer the repository-local tool install, then the one on PATH."""
    local = repo_root / ".dotnet" / DOTNET_EXECUTABLE
    if local.is_file():
        return local

    if (on_path := shutil.which("dotnet")) is not None:
        return Path(on_path)

    raise DotnetNotFoundError(
        f"'{DOTNET_EXECUTABLE}' not found in '{local.parent}' or on PATH"
    )
