"""Process-wide access to the repository's test assets."""

import logging
import shutil
import threading
from dataclasses import dataclass
from pathlib import Path

from dotnet_test_utilities.config import HarnessConfig
from dotnet_test_utilities.repo_directories import RepoDirectories

log = logging.getLogger(__name__)

ASSETS_DIRECTORY = "TestAssets"
IGNORED_BUILD_OUTPUT = ("bin", "obj")

_lock = threading.Lock()
_test_assets: "TestAssets | None" = None


class TestAssetNotFoundError(Exception):
    """Raised when a named test asset does not exist."""

    __test__ = False


@dataclass(frozen=True, kw_only=True)
class TestAssets:
    """Read-only locations shared by every test in the process."""

    __test__ = False

    root: Path
    dotnet_under_test: Path
    working_folder: Path

    @classmethod
    def from_repo_directories(cls, directories: RepoDirectories) -> "TestAssets":
        return cls(
            root=directories.repo_root / ASSETS_DIRECTORY,
            dotnet_under_test=directories.dotnet_under_test,
            working_folder=directories.test_working_folder,
        )

    def get(self, name: str) -> Path:
        """Return the directory of a named asset.

        Raises:
            TestAssetNotFoundError: If the asset directory does not exist

        """
        path = self.root / name
        if not path.is_dir():
            raise TestAssetNotFoundError(f"Test asset '{name}' not found in {self.root}")
        return path

    def create_test_instance(self, name: str, identifier: str = "") -> Path:
        """Copy an asset into the working folder and return the copy.

        Any previous copy with the same name and identifier is replaced.
        Build output directories are not copied.
        """
        source = self.get(name)
        destination = self.working_folder / name
        if identifier:
            destination = destination / identifier

        if destination.exists():
            shutil.rmtree(destination)

        log.info("Creating test instance of %s at %s", name, destination)
        shutil.copytree(
            source, destination, ignore=shutil.ignore_patterns(*IGNORED_BUILD_OUTPUT)
        )
        return destination


def get_test_assets(config: HarnessConfig) -> TestAssets:
    """Return the process-wide test assets, discovering them on first use.

    Later calls return the first instance whatever configuration they pass.
    """
    global _test_assets

    if _test_assets is None:
        with _lock:
            if _test_assets is None:
                directories = RepoDirectories.discover(config)
                _test_assets = TestAssets.from_repo_directories(directories)

    return _test_assets
