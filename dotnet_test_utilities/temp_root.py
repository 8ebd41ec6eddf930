"""Scoped temporary directories owned by a test."""

import logging
import shutil
import tempfile
import uuid
from pathlib import Path

log = logging.getLogger(__name__)

TEMP_PREFIX = "dotnet-test-"


class TempRoot:
    """A temporary directory tree removed as a whole on close."""

    def __init__(self, parent: Path | None = None) -> None:
        if parent is not None:
            parent.mkdir(parents=True, exist_ok=True)
        self.root = Path(tempfile.mkdtemp(prefix=TEMP_PREFIX, dir=parent))
        self.closed = False
        log.debug("Created temp root %s", self.root)

    def create_directory(self) -> Path:
        """Create a uniquely named, empty sub-directory."""
        directory = self.root / uuid.uuid4().hex
        directory.mkdir()
        return directory

    def create_file(self, prefix: str = "", extension: str = ".tmp") -> Path:
        """Create a uniquely named, empty file."""
        path = self.root / f"{prefix}{uuid.uuid4().hex}{extension}"
        path.touch(exist_ok=False)
        return path

    def close(self) -> None:
        """Remove the whole tree. Calling it again does nothing."""
        if self.closed:
            return
        self.closed = True
        log.debug("Removing temp root %s", self.root)
        if self.root.exists():
            shutil.rmtree(self.root)

    def __repr__(self) -> str:
        return f"TempRoot({str(self.root)!r})"
