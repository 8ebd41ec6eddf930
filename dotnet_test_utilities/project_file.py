"""Lookup and inspection of generated project files."""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path

log = logging.getLogger(__name__)


class Language(StrEnum):
    """Languages a template can be instantiated in."""

    CSHARP = "C#"
    FSHARP = "F#"
    VB = "VB"


PROJECT_EXTENSIONS: Mapping[Language, str] = {
    Language.CSHARP: ".csproj",
    Language.FSHARP: ".fsproj",
    Language.VB: ".vbproj",
}
DEFAULT_PROJECT_EXTENSION = PROJECT_EXTENSIONS[Language.CSHARP]


class ProjectFileLookupError(Exception):
    """Raised when a directory does not hold exactly one project file."""


class ProjectFileNotFoundError(ProjectFileLookupError):
    """Raised when no project file matches."""


class MultipleProjectFilesError(ProjectFileLookupError):
    """Raised when more than one project file matches."""


def project_extension(language: str = "") -> str:
    """Return the project file extension for a language identifier.

    An empty identifier means the template's default language. Unknown
    identifiers also map to C# projects; that fallback is logged because it
    usually hides a typo in the caller.
    """
    try:
        return PROJECT_EXTENSIONS[Language(language)]
    except ValueError:
        if language.strip():
            log.warning(
                "Unknown language %r, looking for %s files",
                language,
                DEFAULT_PROJECT_EXTENSION,
            )
        return DEFAULT_PROJECT_EXTENSION


def find_project_file(directory: Path, language: str = "") -> Path:
    """Return the single project file for ``language`` in ``directory``.

    Raises:
        ProjectFileNotFoundError: If no file matches
        MultipleProjectFilesError: If several files match

    """
    extension = project_extension(language)
    matches = sorted(
        path for path in directory.glob(f"*{extension}") if path.is_file()
    )

    if not matches:
        raise ProjectFileNotFoundError(f"No *{extension} file found in {directory}")
    if len(matches) > 1:
        names = ", ".join(path.name for path in matches)
        raise MultipleProjectFilesError(
            f"Expected a single *{extension} file in {directory}, found: {names}"
        )
    return matches[0]


def read_target_framework(project_file: Path) -> str | None:
    """Return the first ``PropertyGroup/TargetFramework`` value, if any."""
    root = ET.parse(project_file).getroot()
    namespace = root.tag[: root.tag.index("}") + 1] if root.tag.startswith("{") else ""

    property_group = root.find(f"{namespace}PropertyGroup")
    if property_group is None:
        return None

    target_framework = property_group.find(f"{namespace}TargetFramework")
    if target_framework is None:
        return None
    return target_framework.text or ""
