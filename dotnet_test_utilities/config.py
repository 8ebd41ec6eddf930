"""Harness configuration read from the process environment."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

UI_LANGUAGE_VARIABLE = "DOTNET_CLI_UI_LANGUAGE"
PRESERVE_TEMP_VARIABLE = "DOTNET_TEST_PRESERVE_TEMP"
REPO_ROOT_VARIABLE = "DOTNET_TEST_REPO_ROOT"
DOTNET_UNDER_TEST_VARIABLE = "DOTNET_UNDER_TEST"
WORKING_FOLDER_VARIABLE = "DOTNET_TEST_WORKING_FOLDER"

TRUTHY_VALUES = frozenset({"true", "1", "on"})

CultureName: TypeAlias = Annotated[
    str, StringConstraints(pattern=r"^[A-Za-z]{2,8}(-[A-Za-z0-9]{1,8})*$")
]

ENVIRONMENT_FIELDS: Mapping[str, str] = {
    UI_LANGUAGE_VARIABLE: "ui_language",
    PRESERVE_TEMP_VARIABLE: "preserve_temp",
    REPO_ROOT_VARIABLE: "repo_root",
    DOTNET_UNDER_TEST_VARIABLE: "dotnet_under_test",
    WORKING_FOLDER_VARIABLE: "working_folder",
}


def is_truthy(value: str | None) -> bool:
    """Return True for ``true``, ``1`` or ``on`` in any letter case."""
    return value is not None and value.lower() in TRUTHY_VALUES


class HarnessConfig(BaseModel):
    """Configuration shared by every test context of a session."""

    model_config = ConfigDict(frozen=True)

    ui_language: CultureName | None = Field(
        default=None,
        description="Culture used by the CLI and its child processes",
    )
    preserve_temp: bool = False
    repo_root: Path | None = None
    dotnet_under_test: Path | None = None
    working_folder: Path | None = None

    @field_validator("preserve_temp", mode="before")
    @classmethod
    def parse_preserve_temp(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return is_truthy(value)
        return value

    @field_validator(
        "ui_language", "repo_root", "dotnet_under_test", "working_folder", mode="before"
    )
    @classmethod
    def blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "HarnessConfig":
        """Build the configuration from environment variables.

        Args:
            environ: Variables to read (defaults to ``os.environ``)

        """
        if environ is None:
            environ = os.environ

        values = {
            field_name: environ[variable]
            for variable, field_name in ENVIRONMENT_FIELDS.items()
            if variable in environ
        }
        return cls(**values)

    def subprocess_environment(self) -> Mapping[str, str]:
        """Variables every spawned command must see."""
        if self.ui_language is None:
            return {}
        return {UI_LANGUAGE_VARIABLE: self.ui_language}
