"""Models for runtime configuration files produced by builds."""

from collections.abc import Sequence
from pathlib import Path

from pydantic import Field

from dotnet_test_utilities.models.base import Model


class RuntimeFramework(Model):
    """Shared framework reference."""

    name: str
    version: str | None = None


class RuntimeOptions(Model):
    """The ``runtimeOptions`` section of a runtime configuration file."""

    tfm: str | None = None
    framework: RuntimeFramework | None = None
    frameworks: Sequence[RuntimeFramework] = Field(default_factory=list)
    included_frameworks: Sequence[RuntimeFramework] = Field(
        default_factory=list, alias="includedFrameworks"
    )


class RuntimeConfig(Model):
    """Parsed subset of ``<app>.runtimeconfig.json``.

    Framework-dependent ("portable") outputs reference the shared framework
    they run on, through ``framework`` or ``frameworks``. Self-contained
    outputs carry ``includedFrameworks`` instead and start without a host.
    """

    runtime_options: RuntimeOptions = Field(
        default_factory=RuntimeOptions, alias="runtimeOptions"
    )

    @classmethod
    def from_file(cls, path: Path) -> "RuntimeConfig":
        """Load and validate a runtime configuration file."""
        return cls.model_validate_json(path.read_bytes())

    @property
    def framework(self) -> RuntimeFramework | None:
        """First shared framework the output depends on, if any."""
        options = self.runtime_options
        if options.framework is not None:
            return options.framework
        if options.frameworks:
            return options.frameworks[0]
        return None

    @property
    def target_framework(self) -> str | None:
        return self.runtime_options.tfm

    @property
    def is_portable(self) -> bool:
        """Whether the output needs an external host to run."""
        return self.framework is not None
