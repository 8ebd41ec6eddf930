"""Per-test context shared by the CLI test suites."""

import logging
import uuid
from pathlib import Path
from types import TracebackType

from dotnet_test_utilities.assets import TestAssets
from dotnet_test_utilities.commands import TestCommand, escape_single_arg, new_command
from dotnet_test_utilities.config import HarnessConfig
from dotnet_test_utilities.models.result import CommandResult
from dotnet_test_utilities.models.runtime_config import RuntimeConfig
from dotnet_test_utilities.project_file import find_project_file, read_target_framework
from dotnet_test_utilities.temp_root import TempRoot

log = logging.getLogger(__name__)

DEFAULT_FRAMEWORK = "netcoreapp1.0"
DEFAULT_LIBRARY_FRAMEWORK = "netstandard1.5"
CONSOLE_LOGGER_OUTPUT_NORMAL = "--logger console;verbosity=normal"

RUNTIME_CONFIG_SUFFIX = "runtimeconfig.json"
NATIVE_OUTPUT_DIRECTORY = "native"


class TestContext:
    """Resources and helpers owned by a single test.

    The temporary directory is created on first access to ``temp`` and
    removed by ``close`` unless the configuration asks to preserve it.
    """

    __test__ = False

    def __init__(self, config: HarnessConfig, assets: TestAssets) -> None:
        self.config = config
        self.assets = assets
        self._temp: TempRoot | None = None

    @property
    def temp(self) -> TempRoot:
        if self._temp is None:
            self._temp = TempRoot()
        return self._temp

    @property
    def preserve_temp(self) -> bool:
        return self.config.preserve_temp

    def close(self) -> None:
        """Release the temporary directory, if one was created."""
        if self._temp is None:
            return
        if self.preserve_temp:
            log.info("Preserving temp directory %s", self._temp.root)
            return
        self._temp.close()
        self._temp = None

    def __enter__(self) -> "TestContext":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    @staticmethod
    def get_unique_name() -> str:
        return str(uuid.uuid4())

    def command(self, executable: str | Path) -> TestCommand:
        """Command inheriting the context's subprocess environment."""
        return TestCommand(
            executable=executable, environment=self.config.subprocess_environment()
        )

    def template_create(
        self,
        template_name: str,
        project_directory: Path,
        language: str = "",
        framework: str = "",
    ) -> Path:
        """Instantiate a template and return the generated project file.

        Args:
            template_name: Short name of the template (e.g. "console")
            project_directory: Directory to create the project in
            language: Template language ("C#", "F#" or "VB")
            framework: Expected TargetFramework of the project, if checked

        Raises:
            AssertionError: If scaffolding fails or the framework differs
            ProjectFileLookupError: If there is not exactly one project file

        """
        project_directory.mkdir(parents=True, exist_ok=True)

        args = [template_name, "--debug:ephemeral-hive", "--no-restore"]
        if language.strip():
            args += ["--language", language]

        (
            new_command(
                self.assets.dotnet_under_test,
                environment=self.config.subprocess_environment(),
            )
            .with_working_directory(project_directory)
            .execute(args)
            .should()
            .passes()
        )

        project_file = find_project_file(project_directory, language)

        if framework.strip():
            actual = read_target_framework(project_file)
            if actual != framework:
                raise AssertionError(
                    f"Expected TargetFramework {framework!r} in {project_file}, "
                    f"found {actual!r}"
                )

        return project_file

    def is_portable(self, executable_path: Path) -> bool:
        """Whether the build output needs the tool's host to run."""
        runtime_config_path = next(
            (
                path
                for path in sorted(executable_path.parent.iterdir())
                if path.name.endswith(RUNTIME_CONFIG_SUFFIX) and path.is_file()
            ),
            None,
        )
        if runtime_config_path is None:
            return False

        runtime_config = RuntimeConfig.from_file(runtime_config_path)
        framework = runtime_config.framework
        log.info(
            "Runtime config %s: framework=%s",
            runtime_config_path.name,
            framework.name if framework is not None else None,
        )
        return runtime_config.is_portable

    def test_executable(
        self, output_dir: Path, executable_name: str, expected_output: str
    ) -> CommandResult:
        """Run a build output and check it succeeds quietly.

        Portable outputs are launched through ``dotnet exec``, native ones
        directly. Stdout is compared only when ``expected_output`` is set.
        """
        executable_path = output_dir / executable_name
        executable: Path = executable_path
        args: list[str] = []

        if self.is_portable(executable_path):
            args = ["exec", escape_single_arg(executable_path)]
            executable = self.assets.dotnet_under_test

        result = self.command(executable).execute(" ".join(args))

        if expected_output:
            result.should().has_stdout(expected_output)
        result.should().has_no_stderr().passes()
        return result

    def test_output_executable(
        self,
        output_dir: Path,
        executable_name: str,
        expected_output: str,
        native: bool = False,
    ) -> None:
        self.test_executable(
            self.compilation_output_path(output_dir, native),
            executable_name,
            expected_output,
        )

    def test_native_output_executable(
        self, output_dir: Path, executable_name: str, expected_output: str
    ) -> None:
        self.test_output_executable(
            output_dir, executable_name, expected_output, native=True
        )

    @staticmethod
    def compilation_output_path(output_dir: Path, native: bool) -> Path:
        if native:
            return output_dir / NATIVE_OUTPUT_DIRECTORY
        return output_dir
