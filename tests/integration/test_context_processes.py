"""Integration tests for TestContext against a fake CLI."""

import json
import sys
from pathlib import Path

import pytest

from dotnet_test_utilities.assets import TestAssets
from dotnet_test_utilities.config import HarnessConfig
from dotnet_test_utilities.context import TestContext
from dotnet_test_utilities.project_file import MultipleProjectFilesError

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell fakes")

HELLO_SCRIPT = "#!/bin/sh\necho 'Hello World!'\n"
PORTABLE_RUNTIME_CONFIG = {
    "runtimeOptions": {
        "tfm": "net6.0",
        "framework": {"name": "Microsoft.NETCore.App", "version": "6.0.0"},
    }
}


def write_executable(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(0o755)
    return path


def test_plugin_resolves_assets_from_repo(
    dotnet_test_assets: TestAssets, fake_repo: Path
) -> None:
    """Discovers the fake repository's assets and CLI."""
    assert dotnet_test_assets.root == fake_repo / "TestAssets"
    assert dotnet_test_assets.dotnet_under_test == fake_repo / ".dotnet" / "dotnet"
    assert dotnet_test_assets.working_folder == fake_repo / "artifacts" / "tmp"


def test_template_create_scaffolds_project(
    dotnet_test_context: TestContext,
) -> None:
    """Creates a C# console project targeting the expected framework."""
    project_dir = dotnet_test_context.temp.create_directory() / "HelloApp"

    project = dotnet_test_context.template_create(
        "console", project_dir, "C#", "net6.0"
    )

    assert project == project_dir / "HelloApp.csproj"
    assert project.is_file()


def test_template_create_for_fsharp(dotnet_test_context: TestContext) -> None:
    """Finds the F# project generated for the F# language."""
    project_dir = dotnet_test_context.temp.create_directory()

    project = dotnet_test_context.template_create("console", project_dir, "F#")

    assert project.suffix == ".fsproj"


def test_template_create_framework_mismatch(
    dotnet_test_context: TestContext,
) -> None:
    """Fails when the generated project targets another framework."""
    project_dir = dotnet_test_context.temp.create_directory()

    with pytest.raises(AssertionError, match="TargetFramework"):
        dotnet_test_context.template_create("console", project_dir, "C#", "net8.0")


def test_template_create_rejects_two_projects(
    dotnet_test_context: TestContext,
) -> None:
    """Refuses to pick between two generated project files."""
    project_dir = dotnet_test_context.temp.create_directory()

    with pytest.raises(MultipleProjectFilesError):
        dotnet_test_context.template_create("twoprojects", project_dir, "C#")


def test_template_create_reports_scaffold_failure(
    dotnet_test_context: TestContext,
) -> None:
    """Surfaces the CLI's error output when scaffolding fails."""
    project_dir = dotnet_test_context.temp.create_directory()

    with pytest.raises(AssertionError, match="No templates found"):
        dotnet_test_context.template_create("missing", project_dir)


def test_native_executable_runs_directly(dotnet_test_context: TestContext) -> None:
    """Runs a native output and checks its output."""
    output_dir = dotnet_test_context.temp.create_directory()
    write_executable(output_dir / "native" / "app", HELLO_SCRIPT)

    dotnet_test_context.test_native_output_executable(
        output_dir, "app", "Hello World!\n"
    )


def test_portable_executable_runs_through_exec(
    dotnet_test_context: TestContext,
) -> None:
    """Runs a portable output through the CLI's exec verb."""
    output_dir = dotnet_test_context.temp.create_directory() / "bin with space"
    output_dir.mkdir()
    (output_dir / "app.dll").write_text(HELLO_SCRIPT)
    (output_dir / "app.runtimeconfig.json").write_text(
        json.dumps(PORTABLE_RUNTIME_CONFIG)
    )

    result = dotnet_test_context.test_executable(
        output_dir, "app.dll", "Hello World!\n"
    )

    assert result.args[:2] == (
        str(dotnet_test_context.assets.dotnet_under_test),
        "exec",
    )
    assert result.args[2] == str(output_dir / "app.dll")


def test_executable_writing_stderr_fails(dotnet_test_context: TestContext) -> None:
    """Fails when the executable writes to stderr."""
    output_dir = dotnet_test_context.temp.create_directory()
    write_executable(output_dir / "app", "#!/bin/sh\necho warning >&2\n")

    with pytest.raises(AssertionError, match="stderr"):
        dotnet_test_context.test_executable(output_dir, "app", "")


def test_ui_language_reaches_child_process(
    dotnet_test_assets: TestAssets, tmp_path: Path
) -> None:
    """Passes the configured UI language to the executable."""
    write_executable(
        tmp_path / "app", '#!/bin/sh\nprintf "%s" "$DOTNET_CLI_UI_LANGUAGE"\n'
    )

    with TestContext(HarnessConfig(ui_language="de-DE"), dotnet_test_assets) as context:
        context.test_executable(tmp_path, "app", "de-DE")


def test_create_test_instance_copies_asset(
    dotnet_test_assets: TestAssets,
) -> None:
    """Copies a named asset into the working folder."""
    instance = dotnet_test_assets.create_test_instance("HelloWorld", "integration")

    assert (instance / "Program.cs").is_file()
    assert instance.is_relative_to(dotnet_test_assets.working_folder)


def test_temp_is_removed_after_close(dotnet_test_assets: TestAssets) -> None:
    """Removes the temp tree once the context is closed."""
    with TestContext(HarnessConfig(), dotnet_test_assets) as context:
        root = context.temp.root
        (context.temp.create_directory() / "file.txt").write_text("data")

    assert not root.exists()
