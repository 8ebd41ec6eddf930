"""Fixtures for integration tests running real processes."""

import stat
from pathlib import Path

import pytest

from dotnet_test_utilities.config import HarnessConfig

FAKE_DOTNET = r"""#!/bin/sh
# Minimal stand-in for the CLI: "new" writes a project, "exec" runs a script.
verb="$1"
shift
case "$verb" in
  new)
    template="$1"
    shift
    extension=csproj
    while [ $# -gt 0 ]; do
      if [ "$1" = "--language" ]; then
        case "$2" in
          F#) extension=fsproj ;;
          VB) extension=vbproj ;;
        esac
      fi
      shift
    done
    if [ "$template" = "missing" ]; then
      echo "No templates found matching: 'missing'." >&2
      exit 103
    fi
    name=$(basename "$PWD")
    cat > "$name.$extension" <<PROJECT
<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <OutputType>Exe</OutputType>
    <TargetFramework>net6.0</TargetFramework>
  </PropertyGroup>
</Project>
PROJECT
    if [ "$template" = "twoprojects" ]; then
      cp "$name.$extension" "extra.$extension"
    fi
    echo "The template \"$template\" was created successfully."
    ;;
  exec)
    exec /bin/sh "$1"
    ;;
  *)
    echo "Unknown command: $verb" >&2
    exit 1
    ;;
esac
"""


def write_script(path: Path, content: str) -> Path:
    """Write an executable script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture(scope="session")
def fake_repo(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Repository with a fake CLI under .dotnet and one test asset."""
    repo = tmp_path_factory.mktemp("repo")
    (repo / "global.json").write_text("{}")
    write_script(repo / ".dotnet" / "dotnet", FAKE_DOTNET)

    asset = repo / "TestAssets" / "HelloWorld"
    asset.mkdir(parents=True)
    (asset / "Program.cs").write_text('Console.WriteLine("Hello World!");\n')
    return repo


@pytest.fixture(scope="session")
def harness_config(fake_repo: Path) -> HarnessConfig:
    """Point the plugin's fixtures at the fake repository."""
    return HarnessConfig(repo_root=fake_repo)
