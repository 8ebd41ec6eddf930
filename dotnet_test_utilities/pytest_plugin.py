"""Pytest fixtures exposing the harness to CLI test suites."""

from collections.abc import Iterator

import pytest

from dotnet_test_utilities.assets import TestAssets, get_test_assets
from dotnet_test_utilities.config import HarnessConfig
from dotnet_test_utilities.context import TestContext


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("dotnet-test-utilities")
    group.addoption(
        "--dotnet-preserve-temp",
        action="store_true",
        default=False,
        help="Keep each test's temp directory after the test finishes",
    )


@pytest.fixture(scope="session")
def harness_config(pytestconfig: pytest.Config) -> HarnessConfig:
    """Configuration read once from the environment for the whole session."""
    config = HarnessConfig.from_environ()
    if pytestconfig.getoption("dotnet_preserve_temp"):
        config = config.model_copy(update={"preserve_temp": True})
    return config


@pytest.fixture(scope="session")
def dotnet_test_assets(harness_config: HarnessConfig) -> TestAssets:
    """Shared test assets of the repository under test."""
    return get_test_assets(harness_config)


@pytest.fixture
def dotnet_test_context(
    harness_config: HarnessConfig, dotnet_test_assets: TestAssets
) -> Iterator[TestContext]:
    """Per-test context, closed when the test finishes."""
    with TestContext(harness_config, dotnet_test_assets) as context:
        yield context
