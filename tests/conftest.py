"""Pytest configuration and fixtures."""

import os

import pytest

from scriptflow.config import ScriptFlowSettings, reset_settings, set_settings
from scriptflow.models import FormatTag, ScriptLine

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import clean_runner, cli_invoke  # noqa: F401


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )
    config.addinivalue_line(
        "markers",
        "slow: mark test as slow running",
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test against default settings, free of user config files."""
    for var in [k for k in os.environ if k.startswith("SCRIPTFLOW_")]:
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)

    reset_settings()
    set_settings(ScriptFlowSettings())
    yield
    reset_settings()


@pytest.fixture
def line():
    """Factory for ScriptLine instances."""

    def make(text: str, fmt: FormatTag = FormatTag.ACTION) -> ScriptLine:
        return ScriptLine(text=text, format=fmt)

    return make


@pytest.fixture
def sample_screenplay() -> str:
    """A short, cleanly formatted screenplay."""
    return (
        "INT. COFFEE SHOP - DAY\n"
        "\n"
        "Sarah sits by the window, stirring her coffee.\n"
        "\n"
        "SARAH\n"
        "(quietly)\n"
        "He's late again.\n"
        "\n"
        "JOHN (O.S.)\n"
        "I heard that.\n"
        "\n"
        "CUT TO:\n"
        "\n"
        "EXT. STREET - NIGHT\n"
    )
