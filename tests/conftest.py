"""Pytest configuration and shared fixtures for the bbcode2md test suite."""

import logging
import os
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture(autouse=True)
def restore_package_logger() -> Generator[None, None, None]:
    """Undo logging configuration done by CLI tests."""
    package_logger = logging.getLogger("bbcode2md")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    try:
        yield
    finally:
        for handler in package_logger.handlers:
            if handler not in handlers:
                handler.close()
        package_logger.handlers[:] = handlers
        package_logger.setLevel(level)
        package_logger.propagate = propagate


@pytest.fixture
def forum_post() -> str:
    """Provide a forum post exercising every built-in cleaner.

    Returns
    -------
    str
        BBCode text

    """
    return (
        "[center][size=18][color=#336699]Release notes[/color][/size][/center]\n"
        "[b]Version 2.0[/b] is out!\n"
        "[list]\n"
        "[*]Faster [i]startup[/i]\n"
        "[*][s]Legacy[/s] API removed\n"
        "[/list]\n"
        "See [url=https://example.com/changelog]the changelog[/url].\n"
        "[img]https://example.com/shot.png[/img]\n"
        "[quote=alice]Does it support [u]plugins[/u]?[/quote]\n"
        "[code=shell]pip install app[/code]"
    )


@pytest.fixture
def forum_post_markdown() -> str:
    """Provide the expected Markdown for the ``forum_post`` fixture."""
    return (
        "Release notes\n"
        "**Version 2.0** is out!\n"
        "\n- Faster *startup*\n- ~~Legacy~~ API removed\n\n"
        "\n"
        "See [the changelog](https://example.com/changelog).\n"
        "\n![](https://example.com/shot.png)\n"
        "\n"
        "> Does it support _plugins_?\n\n"
        "\n"
        "\n```sh\npip install app\n```\n"
    )
