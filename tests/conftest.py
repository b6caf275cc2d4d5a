"""Pytest configuration and shared fixtures for the adf2md test suite.

This module provides shared fixtures, test configuration, and document
builders used across the entire test suite.
"""

import json
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def issue_description() -> dict:
    """Provide a realistic issue description document.

    Returns
    -------
    dict
        Document loaded from tests/fixtures/documents/issue_description.json

    """
    return json.loads((FIXTURES_DIR / "documents" / "issue_description.json").read_text(encoding="utf-8"))


@pytest.fixture
def issue_description_markdown() -> str:
    """Provide the expected Markdown rendering of the issue description."""
    return (FIXTURES_DIR / "documents" / "issue_description.md").read_text(encoding="utf-8")


@pytest.fixture
def issue_description_path() -> Path:
    """Provide the path of the issue description fixture file."""
    return FIXTURES_DIR / "documents" / "issue_description.json"
