"""Shared test fixtures for vtrans.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from vtrans.llm.providers import EchoLanguageModel, MockLanguageModel


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "vtrans"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def scenario_text() -> str:
    """A three-step behavioral scenario without headers."""
    return (
        "Given a user with role admin\n"
        "When they access /api/users\n"
        "Then access is granted"
    )


@pytest.fixture()
def structured_text() -> str:
    """A structured-data record with one step per section."""
    return (
        '{"given":["a user exists"],"when":["they log in"],'
        '"then":["they see dashboard"]}'
    )


@pytest.fixture()
def echo_model() -> EchoLanguageModel:
    return EchoLanguageModel()


@pytest.fixture()
def failing_model() -> MockLanguageModel:
    """A model whose every call raises a connection error."""
    return MockLanguageModel(error=ConnectionError("service unavailable"))
