"""
Module: conftest.py

Author: Michael Economou
Date: 2026-10-02

Global pytest configuration and fixtures for the tablegroups test suite.
Includes CI-friendly markers; the QApplication comes from pytest-qt.
"""

import os
import sys

# Run Qt headless when no display is available
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add project root to sys.path so the shared test doubles import as tests.mocks
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest  # noqa: E402

from tablegroups.core.group_registry import GroupRegistry  # noqa: E402
from tablegroups.core.history.edit_history import EditHistory  # noqa: E402
from tablegroups.core.membership_tree import MembershipTree  # noqa: E402


def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line("markers", "gui: mark test as requiring GUI")
    config.addinivalue_line("markers", "local_only: mark test as local environment only")


def pytest_collection_modifyitems(session, config, items):
    """Modify test collection to handle CI environment."""
    _ = session
    _ = config

    is_ci = "CI" in os.environ or "GITHUB_ACTIONS" in os.environ

    if is_ci:
        skip_gui = pytest.mark.skip(reason="GUI tests don't work on CI")
        skip_local = pytest.mark.skip(reason="Local-only tests skipped on CI")

        for item in items:
            if "gui" in item.keywords:
                item.add_marker(skip_gui)
            if "local_only" in item.keywords:
                item.add_marker(skip_local)


@pytest.fixture(scope="session")
def ci_environment():
    """Fixture to detect CI environment."""
    return "CI" in os.environ or "GITHUB_ACTIONS" in os.environ


@pytest.fixture
def history():
    """Fresh edit history."""
    return EditHistory()


@pytest.fixture
def registry(history):
    """Empty group registry bound to the history fixture."""
    return GroupRegistry(history)


@pytest.fixture
def tree(history):
    """Empty membership tree bound to the history fixture."""
    return MembershipTree(history)
