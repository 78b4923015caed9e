"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from gh_labeler.labels import DesiredLabel, ExistingLabel
from gh_labeler.testing import InMemoryLabelService

_SETTINGS_ENV = (
    "GH_LABELER_TOKEN",
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GITHUB_BASE_URL",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove settings-related environment variables for the test."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def bug_label() -> DesiredLabel:
    return DesiredLabel(
        name="bug",
        color="#d73a4a",
        description="Something isn't working",
        aliases=("defect",),
    )


@pytest.fixture
def feature_label() -> DesiredLabel:
    return DesiredLabel(
        name="enhancement",
        color="#a2eeef",
        description="New feature or request",
        aliases=("feature",),
    )


@pytest.fixture
def existing_labels() -> list[ExistingLabel]:
    """Labels a freshly created repository might carry."""
    return [
        ExistingLabel(name="bug", color="d73a4a", description="Something isn't working"),
        ExistingLabel(name="feature", color="a2eeef", description="New feature or request"),
        ExistingLabel(name="wontfix", color="ffffff", description="This will not be worked on"),
    ]


@pytest.fixture
def memory_service(existing_labels: list[ExistingLabel]) -> InMemoryLabelService:
    return InMemoryLabelService(list(existing_labels))


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo `configure_logging` changes to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
