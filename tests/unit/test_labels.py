"""Unit tests for label models and rendering."""

from __future__ import annotations

import io

import pytest
from pydantic import ValidationError

from gh_labeler.labels import (
    DesiredLabel,
    ExistingLabel,
    colors_equal,
    default_labels,
    descriptions_equal,
)
from gh_labeler.operations import AttributeChange, Update
from gh_labeler.render import render_errors, render_sync_result
from gh_labeler.result import ErrorKind, SyncResult


def test_remote_color_strips_prefix_only() -> None:
    assert DesiredLabel(name="bug", color="#D73A4A").remote_color == "D73A4A"


def test_desired_label_is_immutable() -> None:
    label = DesiredLabel(name="bug", color="#d73a4a")

    with pytest.raises(ValidationError):
        label.name = "defect"  # type: ignore[misc]


def test_blank_alias_is_rejected() -> None:
    with pytest.raises(ValidationError):
        DesiredLabel(name="bug", color="#d73a4a", aliases=("",))


def test_to_config_omits_defaults() -> None:
    assert DesiredLabel(name="bug", color="#d73a4a").to_config() == {
        "name": "bug",
        "color": "#d73a4a",
    }


def test_colors_equal() -> None:
    assert colors_equal("#D73A4A", "d73a4a")
    assert not colors_equal("#d73a4a", "d73a4b")


def test_descriptions_equal() -> None:
    assert descriptions_equal(None, "")
    assert not descriptions_equal("Broken", None)


def test_existing_label_display_color() -> None:
    assert ExistingLabel(name="bug", color="d73a4a").display_color == "#d73a4a"


def test_default_labels_are_a_fresh_list() -> None:
    labels = default_labels()
    labels.clear()

    assert len(default_labels()) == 6


def test_render_verbose_lists_changes_and_failures() -> None:
    label = DesiredLabel(name="bug", color="#ff0000")
    result = SyncResult(dry_run=False)
    result.record_success(
        Update(
            current_name="bug",
            label=label,
            changes=(AttributeChange("color", "d73a4a", "ff0000"),),
        )
    )
    result.record_failure(
        Update(current_name="docs", label=label, changes=()),
        "nope",
        ErrorKind.OPERATION_FAILED,
    )
    out = io.StringIO()

    render_sync_result(result, verbose=True, out=out)

    text = out.getvalue()
    assert "Sync finished with errors:" in text
    assert "1. Update label: bug\n" in text
    assert "color: d73a4a -> ff0000" in text
    assert "2. Update label: docs [FAILED]" in text


def test_render_no_changes() -> None:
    out = io.StringIO()

    render_sync_result(SyncResult(dry_run=False), verbose=False, out=out)
    render_errors([], out=out)

    assert out.getvalue().startswith("\nNo changes required\n")
    assert "Errors occurred" not in out.getvalue()
