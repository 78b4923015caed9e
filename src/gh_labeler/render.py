"""Human-readable rendering of sync results and label listings."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import IO

import yaml

from gh_labeler.labels import ExistingLabel
from gh_labeler.operations import Rename, Update, describe_operation
from gh_labeler.result import SyncResult


def render_sync_result(result: SyncResult, *, verbose: bool, out: IO[str]) -> None:
    if result.dry_run and result.has_changes():
        out.write("\nSync preview (dry-run mode):\n")
    elif result.failed:
        out.write("\nSync finished with errors:\n")
    elif result.has_changes():
        out.write("\nSync completed:\n")
    else:
        out.write("\nNo changes required\n")

    out.write(f"  Created:   {result.created}\n")
    out.write(f"  Updated:   {result.updated}\n")
    out.write(f"  Deleted:   {result.deleted}\n")
    out.write(f"  Renamed:   {result.renamed}\n")
    out.write(f"  Unchanged: {result.unchanged}\n")

    if not verbose:
        return

    out.write("\nDetailed operations:\n")
    for number, outcome in enumerate(result.outcomes, start=1):
        operation = outcome.operation
        marker = "" if outcome.succeeded else " [FAILED]"
        out.write(f"  {number}. {describe_operation(operation)}{marker}\n")
        if isinstance(operation, (Update, Rename)):
            for change in operation.changes:
                out.write(f"      {change}\n")


def render_errors(errors: Sequence[str], *, out: IO[str]) -> None:
    if not errors:
        return
    out.write("\nErrors occurred:\n")
    for error in errors:
        out.write(f"  {error}\n")


def render_labels(labels: Sequence[ExistingLabel], fmt: str, *, out: IO[str]) -> None:
    if fmt == "json":
        out.write(json.dumps([label.to_json() for label in labels], indent=2) + "\n")
        return
    if fmt == "yaml":
        out.write(yaml.safe_dump([label.to_json() for label in labels], sort_keys=False))
        return

    out.write(f"{'Name':<30} {'Color':<8} {'Description':<50}\n")
    out.write("-" * 90 + "\n")
    for label in labels:
        description = label.description or "(none)"
        out.write(f"{label.name:<30} {label.display_color:<8} {description:<50}\n")
