#!/usr/bin/env python3
"""Programmatic label sync example.

This demonstrates using the gh-labeler components directly:

* load settings from `.env`
* load a label configuration file
* preview or apply the sync and fail on partial errors

Repository selection is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from gh_labeler.config import LabelerSettings
from gh_labeler.errors import LabelerError
from gh_labeler.label_config import load_labels_from_file
from gh_labeler.logging import configure_logging
from gh_labeler.sync import sync_repository_labels


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync repository labels (programmatic example).")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument("--config", required=True, help="Label configuration file (JSON/YAML)")
    parser.add_argument("--apply", action="store_true", help="Apply changes (default: preview)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = LabelerSettings()
    configure_logging(settings.log_level, fmt="text")

    try:
        labels = load_labels_from_file(Path(args.config))
        result = sync_repository_labels(
            token=settings.require_token(),
            repository=args.repo,
            labels=labels,
            dry_run=not args.apply,
            base_url=settings.github_base_url,
        )
        output = result.to_output()
        output.raise_for_status()
    except LabelerError as exc:
        print(f"Sync failed: {exc}")
        return exc.exit_code

    for operation in output.operations:
        print(f"{operation['type']:>9}  {operation['name']}")
    print(f"Status: {output.status.value}")
    return output.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
