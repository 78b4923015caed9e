"""CLI entrypoint.

Exit codes are CI-friendly:

- 0 success (including "no changes")
- 1 general failure
- 2 configuration or validation error
- 3 authentication failure
- 4 repository not found
- 5 partial success (some operations failed)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from gh_labeler import __version__
from gh_labeler.config import LabelerSettings, parse_repository
from gh_labeler.errors import (
    EXIT_CONFIG,
    EXIT_GENERAL,
    EXIT_SUCCESS,
    ConfigValidationError,
    LabelerError,
)
from gh_labeler.github.client import GitHubLabelClient
from gh_labeler.github.contents import GitHubContents
from gh_labeler.label_config import (
    ConfigFormat,
    dump_labels,
    fetch_remote_config,
    fetch_remote_convention_config,
    load_convention_config,
    load_labels_from_file,
    load_labels_from_stdin,
    parse_remote_config_spec,
)
from gh_labeler.labels import DesiredLabel, default_labels
from gh_labeler.logging import configure_logging
from gh_labeler.render import render_errors, render_labels, render_sync_result
from gh_labeler.sync import LabelSyncer, SyncOptions

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-labeler",
        description=(
            "Synchronize GitHub repository labels with a declared configuration. "
            "Renames are detected through aliases and name similarity, so existing "
            "labels keep their issue assignments."
        ),
    )
    parser.add_argument("--version", action="version", version=f"gh-labeler {__version__}")
    parser.add_argument("-t", "--access-token", default=None, help="GitHub access token")
    parser.add_argument(
        "-r",
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Target repository in the form 'owner/repo'",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Compute the plan without applying it"
    )
    parser.add_argument(
        "--allow-added-labels",
        action="store_true",
        help="Keep labels that are not in the configuration instead of deleting them",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-c",
        "--config",
        default=None,
        help="Label configuration file (JSON/YAML), or '-' to read from stdin",
    )
    source.add_argument(
        "--template",
        default=None,
        help="Template repository 'owner/repo' whose convention config file is used",
    )
    source.add_argument(
        "--remote-config",
        default=None,
        help="Configuration file in another repository, 'owner/repo:path/to/file.yaml'",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("sync", help="Synchronize labels (default)")
    subparsers.add_parser("preview", help="Show what a sync would do (forces --dry-run)")

    init = subparsers.add_parser("init", help="Write the default label configuration")
    init.add_argument("--format", choices=["json", "yaml"], default="json", dest="fmt")
    init.add_argument("-o", "--output", default=None, help="Output file path")

    list_labels = subparsers.add_parser("list", help="Display the repository's current labels")
    list_labels.add_argument(
        "--format", choices=["table", "json", "yaml"], default="table", dest="fmt"
    )

    return parser


def open_label_client(
    *, token: str, repository: str, settings: LabelerSettings
) -> GitHubLabelClient:
    return GitHubLabelClient(
        token=token, repository=repository, base_url=settings.github_base_url
    )


def open_contents(*, token: str, settings: LabelerSettings) -> GitHubContents:
    return GitHubContents(token=token, base_url=settings.github_base_url)


def _require_repository(repository: str | None) -> str:
    if not repository:
        raise ConfigValidationError("Repository is required. Use the -r or --repo flag")
    parse_repository(repository)
    return repository


def _say(args: argparse.Namespace, message: str) -> None:
    if not args.json:
        print(message)


def load_label_config(
    args: argparse.Namespace, *, token: str, settings: LabelerSettings
) -> list[DesiredLabel]:
    """Resolve the desired label set from the CLI arguments."""

    if args.remote_config or args.template:
        contents = open_contents(token=token, settings=settings)
        try:
            if args.remote_config:
                repository, path = parse_remote_config_spec(args.remote_config)
                _say(args, f"Fetching remote config: {repository}:{path}")
                return fetch_remote_config(contents, repository, path)
            _say(args, f"Fetching template config from: {args.template}")
            return fetch_remote_convention_config(contents, args.template)
        finally:
            contents.close()

    if args.config == "-":
        return load_labels_from_stdin(sys.stdin)
    if args.config:
        return load_labels_from_file(Path(args.config))

    path, labels = load_convention_config()
    _say(args, f"Using config file: {path}")
    return labels


def _run_sync(args: argparse.Namespace, settings: LabelerSettings, *, dry_run: bool) -> int:
    token = settings.require_token(args.access_token)
    repository = _require_repository(args.repository)
    labels = load_label_config(args, token=token, settings=settings)

    if args.verbose:
        _say(args, f"Initializing sync for repository: {repository}")
        if dry_run:
            _say(args, "Running in dry-run mode (no changes will be made)")

    client = open_label_client(token=token, repository=repository, settings=settings)
    try:
        syncer = LabelSyncer(
            source=client,
            service=client,
            options=SyncOptions(dry_run=dry_run, allow_added_labels=args.allow_added_labels),
        )
        result = syncer.sync(labels)
    finally:
        client.close()

    output = result.to_output()
    if args.json:
        print(json.dumps(output.to_dict(), indent=2, ensure_ascii=False))
        return output.exit_code

    render_sync_result(result, verbose=args.verbose, out=sys.stdout)
    render_errors(result.errors, out=sys.stderr)
    return output.exit_code


def _run_init(args: argparse.Namespace) -> int:
    fmt: ConfigFormat = args.fmt
    output = Path(args.output) if args.output else Path(f".gh-labeler.{fmt}")
    if output.exists():
        raise ConfigValidationError(
            f"File already exists: {output}. Remove it first or use -o to choose another path."
        )

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_labels(default_labels(), fmt), encoding="utf-8")
    logger.info("Default configuration written", extra={"path": str(output)})
    print(f"Default configuration written to: {output}")
    return EXIT_SUCCESS


def _run_list(args: argparse.Namespace, settings: LabelerSettings) -> int:
    token = settings.require_token(args.access_token)
    repository = _require_repository(args.repository)

    client = open_label_client(token=token, repository=repository, settings=settings)
    try:
        labels = client.list_labels()
    finally:
        client.close()

    render_labels(labels, args.fmt, out=sys.stdout)
    return EXIT_SUCCESS


def _report_error(message: str, exit_code: int, *, json_mode: bool) -> None:
    if json_mode:
        payload = {"status": "error", "exit_code": exit_code, "errors": [message]}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(f"Error: {message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = LabelerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment and .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_CONFIG

    level = settings.log_level
    if args.verbose and logging.getLevelName(level.upper()) == logging.WARNING:
        level = "INFO"
    configure_logging(level, fmt=settings.log_format)

    command = args.command or "sync"
    try:
        if command == "init":
            return _run_init(args)
        if command == "list":
            return _run_list(args, settings)
        return _run_sync(args, settings, dry_run=args.dry_run or command == "preview")

    except LabelerError as e:
        logger.debug("Command failed", extra={"command": command, "exit_code": e.exit_code})
        _report_error(str(e), e.exit_code, json_mode=args.json)
        return e.exit_code

    except Exception as e:
        logger.exception("Command failed")
        _report_error(str(e), EXIT_GENERAL, json_mode=args.json)
        return EXIT_GENERAL


if __name__ == "__main__":
    raise SystemExit(main())
