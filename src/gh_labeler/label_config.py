"""Label configuration loading.

A label configuration is a JSON or YAML list of label mappings:

    - name: bug
      color: "#d73a4a"
      description: Something isn't working
      aliases: [defect]

Sources, in the order the CLI consults them: a file in a remote repository, a
convention file in a template repository, stdin, a local path, and finally a
convention file in the working directory.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import IO, Any, Literal

import yaml
from pydantic import ValidationError

from gh_labeler.config import parse_repository
from gh_labeler.errors import (
    ConfigNotFoundError,
    ConfigValidationError,
    LabelValidationError,
    RemoteConfigNotFoundError,
)
from gh_labeler.github.contents import GitHubContents
from gh_labeler.labels import DesiredLabel

logger = logging.getLogger(__name__)

ConfigFormat = Literal["json", "yaml"]

CONVENTION_CONFIG_FILES: tuple[str, ...] = (
    ".gh-labeler.json",
    ".gh-labeler.yaml",
    ".gh-labeler.yml",
    ".github/labels.json",
    ".github/labels.yaml",
    ".github/labels.yml",
)

_EXTENSION_FORMATS: dict[str, ConfigFormat] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def format_for_path(path: str | Path) -> ConfigFormat:
    suffix = Path(path).suffix.lower()
    try:
        return _EXTENSION_FORMATS[suffix]
    except KeyError:
        raise ConfigValidationError(
            f"Unsupported configuration file extension: {path} (expected .json, .yaml or .yml)"
        ) from None


def detect_format(text: str) -> ConfigFormat:
    """Guess the format of unlabelled input (stdin): JSON if it parses, else YAML."""

    try:
        json.loads(text)
    except ValueError:
        return "yaml"
    return "json"


def _format_validation_error(index: int, raw: Any, exc: ValidationError) -> str:
    name = raw.get("name") if isinstance(raw, dict) else None
    where = f"label #{index + 1}" + (f" ({name!r})" if isinstance(name, str) else "")
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'label'}: {err['msg']}" for err in exc.errors()
    )
    return f"Invalid {where}: {problems}"


def validate_labels(raw_labels: Iterable[Any]) -> list[DesiredLabel]:
    """Validate raw mappings into `DesiredLabel`s, rejecting duplicate names."""

    labels: list[DesiredLabel] = []
    seen: set[str] = set()
    for index, raw in enumerate(raw_labels):
        try:
            label = DesiredLabel.model_validate(raw)
        except ValidationError as exc:
            raise LabelValidationError(_format_validation_error(index, raw, exc)) from exc
        if label.name in seen:
            raise LabelValidationError(f"Duplicate label name: {label.name!r}")
        seen.add(label.name)
        labels.append(label)
    return labels


def parse_labels(text: str, fmt: ConfigFormat) -> list[DesiredLabel]:
    try:
        raw = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigValidationError(
            f"Could not parse {fmt.upper()} label configuration: {exc}"
        ) from exc

    if raw is None:
        raw = []
    if not isinstance(raw, list):
        raise ConfigValidationError("Label configuration must be a list of labels")
    return validate_labels(raw)


def load_labels_from_file(path: Path) -> list[DesiredLabel]:
    fmt = format_for_path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigNotFoundError([str(path)]) from None
    labels = parse_labels(text, fmt)
    logger.info("Label configuration loaded", extra={"path": str(path), "count": len(labels)})
    return labels


def load_labels_from_stdin(stream: IO[str]) -> list[DesiredLabel]:
    text = stream.read()
    return parse_labels(text, detect_format(text))


def find_convention_config(root: Path | None = None) -> Path | None:
    base = root if root is not None else Path()
    for name in CONVENTION_CONFIG_FILES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_convention_config(root: Path | None = None) -> tuple[Path, list[DesiredLabel]]:
    path = find_convention_config(root)
    if path is None:
        raise ConfigNotFoundError(CONVENTION_CONFIG_FILES)
    return path, load_labels_from_file(path)


def parse_remote_config_spec(spec: str) -> tuple[str, str]:
    """Split "owner/repo:path/to/file" into ("owner/repo", "path/to/file")."""

    repository, sep, path = spec.partition(":")
    if not sep:
        raise ConfigValidationError(
            f"Invalid remote config format: {spec} (expected 'owner/repo:path/to/file')"
        )
    if not path.strip():
        raise ConfigValidationError(f"Empty file path in remote config: {spec}")
    parse_repository(repository)
    return repository, path


def fetch_remote_config(
    contents: GitHubContents, repository: str, path: str
) -> list[DesiredLabel]:
    parse_repository(repository)
    text = contents.get_text_file(repository=repository, path=path)
    if text is None:
        contents.require_repository(repository)
        raise RemoteConfigNotFoundError(repository, [path])
    labels = parse_labels(text, format_for_path(path))
    logger.info(
        "Remote label configuration loaded",
        extra={"repo": repository, "path": path, "count": len(labels)},
    )
    return labels


def fetch_remote_convention_config(
    contents: GitHubContents, repository: str
) -> list[DesiredLabel]:
    """Load the first convention config file present in a template repository."""

    parse_repository(repository)
    for path in CONVENTION_CONFIG_FILES:
        text = contents.get_text_file(repository=repository, path=path)
        if text is not None:
            logger.info("Template configuration found", extra={"repo": repository, "path": path})
            return parse_labels(text, format_for_path(path))
    contents.require_repository(repository)
    raise RemoteConfigNotFoundError(repository, CONVENTION_CONFIG_FILES)


def dump_labels(labels: Iterable[DesiredLabel], fmt: ConfigFormat) -> str:
    data = [label.to_config() for label in labels]
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
