"""Unit tests for the CLI entrypoint (GitHub access mocked)."""

from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import Mock

import pytest
import yaml

from gh_labeler import main as main_module
from gh_labeler.errors import AuthenticationError
from gh_labeler.github.contents import GitHubContents
from gh_labeler.labels import ExistingLabel
from gh_labeler.main import main
from gh_labeler.testing import InMemoryLabelService, ScriptedLabelService

pytestmark = pytest.mark.usefixtures("restore_root_logger")

CONFIG = [
    {"name": "bug", "color": "#d73a4a", "aliases": ["defect"]},
    {"name": "question", "color": "#d876e3"},
]


@pytest.fixture
def workdir(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> Path:
    clean_env.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config_file(workdir: Path) -> Path:
    path = workdir / "labels.json"
    path.write_text(json.dumps(CONFIG), encoding="utf-8")
    return path


@pytest.fixture
def remote(monkeypatch: pytest.MonkeyPatch) -> InMemoryLabelService:
    service = InMemoryLabelService(
        [
            ExistingLabel(name="defect", color="d73a4a"),
            ExistingLabel(name="stale", color="000000"),
        ]
    )
    monkeypatch.setattr(main_module, "open_label_client", lambda **_kw: service)
    return service


def _args(config_file: Path, *extra: str) -> list[str]:
    return ["-t", "test-token", "-r", "octo-org/octo-repo", "-c", str(config_file), *extra]


def test_sync_applies_changes(
    config_file: Path, remote: InMemoryLabelService, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(_args(config_file))

    assert exit_code == 0
    assert sorted(label.name for label in remote.labels) == ["bug", "question"]
    out = capsys.readouterr().out
    assert "Sync completed:" in out
    assert "Renamed:   1" in out


def test_dry_run_json_output(
    config_file: Path, remote: InMemoryLabelService, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(_args(config_file, "--dry-run", "--json"))

    assert exit_code == 0
    assert remote.calls == []
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "success"
    assert payload["dry_run"] is True
    assert payload["summary"] == {
        "created": 1,
        "updated": 0,
        "deleted": 1,
        "renamed": 1,
        "unchanged": 0,
    }
    assert [op["type"] for op in payload["operations"]] == ["rename", "create", "delete"]


def test_preview_forces_dry_run(
    config_file: Path, remote: InMemoryLabelService, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main([*_args(config_file, "-v"), "preview"])

    assert exit_code == 0
    assert remote.calls == []
    out = capsys.readouterr().out
    assert "Sync preview (dry-run mode):" in out
    assert "Rename label: defect -> bug" in out


def test_second_sync_reports_no_changes(
    config_file: Path, remote: InMemoryLabelService, capsys: pytest.CaptureFixture[str]
) -> None:
    main(_args(config_file))
    capsys.readouterr()

    exit_code = main(_args(config_file, "--json"))

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["status"] == "no_changes"
    assert payload["idempotent"] is True


def test_partial_failure_exit_code(
    config_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    service = ScriptedLabelService(fail_creates={"question"})
    monkeypatch.setattr(main_module, "open_label_client", lambda **_kw: service)

    exit_code = main(_args(config_file))

    assert exit_code == 5
    captured = capsys.readouterr()
    assert "Sync finished with errors:" in captured.out
    assert "Operation failed: Create label: question" in captured.err


def test_missing_token(config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["-r", "octo-org/octo-repo", "-c", str(config_file)])

    assert exit_code == 2
    assert "access token is required" in capsys.readouterr().err


def test_missing_repository(config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["-t", "test-token", "-c", str(config_file)])

    assert exit_code == 2
    assert "Repository is required" in capsys.readouterr().err


def test_invalid_repository(config_file: Path) -> None:
    assert main(["-t", "test-token", "-r", "octo-repo", "-c", str(config_file)]) == 2


def test_invalid_config_reports_json_error(
    workdir: Path, remote: InMemoryLabelService, capsys: pytest.CaptureFixture[str]
) -> None:
    path = workdir / "labels.yaml"
    path.write_text("- name: bug\n  color: d73a4a\n", encoding="utf-8")

    exit_code = main(_args(path, "--json"))

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 2
    assert payload["status"] == "error"
    assert payload["exit_code"] == 2
    assert "Color must start with #" in payload["errors"][0]
    assert remote.calls == []


def test_authentication_failure(
    config_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _fail(**_kw: object) -> InMemoryLabelService:
        raise AuthenticationError("Authentication failed while trying to open repository")

    monkeypatch.setattr(main_module, "open_label_client", _fail)

    exit_code = main(_args(config_file))

    assert exit_code == 3
    assert "Error: Authentication failed" in capsys.readouterr().err


def test_unexpected_error_exits_with_general_failure(
    config_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _boom(**_kw: object) -> InMemoryLabelService:
        raise RuntimeError("boom")

    monkeypatch.setattr(main_module, "open_label_client", _boom)

    assert main(_args(config_file)) == 1


def test_convention_config_is_discovered(
    workdir: Path, remote: InMemoryLabelService, capsys: pytest.CaptureFixture[str]
) -> None:
    (workdir / ".gh-labeler.yaml").write_text(yaml.safe_dump(CONFIG), encoding="utf-8")

    exit_code = main(["-t", "test-token", "-r", "octo-org/octo-repo"])

    assert exit_code == 0
    assert "Using config file: .gh-labeler.yaml" in capsys.readouterr().out


def test_no_config_found(workdir: Path, remote: InMemoryLabelService) -> None:
    assert main(["-t", "test-token", "-r", "octo-org/octo-repo"]) == 2


def test_config_from_stdin(
    workdir: Path, remote: InMemoryLabelService, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(yaml.safe_dump(CONFIG)))

    exit_code = main(["-t", "test-token", "-r", "octo-org/octo-repo", "-c", "-"])

    assert exit_code == 0
    assert sorted(label.name for label in remote.labels) == ["bug", "question"]


def test_remote_config(
    workdir: Path, remote: InMemoryLabelService, monkeypatch: pytest.MonkeyPatch
) -> None:
    contents = Mock(spec=GitHubContents)
    contents.get_text_file.return_value = yaml.safe_dump(CONFIG)
    monkeypatch.setattr(main_module, "open_contents", lambda **_kw: contents)

    exit_code = main(
        [
            "-t",
            "test-token",
            "-r",
            "octo-org/octo-repo",
            "--remote-config",
            "octo-org/shared:labels/default.yaml",
        ]
    )

    assert exit_code == 0
    contents.get_text_file.assert_called_once_with(
        repository="octo-org/shared", path="labels/default.yaml"
    )
    contents.close.assert_called_once_with()


def test_template_repository(
    workdir: Path, remote: InMemoryLabelService, monkeypatch: pytest.MonkeyPatch
) -> None:
    contents = Mock(spec=GitHubContents)
    contents.get_text_file.side_effect = lambda *, repository, path: (
        json.dumps(CONFIG) if path == ".gh-labeler.json" else None
    )
    monkeypatch.setattr(main_module, "open_contents", lambda **_kw: contents)

    exit_code = main(
        ["-t", "test-token", "-r", "octo-org/octo-repo", "--template", "octo-org/template"]
    )

    assert exit_code == 0
    assert sorted(label.name for label in remote.labels) == ["bug", "question"]


def test_config_sources_are_mutually_exclusive(config_file: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(_args(config_file, "--template", "octo-org/template"))

    assert exc_info.value.code == 2


def test_init_writes_default_config(workdir: Path) -> None:
    assert main(["init"]) == 0

    written = json.loads((workdir / ".gh-labeler.json").read_text(encoding="utf-8"))
    assert [label["name"] for label in written] == [
        "bug",
        "enhancement",
        "documentation",
        "duplicate",
        "good first issue",
        "help wanted",
    ]
    assert written[0]["aliases"] == ["defect"]


def test_init_yaml_to_custom_path(workdir: Path) -> None:
    assert main(["init", "--format", "yaml", "-o", "config/labels.yml"]) == 0

    written = yaml.safe_load((workdir / "config" / "labels.yml").read_text(encoding="utf-8"))
    assert written[1]["name"] == "enhancement"


def test_init_refuses_to_overwrite(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    existing = workdir / ".gh-labeler.json"
    existing.write_text("[]", encoding="utf-8")

    assert main(["init"]) == 2
    assert existing.read_text(encoding="utf-8") == "[]"
    assert "File already exists" in capsys.readouterr().err


@pytest.mark.parametrize("fmt", ["json", "yaml"])
def test_list_labels_machine_readable(
    workdir: Path, remote: InMemoryLabelService, capsys: pytest.CaptureFixture[str], fmt: str
) -> None:
    exit_code = main(["-t", "test-token", "-r", "octo-org/octo-repo", "list", "--format", fmt])

    out = capsys.readouterr().out
    data = json.loads(out) if fmt == "json" else yaml.safe_load(out)
    assert exit_code == 0
    assert data == [
        {"name": "defect", "color": "d73a4a", "description": None},
        {"name": "stale", "color": "000000", "description": None},
    ]


def test_list_labels_table(
    workdir: Path, remote: InMemoryLabelService, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["-t", "test-token", "-r", "octo-org/octo-repo", "list"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.splitlines()[0].startswith("Name")
    assert "#d73a4a" in out
    assert "(none)" in out
