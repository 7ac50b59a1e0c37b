"""End-to-end CLI coverage for the commands exposed by proxy_node_config."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

import lib_cli_exit_tools

from proxy_node_config import ConfigInitializationError, cli
from proxy_node_config.adapters.path_resolvers.default import load_location_table
from tests.support import create_node_sandbox, node_record


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_locate_reports_platform_location() -> None:
    result = _runner().invoke(cli.cli, ["locate", "--platform", "linux"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    expected = load_location_table()["linux"].rstrip("/") + "/"
    assert payload["platform"] == "linux"
    assert payload["location"] == expected
    assert payload["location_url"] == "file://" + expected
    assert payload["config_file"] == expected + "config.json"


def test_cli_locate_windows_url() -> None:
    result = _runner().invoke(cli.cli, ["locate", "--platform", "windows"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["platform"] == "windows"
    assert payload["location_url"].startswith("file:///")


def test_cli_rejects_unknown_platform() -> None:
    result = _runner().invoke(cli.cli, ["locate", "--platform", "beos"])
    assert result.exit_code != 0
    assert "Platform must be one of" in result.output


def test_cli_nodes_bootstraps_and_masks_password(tmp_path: Path) -> None:
    sandbox = create_node_sandbox(tmp_path)
    result = _runner().invoke(cli.cli, ["nodes", "--directory", str(sandbox.root)])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [node["name"] for node in payload["nodes"]] == ["default"]
    assert payload["nodes"][0]["password"] == "********"
    assert sandbox.config_file.is_file()


def test_cli_nodes_reveals_secrets_on_request(tmp_path: Path) -> None:
    sandbox = create_node_sandbox(tmp_path)
    sandbox.write_document([node_record()])
    result = _runner().invoke(cli.cli, ["nodes", "--directory", str(sandbox.root), "--reveal-secrets"])
    assert result.exit_code == 0
    assert json.loads(result.output)["nodes"][0]["password"] == "abc123"


def test_cli_nodes_exits_with_one_on_illegal_port(tmp_path: Path) -> None:
    sandbox = create_node_sandbox(tmp_path)
    sandbox.write_document([node_record(port=70000)])
    result = _runner().invoke(cli.cli, ["nodes", "--directory", str(sandbox.root)])
    assert result.exit_code == 1


def test_cli_nodes_surfaces_initialization_error(tmp_path: Path) -> None:
    sandbox = create_node_sandbox(tmp_path)
    sandbox.write_document([node_record(auth_type="token")])
    result = _runner().invoke(cli.cli, ["nodes", "--directory", str(sandbox.root)])
    assert result.exit_code != 0
    assert isinstance(result.exception, ConfigInitializationError)


def test_cli_template_respects_force(tmp_path: Path) -> None:
    runner = _runner()
    first = runner.invoke(cli.cli, ["template", "--destination", str(tmp_path)])
    assert first.exit_code == 0
    assert json.loads(first.output) == [str(tmp_path.resolve() / "config.json")]
    password = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))[0]["password"]

    skipped = runner.invoke(cli.cli, ["template", "--destination", str(tmp_path)])
    assert json.loads(skipped.output) == []

    forced = runner.invoke(cli.cli, ["template", "--destination", str(tmp_path), "--force"])
    assert json.loads(forced.output) == [str(tmp_path.resolve() / "config.json")]
    assert json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))[0]["password"] != password


def test_cli_info_without_metadata(monkeypatch) -> None:
    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output
    assert "config.server" in result.output
    assert "config.json" in result.output


def test_cli_platform_aliases_share_a_location() -> None:
    runner = _runner()
    aliases = ("mac", " MacOS ", "darwin")
    outputs = [json.loads(runner.invoke(cli.cli, ["locate", "--platform", alias]).output) for alias in aliases]
    assert {payload["platform"] for payload in outputs} == {"mac"}
    assert len({payload["location"] for payload in outputs}) == 1


def test_cli_main_restores_traceback_flag(tmp_path: Path) -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    sandbox = create_node_sandbox(tmp_path)
    sandbox.write_document([node_record()])
    exit_code = cli.main(["--traceback", "nodes", "--directory", str(sandbox.root)], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback


def test_cli_main_fails_on_fatal_port(tmp_path: Path) -> None:
    sandbox = create_node_sandbox(tmp_path)
    sandbox.write_document([node_record(port=0)])
    assert cli.main(["nodes", "--directory", str(sandbox.root)]) != 0
