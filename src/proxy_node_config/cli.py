"""Operator command line for ``proxy_node_config``.

Purpose
-------
Let operators inspect where the server keeps its node document, write a
first-run template, and check that the document loads, without starting the
server.

Contents
--------
* :func:`cli` – command group; owns the ``--traceback`` switch.
* :func:`cli_info` – installed version plus where this host looks for nodes.
* :func:`cli_locate` – resolved location, URL and document path as JSON.
* :func:`cli_nodes` – loads the registry through :func:`bootstrap` and prints it.
* :func:`cli_template` – writes a template node document.
* :func:`main` – ``console_scripts`` entry point.

System Role
-----------
Outermost ring. Commands call the composition root and adapters; exit codes
and error printing go through ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from importlib import metadata
from pathlib import Path
from typing import Final, Iterator, Mapping, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.path_resolvers.default import DefaultLocationResolver
from .adapters.template.default import DefaultTemplateWriter
from .core import bootstrap
from .domain.config import CONFIG_FILE_NAME, CONFIG_NAME, location_url_for

DIST_NAME: Final[str] = "proxy-node-config"
PROG_NAME: Final[str] = "proxy_node_config"
CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

# Printed error length, indexed by the --traceback flag.
_ERROR_LENGTH_LIMIT: Final[Mapping[bool, int]] = {False: 500, True: 10_000}

_PLATFORM_ALIASES: Final[Mapping[str, str]] = {
    "linux": "linux",
    "posix": "linux",
    "darwin": "darwin",
    "mac": "darwin",
    "macos": "darwin",
    "win": "win32",
    "win32": "win32",
    "windows": "win32",
}


def _resolve_version() -> str:
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _platform_from_alias(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    """Click callback mapping ``--platform`` aliases onto ``sys.platform`` spellings.

    ``None`` or a blank value keeps auto-detection.
    """

    alias = (value or "").strip().lower()
    if not alias:
        return None
    if alias not in _PLATFORM_ALIASES:
        raise click.BadParameter(f"Platform must be one of: {', '.join(sorted(_PLATFORM_ALIASES))}.")
    return _PLATFORM_ALIASES[alias]


platform_option = click.option(
    "--platform",
    default=None,
    callback=_platform_from_alias,
    help="Override auto-detected platform (e.g. linux, darwin, windows)",
)


def _with_trailing_separator(location: str) -> str:
    return location if location.endswith(("/", "\\")) else location + "/"


@click.group(help="Proxy server node configuration loader", context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=_resolve_version(), prog_name=PROG_NAME)
@click.option("--traceback/--no-traceback", default=False, help="Show full Python traceback on errors")
def cli(traceback: bool) -> None:
    """Inspect and bootstrap the proxy server's node document.

    Side Effects
        Sets ``lib_cli_exit_tools.config.traceback`` (and its colour twin) so
        :func:`main` prints errors at the requested verbosity.
    """

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Show the installed version and where this host keeps its nodes."""

    try:
        version = metadata.metadata(DIST_NAME).get("Version") or _resolve_version()
    except metadata.PackageNotFoundError:
        click.echo(f"{PROG_NAME} (metadata unavailable)")
    else:
        click.echo(f"{PROG_NAME} {version}")

    resolver = DefaultLocationResolver()
    location = _with_trailing_separator(resolver.base_directory())
    rows = (
        ("section", CONFIG_NAME),
        ("platform", resolver.family),
        ("document", location + CONFIG_FILE_NAME),
    )
    for label, value in rows:
        click.echo(f"  {label:<9}: {value}")


@cli.command("locate", context_settings=CLICK_CONTEXT_SETTINGS)
@platform_option
def cli_locate(platform: Optional[str]) -> None:
    """Print the configuration directory and its URL without creating anything."""

    resolver = DefaultLocationResolver(platform=platform)
    location = _with_trailing_separator(resolver.base_directory())
    payload = {
        "platform": resolver.family,
        "location": location,
        "location_url": location_url_for(location, windows=resolver.is_windows),
        "config_file": location + CONFIG_FILE_NAME,
    }
    click.echo(json.dumps(payload, indent=2))


@cli.command("nodes", context_settings=CLICK_CONTEXT_SETTINGS)
@platform_option
@click.option(
    "--directory",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True, resolve_path=True),
    default=None,
    help="Use this directory instead of the platform location",
)
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with this indent size")
@click.option("--reveal-secrets/--no-reveal-secrets", default=False, help="Print passwords instead of masking them")
def cli_nodes(
    platform: Optional[str],
    directory: Optional[Path],
    indent: Optional[int],
    reveal_secrets: bool,
) -> None:
    """Load the node registry and print it as JSON.

    A missing ``config.json`` is bootstrapped from the template first. A node
    with an illegal port ends the command with exit status 1.
    """

    resolver = DefaultLocationResolver(platform=platform)
    if directory is not None:
        resolver = DefaultLocationResolver(platform=platform, table={resolver.family: str(directory)})
    config = bootstrap(resolver=resolver)
    click.echo(config.to_json(indent=indent, reveal_secrets=reveal_secrets))


@cli.command("template", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--destination",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True, resolve_path=True),
    required=True,
    help="Directory that will receive config.json",
)
@click.option("--force/--no-force", default=False, show_default=True, help="Overwrite an existing config.json")
def cli_template(destination: Path, force: bool) -> None:
    """Write a template ``config.json`` with a freshly generated password.

    Prints a JSON list holding the written path, or an empty list when an
    existing document was kept.
    """

    target = destination / CONFIG_FILE_NAME
    written: list[str] = []
    if force or not target.exists():
        DefaultTemplateWriter().write(str(target))
        written.append(str(target))
    click.echo(json.dumps(written, indent=2))


@contextmanager
def _traceback_settings(restore: bool) -> Iterator[None]:
    """Put ``lib_cli_exit_tools`` traceback settings back on exit when *restore*."""

    config = lib_cli_exit_tools.config
    saved = (getattr(config, "traceback", False), getattr(config, "traceback_force_color", False))
    try:
        yield
    finally:
        if restore:
            config.traceback, config.traceback_force_color = saved


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Run :func:`cli` and return its exit code instead of raising.

    Errors escaping the commands (including the ``SystemExit(1)`` raised for
    an illegal port) are printed by ``lib_cli_exit_tools`` and mapped to an
    exit code.
    """

    args = None if argv is None else list(argv)
    with _traceback_settings(restore_traceback):
        try:
            return lib_cli_exit_tools.run_cli(cli, argv=args, prog_name=PROG_NAME)
        except BaseException as exc:  # noqa: BLE001 - printed and mapped to an exit code
            verbose = bool(lib_cli_exit_tools.config.traceback)
            lib_cli_exit_tools.print_exception_message(
                trace_back=verbose,
                length_limit=_ERROR_LENGTH_LIMIT[verbose],
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
