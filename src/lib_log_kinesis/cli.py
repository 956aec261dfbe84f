"""Command line interface for inspecting configuration and sending test records.

Purpose
-------
Give operators a quick way to verify credentials, region, and stream wiring
from a shell before enabling the handler in an application.

Contents
--------
* :func:`cli` - click group with ``--traceback`` and ``--use-dotenv`` toggles.
* ``info`` / ``config`` / ``send`` subcommands.
* :func:`main` - entry point running the group through ``lib_cli_exit_tools``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as kinesis_config
from . import runtime
from .adapters.session import resolve_credentials, resolve_endpoint, resolve_region
from .domain.events import LogEvent
from .domain.levels import LogLevel
from .errors import SessionInitError
from .hook import KinesisHook
from .settings import HookConfig, KinesisMode

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner printed by ``info``."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _parse_fields(values: Sequence[str]) -> dict[str, Any]:
    """Turn repeated ``key=value`` options into a field mapping.

    Examples
    --------
    >>> _parse_fields(['user=alice', 'attempt=3'])
    {'user': 'alice', 'attempt': '3'}
    """
    fields: dict[str, Any] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--field")
        fields[key.strip()] = value
    return fields


def _resolve_config(
    settings: kinesis_config.HookSettings,
    *,
    mode: str | None,
    region: str | None,
    endpoint: str | None,
) -> HookConfig:
    overrides: dict[str, Any] = {}
    if mode:
        overrides["mode"] = KinesisMode.from_name(mode)
    if region:
        overrides["region"] = region
    if endpoint:
        overrides["endpoint"] = endpoint
    return settings.to_hook_config(**overrides)


def _create_hook(stream_name: str, hook_config: HookConfig) -> KinesisHook:
    return runtime.new(stream_name, hook_config)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before reading settings (env: {kinesis_config.DOTENV_ENV_VAR})",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Root command storing global flags."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if kinesis_config.dotenv_requested(use_dotenv):
        kinesis_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--mode", type=click.Choice([mode.value for mode in KinesisMode]), default=None)
@click.option("--region", default=None, help="Override the AWS region")
@click.option("--endpoint", default=None, help="Override the service endpoint URL")
def cli_config(mode: str | None, region: str | None, endpoint: str | None) -> None:
    """Show the resolved connection settings (secrets are never printed)."""

    settings = kinesis_config.HookSettings.from_env()
    hook_config = _resolve_config(settings, mode=mode, region=region, endpoint=endpoint)
    try:
        credential_source = resolve_credentials(hook_config).source
    except SessionInitError:
        credential_source = "missing"

    table = Table(title="lib_log_kinesis configuration", show_header=True)
    table.add_column("setting")
    table.add_column("value")
    table.add_row("mode", hook_config.mode.value)
    table.add_row("stream", settings.stream_name or "-")
    table.add_row("region", resolve_region(hook_config))
    table.add_row("endpoint", resolve_endpoint(hook_config) or "(service default)")
    table.add_row("credentials", credential_source)
    table.add_row("levels", ", ".join(level.name for level in settings.levels))
    table.add_row("async", str(settings.run_async).lower())
    Console(soft_wrap=True).print(table)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.option("--stream", "stream_name", default=None, help="Stream or delivery stream name")
@click.option("--mode", type=click.Choice([mode.value for mode in KinesisMode]), default=None)
@click.option("--partition-key", default=None, help="Default partition key")
@click.option("--field", "fields", multiple=True, help="Extra field as key=value (repeatable)")
@click.option(
    "--level",
    type=click.Choice([level.name.lower() for level in LogLevel]),
    default="info",
    show_default=True,
)
@click.option("--region", default=None, help="Override the AWS region")
@click.option("--endpoint", default=None, help="Override the service endpoint URL")
def cli_send(
    message: str,
    stream_name: str | None,
    mode: str | None,
    partition_key: str | None,
    fields: tuple[str, ...],
    level: str,
    region: str | None,
    endpoint: str | None,
) -> None:
    """Send MESSAGE as a single record, synchronously."""

    settings = kinesis_config.HookSettings.from_env()
    target = stream_name or settings.stream_name
    if not target:
        raise click.UsageError("no stream configured; pass --stream or set LOG_KINESIS_STREAM")

    hook = _create_hook(target, _resolve_config(settings, mode=mode, region=region, endpoint=endpoint))
    settings.apply(hook)
    if partition_key:
        hook.set_partition_key(partition_key)

    event = LogEvent(LogLevel.from_name(level), message, _parse_fields(fields), logger_name=__init__conf__.shell_command)
    hook.fire(event)
    click.echo(f"sent 1 record to {hook.resolver.stream_name(event)}")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    so embedding applications keep their own settings.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
