"""Click command line interface for demos and metadata.

Purpose
-------
Expose the package through ``lib_log_easy`` / ``python -m lib_log_easy`` so the
tag formats, level masks and moment timing can be tried from a shell.

Contents
--------
* :func:`cli` – root group with ``--traceback`` and ``--use-dotenv`` switches.
* ``info``, ``logdemo`` and ``moments`` sub-commands.
* :func:`main` – runs :func:`cli` through :mod:`lib_cli_exit_tools`.
* :func:`summary_info` – metadata banner shared with the package surface.
"""

from __future__ import annotations

import os
from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as log_config
from .adapters import full_tag, no_tag, short_tag
from .domain import ATOMIC_LEVELS, LogLevel
from .log import Log
from .runtime import LoggingContext

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_TAG_CHOICES = ("formatted", "short", "full", "none")
_TAGS = {"short": short_tag, "full": full_tag, "none": no_tag}


def summary_info() -> str:
    """Return the metadata banner printed by ``info`` and the bare command."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(__init__conf__.version, "--version", "-V", prog_name=__init__conf__.shell_command)
@click.option(
    "--traceback/--no-traceback",
    default=None,
    help="Show full Python tracebacks when a command fails.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load environment variables from a nearby .env (default from {log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool | None, use_dotenv: bool | None) -> None:
    """Event-driven logging with moment timing."""

    if log_config.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(log_config.DOTENV_ENV_VAR)):
        log_config.enable_dotenv()
    if traceback is not None:
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--level", "level_name", default="ALL", show_default=True, help="Concerned-level mask, e.g. INFO|ERROR.")
@click.option("--tag", "tag_name", type=click.Choice(_TAG_CHOICES), default="formatted", show_default=True)
def cli_logdemo(level_name: str, tag_name: str) -> None:
    """Broadcast one message per level and a sample exception."""

    try:
        mask = LogLevel.from_name(level_name)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--level") from exc

    click.echo(f"=== Level mask: {mask.label} ===")
    context = LoggingContext(default_level=mask, with_primary=False)
    with Log(context=context, build_tag=_TAGS.get(tag_name), description="logdemo"):
        context.v("verbose sample")
        context.d("debug sample")
        context.i("info sample with {0} argument", 1)
        context.w("warn sample")
        context.e("error sample")
        try:
            raise ValueError("sample failure")
        except ValueError as exc:
            context.exception(exc, LogLevel.INFO)
    emitted = sum(1 for level in ATOMIC_LEVELS if level.matches(mask))
    click.echo(f"emitted {emitted} of {len(ATOMIC_LEVELS)} levels")


@cli.command("moments", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--count", type=click.IntRange(min=1), default=5, show_default=True)
@click.option("--key", default="cli", show_default=True)
def cli_moments(count: int, key: str) -> None:
    """Mark ``count`` moments under ``key`` and print the intervals between them."""

    context = LoggingContext(with_primary=False)
    for _ in range(count):
        context.mark_moment(key)
    intervals = context.get_intervals(key)
    click.echo(f"{key}: {len(context.get_moments(key))} moments")
    click.echo("intervals (ns): " + ", ".join(str(interval) for interval in intervals))


def main(argv: Sequence[str] | None = None) -> int:
    """Run :func:`cli` and restore the traceback preferences afterwards.

    Parameters
    ----------
    argv:
        Optional argument list; ``sys.argv[1:]`` when omitted.

    Returns
    -------
    int
        Exit code reported by :func:`lib_cli_exit_tools.run_cli`.
    """

    previous = (
        lib_cli_exit_tools.config.traceback,
        lib_cli_exit_tools.config.traceback_force_color,
    )
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = previous


__all__ = ["cli", "main", "summary_info"]
