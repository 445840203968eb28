# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""CLI entry point for yt-media."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click

from yt_media import __version__, create_dispatcher
from yt_media.core.errors import ErrorKind
from yt_media.core.logging import setup_logging
from yt_media.core.models import Failure
from yt_media.core.options import ServerOptions


# Exit codes
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _common_options(fn):
    """Shared Click options that map to ServerOptions fields."""
    decorators = [
        click.option("--output-dir", type=click.Path(path_type=Path), default=None, help="Default download directory."),
        click.option("--ffmpeg-path", type=str, default=None, help="ffmpeg executable."),
        click.option("--audio-bitrate", type=int, default=None, help="Audio bitrate in kbps."),
        click.option("--verbose", is_flag=True, default=None, help="Verbose logging on stderr."),
        click.option("--log-file", type=click.Path(path_type=Path), default=None, help="Also write JSONL logs here."),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _build_options(**cli_kwargs) -> ServerOptions:
    """Build ServerOptions from CLI kwargs, filtering out unset (None) values.

    Only explicitly-provided CLI flags are passed to ServerOptions as init
    overrides. Unset flags fall through to env vars → YAML → defaults.
    """
    overrides = {key: value for key, value in cli_kwargs.items() if value is not None}
    return ServerOptions(**overrides)


def _parse_param(raw: str) -> tuple[str, object]:
    """Split key=value; the value is read as JSON when it parses, else kept as text."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected key=value, got {raw!r}", param_hint="--param")
    try:
        return key, json.loads(value)
    except json.JSONDecodeError:
        return key, value


def _exit_code(outcome) -> int:
    if not isinstance(outcome, Failure):
        return EXIT_OK
    if outcome.kind in (ErrorKind.UNKNOWN_OPERATION, ErrorKind.INVALID_PARAMETERS):
        return EXIT_USAGE
    return EXIT_FAILED


@click.group()
@click.version_option(version=__version__, prog_name="yt-media")
def cli() -> None:
    """YouTube video, audio, and transcript tools over MCP."""


@cli.command()
@_common_options
def serve(**kwargs):
    """Serve the tools over MCP on stdin/stdout."""
    from yt_media.server import serve as serve_stdio

    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=options.log_file)
    dispatcher = create_dispatcher(options)

    try:
        asyncio.run(serve_stdio(dispatcher))
    except KeyboardInterrupt:
        pass
    sys.exit(EXIT_OK)


@cli.command()
@_common_options
def tools(**kwargs):
    """Print the available tools and their input schemas as JSON."""
    from yt_media.core.registry import build_registry

    options = _build_options(**kwargs)
    registry = build_registry(options)
    listing = [
        {"name": d.name, "description": d.description, "inputSchema": d.input_schema}
        for d in registry.list()
    ]
    click.echo(json.dumps(listing, indent=2))


@cli.command()
@click.argument("name")
@click.option("--params", "params_json", type=str, default=None, help="Parameters as a JSON object.")
@click.option("--param", "param_pairs", multiple=True, help="Parameter as key=value (repeatable).")
@_common_options
def call(name, params_json, param_pairs, **kwargs):
    """Run one tool locally and print its result."""
    options = _build_options(**kwargs)
    setup_logging(verbose=options.verbose, jsonl_path=options.log_file)

    params: dict = {}
    if params_json:
        try:
            loaded = json.loads(params_json)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"invalid JSON: {exc}", param_hint="--params") from exc
        if not isinstance(loaded, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--params")
        params.update(loaded)
    params.update(_parse_param(p) for p in param_pairs)

    outcome = create_dispatcher(options).dispatch(name, params)
    if isinstance(outcome, Failure):
        click.echo(f"Error ({outcome.kind.value}): {outcome.message}", err=True)
    else:
        click.echo(outcome.payload)
    sys.exit(_exit_code(outcome))


if __name__ == "__main__":
    cli()
