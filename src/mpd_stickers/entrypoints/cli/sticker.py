"""MPD-STICKERS sticker CLI: thin wrappers over the sticker adapter.

Each command opens one connection, issues one sticker command and closes the
connection again.

Behavior
- Sticker data (values, ``name=value`` lines, ``--json``) goes to **stdout**;
  human-oriented notices go to **stderr**.
- Deleting every sticker of an object prompts for confirmation unless
  ``--force`` is given.

Failure modes
- The server rejects the command (unknown song, missing sticker, ...) →
  ``ClickException`` carrying the server's message.
- The server is unreachable, drops the connection or sends an undecodable
  reply → the redacted cause on stderr, then a ``ClickException`` with
  guidance.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click
import click_extra as clickx

from mpd_stickers.adapters.stickers import StickerAdapter
from mpd_stickers.bootstrap import bootstrap
from mpd_stickers.domain.errors import StickerError
from mpd_stickers.interfaces.dispatcher import DispatcherError, ProtocolError

from .helpers import CliState, error, success, warn

logger = logging.getLogger(__name__)

CANNOT_CONNECT_MSG = (
    "Cannot talk to the MPD server.\n"
    "Please ensure MPD is running and that MPD_HOST/MPD_PORT (or --host/--port) "
    "point to it."
)

DELETE_ALL_WARNING = "This will delete every sticker on {object_type} '{uri}'."


@contextmanager
def _stickers(ctx: click.Context) -> Iterator[StickerAdapter]:
    """Yield a sticker adapter on an open connection; map errors to Click errors."""
    state = ctx.find_object(CliState) or CliState()
    container = bootstrap(settings=state.settings, redactor_mode=state.redactor_mode)
    try:
        with container.dispatcher:
            yield container.stickers
    except ProtocolError as e:
        logger.debug("Server rejected command: %s", e)
        raise click.ClickException(e.message) from e
    except DispatcherError as e:
        logger.debug("Dispatcher failure: %r", e)
        error(str(e))
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    except StickerError as e:
        raise click.ClickException(str(e)) from e


def _echo_mapping(mapping: dict[str, str], as_json: bool, separator: str) -> None:
    if as_json:
        click.echo(json.dumps(mapping, indent=2, sort_keys=True))
        return
    for key in sorted(mapping):
        click.echo(f"{key}{separator}{mapping[key]}")


@click.group(cls=clickx.ExtraGroup)
def sticker() -> None:
    """Sticker commands (TYPE is the object type, usually 'song')."""


@sticker.command()
@click.argument("object_type", metavar="TYPE")
@click.argument("uri")
@click.argument("name")
@click.pass_context
def get(ctx: click.Context, object_type: str, uri: str, name: str) -> None:
    """Print the value of sticker NAME on an object."""
    with _stickers(ctx) as stickers:
        value = stickers.get(object_type, uri, name)
    click.echo(value)


@sticker.command(name="set")
@click.argument("object_type", metavar="TYPE")
@click.argument("uri")
@click.argument("name")
@click.argument("value")
@click.pass_context
def set_(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context, object_type: str, uri: str, name: str, value: str
) -> None:
    """Set sticker NAME to VALUE on an object (replacing any previous value)."""
    with _stickers(ctx) as stickers:
        stickers.set(object_type, uri, name, value)
    success(f"Sticker '{name}' set on {object_type} '{uri}'.")


@sticker.command()
@click.argument("object_type", metavar="TYPE")
@click.argument("uri")
@click.argument("name", required=False)
@click.option("--force", is_flag=True, help="Delete all stickers without confirmation.")
@click.pass_context
def delete(
    ctx: click.Context, object_type: str, uri: str, name: str | None, force: bool
) -> None:
    """Delete sticker NAME from an object, or all of its stickers if NAME is omitted."""
    if name is None and not force:
        warn(DELETE_ALL_WARNING.format(object_type=object_type, uri=uri))
        click.confirm("Are you sure you want to proceed?", abort=True)
    with _stickers(ctx) as stickers:
        stickers.delete(object_type, uri, name)
    if name is None:
        success(f"All stickers deleted from {object_type} '{uri}'.")
    else:
        success(f"Sticker '{name}' deleted from {object_type} '{uri}'.")


@sticker.command(name="list")
@click.argument("object_type", metavar="TYPE")
@click.argument("uri")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON object.")
@click.pass_context
def list_(ctx: click.Context, object_type: str, uri: str, as_json: bool) -> None:
    """List the stickers of an object as NAME=VALUE lines."""
    with _stickers(ctx) as stickers:
        mapping = stickers.list(object_type, uri)
    _echo_mapping(mapping, as_json, "=")


@sticker.command()
@click.argument("object_type", metavar="TYPE")
@click.argument("name")
@click.option(
    "--directory",
    "-d",
    default="",
    show_default=True,
    help="Only search below this directory (default: the whole database).",
)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON object.")
@click.pass_context
def find(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context, object_type: str, name: str, directory: str, as_json: bool
) -> None:
    """Print URI<TAB>VALUE for every object below a directory carrying sticker NAME."""
    with _stickers(ctx) as stickers:
        mapping = stickers.find(object_type, directory, name)
    if mapping is None:
        warn("The server did not return individual results.")
        return
    _echo_mapping(mapping, as_json, "\t")
