""" This module contains the CLI for faptopia. """

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

import click

from faptopia.faptopia import Faptopia
from faptopia.fourchan import parse_thread_id
from faptopia.gallery import save_gallery
from faptopia.logger import FaptopiaLogger
from faptopia.server import create_app, serve as serve_app, PortInUseError
from faptopia.typing_custom import InvalidQueryError, SaveStatus, Section, Settings, SubredditQuery
from faptopia.utils import get_version


@dataclass
class AppState:
    """ State shared by the subcommands """
    faptopia: Faptopia
    logger: FaptopiaLogger
    settings: Settings
    output_dir: Path


def load_settings(path: Path | None) -> Settings:
    """ Reads the settings from a JSON file, or returns the defaults """
    if path is None:
        return Settings()
    try:
        with open(path, encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Malformed JSON in {path}: {e}", param_hint="--config") from e
    if not isinstance(config, dict):
        raise click.BadParameter(f"Invalid settings in {path}: expected a JSON object", param_hint="--config")

    unknown = sorted(set(config) - {setting.name for setting in fields(Settings)})
    if unknown:
        raise click.BadParameter(f"Unknown setting in {path}: {', '.join(unknown)}", param_hint="--config")
    try:
        return Settings(**config)
    except (TypeError, ValueError) as e:
        raise click.BadParameter(f"Invalid settings in {path}: {e}", param_hint="--config") from e


def write_gallery(state: AppState, sections: list[Section], source: str) -> None:
    """ Saves the gallery of one subcommand and reports the outcome """
    path = state.output_dir / f"{state.settings.prefix}_{source}.html"
    try:
        status = save_gallery(sections, path)
    except OSError as e:
        state.logger.error("Failed to write %s: %s", path, e)
        raise click.ClickException(f"Failed to write {path}: {e}") from e

    match status:
        case SaveStatus.EMPTY:
            click.echo("No media items found")
        case SaveStatus.SAVED:
            click.echo(f"Gallery saved to {path}")


@click.group()
@click.option(
    "--debug", "-d",
    is_flag = True,
    help = "Turn on debug mode.",
)
@click.option(
    "--config",
    metavar = "FILENAME",
    type = click.Path(exists=True, dir_okay=False, path_type=Path),
    help = "JSON file with settings.",
)
@click.option(
    "--max-tries",
    type = click.IntRange(min=1),
    help = "Attempts per request, 1 disables retrying.",
)
@click.option(
    "--log-dir",
    type = Path,
    default = Path("logs"),
    show_default = True,
    help = "Directory for log files.",
)
@click.option(
    "--no-log-file",
    is_flag = True,
    help = "Only log to the console.",
)
@click.option(
    "--output-dir", "-o",
    type = click.Path(file_okay=False, path_type=Path),
    default = Path("."),
    help = "Directory the gallery is written to.",
)
@click.version_option(get_version(), message="%(version)s")
@click.pass_context
def cli(ctx: click.Context, debug: bool, config: Path | None, max_tries: int | None,
        log_dir: Path, no_log_file: bool, output_dir: Path):
    """ Builds a scrollable video gallery from Reddit and 4chan. """
    settings = load_settings(config)
    if max_tries is not None:
        settings = replace(settings, max_tries=max_tries)

    logger = FaptopiaLogger(level=logging.DEBUG if debug else logging.INFO,
                            log_dir=None if no_log_file else log_dir)
    ctx.call_on_close(logger.close)

    faptopia = Faptopia(settings, logger=logger)
    logger.set_faptopia(faptopia)

    ctx.obj = AppState(faptopia, logger, settings, output_dir)


@cli.command()
@click.argument("queries", nargs=-1, metavar="SUBREDDIT:MODIFIER:TIME...")
@click.option(
    "--embed",
    is_flag = True,
    help = "Embed the players as iframes instead of resolving direct video links.",
)
@click.pass_obj
def reddit(state: AppState, queries: tuple[str, ...], embed: bool):
    """
    Collects the RedGifs videos of subreddit listings, e.g. hotwife:top:month
    """
    if len(queries) == 0:
        click.echo("Input a subreddit page, e.g. hotwife:top:month")
        return

    parsed: list[SubredditQuery] = []
    for query in queries:
        try:
            parsed.append(SubredditQuery.parse(query))
        except InvalidQueryError as e:
            click.echo(str(e))

    state.logger.info("Fetching %d subreddit listings 🚀", len(parsed))
    sections = state.faptopia.reddit_sections(parsed, embed=embed)
    write_gallery(state, sections, "reddit")


@cli.command("4chan")
@click.argument("thread_ids", nargs=-1, metavar="THREAD_ID...")
@click.pass_obj
def fourchan(state: AppState, thread_ids: tuple[str, ...]):
    """
    Collects the videos of 4chan threads
    """
    if len(thread_ids) == 0:
        click.echo("Input a thread id")
        return

    parsed: list[int] = []
    for thread_id in thread_ids:
        try:
            parsed.append(parse_thread_id(thread_id))
        except InvalidQueryError as e:
            click.echo(str(e))

    state.logger.info("Fetching %d threads 🚀", len(parsed))
    sections = state.faptopia.fourchan_sections(parsed)
    write_gallery(state, sections, "4chan")


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Address to listen on.")
@click.option("--port", "-p", type=click.IntRange(1, 65535), default=8080, show_default=True, help="Port to listen on.")
@click.option(
    "--root",
    type = click.Path(exists=True, file_okay=False, path_type=Path),
    default = Path("."),
    help = "Directory to serve files from.",
)
@click.pass_obj
def serve(state: AppState, host: str, port: int, root: Path):
    """
    Serves the gallery files and an API for fetching further threads
    """
    app = create_app(root, state.faptopia.fourchan, logger=state.logger)
    state.logger.info("Serving %s at http://%s:%d, press Ctrl+C to stop", root.resolve(), host, port)
    try:
        serve_app(app, host=host, port=port)
    except PortInUseError as e:
        raise click.ClickException(e.strerror) from e
