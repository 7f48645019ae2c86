#!/usr/bin/env python3
"""Deckrunner CLI - dev server and batch builds for Slidev decks."""

import logging
import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from . import __version__
from .config import ConfigError, load_config
from .index import deck_title
from .invoker import RendererError, build_all, serve_deck
from .locator import discover_decks, resolve_deck
from .selector import select_decks

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _load_env() -> None:
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)


slides_dir_option = click.option(
    "--slides-dir", type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding deck folders (default: slides, or SLIDES_DIR)",
)
config_option = click.option(
    "--config", "config_file", type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (default: decks.yml)",
)
verbose_option = click.option("-v", "--verbose", is_flag=True, help="Debug logging")


@click.group()
@click.version_option(version=__version__)
def cli():
    """Deckrunner - run and build Slidev slide decks.

    Decks are folders under slides/ holding a markdown entry
    (slides.md, index.md, deck.md, presentation.md or any *.md).
    """
    pass


@cli.command()
@click.argument("deck", required=False)
@slides_dir_option
@config_option
@verbose_option
def dev(deck, slides_dir, config_file, verbose):
    """Start the dev server for DECK (or $DECK)."""
    _setup_logging(verbose)
    _load_env()

    deck_name = deck or os.environ.get("DECK")
    if not deck_name:
        click.echo("Error: Please specify a deck name, e.g.: deck-dev my-talk", err=True)
        sys.exit(1)

    try:
        config = load_config(env=os.environ, config_file=config_file, slides_dir=slides_dir)
        target = resolve_deck(config.slides_dir, deck_name)
    except (ConfigError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    sys.exit(serve_deck(config, target))


@cli.command()
@click.option("--only", help="Comma-separated deck patterns to build (overrides SLIDE_DECKS)")
@click.option("--skip", help="Comma-separated deck patterns to skip (overrides SKIP_DECKS)")
@slides_dir_option
@click.option("--dist-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Output directory (default: dist, or DIST_DIR)")
@click.option("--clean", is_flag=True, help="Remove the output directory first")
@config_option
@verbose_option
def build(only, skip, slides_dir, dist_dir, clean, config_file, verbose):
    """Build every selected deck into dist/ and write dist/index.html.

    \b
    Examples:
      deck-build
      SLIDE_DECKS="intro,talk-*" deck-build
      deck-build --skip "draft,old-*"
    """
    _setup_logging(verbose)
    _load_env()

    try:
        config = load_config(
            env=os.environ,
            config_file=config_file,
            slides_dir=slides_dir,
            dist_dir=dist_dir,
            include=only,
            exclude=skip,
        )
        decks = select_decks(discover_decks(config.slides_dir), config.include, config.exclude)
        if not decks:
            logger.info(f"No decks found under {config.slides_dir}")
            return

        logger.info(f"Found {len(decks)} deck(s): {', '.join(d.name for d in decks)}")
        build_all(config, decks, clean=clean)
    except (ConfigError, RendererError, OSError) as e:
        click.echo(f"Build failed: {e}", err=True)
        sys.exit(1)

    logger.info("All decks built.")


@cli.command("list")
@click.option("--only", help="Comma-separated deck patterns to include")
@click.option("--skip", help="Comma-separated deck patterns to skip")
@slides_dir_option
@config_option
@verbose_option
def list_decks(only, skip, slides_dir, config_file, verbose):
    """List decks that a build would pick up."""
    _setup_logging(verbose)
    _load_env()

    try:
        config = load_config(
            env=os.environ,
            config_file=config_file,
            slides_dir=slides_dir,
            include=only,
            exclude=skip,
        )
        decks = select_decks(discover_decks(config.slides_dir), config.include, config.exclude)
    except (ConfigError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for d in decks:
        click.echo(f"{d.name}\t{d.entry}\t{deck_title(d)}")


if __name__ == "__main__":
    cli()
