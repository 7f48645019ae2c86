"""Deck discovery: find deck folders and resolve their entry documents."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import ConfigError

logger = logging.getLogger(__name__)

# Checked in this order before falling back to any *.md file
ENTRY_CANDIDATES = ("slides.md", "index.md", "deck.md", "presentation.md")


class SlidesDirNotFoundError(ConfigError):
    """The base directory holding the decks does not exist."""
    pass


class DeckNotFoundError(ConfigError):
    """No folder for the requested deck."""
    pass


class NoEntryError(ConfigError):
    """Deck folder has no markdown entry file."""
    pass


@dataclass(frozen=True)
class Deck:
    """One presentation folder under the slides directory."""

    name: str
    path: Path
    entry: str

    @property
    def entry_path(self) -> Path:
        return self.path / self.entry

    @property
    def base_path(self) -> str:
        return f"/{self.name}/"

    def output_dir(self, dist_dir: Path) -> Path:
        return Path(dist_dir) / self.name


def find_entry(deck_path: Path) -> Optional[str]:
    """Find the markdown entry file inside a deck folder.

    Returns the first canonical filename that exists, else the first *.md
    file in directory listing order, else None.
    """
    deck_path = Path(deck_path)
    for candidate in ENTRY_CANDIDATES:
        if (deck_path / candidate).exists():
            return candidate

    for name in os.listdir(deck_path):
        if name.endswith(".md"):
            return name

    return None


def is_candidate_dir(path: Path) -> bool:
    return path.is_dir() and not path.name.startswith((".", "_"))


def discover_decks(slides_dir: Path) -> list[Deck]:
    """Discover every deck folder under slides_dir.

    Hidden (``.``) and private (``_``) folders are ignored, as are folders
    without a markdown entry. Order follows directory listing order.

    Raises:
        SlidesDirNotFoundError: if slides_dir does not exist
    """
    slides_dir = Path(slides_dir)
    if not slides_dir.is_dir():
        raise SlidesDirNotFoundError(f"No slides directory found: {slides_dir}")

    decks = []
    for name in os.listdir(slides_dir):
        path = slides_dir / name
        if not is_candidate_dir(path):
            continue

        entry = find_entry(path)
        if entry is None:
            logger.debug(f"Skipping {name}: no markdown entry")
            continue

        decks.append(Deck(name=name, path=path, entry=entry))

    return decks


def resolve_deck(slides_dir: Path, name: str) -> Deck:
    """Resolve a single deck by name for the dev server.

    Raises:
        DeckNotFoundError: if the deck folder does not exist
        NoEntryError: if the folder has no markdown entry
    """
    slides_dir = Path(slides_dir)
    path = slides_dir / name
    # Deck names are folder names; absolute or ../ names must not escape slides_dir
    if Path(name).is_absolute() or slides_dir.resolve() not in path.resolve().parents:
        raise DeckNotFoundError(f"Deck folder not found: {path}")
    if not path.is_dir():
        raise DeckNotFoundError(f"Deck folder not found: {path}")

    entry = find_entry(path)
    if entry is None:
        raise NoEntryError(f"No markdown entry file found in {path}")

    return Deck(name=name, path=path, entry=entry)
