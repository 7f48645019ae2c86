"""Dev server and batch build helpers for Slidev slide decks."""

__version__ = "0.1.0"

from deckrunner.config import ConfigError, DeckConfig, load_config
from deckrunner.locator import (
    Deck,
    DeckNotFoundError,
    NoEntryError,
    SlidesDirNotFoundError,
    discover_decks,
    find_entry,
    resolve_deck,
)
from deckrunner.selector import matches, select_decks
from deckrunner.invoker import RendererError, build_all, build_deck, serve_deck
from deckrunner.index import extract_title, write_index

__all__ = [
    # config.py
    "ConfigError",
    "DeckConfig",
    "load_config",
    # locator.py
    "Deck",
    "DeckNotFoundError",
    "NoEntryError",
    "SlidesDirNotFoundError",
    "discover_decks",
    "find_entry",
    "resolve_deck",
    # selector.py
    "matches",
    "select_decks",
    # invoker.py
    "RendererError",
    "build_all",
    "build_deck",
    "serve_deck",
    # index.py
    "extract_title",
    "write_index",
]
