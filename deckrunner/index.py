"""Landing page listing every built deck."""

import html
import logging
import re
from pathlib import Path
from typing import Optional, Sequence

from .locator import Deck

logger = logging.getLogger(__name__)

# First matching line anywhere in the file; no front-matter delimiter check
TITLE_RE = re.compile(r"^\s*title:\s*(.+?)\s*$", re.MULTILINE)
HEADING_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)

INDEX_TEMPLATE = """<!doctype html>
<html lang="en">
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Decks</title>
<style>
  body {{ font-family: system-ui; margin: 2rem; }}
  h1 {{ font-size: 1.5rem; margin-bottom: 1rem; }}
  ul {{ display: grid; gap: .5rem; padding: 0; list-style: none; }}
  a {{ text-decoration: none; padding: .75rem 1rem; border: 1px solid #ddd; border-radius: .75rem; display: block; }}
  a:hover {{ background: #fafafa; }}
</style>
<h1>Decks</h1>
<ul>
{items}
</ul>
</html>
"""


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1].strip()
    return value


def extract_title(text: str) -> Optional[str]:
    """Title from a ``title:`` line, else the first ``# `` heading."""
    m = TITLE_RE.search(text)
    if m:
        title = _unquote(m.group(1).strip())
        if title:
            return title

    m = HEADING_RE.search(text)
    if m and m.group(1).strip():
        return m.group(1).strip()

    return None


def deck_title(deck: Deck) -> str:
    """Display title for a deck; falls back to its folder name."""
    try:
        raw = deck.entry_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {deck.entry_path}: {e}")
        return deck.name
    return extract_title(raw) or deck.name


def render_deck_item(deck: Deck) -> str:
    href = html.escape(f"./{deck.name}/", quote=True)
    return f"<li><a href=\"{href}\">{html.escape(deck_title(deck))}</a></li>"


def render_index(decks: Sequence[Deck]) -> str:
    items = "\n".join(render_deck_item(d) for d in decks)
    return INDEX_TEMPLATE.format(items=items)


def write_index(dist_dir: Path, decks: Sequence[Deck]) -> Path:
    """Write <dist_dir>/index.html and return its path."""
    dist_dir = Path(dist_dir)
    dist_dir.mkdir(parents=True, exist_ok=True)
    out_path = dist_dir / "index.html"
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(render_index(decks))
    logger.info(f"Wrote {out_path}")
    return out_path
