import sys
import textwrap
from pathlib import Path

import pytest

from deckrunner.config import DeckConfig

FAKE_RENDERER = textwrap.dedent('''\
    """Stand-in for slidev: records calls, writes output, fails on demand."""
    import os
    import sys
    from pathlib import Path

    args = sys.argv[1:]
    with open(os.environ["FAKE_RENDERER_LOG"], "a", encoding="utf-8") as f:
        f.write(" ".join(args) + "\\n")

    if args and args[0] == "build":
        out = Path(args[args.index("--out") + 1])
        if out.name in os.environ.get("FAKE_RENDERER_FAIL", "").split(","):
            sys.exit(2)
        out.mkdir(parents=True, exist_ok=True)
        (out / "index.html").write_text("<html></html>", encoding="utf-8")
        (out / "node_options.txt").write_text(os.environ.get("NODE_OPTIONS", ""), encoding="utf-8")
        sys.exit(0)

    sys.exit(int(os.environ.get("FAKE_RENDERER_EXIT", "0")))
''')


@pytest.fixture
def slides_dir(tmp_path) -> Path:
    path = tmp_path / "slides"
    path.mkdir()
    return path


@pytest.fixture
def make_deck(slides_dir):
    """Create slides/<name>/ with the given files (name -> content)."""
    def _make(name: str, files=None) -> Path:
        deck_dir = slides_dir / name
        deck_dir.mkdir()
        for filename, content in (files or {"slides.md": f"# {name}\n"}).items():
            (deck_dir / filename).write_text(content, encoding="utf-8")
        return deck_dir
    return _make


@pytest.fixture
def renderer_log(tmp_path, monkeypatch) -> Path:
    log = tmp_path / "renderer.log"
    log.touch()
    monkeypatch.setenv("FAKE_RENDERER_LOG", str(log))
    monkeypatch.delenv("FAKE_RENDERER_FAIL", raising=False)
    monkeypatch.delenv("FAKE_RENDERER_EXIT", raising=False)
    return log


@pytest.fixture
def fake_renderer(tmp_path, renderer_log) -> tuple[str, ...]:
    script = tmp_path / "fake_slidev.py"
    script.write_text(FAKE_RENDERER, encoding="utf-8")
    return (sys.executable, str(script))


@pytest.fixture
def config(tmp_path, slides_dir, fake_renderer) -> DeckConfig:
    return DeckConfig(root=tmp_path, renderer=fake_renderer)


@pytest.fixture
def renderer_calls(renderer_log):
    """Argument lines the fake renderer was called with, in order."""
    def _calls() -> list[str]:
        return [line for line in renderer_log.read_text(encoding="utf-8").splitlines() if line]
    return _calls


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("DECK", "SLIDE_DECKS", "SKIP_DECKS", "SLIDES_DIR", "DIST_DIR",
                "DECK_RENDERER", "NODE_OPTIONS"):
        monkeypatch.delenv(key, raising=False)
