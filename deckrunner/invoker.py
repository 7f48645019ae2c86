"""Run the external renderer for dev serving and batch builds."""

import logging
import os
import shutil
import signal
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .config import DeckConfig
from .index import write_index
from .locator import Deck

logger = logging.getLogger(__name__)

# Exit code shells use for "command not found"
EXIT_NOT_FOUND = 127

FORWARDED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP") if hasattr(signal, name)
)


class RendererError(Exception):
    """Renderer process exited non-zero."""

    def __init__(self, cmd: Sequence[str], returncode: int):
        self.cmd = list(cmd)
        self.returncode = returncode
        super().__init__(f"{' '.join(self.cmd)} failed with {returncode}")


def resolve_command(cmd: Sequence[str]) -> list[str]:
    """Resolve the executable via PATH so npx.cmd works on Windows."""
    cmd = list(cmd)
    found = shutil.which(cmd[0])
    if found:
        cmd[0] = found
    return cmd


def _shares_process_group(proc: subprocess.Popen) -> bool:
    """True if the child is in our process group (and so sees terminal signals)."""
    if not hasattr(os, "getpgid"):
        # Windows: console Ctrl-C goes to every process attached to the console
        return True
    try:
        return os.getpgid(proc.pid) == os.getpgrp()
    except ProcessLookupError:
        return False


def forward_signal(proc: subprocess.Popen, signum: int) -> bool:
    """Pass signum on to a running child. Returns True if it was sent."""
    if signum == signal.SIGINT and _shares_process_group(proc):
        # Ctrl-C already reached the child through the terminal
        return False
    if proc.poll() is not None:
        return False
    logger.debug(f"Forwarding signal {signum} to pid {proc.pid}")
    proc.send_signal(signum)
    return True


@contextmanager
def _forward_signals(proc: subprocess.Popen):
    """Relay termination signals received by this process to the child."""
    def handler(signum, frame):
        forward_signal(proc, signum)

    previous = {}
    for sig in FORWARDED_SIGNALS:
        try:
            previous[sig] = signal.signal(sig, handler)
        except ValueError:
            # Not the main thread; the child is still reaped by wait()
            break
    try:
        yield
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)


def normalize_returncode(returncode: int) -> int:
    """Map signal deaths (negative codes) to the shell's 128 + N convention."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_renderer(
    cmd: Sequence[str],
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    """Run cmd with inherited stdio and return its exit code.

    Blocks until the child exits. SIGINT/SIGTERM/SIGHUP sent to this process
    are passed on to the child while it runs.
    """
    logger.debug(f"Running: {' '.join(cmd)} (cwd={cwd or os.getcwd()})")
    try:
        proc = subprocess.Popen(resolve_command(cmd), cwd=cwd, env=env)
    except FileNotFoundError as e:
        logger.error(f"Renderer not found: {e}")
        return EXIT_NOT_FOUND

    with _forward_signals(proc):
        returncode = proc.wait()

    return normalize_returncode(returncode)


def serve_command(config: DeckConfig, deck: Deck) -> list[str]:
    return [*config.renderer, *config.serve_args, str(deck.entry_path)]


def build_command(config: DeckConfig, deck: Deck) -> list[str]:
    return [
        *config.renderer,
        "build", str(deck.entry_path),
        "--base", deck.base_path,
        "--out", str(deck.output_dir(config.dist_dir)),
    ]


def serve_deck(config: DeckConfig, deck: Deck, env: Optional[Mapping[str, str]] = None) -> int:
    """Start the dev server for one deck and return its exit code."""
    logger.info(f"Starting dev server for deck \"{deck.name}\" (entry: {deck.entry})")
    return run_renderer(serve_command(config, deck), cwd=config.root, env=env)


def build_deck(config: DeckConfig, deck: Deck, env: Optional[Mapping[str, str]] = None) -> Path:
    """Build one deck into <dist>/<name>/.

    Raises:
        RendererError: if the renderer exits non-zero
    """
    out_dir = deck.output_dir(config.dist_dir)
    logger.info(f"Building deck: {deck.name}")
    logger.info(f"  entry: {deck.entry}")
    logger.info(f"  out:   {out_dir}")
    logger.info(f"  base:  {deck.base_path}")

    out_dir.mkdir(parents=True, exist_ok=True)

    cmd = build_command(config, deck)
    returncode = run_renderer(cmd, cwd=deck.path, env=config.child_env(env if env is not None else os.environ))
    if returncode != 0:
        raise RendererError(cmd, returncode)

    logger.info(f"Built {deck.name}")
    return out_dir


def build_all(
    config: DeckConfig,
    decks: Sequence[Deck],
    clean: bool = False,
    env: Optional[Mapping[str, str]] = None,
) -> Path:
    """Build decks one at a time, then write the landing page.

    Stops at the first failing deck; the index is only written when every
    deck built.

    Returns:
        Path to the written index.html

    Raises:
        RendererError: from the first deck whose build fails
    """
    dist_dir = config.dist_dir
    if clean and dist_dir.exists():
        logger.info(f"Removing {dist_dir}")
        shutil.rmtree(dist_dir)
    dist_dir.mkdir(parents=True, exist_ok=True)

    for deck in decks:
        build_deck(config, deck, env=env)

    return write_index(dist_dir, decks)
