"""Entry point for python -m deckrunner

Usage:
  python -m deckrunner dev my-talk
  python -m deckrunner build --skip "draft-*"
  python -m deckrunner list
"""

from .cli import cli

if __name__ == "__main__":
    cli()
