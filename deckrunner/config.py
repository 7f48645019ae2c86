"""Configuration for deck discovery, selection and rendering."""

import logging
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "decks.yml"
DEFAULT_RENDERER = ("npx", "-y", "slidev")
DEFAULT_NODE_OPTIONS = "--max_old_space_size=4096"


class ConfigError(Exception):
    """Invalid or missing configuration (arguments, directories, entry files)."""
    pass


def parse_pattern_list(value) -> tuple[str, ...]:
    """Split a comma-separated pattern string into trimmed, non-empty patterns.

    Lists and tuples are accepted too (as they come out of decks.yml).
    """
    if not value:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(v) for v in value]
    return tuple(s.strip() for s in items if s.strip())


@dataclass(frozen=True)
class DeckConfig:
    """Everything the locator, selector and invokers need.

    Nothing here reads the process environment; the CLI builds one of these
    via load_config() and passes it down.
    """

    root: Path = field(default_factory=Path.cwd)
    slides_dir: Optional[Path] = None
    dist_dir: Optional[Path] = None
    renderer: tuple[str, ...] = DEFAULT_RENDERER
    serve_args: tuple[str, ...] = ()
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    node_options: str = DEFAULT_NODE_OPTIONS

    def __post_init__(self):
        root = Path(self.root)
        object.__setattr__(self, "root", root)
        object.__setattr__(self, "slides_dir", _under(root, self.slides_dir or "slides"))
        object.__setattr__(self, "dist_dir", _under(root, self.dist_dir or "dist"))
        object.__setattr__(self, "renderer", tuple(self.renderer))
        object.__setattr__(self, "serve_args", tuple(self.serve_args))
        object.__setattr__(self, "include", parse_pattern_list(self.include))
        object.__setattr__(self, "exclude", parse_pattern_list(self.exclude))
        if not self.renderer:
            raise ConfigError("Renderer command must not be empty")

    def child_env(self, base_env: Mapping[str, str]) -> dict[str, str]:
        """Environment for a build child, with a heap hint unless one is set."""
        env = dict(base_env)
        if not env.get("NODE_OPTIONS"):
            env["NODE_OPTIONS"] = self.node_options
        return env


def _under(root: Path, path) -> Path:
    path = Path(path).expanduser()
    return path if path.is_absolute() else root / path


def load_config_file(path: Path) -> dict:
    """Load decks.yml. A missing file is an empty config."""
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

    logger.debug(f"Loaded config from {path}")
    return data


def _file_settings(data: dict) -> dict:
    settings = {}
    for key in ("slides_dir", "dist_dir", "node_options"):
        if data.get(key):
            settings[key] = data[key]
    for key in ("include", "exclude"):
        if data.get(key):
            settings[key] = parse_pattern_list(data[key])
    for key in ("renderer", "serve_args"):
        value = data.get(key)
        if value:
            settings[key] = tuple(shlex.split(value)) if isinstance(value, str) else tuple(map(str, value))

    unknown = set(data) - {"slides_dir", "dist_dir", "node_options", "include",
                           "exclude", "renderer", "serve_args"}
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
    return settings


def _env_settings(env: Mapping[str, str]) -> dict:
    settings = {}
    if env.get("SLIDE_DECKS"):
        settings["include"] = parse_pattern_list(env["SLIDE_DECKS"])
    if env.get("SKIP_DECKS"):
        settings["exclude"] = parse_pattern_list(env["SKIP_DECKS"])
    if env.get("SLIDES_DIR"):
        settings["slides_dir"] = env["SLIDES_DIR"]
    if env.get("DIST_DIR"):
        settings["dist_dir"] = env["DIST_DIR"]
    if env.get("DECK_RENDERER"):
        settings["renderer"] = tuple(shlex.split(env["DECK_RENDERER"]))
    return settings


def load_config(
    root: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> DeckConfig:
    """Build a DeckConfig.

    Precedence, highest first: keyword overrides, environment mapping,
    decks.yml, built-in defaults.

    Args:
        root: Project root (default: current directory)
        env: Environment mapping to read SLIDE_DECKS/SKIP_DECKS/etc. from
        config_file: YAML config path (default: <root>/decks.yml)
        **overrides: DeckConfig fields; None values are ignored

    Returns:
        The merged DeckConfig
    """
    root = Path(root) if root else Path.cwd()
    config_file = _under(root, config_file) if config_file else root / CONFIG_FILENAME

    settings = _file_settings(load_config_file(config_file))
    settings.update(_env_settings(env or {}))
    settings.update({k: v for k, v in overrides.items() if v is not None})

    return DeckConfig(root=root, **settings)
