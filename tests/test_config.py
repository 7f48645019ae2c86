import pytest
import yaml

from deckrunner.config import (
    DEFAULT_NODE_OPTIONS,
    DEFAULT_RENDERER,
    ConfigError,
    DeckConfig,
    load_config,
    parse_pattern_list,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ()),
        ("", ()),
        ("deck1,deck2", ("deck1", "deck2")),
        (" draft , old-* ,,", ("draft", "old-*")),
        (["a", " b "], ("a", "b")),
    ],
)
def test_parse_pattern_list(value, expected):
    assert parse_pattern_list(value) == expected


def test_defaults(tmp_path):
    config = DeckConfig(root=tmp_path)
    assert config.slides_dir == tmp_path / "slides"
    assert config.dist_dir == tmp_path / "dist"
    assert config.renderer == DEFAULT_RENDERER
    assert config.include == ()
    assert config.exclude == ()


def test_empty_renderer_rejected(tmp_path):
    with pytest.raises(ConfigError):
        DeckConfig(root=tmp_path, renderer=())


def test_child_env_sets_memory_hint(tmp_path):
    config = DeckConfig(root=tmp_path)
    env = config.child_env({"PATH": "/bin"})
    assert env["NODE_OPTIONS"] == DEFAULT_NODE_OPTIONS
    assert env["PATH"] == "/bin"


def test_child_env_keeps_existing_hint(tmp_path):
    config = DeckConfig(root=tmp_path)
    assert config.child_env({"NODE_OPTIONS": "--inspect"})["NODE_OPTIONS"] == "--inspect"


def test_load_config_from_env(tmp_path):
    env = {
        "SLIDE_DECKS": "intro, talk-*",
        "SKIP_DECKS": "draft",
        "SLIDES_DIR": "decks",
        "DIST_DIR": "/srv/site",
        "DECK_RENDERER": "slidev --log warn",
    }
    config = load_config(root=tmp_path, env=env)
    assert config.include == ("intro", "talk-*")
    assert config.exclude == ("draft",)
    assert config.slides_dir == tmp_path / "decks"
    assert str(config.dist_dir).endswith("site")
    assert config.renderer == ("slidev", "--log", "warn")


def test_load_config_precedence(tmp_path):
    (tmp_path / "decks.yml").write_text(yaml.safe_dump({
        "include": ["from-file"],
        "exclude": "old-*",
        "dist_dir": "public",
        "renderer": ["pnpm", "slidev"],
    }), encoding="utf-8")

    config = load_config(
        root=tmp_path,
        env={"SLIDE_DECKS": "from-env"},
        include="from-cli",
    )
    assert config.include == ("from-cli",)
    assert config.exclude == ("old-*",)
    assert config.dist_dir == tmp_path / "public"
    assert config.renderer == ("pnpm", "slidev")


def test_load_config_ignores_none_overrides(tmp_path):
    config = load_config(root=tmp_path, env={"SKIP_DECKS": "x"}, exclude=None)
    assert config.exclude == ("x",)


def test_load_config_rejects_non_mapping(tmp_path):
    (tmp_path / "decks.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(root=tmp_path, env={})


def test_load_config_rejects_bad_yaml(tmp_path):
    path = tmp_path / "custom.yml"
    path.write_text("renderer: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(root=tmp_path, env={}, config_file=path)
