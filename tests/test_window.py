import logging
from types import SimpleNamespace

import pytest

arcade = pytest.importorskip("arcade")

from crossing import CLASSIC, Game, GameState
from crossing.window import ArcadeCanvas, CrossingWindow, ResourceResolver, BODY_Y

from conftest import park_enemies, put_enemy_on_player

HEIGHT = CLASSIC.canvas_height


@pytest.fixture
def drawn(monkeypatch):
    calls = {"texture": [], "rect": []}
    monkeypatch.setattr(arcade, "LBWH", lambda left, bottom, width, height: (left, bottom, width, height))
    monkeypatch.setattr(arcade, "draw_texture_rect", lambda texture, rect: calls["texture"].append((texture, rect)))
    monkeypatch.setattr(arcade, "draw_lrbt_rectangle_filled", lambda *args: calls["rect"].append(args))
    return calls


def test_texture_is_drawn_with_flipped_y(tmp_path, drawn) -> None:
    resolver = ResourceResolver(assets_dir=tmp_path)
    texture = SimpleNamespace(width=101, height=171)
    resolver._textures["char-boy"] = texture
    canvas = ArcadeCanvas(HEIGHT, resolver)

    canvas.draw_sprite("char-boy", 200, 395)

    # bottom = 606 - 395 - 171
    assert drawn["texture"] == [(texture, (200, 40, 101, 171))]
    assert drawn["rect"] == []


def test_missing_image_draws_placeholder_block(tmp_path, drawn, caplog) -> None:
    resolver = ResourceResolver(assets_dir=tmp_path)
    canvas = ArcadeCanvas(HEIGHT, resolver)

    with caplog.at_level(logging.DEBUG, logger="crossing.window"):
        assert resolver.get("enemy-bug") is None
    assert all(r.levelno == logging.DEBUG for r in caplog.records)

    canvas.draw_sprite("enemy-bug", 100, 63)

    box = CLASSIC.enemy_hitbox
    top = HEIGHT - (63 + BODY_Y)
    left, right, bottom, rect_top, _color = drawn["rect"][0]
    assert (left, right) == (100 + box.dx, 100 + box.dx + box.width)
    assert (bottom, rect_top) == (top - box.height, top)
    assert drawn["texture"] == []


def test_image_on_disk_is_loaded_once(tmp_path, monkeypatch) -> None:
    (tmp_path / "enemy-bug.png").write_bytes(b"")
    loaded = []
    monkeypatch.setattr(arcade, "load_texture", lambda path: loaded.append(path) or "texture")
    resolver = ResourceResolver(assets_dir=tmp_path)

    assert resolver.get("enemy-bug") == "texture"
    assert resolver.get("enemy-bug") == "texture"
    assert loaded == [tmp_path / "enemy-bug.png"]


def test_unknown_sprite_gets_a_default_placeholder(tmp_path) -> None:
    box = ResourceResolver(assets_dir=tmp_path).placeholder("gem-blue")
    assert (box.width, box.height) == (60, 60)


def _window_for(game: Game):
    # key handling only needs the game and the seed, not a real window
    return SimpleNamespace(game=game, seed=5)


@pytest.mark.parametrize(
    "key, expected",
    [
        (arcade.key.UP, (200.0, 312.0)),
        (arcade.key.LEFT, (100.0, 395.0)),
        (arcade.key.RIGHT, (300.0, 395.0)),
        (arcade.key.DOWN, (200.0, 395.0)),
        (arcade.key.SPACE, (200.0, 395.0)),
    ],
)
def test_arrow_keys_move_player(key, expected) -> None:
    window = _window_for(Game(seed=5))
    CrossingWindow.on_key_release(window, key, 0)
    assert (window.game.player.x, window.game.player.y) == expected


def test_restart_key_ignored_while_playing() -> None:
    game = Game(seed=5)
    game.handle_player_input("up")
    window = _window_for(game)

    CrossingWindow.on_key_release(window, arcade.key.R, 0)

    assert window.game is game
    assert game.player.y == 312.0


def test_restart_key_starts_new_game_after_game_over() -> None:
    game = Game(seed=5)
    for _ in range(3):
        park_enemies(game)
        put_enemy_on_player(game)
        game.tick(0.0)
    window = _window_for(game)

    CrossingWindow.on_key_release(window, arcade.key.UP, 0)
    assert game.player.y == 395.0

    CrossingWindow.on_key_release(window, arcade.key.R, 0)
    assert window.game is not game
    assert window.game.state is GameState.PLAY
    assert window.game.lives == CLASSIC.initial_lives
