import numpy as np
import pytest

from crossing import CLASSIC, Game, GameConfig, GameState
from crossing.entities import DIRECTIONS

from conftest import park_enemies, put_enemy_on_player, reach_goal


def test_initial_state(game: Game) -> None:
    assert game.state is GameState.PLAY
    assert game.level == 0
    assert game.lives == 3
    assert game.input_enabled
    assert len(game.enemies) == CLASSIC.initial_enemy_count


def test_collision_costs_one_life_and_resets_player(game: Game) -> None:
    park_enemies(game)
    game.handle_player_input("right")
    put_enemy_on_player(game)

    events = game.tick(0.0)

    assert events["collision"] == 1
    assert game.lives == 2
    assert (game.player.x, game.player.y) == (200.0, 395.0)
    assert game.state is GameState.PLAY
    assert game.collisions == 1


def test_several_overlapping_enemies_count_as_one_hit(game: Game) -> None:
    park_enemies(game)
    game.handle_player_input("up")
    for i in range(len(game.enemies)):
        put_enemy_on_player(game, i)

    game.tick(0.0)
    assert game.lives == 2


def test_no_collision_with_enemy_on_another_row(game: Game) -> None:
    park_enemies(game)
    game.handle_player_input("up")  # y = 312, grass
    enemy = game.enemies[0]
    enemy.x, enemy.y = game.player.x, CLASSIC.row_y(3)
    game.tick(0.0)
    assert game.lives == 3


def test_three_collisions_end_the_game(game: Game) -> None:
    for _ in range(3):
        park_enemies(game)
        put_enemy_on_player(game)
        game.tick(0.0)

    assert game.lives == 0
    assert not game.player.alive
    assert game.state is GameState.GAME_OVER
    assert not game.input_enabled

    x, y = game.player.x, game.player.y
    assert not game.handle_player_input("up")
    assert (game.player.x, game.player.y) == (x, y)


def test_ticks_after_game_over_change_nothing(game: Game) -> None:
    for _ in range(3):
        park_enemies(game)
        put_enemy_on_player(game)
        game.tick(0.0)
    for enemy in game.enemies:
        enemy.speed = 300.0
    before = [(e.x, e.y, e.speed) for e in game.enemies]

    for _ in range(50):
        events = game.tick(0.1)
        assert events == {"collision": 0, "win": 0, "game_over": 0}

    assert [(e.x, e.y, e.speed) for e in game.enemies] == before
    assert game.lives == 0
    assert game.level == 0
    assert game.state is GameState.GAME_OVER


def test_reaching_the_water_advances_the_level(game: Game) -> None:
    reach_goal(game)
    assert game.level == 1
    assert game.crossings == 1
    assert (game.player.x, game.player.y) == (200.0, 395.0)
    assert len(game.enemies) == 3
    assert game.lives == 3


def test_third_level_adds_an_enemy(game: Game) -> None:
    reach_goal(game)
    reach_goal(game)
    assert game.level == 2
    assert len(game.enemies) == 3

    reach_goal(game)
    assert game.level == 3
    assert len(game.enemies) == 4
    assert (game.player.x, game.player.y) == (200.0, 395.0)


@pytest.mark.parametrize("k", range(10))
def test_roster_size_follows_goal_count(k: int) -> None:
    game = Game(seed=k)
    for _ in range(k):
        reach_goal(game)
    assert game.level == k
    assert len(game.enemies) == CLASSIC.initial_enemy_count + k // 3


def test_new_enemy_gets_level_speed_bonus() -> None:
    game = Game(seed=11)
    for _ in range(4):
        reach_goal(game)
    # level 4: bonus (4 % 3) * 50
    game.enemies[0].init_position(game.level)
    assert game.enemies[0].speed >= 150


def test_negative_dt_is_treated_as_zero(game: Game) -> None:
    before = [e.x for e in game.enemies]
    game.tick(-1.0)
    assert [e.x for e in game.enemies] == before


def test_draw_renders_enemies_then_player(game: Game, canvas) -> None:
    game.draw(canvas)
    sprites = [c[0] for c in canvas.calls]
    assert sprites == ["enemy-bug"] * 3 + ["char-boy"]
    assert canvas.calls[-1] == ("char-boy", 200.0, 395.0)


def test_draw_skips_dead_player(game: Game, canvas) -> None:
    for _ in range(3):
        park_enemies(game)
        put_enemy_on_player(game)
        game.tick(0.0)
    game.draw(canvas)
    assert "char-boy" not in [c[0] for c in canvas.calls]


def test_same_seed_same_game() -> None:
    a, b = Game(seed=99), Game(seed=99)
    for _ in range(300):
        a.tick(1 / 30)
        b.tick(1 / 30)
    assert [(e.x, e.y, e.speed) for e in a.enemies] == [(e.x, e.y, e.speed) for e in b.enemies]


def test_random_play_keeps_invariants() -> None:
    rng = np.random.default_rng(2024)
    game = Game(seed=2024)
    lives = game.lives
    level = game.level

    for _ in range(5000):
        if rng.random() < 0.3:
            game.handle_player_input(DIRECTIONS[rng.integers(len(DIRECTIONS))])
        events = game.tick(float(rng.uniform(0.0, 0.2)))

        assert 0 <= game.lives <= lives
        assert lives - game.lives == events["collision"]
        assert game.level >= level
        assert len(game.enemies) == CLASSIC.initial_enemy_count + game.level // 3
        for enemy in game.enemies:
            assert CLASSIC.init_enemy_x <= enemy.x <= CLASSIC.end_enemy_x
        lives, level = game.lives, game.level
        if game.is_over:
            break


def test_custom_config_is_used() -> None:
    game = Game(config=GameConfig.from_dict({"initial_enemy_count": 1, "initial_lives": 1}), seed=0)
    assert len(game.enemies) == 1
    park_enemies(game)
    put_enemy_on_player(game)
    events = game.tick(0.0)
    assert events["game_over"] == 1
    assert game.is_over


def test_invalid_config_is_rejected() -> None:
    with pytest.raises(ValueError):
        Game(config=GameConfig(min_enemy_speed=400, max_enemy_speed=100))
