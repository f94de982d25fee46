from typing import List, Tuple

import pytest

from crossing import CLASSIC, Game


class RecordingCanvas:
    """Canvas stand-in that records draw calls instead of drawing."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, float, float]] = []

    def draw_sprite(self, sprite_id: str, x: float, y: float) -> None:
        self.calls.append((sprite_id, x, y))


def park_enemies(game: Game) -> None:
    """Stop every enemy off-screen left so nothing can hit the player."""
    for enemy in game.enemies:
        enemy.x = float(CLASSIC.init_enemy_x)
        enemy.speed = 0.0


def put_enemy_on_player(game: Game, index: int = 0) -> None:
    enemy = game.enemies[index]
    enemy.x, enemy.y = game.player.x, game.player.y
    enemy.speed = 0.0


def reach_goal(game: Game) -> None:
    """Walk the player straight up to the water and let one tick detect it."""
    park_enemies(game)
    for _ in range(CLASSIC.init_player_cell_y):
        assert game.handle_player_input("up")
    game.tick(0.0)


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def game() -> Game:
    return Game(seed=1234)
