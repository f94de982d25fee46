"""
Game entities: the bugs crossing the stone rows and the player
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

import numpy as np

from .constants import CLASSIC, GameConfig
from .utils import make_rng, random_int

logger = logging.getLogger(__name__)

DIRECTIONS = ("up", "down", "left", "right")

RenderData = Tuple[str, float, float]


class Canvas(Protocol):
    """Rendering surface the entities draw themselves on"""

    def draw_sprite(self, sprite_id: str, x: float, y: float) -> None:
        ...


class Renderable(Protocol):
    """Anything with a grid position that can be drawn"""
    x: float
    y: float
    alive: bool
    sprite: str

    def init_position(self) -> None:
        ...

    def render_data(self) -> Optional[RenderData]:
        ...


def render(entity: Renderable, canvas: Canvas) -> None:
    """Draw the entity, unless it is no longer alive"""
    data = entity.render_data()
    if data is not None:
        canvas.draw_sprite(*data)


@dataclass(eq=False)
class Enemy:
    """
    Bug that runs left to right along one of the stone rows.

    When it leaves the board on the right it is respawned in place with a new
    row and speed. The speed gets a bonus that grows with the level and resets
    every `level_cycle` levels.
    """
    config: GameConfig = CLASSIC
    rng: np.random.Generator = field(default_factory=make_rng, repr=False)
    level: int = 0
    x: float = 0.0
    y: float = 0.0
    speed: float = 0.0
    alive: bool = True
    sprite: str = ""

    def __post_init__(self):
        if not self.sprite:
            self.sprite = self.config.enemy_sprite
        self.init_position(self.level)

    def init_position(self, level: Optional[int] = None) -> None:
        if level is not None:
            self.level = level
        cfg = self.config
        self.x = float(cfg.init_enemy_x)
        self.y = float(cfg.row_y(random_int(self.rng, cfg.min_enemy_row, cfg.max_enemy_row)))
        bonus = (self.level % cfg.level_cycle) * cfg.speed_increase_by_level
        self.speed = float(random_int(self.rng, cfg.min_enemy_speed, cfg.max_enemy_speed) + bonus)

    def update(self, dt: float, level: Optional[int] = None) -> None:
        """Advance by speed * dt and respawn once past the right edge"""
        self.x += self.speed * dt
        if self.x > self.config.end_enemy_x:
            self.init_position(level)

    def render_data(self) -> Optional[RenderData]:
        if not self.alive:
            return None
        return self.sprite, self.x, self.y


@dataclass(eq=False)
class Player:
    """
    The player moves one cell per key press and owns its lives counter.
    """
    config: GameConfig = CLASSIC
    lives: Optional[int] = None
    x: float = 0.0
    y: float = 0.0
    alive: bool = True
    sprite: str = ""

    def __post_init__(self):
        if self.lives is None:
            self.lives = self.config.initial_lives
        self.alive = self.lives > 0
        if not self.sprite:
            self.sprite = self.config.player_sprite
        self.init_position()

    def init_position(self) -> None:
        self.x, self.y = (float(v) for v in self.config.player_start)

    def handle_input(self, direction: Optional[str]) -> bool:
        """
        Move one cell towards `direction` if the target cell is on the board.

        Returns True if the player moved. Unknown directions are ignored.
        """
        if direction not in DIRECTIONS:
            return False

        cfg = self.config
        dx, dy = {
            "up": (0, -cfg.cell_y_size),
            "down": (0, cfg.cell_y_size),
            "left": (-cfg.cell_x_size, 0),
            "right": (cfg.cell_x_size, 0),
        }[direction]
        nx, ny = self.x + dx, self.y + dy
        if not cfg.min_player_allowed_x <= nx <= cfg.max_player_allowed_x:
            return False
        if not cfg.min_player_allowed_y <= ny <= cfg.max_player_allowed_y:
            return False
        self.x, self.y = nx, ny
        return True

    def win(self) -> None:
        # back to the start cell; the level is advanced by the game
        self.init_position()

    def die(self) -> bool:
        """Lose a life and go back to start. Returns True when no lives are left."""
        self.init_position()
        if self.lives > 0:
            self.lives -= 1
        if self.lives == 0:
            self.alive = False
            logger.debug("Player has no lives left")
        return not self.alive

    def render_data(self) -> Optional[RenderData]:
        if not self.alive:
            return None
        return self.sprite, self.x, self.y
