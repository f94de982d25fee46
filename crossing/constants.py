"""
Tuning constants for the crossing game
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Hitbox:
    """Collision rectangle relative to an entity's (x, y) anchor"""
    dx: float
    dy: float
    width: float
    height: float


@dataclass(frozen=True)
class GameConfig:
    """All the numbers the game runs on (classic profile by default)"""

    # number of enemies at level 0
    initial_enemy_count: int = 3
    # number of initial player lives
    initial_lives: int = 3

    # size in pixels of the game cells
    cell_x_size: int = 100
    cell_y_size: int = 83
    # y offset for rendering entities inside their cells
    y_offset: int = 20

    # board size in cells (top row is water, then 3 stone rows, then 2 grass rows)
    board_cols: int = 5
    board_rows: int = 6

    # start cell of the player
    init_player_cell_x: int = 2
    init_player_cell_y: int = 5

    # range of coordinates the player may occupy (goal row included)
    min_player_allowed_x: int = 0
    max_player_allowed_x: int = 100 * 4
    min_player_allowed_y: int = -20
    max_player_allowed_y: int = 83 * 5 - 20

    # rows (1-based cell index) enemies may spawn on
    min_enemy_row: int = 1
    max_enemy_row: int = 3

    # initial and final x coordinates for enemies
    init_enemy_x: int = -120
    end_enemy_x: int = 505

    # range of values for the speed of enemies (px/s)
    min_enemy_speed: int = 100
    max_enemy_speed: int = 350
    speed_increase_by_level: int = 50
    # levels per difficulty cycle: speed bonus resets and one enemy is added
    level_cycle: int = 3

    enemy_hitbox: Hitbox = field(default_factory=lambda: Hitbox(2.0, 0.0, 97.0, 66.0))
    player_hitbox: Hitbox = field(default_factory=lambda: Hitbox(17.0, 0.0, 67.0, 66.0))

    enemy_sprite: str = "enemy-bug"
    player_sprite: str = "char-boy"

    @property
    def canvas_width(self) -> int:
        return self.cell_x_size * self.board_cols + 5

    @property
    def canvas_height(self) -> int:
        return self.cell_y_size * self.board_rows + 108

    @property
    def player_start(self):
        return (
            self.cell_x_size * self.init_player_cell_x,
            self.cell_y_size * self.init_player_cell_y - self.y_offset,
        )

    @property
    def goal_row_y(self) -> int:
        """y of the row above the topmost obstacle row"""
        return self.cell_y_size * (self.min_enemy_row - 1) - self.y_offset

    def row_y(self, row: int) -> int:
        return self.cell_y_size * row - self.y_offset

    def validate(self) -> "GameConfig":
        """Raise ValueError if the tuning cannot produce a playable game"""
        if self.initial_enemy_count < 0:
            raise ValueError("initial_enemy_count must be >= 0")
        if self.initial_lives <= 0:
            raise ValueError("initial_lives must be > 0")
        if self.cell_x_size <= 0 or self.cell_y_size <= 0:
            raise ValueError("cell sizes must be positive")
        if self.min_player_allowed_x > self.max_player_allowed_x:
            raise ValueError("empty horizontal player range")
        if self.min_player_allowed_y > self.max_player_allowed_y:
            raise ValueError("empty vertical player range")
        if not 1 <= self.min_enemy_row <= self.max_enemy_row:
            raise ValueError("enemy rows must satisfy 1 <= min <= max")
        if not 0 < self.min_enemy_speed <= self.max_enemy_speed:
            raise ValueError(
                f"enemy speed range [{self.min_enemy_speed}, {self.max_enemy_speed}] is invalid"
            )
        if self.speed_increase_by_level < 0:
            raise ValueError("speed_increase_by_level must be >= 0")
        if self.level_cycle <= 0:
            raise ValueError("level_cycle must be > 0")
        if self.init_enemy_x >= self.end_enemy_x:
            raise ValueError("init_enemy_x must be left of end_enemy_x")
        return self

    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """Build a config from plain-dict overrides; unknown keys are rejected"""
        overrides = dict(overrides or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}")
        for key in ("enemy_hitbox", "player_hitbox"):
            value = overrides.get(key)
            if value is not None and not isinstance(value, Hitbox):
                overrides[key] = Hitbox(*value)
        return replace(cls(), **overrides).validate()


CLASSIC = GameConfig()

FPS = 60
