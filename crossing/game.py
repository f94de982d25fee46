"""
Game context: owns the player, the enemy roster, the level and the game state.

Every frame the scheduler calls `tick(dt)` followed by `draw(canvas)`;
keyboard input reaches the player through `handle_player_input`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional

from .constants import CLASSIC, GameConfig
from .entities import Canvas, Enemy, Player, render
from .utils import SeedLike, hitbox_overlap, make_rng

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    PLAY = "PLAY"
    GAME_OVER = "GAME_OVER"


class Game:
    """Single owner of all mutable game state"""

    def __init__(self, config: GameConfig = CLASSIC, seed: SeedLike = None):
        self.config = config.validate()
        self.rng = make_rng(seed)

        self._state = GameState.PLAY
        self._level = 0
        self._input_enabled = True

        self.player = Player(config=self.config)
        self.enemies: List[Enemy] = [
            self._spawn_enemy() for _ in range(self.config.initial_enemy_count)
        ]

        # Running totals, handy for HUDs and episode statistics
        self.crossings = 0
        self.collisions = 0
        self.elapsed = 0.0

        # Event flags of the last tick
        self._events: Dict[str, int] = {"collision": 0, "win": 0, "game_over": 0}

    # ----------------------------
    # Read-only accessors
    # ----------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def level(self) -> int:
        return self._level

    @property
    def lives(self) -> int:
        return self.player.lives

    @property
    def input_enabled(self) -> bool:
        return self._input_enabled

    @property
    def is_over(self) -> bool:
        return self._state is GameState.GAME_OVER

    @property
    def events(self) -> Dict[str, int]:
        return dict(self._events)

    # ----------------------------
    # Frame entry points
    # ----------------------------

    def tick(self, dt: float) -> Dict[str, int]:
        """
        Advance the simulation by `dt` seconds.

        Moves every enemy, then checks the player against the enemies and the
        goal row. Does nothing once the game is over. Returns the events of
        this tick.
        """
        self._events = {"collision": 0, "win": 0, "game_over": 0}
        if self._state is not GameState.PLAY:
            return self.events

        dt = max(0.0, float(dt))
        self.elapsed += dt

        for enemy in self.enemies:
            enemy.update(dt, self._level)

        if self._check_collisions():
            self._events["collision"] = 1
        elif self._check_goal():
            self._events["win"] = 1

        if not self.player.alive:
            self._game_over()
            self._events["game_over"] = 1

        return self.events

    def draw(self, canvas: Canvas) -> None:
        """Draw every live entity; the player goes on top of the bugs"""
        for enemy in self.enemies:
            render(enemy, canvas)
        render(self.player, canvas)

    def handle_player_input(self, direction: Optional[str]) -> bool:
        if not self._input_enabled:
            return False
        return self.player.handle_input(direction)

    # ----------------------------
    # Collision / win detection
    # ----------------------------

    def _check_collisions(self) -> bool:
        player = self.player
        for enemy in self.enemies:
            if not enemy.alive:
                continue
            if hitbox_overlap(
                player.x, player.y, self.config.player_hitbox,
                enemy.x, enemy.y, self.config.enemy_hitbox,
            ):
                # one hit per tick, no matter how many bugs overlap
                self.collisions += 1
                player.die()
                logger.debug("Collision at level %d, %d lives left", self._level, player.lives)
                return True
        return False

    def _check_goal(self) -> bool:
        if self.player.y > self.config.goal_row_y:
            return False
        self.player.win()
        self.crossings += 1
        self._advance_level()
        return True

    # ----------------------------
    # State transitions
    # ----------------------------

    def _advance_level(self):
        self._level += 1
        if self._level % self.config.level_cycle == 0:
            self.enemies.append(self._spawn_enemy())
        logger.info("Level %d reached, %d enemies", self._level, len(self.enemies))

    def _game_over(self):
        self._state = GameState.GAME_OVER
        self._input_enabled = False
        logger.info("Game over at level %d after %.1fs", self._level, self.elapsed)

    def _spawn_enemy(self) -> Enemy:
        return Enemy(config=self.config, rng=self.rng, level=self._level)
