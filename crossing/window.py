"""
Arcade front end: window, frame loop, keyboard mapping and sprite drawing.

The game logic works in canvas coordinates (origin top-left, y down);
arcade draws with the origin bottom-left and y up, so `ArcadeCanvas` flips.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

import arcade

from .constants import CLASSIC, FPS, GameConfig
from .game import Game
from .utils import SeedLike

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets" / "images"

# Top of the visible face of a tile / entity body inside a 101x171 sprite
TILE_FACE_Y = 50
BODY_Y = 77

KEY_DIRECTIONS = {
    arcade.key.UP: "up",
    arcade.key.DOWN: "down",
    arcade.key.LEFT: "left",
    arcade.key.RIGHT: "right",
}

ROW_COLORS = {
    "water": (70, 130, 220),
    "stone": (130, 130, 130),
    "grass": (90, 170, 80),
}


@dataclass(frozen=True)
class Placeholder:
    """Block drawn when a sprite has no image on disk"""
    color: Tuple[int, int, int]
    dx: float
    dy: float
    width: float
    height: float


class ResourceResolver:
    """Maps sprite keys to textures in `assets/images/<key>.png`, cached"""

    def __init__(self, config: GameConfig = CLASSIC, assets_dir: Path = ASSETS_DIR):
        self.assets_dir = Path(assets_dir)
        self._textures: Dict[str, Optional[arcade.Texture]] = {}
        self.placeholders = {
            config.enemy_sprite: Placeholder(
                (220, 60, 60), config.enemy_hitbox.dx, BODY_Y,
                config.enemy_hitbox.width, config.enemy_hitbox.height,
            ),
            config.player_sprite: Placeholder(
                (240, 220, 120), config.player_hitbox.dx, BODY_Y,
                config.player_hitbox.width, config.player_hitbox.height,
            ),
        }

    def get(self, sprite_id: str) -> Optional[arcade.Texture]:
        if sprite_id not in self._textures:
            path = self.assets_dir / f"{sprite_id}.png"
            texture = None
            if path.is_file():
                texture = arcade.load_texture(path)
            else:
                logger.debug("No image for sprite '%s' (%s), drawing a placeholder", sprite_id, path)
            self._textures[sprite_id] = texture
        return self._textures[sprite_id]

    def placeholder(self, sprite_id: str) -> Placeholder:
        return self.placeholders.get(sprite_id, Placeholder((255, 0, 255), 0, BODY_Y, 60, 60))


class ArcadeCanvas:
    """Draws sprites given top-left canvas coordinates"""

    def __init__(self, height: int, resources: ResourceResolver):
        self.height = height
        self.resources = resources

    def draw_sprite(self, sprite_id: str, x: float, y: float) -> None:
        texture = self.resources.get(sprite_id)
        if texture is not None:
            bottom = self.height - y - texture.height
            arcade.draw_texture_rect(texture, arcade.LBWH(x, bottom, texture.width, texture.height))
            return

        box = self.resources.placeholder(sprite_id)
        left = x + box.dx
        top = self.height - (y + box.dy)
        arcade.draw_lrbt_rectangle_filled(left, left + box.width, top - box.height, top, box.color)


class CrossingWindow(arcade.Window):
    """Arcade window driving a `Game`: frame loop, input and drawing"""

    def __init__(self, game: Optional[Game] = None, config: GameConfig = CLASSIC,
                 seed: SeedLike = None, title: str = "Bug Crossing", visible: bool = True):
        self.game = game if game is not None else Game(config=config, seed=seed)
        cfg = self.game.config
        super().__init__(cfg.canvas_width, cfg.canvas_height, title, visible=visible)
        self.set_update_rate(1 / FPS)
        self.background_color = (18, 18, 22)

        self.seed = seed
        self.canvas = ArcadeCanvas(cfg.canvas_height, ResourceResolver(cfg))

        # Colors
        self.HUD_C = (240, 240, 240)
        self.OVER_C = (230, 60, 60)

    def on_update(self, delta_time: float):
        """Scheduler hook: one simulation tick per frame"""
        self.game.tick(delta_time)

    def on_draw(self):
        """Draw the board, the entities and the HUD"""
        self.clear()
        self._draw_board()
        self.game.draw(self.canvas)
        self._draw_hud()

    def on_key_release(self, key: int, modifiers: int):
        if key == arcade.key.R and self.game.is_over:
            logger.info("Restarting game")
            self.game = Game(config=self.game.config, seed=self.seed)
            return
        self.game.handle_player_input(KEY_DIRECTIONS.get(key))

    def _draw_board(self):
        cfg = self.game.config
        width = cfg.canvas_width
        for row in range(cfg.board_rows):
            if row < cfg.min_enemy_row:
                kind = "water"
            elif row <= cfg.max_enemy_row:
                kind = "stone"
            else:
                kind = "grass"
            top = self.height - (row * cfg.cell_y_size + TILE_FACE_Y)
            arcade.draw_lrbt_rectangle_filled(
                0, width, top - cfg.cell_y_size, top, ROW_COLORS[kind]
            )

    def _draw_hud(self):
        game = self.game
        txt = f"Lives: {game.lives}  Level: {game.level}  Crossings: {game.crossings}"
        arcade.draw_text(txt, 10, self.height - 30, self.HUD_C, 14)

        if game.is_over:
            arcade.draw_text(
                "GAME OVER", self.width / 2, self.height / 2, self.OVER_C, 40,
                anchor_x="center", bold=True,
            )
            arcade.draw_text(
                "press R to play again", self.width / 2, self.height / 2 - 40, self.HUD_C, 16,
                anchor_x="center",
            )


def run(config: GameConfig = CLASSIC, seed: SeedLike = None):
    """Open the window and run the game until it is closed"""
    window = CrossingWindow(config=config, seed=seed)
    logger.info("Starting Bug Crossing (%dx%d)", window.width, window.height)
    arcade.run()
    return window.game
