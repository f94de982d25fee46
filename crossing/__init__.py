"""Bug crossing game - grid crossing arcade game and RL environment"""

from .constants import CLASSIC, GameConfig, Hitbox
from .entities import Enemy, Player, render
from .game import Game, GameState

__all__ = ['CLASSIC', 'GameConfig', 'Hitbox', 'Enemy', 'Player', 'render', 'Game', 'GameState']
