"""
CrossingEnv - the bug crossing game as a Gymnasium environment
--------------------------------------------------------------
- Same Game core the arcade front end plays
- Discrete(5) actions: stay, up, down, left, right (one cell per step)
- Fixed dt per step, so an episode is reproducible from its seed
- Vector observation: player state + top-K nearest enemies
- Reward: crossing bonus, collision penalty, row progress, time penalty

Quick test:
    python -m crossing.crossing_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .constants import GameConfig
from .game import Game
from .utils import clamp, seed_everything

ACTIONS = (None, "up", "down", "left", "right")

DEFAULT_REWARD = {
    "R_WIN": 5.0,
    "R_COLLISION": 2.0,
    "R_PROGRESS": 0.2,
    "R_TIME": 0.001,
    "R_GAME_OVER": 5.0,
}


class CrossingEnv(gym.Env):
    """Grid crossing environment on top of `Game`"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        dt: float = 1 / 30,
        max_steps: int = 3600,  # 120s at 30 FPS
        k_enemies: int = 5,
        max_level: int = 12,  # level used to normalize the observation
        config: Optional[Dict[str, Any]] = None,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        if max_level <= 0:
            raise ValueError(f"max_level must be > 0, got {max_level}")
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.max_level = max_level
        self.game_config = GameConfig.from_dict(config)

        self.reward_config = dict(DEFAULT_REWARD)
        if reward_config:
            unknown = sorted(k for k in reward_config if k.startswith("R_") and k not in DEFAULT_REWARD)
            if unknown:
                raise ValueError(f"Unknown reward terms: {unknown}")
            self.reward_config.update({k: v for k, v in reward_config.items() if k in DEFAULT_REWARD})

        self.action_space = spaces.Discrete(len(ACTIONS))

        # Player: pos(2) lives(1) level(1)
        # Each enemy: rel pos(2) speed(1)
        obs_dim = 2 + 1 + 1 + self.k_enemies * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        cfg = self.game_config
        self._max_speed = cfg.max_enemy_speed + (cfg.level_cycle - 1) * cfg.speed_increase_by_level

        # Arcade rendering state
        self._window = None

        self.game: Game = None  # type: ignore
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self.game = Game(config=self.game_config, seed=self.np_random)
        if self._window is not None:
            self._window.game = self.game

        return self._get_obs(), self._get_info()

    def step(self, action):
        direction = ACTIONS[int(action)]
        self._events = {"progress": 0.0, "collision": 0.0, "win": 0.0, "game_over": 0.0}

        if self.game.handle_player_input(direction):
            if direction == "up":
                self._events["progress"] += 1.0
            elif direction == "down":
                self._events["progress"] -= 1.0

        tick = self.game.tick(self.dt)
        for key in ("collision", "win", "game_over"):
            self._events[key] += tick[key]

        reward = self._compute_reward()

        terminated = self.game.is_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.game_config
        player = self.game.player

        px = (player.x - cfg.min_player_allowed_x) / max(1, cfg.max_player_allowed_x - cfg.min_player_allowed_x)
        py = (player.y - cfg.min_player_allowed_y) / max(1, cfg.max_player_allowed_y - cfg.min_player_allowed_y)
        lives = player.lives / max(1, cfg.initial_lives)
        level = min(self.game.level, self.max_level) / self.max_level

        obs_parts = [px * 2 - 1, py * 2 - 1, lives * 2 - 1, level * 2 - 1]

        enemies_sorted = sorted(
            self.game.enemies,
            key=lambda e: (e.x - player.x) ** 2 + (e.y - player.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                dx = (e.x - player.x) / cfg.canvas_width
                dy = (e.y - player.y) / cfg.canvas_height
                speed = e.speed / self._max_speed
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1), clamp(speed * 2 - 1, -1, 1)]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        reward = 0.0

        reward += rc["R_WIN"] * self._events.get("win", 0.0)
        reward += rc["R_PROGRESS"] * self._events.get("progress", 0.0)
        reward -= rc["R_COLLISION"] * self._events.get("collision", 0.0)
        reward -= rc["R_TIME"]

        if self._events.get("game_over", 0.0):
            reward -= rc["R_GAME_OVER"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "lives": self.game.lives,
            "level": self.game.level,
            "crossings": self.game.crossings,
            "collisions": self.game.collisions,
            "num_enemies": len(self.game.enemies),
            "state": self.game.state.value,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # imported here so headless training never needs a display
            from .window import CrossingWindow
            self._window = CrossingWindow(game=self.game, visible=self.render_mode == "human")

        self._window.switch_to()
        self._window.on_draw()
        if self.render_mode == "human":
            return None
        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        import arcade

        image = arcade.get_image(0, 0, self._window.width, self._window.height)
        return np.asarray(image.convert("RGB"), dtype=np.uint8)

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random episode for testing"""
    env = CrossingEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.flip()
            time.sleep(env.dt)

    print(f"Random episode return: {total:.2f} "
          f"(level {info['level']}, crossings {info['crossings']}, lives {info['lives']})")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
