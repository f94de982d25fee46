"""
Training configuration for the crossing environment
Reward shaping profiles, algorithm hyperparameters and training settings
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "dt": 1/30,
    "max_steps": 3600,  # 120 seconds at 30 FPS
    "k_enemies": 5,
    "max_level": 12,
    # GameConfig overrides, empty = classic profile
    "config": {},
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced crossing reward",
    "R_WIN": 5.0,         # Reward for reaching the water
    "R_COLLISION": 2.0,   # Penalty for getting hit by a bug
    "R_PROGRESS": 0.2,    # Reward per row moved up (penalty per row moved down)
    "R_TIME": 0.001,      # Small time penalty
    "R_GAME_OVER": 5.0,   # Penalty for losing the last life
}

# Reward Config 2: CAUTIOUS (Dodging matters more than speed)
REWARD_CONFIG_CAUTIOUS = {
    "name": "cautious",
    "description": "Heavier collision and game over penalties, no time pressure",
    "R_WIN": 5.0,
    "R_COLLISION": 5.0,
    "R_PROGRESS": 0.1,
    "R_TIME": 0.0,
    "R_GAME_OVER": 10.0,
}

# Reward Config 3: RUSH (Cross as often as possible)
REWARD_CONFIG_RUSH = {
    "name": "rush",
    "description": "Bigger crossing bonus and time pressure, accept more hits",
    "R_WIN": 10.0,
    "R_COLLISION": 1.0,
    "R_PROGRESS": 0.5,
    "R_TIME": 0.005,
    "R_GAME_OVER": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "cautious": REWARD_CONFIG_CAUTIOUS,
    "rush": REWARD_CONFIG_RUSH,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def get_reward_config(name: str) -> dict:
    """Look up a reward profile by name"""
    if name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {name} (choose from {sorted(REWARD_CONFIGS)})")
    return REWARD_CONFIGS[name]
