"""
Evaluation script for trained RL agents

Reports, per policy, how far the agent gets across the board: crossings,
collisions, highest level and how many episodes ended with lives left.
"""

import time
import argparse
from typing import Any, Dict, List, Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from crossing.crossing_env import CrossingEnv
from rl.configs.crossing_config import ENV_CONFIG

ALGOS = {"ppo": PPO, "dqn": DQN}


def summarize_episodes(rewards: List[float], lengths: List[int], final_infos: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Aggregate episode returns and the game stats of each episode's last step"""
    crossings = [info.get("crossings", 0) for info in final_infos]
    collisions = [info.get("collisions", 0) for info in final_infos]
    levels = [info.get("level", 0) for info in final_infos]
    survived = [1.0 if info.get("lives", 0) > 0 else 0.0 for info in final_infos]

    return {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "mean_crossings": float(np.mean(crossings)),
        "mean_collisions": float(np.mean(collisions)),
        "max_level": int(np.max(levels)),
        "survival_rate": float(np.mean(survived)),
        "episode_rewards": list(rewards),
        "episode_levels": levels,
    }


def print_summary(title: str, summary: Dict[str, Any]) -> None:
    print("\n" + "="*50)
    print(title)
    print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
    print(f"Mean Episode Length: {summary['mean_length']:.1f}")
    print(f"Crossings/episode: {summary['mean_crossings']:.2f}  "
          f"Collisions/episode: {summary['mean_collisions']:.2f}")
    print(f"Highest level: {summary['max_level']}  Survival rate: {summary['survival_rate']:.0%}")
    print("="*50)


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
    env_config: Optional[Dict[str, Any]] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to watch the agent in the arcade window
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
        env_config: CrossingEnv keyword arguments (default: ENV_CONFIG)
    """
    if algo not in ALGOS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model = ALGOS[algo].load(model_path)

    base_env = CrossingEnv(render_mode="human" if render else None, **(env_config or ENV_CONFIG))
    env = DummyVecEnv([lambda: base_env])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    rewards, lengths, final_infos = [], [], []

    for episode in range(n_episodes):
        if seed is not None:
            env.seed(seed + episode)
        obs = env.reset()

        total_reward = 0.0
        steps = 0
        done = np.array([False])

        while not done[0]:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1

            if render and base_env._window:
                base_env._window.dispatch_events()
                base_env._window.flip()
                time.sleep(0.05)  # slow enough to watch

        rewards.append(total_reward)
        lengths.append(steps)
        final_infos.append(info[0])

        print(f"Episode {episode + 1}/{n_episodes}: reward {total_reward:.2f}, "
              f"{steps} steps, level {info[0].get('level', 0)}, "
              f"{info[0].get('crossings', 0)} crossings, {info[0].get('lives', 0)} lives left")

    env.close()

    summary = summarize_episodes(rewards, lengths, final_infos)
    print_summary(f"Evaluation Results ({n_episodes} episodes, {algo}):", summary)
    return summary


def compare_with_random(
    n_episodes: int = 10,
    seed: Optional[int] = None,
    env_config: Optional[Dict[str, Any]] = None,
):
    """Evaluate a uniformly random policy as a baseline"""
    env = CrossingEnv(render_mode=None, **(env_config or ENV_CONFIG))

    rewards, lengths, final_infos = [], [], []

    for episode in range(n_episodes):
        episode_seed = seed + episode if seed is not None else None
        obs, info = env.reset(seed=episode_seed)
        env.action_space.seed(episode_seed)

        terminated = truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            total_reward += reward
            steps += 1

        rewards.append(total_reward)
        lengths.append(steps)
        final_infos.append(info)

    env.close()

    summary = summarize_episodes(rewards, lengths, final_infos)
    print_summary(f"Random Policy Results ({n_episodes} episodes):", summary)
    return summary


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument(
        "model_path",
        type=str,
        help="Path to the trained model",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=sorted(ALGOS),
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file (for PPO)",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        baseline = compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        print(f"\nCrossings over random: {results['mean_crossings'] - baseline['mean_crossings']:+.2f}")
        print(f"Reward over random: {results['mean_reward'] - baseline['mean_reward']:+.2f}")


if __name__ == "__main__":
    main()
