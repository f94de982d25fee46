import csv

import pytest

from rl.configs.crossing_config import REWARD_CONFIGS, get_reward_config
from rl.metrics_callback import MetricsCallback


def _info(reward, length, crossings, collisions, level, lives):
    return {
        "episode": {"r": reward, "l": length},
        "crossings": crossings,
        "collisions": collisions,
        "level": level,
        "lives": lives,
    }


def test_summary_over_recorded_episodes(tmp_path) -> None:
    callback = MetricsCallback(log_dir=str(tmp_path), algo_name="ppo", verbose=0)
    callback.record_episode(_info(4.0, 100, 2, 3, 2, 0))
    callback.record_episode(_info(8.0, 300, 4, 1, 4, 2))

    summary = callback.get_summary()
    assert summary["total_episodes"] == 2
    assert summary["mean_reward"] == pytest.approx(6.0)
    assert summary["mean_crossings"] == pytest.approx(3.0)
    assert summary["max_level"] == 4


def test_empty_summary(tmp_path) -> None:
    assert MetricsCallback(log_dir=str(tmp_path), algo_name="dqn", verbose=0).get_summary() == {}


def test_episodes_are_written_to_csv(tmp_path) -> None:
    callback = MetricsCallback(log_dir=str(tmp_path), algo_name="dqn", verbose=0)
    callback._on_training_start()
    callback.record_episode(_info(1.5, 42, 1, 3, 1, 0))
    callback._on_training_end()

    with open(tmp_path / "dqn_metrics.csv", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0][:4] == ["timestep", "episode", "reward", "length"]
    assert rows[1][1:] == ["1", "1.5", "42", "1", "3", "1", "0"]


def test_reward_profiles_lookup() -> None:
    assert get_reward_config("baseline") is REWARD_CONFIGS["baseline"]
    with pytest.raises(ValueError):
        get_reward_config("greedy")
