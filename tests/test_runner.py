import json
import os

import pandas as pd
import pytest

from tumblecube.core.base import BenchmarkSummary, GameResult
from tumblecube.runner import ScenarioRunner


def test_run_single_game_requires_setup(runner_config):
    runner = ScenarioRunner(runner_config, verbose=False)
    with pytest.raises(RuntimeError):
        runner.run_single_game()


def test_run_single_game(runner_config):
    runner = ScenarioRunner(runner_config, verbose=False)
    runner.setup()

    result = runner.run_single_game()

    assert 1 <= result.scenarios_evaluated <= runner_config.runner.max_scenarios
    assert result.seed == 1234
    if result.solved:
        assert len(result.solution) == result.moves_successful
    else:
        assert result.solution == []
    assert len(runner.logger.logs) == 1
    assert os.path.exists(runner.logger.logs[0]["image_path"])


def test_benchmark_writes_logs_and_csv(runner_config):
    runner = ScenarioRunner(runner_config, verbose=False)

    summary = runner.run_benchmark(num_runs=2)

    assert summary.num_games == 2
    assert 0.0 <= summary.solve_rate <= 1.0

    with open(os.path.join(runner.logger.run_dir, "experiment_log.json"), encoding="utf-8") as f:
        logs = json.load(f)
    assert [entry["game"] for entry in logs] == [1, 2]
    assert os.path.exists(os.path.join(runner.logger.run_dir, "summary.txt"))

    table = pd.read_csv(os.path.join(runner.logger.run_dir, "results.csv"))
    assert len(table) == 1
    assert table.loc[0, "num_games"] == 2


def test_benchmark_is_reproducible(runner_config):
    first = ScenarioRunner(runner_config, verbose=False).run_multiple_games(2)
    second = ScenarioRunner(runner_config, verbose=False).run_multiple_games(2)

    assert [r.scenarios_evaluated for r in first] == [r.scenarios_evaluated for r in second]
    assert [r.moves_attempted for r in first] == [r.moves_attempted for r in second]


def test_summary_from_results():
    results = [
        GameResult(True, 2, 10, 6, 1.0, 0.5),
        GameResult(False, 4, 20, 8, 3.0, 0.5),
    ]

    summary = BenchmarkSummary.from_results(results)

    assert summary.num_solved == 1
    assert summary.solve_rate == 0.5
    assert summary.mean_scenarios == 3.0
    assert summary.mean_moves_attempted == 15.0
    assert summary.mean_total_time == 2.0
    assert "results" not in summary.to_dict()


def test_summary_of_no_results():
    assert BenchmarkSummary.from_results([]).num_games == 0
