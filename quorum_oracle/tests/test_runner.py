"""Tests for the simulation runner"""

import pytest

from quorum_oracle.config import OracleConfig, EngineConfig, SimulationConfig
from quorum_oracle.runner import OracleRunner, main


def make_config(**sim):
    sim.setdefault("seed", 1)
    return OracleConfig(
        engine=EngineConfig(default_interval=30, default_min_posts=3),
        simulation=SimulationConfig(**sim),
    )


class TestOracleRunner:
    def test_initialization(self):
        runner = OracleRunner(make_config(num_validators=4))
        assert len(runner.validators) == 4
        assert all(v.oracle_id == runner.oracle.id for v in runner.validators)
        assert runner.oracle.min_posts == 3

    def test_threshold_overrides(self):
        runner = OracleRunner(make_config(), interval=500, min_posts=7)
        assert runner.oracle.interval == 500
        assert runner.oracle.min_posts == 7

    def test_clock_advances(self):
        runner = OracleRunner(make_config(tick_seconds=10))
        runner.tick()
        runner.tick()
        assert runner.clock == 20

    def test_every_validator_posts(self):
        config = make_config(num_validators=3, post_probability=1.0, noise_std=0.0)
        runner = OracleRunner(config)

        folds = runner.tick()
        assert len(folds) == 1
        assert folds[0].num_observations == 3
        assert folds[0].value == config.simulation.base_value

    def test_run_publishes(self):
        runner = OracleRunner(make_config(num_validators=5, post_probability=0.8))
        folds = runner.run(20)

        assert len(folds) > 0
        assert folds == runner.service.history(runner.oracle.id)[-len(folds):]
        for summary in folds:
            assert summary.min_value <= summary.value <= summary.max_value

    def test_seeded_runs_repeat(self):
        a = OracleRunner(make_config(seed=123)).run(10)
        b = OracleRunner(make_config(seed=123)).run(10)
        assert [s.value for s in a] == [s.value for s in b]

    def test_last_update_never_decreases(self):
        runner = OracleRunner(make_config(post_probability=0.3))
        last = 0
        for _ in range(15):
            runner.tick()
            assert runner.oracle.last_update >= last
            last = runner.oracle.last_update


class TestMain:
    def test_once(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["--once", "--seed", "3", "--validators", "2"]) == 0
        out = capsys.readouterr().out
        assert "Published:" in out

    def test_invalid_override(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            main(["--validators", "0"])

    @pytest.mark.parametrize("flag", ["--interval", "--min-posts"])
    def test_negative_threshold(self, flag, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc_info:
            main([flag, "-1"])
        assert exc_info.value.code == 2
        assert f"{flag} must be non-negative" in capsys.readouterr().err
