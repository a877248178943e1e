"""Tests for simulation configuration and logging setup."""

import json
import logging

import pytest

from mdkernel.config import SimulationConfig
from mdkernel.errors import ConfigurationError
from mdkernel.logging_config import setup_logging
from mdkernel.units import BOLTZMANN_CONSTANT, TIME_UNIT, fs_to_natural, natural_to_fs


class TestSimulationConfig:
    """Test the configuration dataclass."""

    def test_defaults(self):
        """Defaults describe the argon gas run."""
        config = SimulationConfig()
        assert config.box == (30.0, 30.0, 30.0)
        assert config.n_particles == 100
        assert config.epsilon == 0.0103
        assert config.sigma == 3.405
        assert config.cutoff == 5.0
        assert config.temperature == 300.0
        assert config.rescale_frequency == 50
        assert config.mode == "sequential"

    def test_timestep_in_natural_units(self):
        """5 fs is about half a natural time unit."""
        config = SimulationConfig(timestep_fs=5.0)
        assert config.timestep == pytest.approx(5.0 / 10.18051)

    def test_json_round_trip(self, tmp_path):
        """A saved configuration loads back unchanged."""
        config = SimulationConfig(
            box=(20.0, 25.0, 30.0), n_particles=8, seed=4, mode="synchronized"
        )
        path = tmp_path / "config.json"
        config.to_json(path)

        assert json.loads(path.read_text())["box"] == [20.0, 25.0, 30.0]
        assert SimulationConfig.from_json(path) == config

    def test_unknown_keys_rejected(self):
        """Typos in configuration files are reported."""
        with pytest.raises(ConfigurationError, match="tempreature"):
            SimulationConfig.from_dict({"tempreature": 300.0})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"box": (30.0, 0.0, 30.0)},
            {"box": (30.0, 30.0)},
            {"n_particles": -1},
            {"timestep_fs": 0.0},
            {"n_steps": -5},
            {"cutoff": 15.0},
            {"rescale_frequency": 0},
            {"report_frequency": -1},
            {"mode": "parallel"},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        """Invalid parameters fail at construction."""
        with pytest.raises(ConfigurationError):
            SimulationConfig(**kwargs)


class TestUnits:
    """Test natural-unit helpers."""

    def test_constants(self):
        """Test the Boltzmann constant and the time unit."""
        assert BOLTZMANN_CONSTANT == pytest.approx(8.617343e-5)
        assert TIME_UNIT == pytest.approx(10.18051)

    def test_time_conversion(self):
        """fs_to_natural and natural_to_fs are inverses."""
        assert fs_to_natural(TIME_UNIT) == pytest.approx(1.0)
        assert natural_to_fs(fs_to_natural(2.5)) == pytest.approx(2.5)


class TestLoggingSetup:
    """Test the logging configuration helper."""

    def test_handlers_and_file(self, tmp_path):
        """Console and file handlers are attached to the package logger."""
        log_file = tmp_path / "run.log"
        logger = logging.getLogger("mdkernel")
        try:
            setup_logging(logging.DEBUG, log_file=str(log_file))
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2

            logging.getLogger("mdkernel.engine.simulation").debug("hello")
            for handler in logger.handlers:
                handler.flush()
            assert "hello" in log_file.read_text()

            setup_logging(logging.INFO)
            assert len(logger.handlers) == 1
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
