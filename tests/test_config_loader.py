"""
Sentry Config Loader Test Suite

Tests for YAML session parsing, defaults and validation.
"""

import os
import sys

import pytest
import yaml

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sentry.io.config_loader import ConfigLoader, load_config
from sentry.simulation.engine import SentryEngine
from sentry.simulation.objects import ThreatKind, ThreatLevel

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_SESSION = os.path.join(PROJECT_ROOT, "scenarios", "default_session.yaml")


def write_yaml(tmp_path, data, name="session.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


class TestLoading:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader(str(tmp_path / "missing.yaml"))

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        config = load_config(str(path))

        assert config.session.sensitivity == 50
        assert config.detector.cluster_radius == 15.0
        assert config.threats.catalogue is None
        assert config.ticks.motion_s == 0.5

    def test_default_session_file(self):
        loader = ConfigLoader(DEFAULT_SESSION)
        config = loader.get_config()

        assert loader.get_session_name() == "Default Sentry Session"
        assert config.session.seed == 42
        assert len(config.threats.catalogue) == 8
        assert config.threats.catalogue[0].kind == ThreatKind.MISSILE
        assert config.threats.catalogue[-1].level == ThreatLevel.LOW

    def test_partial_sections(self, tmp_path):
        path = write_yaml(
            tmp_path,
            {
                "session": {"sensitivity": 80, "name": "Night Watch"},
                "sweep": {"step_deg": 3.0},
                "threats": {"defended_position": {"lat": 1.5, "lng": 2.5}},
            },
        )
        config = load_config(path)

        assert config.session.sensitivity == 80
        assert config.session.name == "Night Watch"
        assert config.sweep.step_deg == 3.0
        assert config.sweep.window_deg == 10.0
        assert config.threats.defended_lat == 1.5
        assert config.threats.defended_lng == 2.5

    def test_no_config_before_load(self):
        loader = ConfigLoader()
        assert loader.get_config() is None
        assert loader.get_session_name() == "Unknown"
        with pytest.raises(ValueError):
            loader.create_engine()


class TestValidation:
    @pytest.mark.parametrize("sensitivity", [-1, 101])
    def test_sensitivity_range(self, tmp_path, sensitivity):
        path = write_yaml(tmp_path, {"session": {"sensitivity": sensitivity}})
        with pytest.raises(ValueError):
            ConfigLoader(path)

    def test_history_length_positive(self, tmp_path):
        path = write_yaml(tmp_path, {"session": {"history_length": 0}})
        with pytest.raises(ValueError, match="history_length"):
            ConfigLoader(path)

    def test_non_positive_interval(self, tmp_path):
        path = write_yaml(tmp_path, {"ticks": {"sweep_s": 0}})
        with pytest.raises(ValueError):
            ConfigLoader(path)

    def test_unknown_threat_kind(self, tmp_path):
        path = write_yaml(
            tmp_path,
            {"threats": {"catalogue": [{"lat": 1.0, "lng": 2.0, "kind": "laser"}]}},
        )
        with pytest.raises(ValueError, match="catalogue"):
            ConfigLoader(path)

    def test_bad_progress_range(self, tmp_path):
        path = write_yaml(tmp_path, {"threats": {"progress_range": [0.1]}})
        with pytest.raises(ValueError):
            ConfigLoader(path)

    def test_bad_block_size(self, tmp_path):
        path = write_yaml(tmp_path, {"detector": {"block_size": 0}})
        with pytest.raises(ValueError):
            ConfigLoader(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigLoader(str(path))


class TestEngineCreation:
    def test_custom_catalogue_used(self, tmp_path):
        path = write_yaml(
            tmp_path,
            {
                "threats": {
                    "catalogue": [
                        {
                            "id": "t-1",
                            "name": "Test Range",
                            "lat": 10.0,
                            "lng": 40.0,
                            "kind": "drone",
                            "level": "high",
                            "velocity_kmh": 300,
                            "altitude_m": 1000,
                        }
                    ]
                }
            },
        )
        engine = ConfigLoader(path).create_engine(seed=1)
        engine.start()

        assert isinstance(engine, SentryEngine)
        assert [t.id for t in engine.registry.snapshot()] == ["t-1"]
        assert engine.registry.counts()["high"] == 1

    def test_default_session_engine_runs(self):
        engine = ConfigLoader(DEFAULT_SESSION).create_engine()
        snapshot = engine.run(duration_s=1.0)

        assert snapshot["active"]
        assert len(snapshot["threats"]) == 8
        assert engine.sensitivity == 50


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
