"""
Headless CLI smoke tests.
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import headless


def test_quiet_run_prints_counts(capsys):
    assert headless.main(["--quiet", "--duration", "1", "--seed", "1"]) == 0

    out = capsys.readouterr().out.strip().splitlines()[-1]
    assert out.split() == ["critical=2", "high=3", "medium=2", "low=1"]


def test_missing_config(capsys, tmp_path):
    assert headless.main(["--config", str(tmp_path / "nope.yaml")]) == 1
    assert "not found" in capsys.readouterr().out


def test_malformed_yaml(capsys, tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("session: [unclosed\n", encoding="utf-8")

    assert headless.main(["--config", str(path)]) == 1
    assert "Invalid config" in capsys.readouterr().out


def test_verbose_summary(capsys):
    assert headless.main(["--duration", "2", "--seed", "4", "--sensitivity", "90"]) == 0

    out = capsys.readouterr().out
    assert "Sensitivity: 90%" in out
    assert "Threat origins: 8" in out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
