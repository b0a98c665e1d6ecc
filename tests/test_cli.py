"""Tests for the command-line interface."""

import io
import json
import numpy as np
import pytest
from nbody_sim.cli.main import build_config, build_parser, main, run_simulation
from nbody_sim.utils.config import SimulationConfig


def test_main_runs_and_reports(capsys):
    assert main(["3", "--steps", "10", "--seed", "1", "--quiet"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].split()[0] == "Body"
    assert len(lines) == 5
    assert lines[-1].startswith("steps=10 ")


def test_count_option(capsys):
    assert main(["-n", "2", "--steps", "5", "--quiet"]) == 0
    assert len(capsys.readouterr().out.strip().splitlines()) == 4


@pytest.mark.parametrize("argv", [[], ["abc"], ["0"], ["-5"], ["2.5"], ["3", "-n", "4"]])
def test_bad_count_exits_nonzero(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv + ["--steps", "1"])
    assert excinfo.value.code != 0
    assert "error" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [["3", "--dt", "0"], ["3", "--seed", "-1"], ["3", "--seed", "4294967296"]])
def test_bad_option_value_exits_nonzero(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv + ["--steps", "2", "--quiet"])
    assert excinfo.value.code == 2
    assert "error" in capsys.readouterr().err


def test_progress_report(capsys):
    assert main(["2", "--steps", "4", "--report-every", "2", "--seed", "3", "--G", "1.0"]) == 0

    out = capsys.readouterr().out
    assert "Running simulation: 2 bodies, 4 steps" in out
    assert out.count("\n2 ") + out.count("\n4 ") >= 2
    assert "Simulation complete!" in out


def test_save_state_and_plot(tmp_path, capsys):
    state_path = tmp_path / "final.json"
    plot_path = tmp_path / "final.png"

    assert main(["4", "--steps", "3", "--seed", "8", "--save-state", str(state_path),
                 "--plot", str(plot_path)]) == 0

    with open(state_path) as f:
        state = json.load(f)
    assert len(state["masses"]) == 4
    assert state["metadata"]["steps"] == 3
    assert plot_path.exists()


def test_config_file(tmp_path, capsys):
    path = tmp_path / "run.yaml"
    path.write_text("n_bodies: 2\nmax_steps: 6\nseed: 5\n")

    assert main(["--config", str(path), "--quiet"]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1].startswith("steps=6 ")


@pytest.mark.parametrize("text", ["integrator: 5\n", "backend: 1\n", "seed: -1\n"])
def test_bad_config_value_exits_with_usage_error(tmp_path, capsys, text):
    path = tmp_path / "run.yaml"
    path.write_text("n_bodies: 2\nmax_steps: 2\n" + text)

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(path), "--quiet"])
    assert excinfo.value.code == 2
    assert "error" in capsys.readouterr().err


def test_flags_override_config(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"n_bodies": 2, "max_steps": 6, "integrator": "euler"}))
    args = build_parser().parse_args(["5", "--config", str(path), "--steps", "9"])

    config = build_config(args)

    assert config.n_bodies == 5
    assert config.max_steps == 9
    assert config.integrator == "euler"


def test_run_simulation_is_reproducible():
    config = SimulationConfig(n_bodies=3, max_steps=20, seed=99, G=1.0, dt=0.01)

    first = run_simulation(config, quiet=True, stream=io.StringIO())
    second = run_simulation(config, quiet=True, stream=io.StringIO())

    assert np.array_equal(first.get_state()[0], second.get_state()[0])
    assert first.is_done
