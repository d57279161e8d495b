from main import main


def test_run_writes_results(tmp_path, capsys):
    code = main(["--seed", "3", "--population", "3", "--quiet", "--no-charts",
                 "--output-dir", str(tmp_path)])

    assert code == 0
    assert (tmp_path / "results.txt").exists()
    transcript = (tmp_path / "transcript.txt").read_text(encoding='utf-8')
    assert transcript.startswith("# seed 3")
    assert "=== DONE: all 3 processes" in transcript
    assert "Process details - seed 3" in capsys.readouterr().out


def test_multiple_runs_with_charts(tmp_path):
    code = main(["--seed", "3", "--population", "3", "--runs", "2", "--quiet",
                 "--output-dir", str(tmp_path)])

    assert code == 0
    assert (tmp_path / "gantt_seed_3.png").exists()
    assert (tmp_path / "gantt_seed_4.png").exists()
    assert (tmp_path / "comparison.png").exists()


def test_config_file_and_overrides(tmp_path, capsys):
    config_file = tmp_path / "sim.conf"
    config_file.write_text("population_size = 2\nquantum = 5\nseed = 4\n", encoding='utf-8')

    code = main(["--config", str(config_file), "--quantum", "2", "--quiet", "--no-charts",
                 "--output-dir", str(tmp_path / "out")])

    assert code == 0
    out = capsys.readouterr().out
    assert "Processes        : 2" in out
    assert "Quantum          : 2" in out


def test_invalid_config_exits_with_error(tmp_path, capsys):
    code = main(["--cpu-min", "30", "--cpu-max", "10", "--output-dir", str(tmp_path)])
    assert code == 1
    assert "Invalid configuration" in capsys.readouterr().out


def test_missing_config_file(tmp_path):
    assert main(["--config", str(tmp_path / "nope.conf"), "--output-dir", str(tmp_path)]) == 1
