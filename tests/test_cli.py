import json

import pytest

from swissmeta.cli import create_parser, main


def _write_config(tmp_path, **overrides):
    data = {
        "matchup_matrix": [[0.5, 0.55], [0.45, 0.5]],
        "meta_percentages": [60, 30],
        "deck_names": ["Aggro", "Control"],
        "n_players": 32,
        "skill_percents": [10, 20],
    }
    data.update(overrides)
    path = tmp_path / "meta.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_parser_defaults():
    args = create_parser().parse_args(["batch", "--config", "meta.json"])
    assert args.iterations == 1000
    assert args.output is None
    assert not args.verbose


def test_missing_command_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_run_day1(tmp_path, capsys):
    config = _write_config(tmp_path)
    assert main(["run", "--config", config, "--seed", "1", "--top", "5"]) == 0
    assert "DAY1 standings after round 8" in capsys.readouterr().out


def test_run_day2_needs_day1_records(tmp_path, capsys):
    config = _write_config(tmp_path)
    assert main(["run", "--config", config, "--day2"]) == 1
    assert "Day 1 data not found" in capsys.readouterr().err


def test_run_day2_from_store(tmp_path):
    config = _write_config(tmp_path)
    store = str(tmp_path / "records")

    assert main(["run", "--config", config, "--store", store, "--seed", "2"]) == 0
    assert (tmp_path / "records" / "Day1Records.json").exists()

    assert main(["run", "--config", config, "--store", store, "--day2"]) == 0
    assert (tmp_path / "records" / "Day2Records.json").exists()


def test_batch_writes_report(tmp_path):
    config = _write_config(tmp_path)
    output = tmp_path / "report.json"

    code = main(
        ["batch", "--config", config, "-n", "2", "--seed", "3", "--output", str(output)]
    )

    assert code == 0
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["metadata"]["iterations"] == 2
    assert report["metadata"]["configuration"]["requested_iterations"] == 2
    assert sum(report["results"]["day1"].values()) == 64
    assert {s["deck"] for s in report["summary"]} == {"Aggro", "Control", "Other"}


def test_matchups_csv_replaces_matrix(tmp_path):
    config = _write_config(tmp_path, matchup_matrix=[[2.0, 2.0], [2.0, 2.0]])
    matchups = tmp_path / "matchups.csv"
    matchups.write_text("Aggro,Control,11,9\nControl,Aggro,9,11\n", encoding="utf-8")

    assert main(["run", "--config", config, "--matchups", str(matchups)]) == 0


def test_invalid_config_exits_with_error(tmp_path, capsys):
    config = _write_config(tmp_path, skill_percents=[10])
    assert main(["run", "--config", config]) == 1
    assert "Error:" in capsys.readouterr().err


def test_missing_config_file(tmp_path):
    assert main(["run", "--config", str(tmp_path / "nope.json")]) == 1
