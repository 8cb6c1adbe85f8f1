import json

import pytest

from swissmeta.batch.aggregator import BatchResults
from swissmeta.batch.analyzer import placement_brackets, summarize_batch
from swissmeta.batch.reporter import (
    BatchReporter,
    generate_batch_report,
    standings_table,
    summary_table,
)
from swissmeta.player import Player


def _results():
    results = BatchResults.for_decks(["Aggro", "Control"])
    results.day1.update({"Aggro": 100, "Control": 50})
    results.day2.update({"Aggro": 40, "Control": 0})
    for cut, count in zip((16, 32, 64, 128, 256), (10, 20, 30, 35, 38)):
        results.top_cuts[cut]["Aggro"] = count
    results.iterations = 2
    return results


def test_placement_brackets_are_disjoint():
    assert placement_brackets(_results(), "Aggro") == {
        "top16": 10,
        "17-32": 10,
        "33-64": 10,
        "65-128": 5,
        "129-256": 3,
        "day2_rest": 2,
    }


def test_deck_summary_figures():
    aggro, control = summarize_batch(_results())

    assert aggro.deck == "Aggro"
    assert aggro.day1_share == pytest.approx(100 * 100 / 150)
    assert aggro.day2_share == pytest.approx(100.0)
    assert aggro.conversion_rate == pytest.approx(40.0)
    assert aggro.average_top16 == pytest.approx(5.0)
    assert control.conversion_rate == 0.0
    assert sum(control.brackets.values()) == 0


def test_summary_of_empty_batch():
    summaries = summarize_batch(BatchResults.for_decks(["Aggro"]))
    assert summaries[0].conversion_rate == 0.0
    assert summaries[0].average_top16 == 0.0


def test_report_shape():
    report = BatchReporter().generate_report(_results(), {"n_players": 40})

    assert set(report) == {"metadata", "results", "summary"}
    assert report["metadata"]["iterations"] == 2
    assert report["metadata"]["configuration"] == {"n_players": 40}
    assert report["results"]["top16"] == {"Aggro": 10, "Control": 0}
    assert [s["deck"] for s in report["summary"]] == ["Aggro", "Control"]


def test_report_is_written_as_json(tmp_path):
    output = tmp_path / "reports" / "batch.json"
    report = generate_batch_report(_results(), output_path=output)

    with open(output, "r", encoding="utf-8") as f:
        assert json.load(f) == report


def test_terminal_tables():
    assert summary_table(summarize_batch(_results())).row_count == 2

    players = [Player(i, "Aggro", match_points=30 - i) for i in range(1, 21)]
    assert standings_table(players, 16, "Standings").row_count == 16
