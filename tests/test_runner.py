import random

import pytest

from swissmeta.constants import DAY1_RECORDS_KEY, DAY2_RECORDS_KEY, OTHER_DECK
from swissmeta.exceptions import MissingDay1DataException
from swissmeta.player import Player
from swissmeta.tournament.models import Stage, TournamentConfig
from swissmeta.tournament.runner import (
    TournamentRunner,
    qualify_for_day2,
    sort_standings,
)
from swissmeta.tournament.storage import InMemoryRecordStore


def _config(**overrides):
    data = dict(
        matchup_matrix=[
            [0.5, 0.6, 0.45],
            [0.4, 0.5, 0.55],
            [0.55, 0.45, 0.5],
        ],
        meta_percentages=[40, 35, 25],
        deck_names=["Aggro", "Control", "Combo"],
        n_players=64,
        skill_percents=[10, 20, 0],
        seed=7,
    )
    data.update(overrides)
    return TournamentConfig(**data)


def test_day1_runs_every_player_through_eight_rounds():
    result = TournamentRunner(_config()).run()

    assert result.stage == Stage.DAY1
    assert result.end_of_round == 8
    assert len(result.players) == 64
    assert len({p.id for p in result.players}) == 64
    assert all(p.rounds_played <= 8 for p in result.players)
    assert result.deck_counts == {"Aggro": 26, "Control": 22, "Combo": 16}


def test_standings_are_sorted_by_match_points():
    result = TournamentRunner(_config()).run_day1()
    points = [p.match_points for p in result.players]
    assert points == sorted(points, reverse=True)


def test_sort_is_stable_for_equal_points():
    players = [
        Player(3, "A", match_points=3),
        Player(1, "A"),
        Player(2, "A", match_points=3),
    ]
    assert [p.id for p in sort_standings(players)] == [3, 2, 1]


def test_other_deck_joins_an_incomplete_meta():
    result = TournamentRunner(_config(meta_percentages=[40, 30, 5])).run_day1()
    assert result.deck_counts[OTHER_DECK] == 16


def test_day1_is_saved_to_the_store():
    store = InMemoryRecordStore()
    result = TournamentRunner(_config(), store=store).run_day1()
    assert store.get(DAY1_RECORDS_KEY) == result.players


def test_day2_without_day1_data_raises():
    runner = TournamentRunner(_config(is_day2=True))
    with pytest.raises(MissingDay1DataException):
        runner.run()


def test_day2_with_empty_store_raises():
    runner = TournamentRunner(_config(is_day2=True), store=InMemoryRecordStore())
    with pytest.raises(MissingDay1DataException):
        runner.run()


def test_qualify_for_day2_copies_and_renumbers():
    players = [
        Player(5, "A", match_points=21),
        Player(9, "B", match_points=16),
        Player(2, "A", match_points=15),
        Player(7, "B", match_points=16),
    ]
    qualified = qualify_for_day2(players, 16)

    assert [p.id for p in qualified] == [5, 9, 7]
    assert [p.day2_id for p in qualified] == [1, 2, 3]
    assert all(p.day2_id is None for p in players)


def test_day2_continues_from_stored_day1():
    store = InMemoryRecordStore()
    day1 = TournamentRunner(_config(), store=store).run()
    day1_points = {p.id: p.match_points for p in day1.players}

    day2 = TournamentRunner(_config(is_day2=True, seed=8), store=store).run()

    assert day2.stage == Stage.DAY2
    assert day2.end_of_round == 6
    qualified = [pid for pid, points in day1_points.items() if points >= 16]
    assert sorted(p.id for p in day2.players) == sorted(qualified)
    assert sorted(p.day2_id for p in day2.players) == list(range(1, len(qualified) + 1))
    for player in day2.players:
        assert player.match_points >= day1_points[player.id]
        assert player.rounds_played <= 14
    assert store.get(DAY2_RECORDS_KEY) == day2.players


def test_explicit_day1_records_take_precedence_over_store():
    store = InMemoryRecordStore()
    store.put(DAY1_RECORDS_KEY, [Player(1, "Aggro", match_points=24)])
    records = [Player(i, "Combo", match_points=18) for i in range(1, 5)]

    result = TournamentRunner(_config(), store=store).run_day2(records)

    assert {p.deck for p in result.players} == {"Combo"}
    assert len(result.players) == 4


def test_same_seed_reproduces_standings():
    first = TournamentRunner(_config(seed=99)).run_day1()
    second = TournamentRunner(_config(seed=99)).run_day1()
    assert [p.to_dict() for p in first.players] == [
        p.to_dict() for p in second.players
    ]


def test_injected_random_source_is_shared():
    rng = random.Random(1)
    runner = TournamentRunner(_config(seed=None), rng=rng)
    assert runner.random is rng
    assert runner.resolver.random is rng
    assert runner.pairing_engine.random is rng
    assert runner.population.random is rng


def test_mirror_matchup_gives_symmetric_points():
    config = _config(
        matchup_matrix=[[0.5, 0.5], [0.5, 0.5]],
        meta_percentages=[50, 50],
        deck_names=["Aggro", "Control"],
        n_players=8,
        skill_percents=[0, 0],
        seed=None,
    )
    runner = TournamentRunner(config, rng=random.Random(2024))
    points = {"Aggro": [], "Control": []}
    for _ in range(400):
        for player in runner.run_day1().players:
            points[player.deck].append(player.match_points)

    mean_aggro = sum(points["Aggro"]) / len(points["Aggro"])
    mean_control = sum(points["Control"]) / len(points["Control"])
    assert len(points["Aggro"]) == len(points["Control"]) == 1600
    assert abs(mean_aggro - mean_control) < 1.0
    assert 7 < (mean_aggro + mean_control) / 2 < 13
