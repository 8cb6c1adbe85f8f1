import random

import pytest

from swissmeta.player import Player
from swissmeta.tournament.matchup import MatchupModel
from swissmeta.tournament.result_simulator import MatchOutcomeResolver, tie_rate


class ScriptedRandom:
    """Random source replaying a fixed list of draws."""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)

    def shuffle(self, seq):
        pass


def _resolver(draws, matrix=None):
    model = MatchupModel(
        ["Aggro", "Control"],
        matrix or [[0.5, 0.5], [0.5, 0.5]],
        [0, 0],
    )
    return MatchOutcomeResolver(model, rng=ScriptedRandom(draws))


def test_tie_rate_defaults_when_matchup_sums_to_one():
    assert tie_rate(0.5, 0.5) == pytest.approx(0.15)
    assert tie_rate(0.6, 0.4) == pytest.approx(0.15)


def test_tie_rate_is_missing_probability_mass():
    assert tie_rate(0.55, 0.4) == pytest.approx(0.05)
    assert tie_rate(0.7, 0.6) < 0


def test_tie_awards_one_point_each():
    p1, p2 = Player(1, "Aggro"), Player(2, "Control")
    outcome = _resolver([0.1]).resolve(p1, p2)

    assert outcome.is_tie
    assert (p1.match_points, p2.match_points) == (1, 1)
    assert p1.opponents == [2]
    assert p2.opponents == [1]


def test_two_game_wins_take_the_match():
    p1, p2 = Player(1, "Aggro"), Player(2, "Control")
    outcome = _resolver([0.9, 0.1, 0.2, 0.9]).resolve(p1, p2)

    assert not outcome.is_tie
    assert outcome.player1_games == 2
    assert (p1.match_points, p2.match_points) == (3, 0)


def test_one_game_win_loses_the_match():
    p1, p2 = Player(1, "Aggro"), Player(2, "Control")
    _resolver([0.9, 0.9, 0.9, 0.1]).resolve(p1, p2)
    assert (p1.match_points, p2.match_points) == (0, 3)


def test_skill_difference_shifts_game_odds():
    draws = [0.9, 0.65, 0.65, 0.9]

    skilled, average = Player(1, "Aggro", skill=0.2), Player(2, "Control")
    _resolver(draws).resolve(skilled, average)
    assert skilled.match_points == 3

    plain, other = Player(3, "Aggro"), Player(4, "Control")
    _resolver(draws).resolve(plain, other)
    assert plain.match_points == 0


def test_no_ties_when_matchup_sums_above_one():
    p1, p2 = Player(1, "Aggro"), Player(2, "Control")
    resolver = _resolver([0.0, 0.1, 0.1, 0.1], matrix=[[0.5, 0.7], [0.6, 0.5]])
    outcome = resolver.resolve(p1, p2)
    assert not outcome.is_tie
    assert p1.match_points == 3


def test_points_always_sum_to_two_or_three():
    model = MatchupModel(["Aggro", "Control"], [[0.5, 0.6], [0.3, 0.5]], [0, 0])
    resolver = MatchOutcomeResolver(model, rng=random.Random(42))
    for i in range(200):
        p1, p2 = Player(2 * i + 1, "Aggro"), Player(2 * i + 2, "Control")
        outcome = resolver.resolve(p1, p2)
        assert outcome.player1_points + outcome.player2_points in (2, 3)
        assert {outcome.player1_points, outcome.player2_points} in ({1}, {0, 3})
