import pytest

from swissmeta.constants import OTHER_DECK
from swissmeta.tournament.matchup import MatchupModel, allocate_players
from swissmeta.tournament.models import TournamentConfig


def _config(meta, n_players=100):
    size = len(meta)
    return TournamentConfig(
        matchup_matrix=[[0.5] * size for _ in range(size)],
        meta_percentages=meta,
        deck_names=[f"Deck {i}" for i in range(size)],
        n_players=n_players,
        skill_percents=[10] * size,
    )


def test_allocation_matches_exact_shares():
    assert allocate_players([50, 30, 20], 100) == [50, 30, 20]


def test_allocation_drift_goes_to_first_largest_deck():
    # 10 / 3 rounds to 3 for every deck, one player is left over
    assert allocate_players([1, 1, 1], 10) == [4, 3, 3]


def test_allocation_rounds_halves_up():
    # 2.5 rounds up for both decks, the surplus player comes off the first
    assert allocate_players([50, 50], 5) == [2, 3]


def test_allocation_scales_shares_by_their_fraction_of_the_total():
    # 7 * 0.35 = 2.45 and 7 * 0.65 = 4.55
    assert allocate_players([35, 65], 7) == [2, 5]
    assert allocate_players([7, 13], 7) == [2, 5]


def test_allocation_always_sums_to_player_count():
    for n_players in (0, 1, 7, 33, 101, 257):
        counts = allocate_players([12.5, 37.5, 20, 5, 25], n_players)
        assert sum(counts) == n_players


def test_other_deck_is_added_when_meta_is_incomplete():
    config = _config([40, 35])
    model = MatchupModel.from_config(config)

    assert model.deck_names == ["Deck 0", "Deck 1", OTHER_DECK]
    assert model.has_other
    assert model.player_counts == [40, 35, 25]
    assert model.skill_percents[-1] == 5
    assert [row[-1] for row in model.matchup_matrix[:-1]] == [0.6, 0.6]
    assert model.matchup_matrix[-1] == [0.4, 0.4, 0.5]


def test_inputs_are_not_modified_when_other_is_added():
    config = _config([40, 35])
    MatchupModel.from_config(config)

    assert config.deck_names == ["Deck 0", "Deck 1"]
    assert config.meta_percentages == [40, 35]
    assert config.matchup_matrix == [[0.5, 0.5], [0.5, 0.5]]
    assert config.skill_percents == [10, 10]


def test_full_meta_has_no_other_deck():
    model = MatchupModel.from_config(_config([60, 40]))
    assert not model.has_other
    assert model.deck_names == ["Deck 0", "Deck 1"]


def test_meta_above_full_is_normalized():
    model = MatchupModel.from_config(_config([60, 60], n_players=10))
    assert not model.has_other
    assert model.player_counts == [5, 5]


def test_empty_meta_sends_everyone_to_other():
    model = MatchupModel.from_config(_config([0, 0], n_players=12))
    assert model.player_counts == [0, 0, 12]


def test_win_rate_lookup_by_name():
    model = MatchupModel(
        ["Aggro", "Control"],
        [[0.5, 0.65], [0.35, 0.5]],
        [0, 0],
    )
    assert model.win_rate("Aggro", "Control") == pytest.approx(0.65)
    assert model.win_rate("Control", "Aggro") == pytest.approx(0.35)
    assert model.deck_index("Control") == 1


def test_counts_by_deck():
    model = MatchupModel.from_config(_config([50, 50], n_players=20))
    assert model.counts_by_deck() == {"Deck 0": 10, "Deck 1": 10}
    assert model.total_players == 20
