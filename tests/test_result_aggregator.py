import pytest

from helpers import bye, game
from tallyboard.constants import (
    DIAG_DUPLICATE_RESULT,
    DIAG_INVALID_RESULT,
    DIAG_ROUND_OUT_OF_RANGE,
    DIAG_UNKNOWN_PLAYER,
)
from tallyboard.models import MatchResult, Player
from tallyboard.standings import ResultAggregator


def test_example_record_after_round_two(four_players, four_player_results):
    aggregation = ResultAggregator().aggregate(
        four_player_results, four_players, as_of_round=2
    )

    alice = aggregation["A"]
    assert alice.wins == 1
    assert alice.losses == 1
    assert alice.spread == 130
    assert alice.games_played == 2

    assert aggregation["B"].spread == -150
    assert aggregation["D"].spread == -50
    assert aggregation.diagnostics == []


def test_every_registered_player_has_a_record(four_players):
    aggregation = ResultAggregator().aggregate([], four_players)

    assert set(aggregation.records) == {"A", "B", "C", "D"}
    for record in aggregation.records.values():
        assert record.wins == 0
        assert record.games_played == 0


def test_spread_is_zero_sum_for_games(four_players, four_player_results):
    games = [r for r in four_player_results if not r.is_bye_result]
    aggregation = ResultAggregator().aggregate(games, four_players)

    assert sum(r.spread for r in aggregation.records.values()) == 0


def test_tie_folds_half_win_and_counts_tie(four_players):
    aggregation = ResultAggregator().aggregate(
        [game(1, "A", "B", 400, 400)], four_players
    )

    for pid in ("A", "B"):
        record = aggregation[pid]
        assert record.wins == 0.5
        assert record.ties == 1
        assert record.losses == 0
        assert record.points == 0.5
        assert record.spread == 0


def test_custom_tie_value(four_players):
    aggregation = ResultAggregator(tie_win_value=0.0).aggregate(
        [game(1, "A", "B", 400, 400)], four_players
    )
    assert aggregation["A"].wins == 0
    assert aggregation["A"].ties == 1


def test_bye_is_a_win_worth_its_score(four_players):
    aggregation = ResultAggregator().aggregate([bye(1, "D", score=75)], four_players)

    record = aggregation["D"]
    assert record.wins == 1
    assert record.spread == 75
    assert record.games_played == 1
    assert record.byes == 1


def test_missing_opponent_counts_as_bye(four_players):
    result = MatchResult(round_number=1, player_a_id="C", player_b_id=None, score_a=40)
    aggregation = ResultAggregator().aggregate([result], four_players)

    assert aggregation["C"].byes == 1
    assert aggregation["C"].spread == 40


def test_missing_scores_are_zero(four_players):
    result = MatchResult(
        round_number=1, player_a_id="A", player_b_id="B", score_a=None, score_b=10
    )
    aggregation = ResultAggregator().aggregate([result], four_players)

    assert aggregation["A"].losses == 1
    assert aggregation["A"].spread == -10
    assert aggregation["B"].wins == 1


def test_unknown_player_is_skipped_with_diagnostic(four_players):
    results = [game(1, "A", "ghost", 400, 300), game(1, "B", "C", 350, 300)]
    aggregation = ResultAggregator().aggregate(results, four_players)

    assert aggregation["A"].games_played == 0
    assert aggregation["B"].wins == 1
    assert "ghost" not in aggregation.records
    assert [d.kind for d in aggregation.diagnostics] == [DIAG_UNKNOWN_PLAYER]
    assert aggregation.diagnostics[0].player_ids == ("A", "ghost")


def test_unknown_player_is_logged(four_players, caplog):
    with caplog.at_level("WARNING", logger="tallyboard"):
        ResultAggregator().aggregate([game(1, "A", "ghost", 400, 300)], four_players)

    assert "ghost" in caplog.text


@pytest.mark.parametrize(
    "result",
    [
        game(0, "A", "B", 400, 300),
        game(1, "A", "B", -5, 300),
        game(1, "A", "A", 400, 300),
        game(1, "A", "B", "lots", 300),
    ],
)
def test_invalid_rows_are_reported(four_players, result):
    aggregation = ResultAggregator().aggregate([result], four_players)

    assert aggregation["A"].games_played == 0
    assert [d.kind for d in aggregation.diagnostics] == [DIAG_INVALID_RESULT]


def test_duplicate_keeps_first_in_input_order(four_players):
    results = [game(1, "A", "B", 400, 300), game(1, "B", "A", 500, 300)]
    aggregation = ResultAggregator().aggregate(results, four_players)

    assert aggregation["A"].wins == 1
    assert aggregation["A"].games_played == 1
    assert aggregation["B"].losses == 1
    assert [d.kind for d in aggregation.diagnostics] == [DIAG_DUPLICATE_RESULT]


def test_result_order_across_rounds_does_not_matter(four_players, four_player_results):
    aggregator = ResultAggregator()
    forward = aggregator.aggregate(four_player_results, four_players)
    backward = aggregator.aggregate(list(reversed(four_player_results)), four_players)

    assert forward.records == backward.records


def test_as_of_round_excludes_later_rounds(four_players, four_player_results):
    aggregation = ResultAggregator().aggregate(
        four_player_results, four_players, as_of_round=1
    )

    assert aggregation["A"].games_played == 1
    assert aggregation["C"].wins == 1
    assert aggregation.diagnostics == []


def test_rounds_beyond_last_round_are_reported(four_players, four_player_results):
    aggregation = ResultAggregator().aggregate(
        four_player_results, four_players, last_round=2
    )

    assert aggregation["A"].games_played == 2
    kinds = {d.kind for d in aggregation.diagnostics}
    assert kinds == {DIAG_ROUND_OUT_OF_RANGE}
    assert len(aggregation.diagnostics) == 2


def test_fold_does_not_mutate_input(four_players):
    aggregator = ResultAggregator()
    records = aggregator.empty_records(p.id for p in four_players)
    folded = aggregator.fold(records, [game(1, "A", "B", 400, 300)])

    assert records["A"].wins == 0
    assert folded["A"].wins == 1


def test_series_majority_wins_the_series():
    players = [Player(id="X", name="X"), Player(id="Y", name="Y")]
    results = [
        game(1, "X", "Y", 400, 300),
        game(2, "X", "Y", 300, 400),
        game(3, "Y", "X", 350, 420),
    ]
    aggregation = ResultAggregator().aggregate_series(results, players, best_of=3)

    assert aggregation["X"].match_wins == 1
    assert aggregation["X"].match_losses == 0
    assert aggregation["Y"].match_losses == 1
    assert aggregation["X"].wins == 2


def test_undecided_series_counts_for_nobody():
    players = [Player(id="X", name="X"), Player(id="Y", name="Y")]
    results = [game(1, "X", "Y", 400, 300), game(2, "X", "Y", 300, 400)]
    aggregation = ResultAggregator().aggregate_series(results, players, best_of=5)

    assert aggregation["X"].match_wins == 0
    assert aggregation["Y"].match_wins == 0
