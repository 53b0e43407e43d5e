import pytest

from tallyboard.exceptions import ConfigurationError, RoundingToleranceError
from tallyboard.models import AggregateRecord, Player, Prize
from tallyboard.standings import PrizeSplitter, TiebreakRanker


def _rows(*entries):
    """Rank players given as (id, wins, spread) tuples; listed order breaks ties."""
    players = [
        Player(id=pid, name=pid, seed=index)
        for index, (pid, _, _) in enumerate(entries, start=1)
    ]
    records = {
        pid: AggregateRecord(player_id=pid, wins=wins, spread=spread)
        for pid, wins, spread in entries
    }
    return TiebreakRanker().rank(records, players)


def _amounts(report):
    return [a.amount for a in report.assignments]


def test_two_tied_leaders_share_first_prize():
    rows = _rows(("A", 5, 100), ("B", 5, 100), ("C", 3, 0))
    report = PrizeSplitter().distribute(rows, [Prize(rank=1, amount=500)])

    first, second, third = report.assignments
    for assignment in (first, second):
        assert assignment.amount == 250
        assert assignment.is_split
        assert assignment.original_amount == 500
        assert assignment.split_count == 2
        assert assignment.is_tied
    assert third.prize is None
    assert third.amount is None
    assert not third.is_split


def test_untied_players_take_prizes_in_rank_order():
    rows = _rows(("A", 5, 100), ("B", 4, 100), ("C", 3, 0))
    prizes = [Prize(rank=2, amount=200), Prize(rank=1, amount=300)]
    report = PrizeSplitter().distribute(rows, prizes)

    assert _amounts(report) == [300, 200, None]
    assert [a.position for a in report.assignments] == [1, 2, 3]
    assert not any(a.is_split for a in report.assignments)
    assert report.total_pool == 500
    assert report.distributed_amount == 500


def test_tied_block_pools_every_prize_it_covers():
    rows = _rows(("A", 5, 100), ("B", 4, 50), ("C", 4, 50), ("D", 1, 0))
    prizes = [
        Prize(rank=1, amount=400),
        Prize(rank=2, amount=200),
        Prize(rank=3, amount=100),
    ]
    report = PrizeSplitter().distribute(rows, prizes)

    assert _amounts(report) == [400, 150, 150, None]
    assert report.assignments[1].original_amount == 300


def test_tied_block_reaching_past_the_last_prize_still_shares():
    rows = _rows(("A", 2, 0), ("B", 2, 0), ("C", 2, 0))
    report = PrizeSplitter().distribute(rows, [Prize(rank=1, amount=300)])

    assert _amounts(report) == [100, 100, 100]
    assert all(a.split_count == 3 for a in report.assignments)


def test_rounding_remainder_goes_to_highest_placed():
    rows = _rows(("A", 2, 0), ("B", 2, 0), ("C", 2, 0))
    report = PrizeSplitter().distribute(rows, [Prize(rank=1, amount=100)])

    assert _amounts(report) == [34, 33, 33]
    assert report.distributed_amount == 100


def test_rounding_excess_is_taken_from_lowest_placed():
    rows = _rows(("A", 2, 0), ("B", 2, 0), ("C", 2, 0))
    report = PrizeSplitter().distribute(rows, [Prize(rank=1, amount=200)])

    assert _amounts(report) == [67, 67, 66]
    assert report.distributed_amount == 200


def test_non_monetary_prizes_are_shared_with_combined_description():
    rows = _rows(("A", 2, 0), ("B", 2, 0))
    prizes = [
        Prize(rank=1, description="Trophy"),
        Prize(rank=2, amount=100, description="Book"),
    ]
    report = PrizeSplitter().distribute(rows, prizes)

    for assignment in report.assignments:
        assert assignment.prize.description == "Trophy / Book"
        assert assignment.amount == 50
        assert assignment.is_split


def test_purely_non_monetary_tie_has_no_amount():
    rows = _rows(("A", 2, 0), ("B", 2, 0))
    report = PrizeSplitter().distribute(rows, [Prize(rank=1, description="Trophy")])

    for assignment in report.assignments:
        assert assignment.prize.description == "Trophy"
        assert assignment.amount is None
        assert assignment.original_amount is None
    assert report.total_pool == 0


def test_excess_prizes_are_unassigned():
    rows = _rows(("A", 2, 0), ("B", 1, 0))
    prizes = [Prize(rank=r, amount=10 * r) for r in (1, 2, 3)]
    report = PrizeSplitter().distribute(rows, prizes)

    assert [p.rank for p in report.unassigned] == [3]
    assert report.total_pool == 60
    assert report.distributed_amount == 30


def test_no_players_leaves_every_prize_unassigned():
    report = PrizeSplitter().distribute([], [Prize(rank=1, amount=10)])

    assert report.assignments == []
    assert len(report.unassigned) == 1


def test_conservation_with_many_ties():
    rows = _rows(*[(f"P{i}", 1, 0) for i in range(7)])
    prizes = [Prize(rank=1, amount=1000), Prize(rank=2, amount=333)]
    report = PrizeSplitter().distribute(rows, prizes)

    assert sum(_amounts(report)) == 1333


@pytest.mark.parametrize(
    "prizes",
    [
        [Prize(rank=1, amount=10), Prize(rank=1, amount=5)],
        [Prize(rank=0, amount=10)],
        [Prize(rank=1)],
        [Prize(rank=1, amount=-10)],
    ],
)
def test_invalid_prize_lists_are_rejected(prizes):
    rows = _rows(("A", 1, 0))
    with pytest.raises(ConfigurationError):
        PrizeSplitter().distribute(rows, prizes)


def test_fractional_pool_beyond_tolerance_raises():
    rows = _rows(("A", 1, 0), ("B", 1, 0))
    with pytest.raises(RoundingToleranceError):
        PrizeSplitter(tolerance=0).distribute(rows, [Prize(rank=1, amount=100.5)])


def test_report_lookup_by_player():
    rows = _rows(("A", 2, 0), ("B", 1, 0))
    report = PrizeSplitter().distribute(rows, [Prize(rank=2, amount=40)])

    assert report.for_player("B").amount == 40
    assert report.for_player("A").prize is None
    assert report.for_player("Z") is None
