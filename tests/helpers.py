"""Result builders shared by the test modules."""

from tallyboard.models import MatchResult


def game(round_number, player_a, player_b, score_a, score_b):
    return MatchResult(
        round_number=round_number,
        player_a_id=player_a,
        player_b_id=player_b,
        score_a=score_a,
        score_b=score_b,
    )


def bye(round_number, player, score=50):
    return MatchResult(
        round_number=round_number,
        player_a_id=player,
        player_b_id=None,
        score_a=score,
        score_b=0,
        is_bye=True,
    )
