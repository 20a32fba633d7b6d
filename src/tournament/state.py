"""State transitions for a single tournament.

Every function takes a :class:`Tournament` and hands back a new value;
the persistence layer stores whatever comes back as a whole. Inputs are
never mutated, so a failed transition leaves the caller's copy intact.
"""
import copy
import logging
import random
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from tournament.exceptions import InvalidScoreError, MatchCompletedError, MatchNotFoundError
from tournament.models import (
    DEFAULT_TARGETS,
    MatchStatus,
    Round,
    ScoringOption,
    Tournament,
    TournamentType,
    generate_id,
)
from tournament.rounds import generate_first_round, generate_next_round, next_round_number

logger = logging.getLogger(__name__)


def create_tournament(
    name: str,
    players: Sequence[str],
    tournament_type: TournamentType = TournamentType.AMERICANO,
    number_of_courts: int = 1,
    scoring_option: ScoringOption = ScoringOption.POINTS,
    target_value: Optional[int] = None,
) -> Tournament:
    if target_value is None:
        target_value = DEFAULT_TARGETS[scoring_option]
    return Tournament(
        id=generate_id(),
        name=name,
        tournament_type=tournament_type,
        number_of_courts=number_of_courts,
        players=list(players),
        scoring_option=scoring_option,
        target_value=target_value,
        rounds=[],
    )


def ensure_first_round(tournament: Tournament, rng: Optional[random.Random] = None) -> Tournament:
    """Generate round 1 the first time a tournament without rounds is opened."""
    if tournament.rounds:
        return tournament
    rounds = generate_first_round(
        tournament.players, tournament.number_of_courts, tournament.tournament_type, rng,
    )
    if not rounds:
        return tournament
    logger.info("Generated first round for tournament %s", tournament.id)
    return replace(tournament, rounds=rounds)


def append_next_round(
    tournament: Tournament, rng: Optional[random.Random] = None,
) -> Tuple[Tournament, Optional[Round]]:
    round_number = next_round_number(tournament.rounds)
    new_round = generate_next_round(
        tournament.players,
        tournament.number_of_courts,
        round_number,
        tournament.rounds,
        tournament.tournament_type,
        rng,
    )
    if new_round is None or not new_round.matches:
        return tournament, None

    logger.info(
        "Generated round %d (%d court(s)) for tournament %s",
        round_number, len(new_round.matches), tournament.id,
    )
    return replace(tournament, rounds=[*copy.deepcopy(tournament.rounds), new_round]), new_round


def submit_score(tournament: Tournament, match_id: str, score1: Optional[int]) -> Tournament:
    """Complete a match from team 1's score; team 2 gets the remainder.

    ``None`` means no value was picked and leaves the tournament unchanged.
    """
    if score1 is None:
        logger.debug("No score chosen for match %s, ignoring", match_id)
        return tournament

    current = tournament.find_match(match_id)
    if current is None:
        raise MatchNotFoundError(match_id)
    if current.completed:
        raise MatchCompletedError(match_id)
    if not 0 <= score1 <= tournament.target_value:
        raise InvalidScoreError(score1, tournament.target_value)

    rounds = copy.deepcopy(tournament.rounds)
    match = next(m for rnd in rounds for m in rnd.matches if m.id == match_id)
    match.score1 = score1
    match.score2 = tournament.target_value - score1
    match.status = MatchStatus.COMPLETED
    return replace(tournament, rounds=rounds)


def replace_players(tournament: Tournament, players: Sequence[str]) -> Tournament:
    # Past rounds keep the old names; standings only count current players.
    return replace(tournament, players=list(players))
