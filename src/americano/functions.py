import logging
import random
from typing import List, Optional, Sequence

from tournament.models import PLAYERS_PER_COURT, Match, Round, generate_id

logger = logging.getLogger(__name__)


def courts_used(player_count: int, number_of_courts: int) -> int:
    return max(0, min(number_of_courts, player_count // PLAYERS_PER_COURT))


def match_id(round_number: int, court: int) -> str:
    return f"r{round_number}c{court}-{generate_id()}"


def build_round(groups: Sequence[Sequence[str]], round_number: int) -> Round:
    """Turn ordered 4-player groups into court matches.

    Each group is ``[a, b, c, d]`` meaning ``a & b`` against ``c & d``; the
    n-th group goes on court n.
    """
    matches = []
    for court, (p1, p2, p3, p4) in enumerate(groups, start=1):
        matches.append(Match(
            id=match_id(round_number, court),
            court=court,
            team1=[p1, p2],
            team2=[p3, p4],
        ))
    return Round(round=round_number, matches=matches)


def generate_americano_round(
    players: Sequence[str],
    courts: int,
    round_number: int,
    rng: Optional[random.Random] = None,
) -> Round:
    """Random pairings: shuffle everyone, fill courts four at a time.

    Players left over once the courts are full sit this round out.
    """
    rng = rng or random.Random()
    available: List[str] = list(players)
    rng.shuffle(available)

    groups = []
    for court in range(courts_used(len(available), courts)):
        start = court * PLAYERS_PER_COURT
        groups.append(available[start:start + PLAYERS_PER_COURT])

    rnd = build_round(groups, round_number)
    logger.debug(
        "Americano round %d: %d match(es), %d player(s) resting",
        round_number, len(rnd.matches), len(available) - len(groups) * PLAYERS_PER_COURT,
    )
    return rnd
