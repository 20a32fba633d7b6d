import logging
from typing import Sequence

from americano.functions import build_round, courts_used
from tournament.models import PLAYERS_PER_COURT, Round
from tournament.standings import ranked_names

logger = logging.getLogger(__name__)


def generate_mexicano_round(
    players: Sequence[str],
    courts: int,
    round_number: int,
    rounds: Sequence[Round],
) -> Round:
    """
    Generate a Mexicano round from the current standings.
    Ranks 1-4 play on court 1, 5-8 on court 2 and so on;
    inside each group rank 1 & 4 partner together vs rank 2 & 3.
    Players ranked below the last full group sit out.
    """
    ranked = ranked_names(players, rounds)

    groups = []
    for court in range(courts_used(len(ranked), courts)):
        start = court * PLAYERS_PER_COURT
        r1, r2, r3, r4 = ranked[start:start + PLAYERS_PER_COURT]
        groups.append([r1, r4, r2, r3])

    rnd = build_round(groups, round_number)
    logger.debug("Mexicano round %d: %d match(es)", round_number, len(rnd.matches))
    return rnd
