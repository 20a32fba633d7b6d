import logging
import random
from typing import List, Optional, Sequence

from americano.functions import courts_used, generate_americano_round
from mexicano.functions import generate_mexicano_round
from tournament.models import Round, TournamentType

logger = logging.getLogger(__name__)


def next_round_number(rounds: Sequence[Round]) -> int:
    return max((r.round for r in rounds), default=0) + 1


def generate_first_round(
    players: Sequence[str],
    number_of_courts: int,
    tournament_type: TournamentType,
    rng: Optional[random.Random] = None,
) -> List[Round]:
    """Round 1 is random for both formats; empty list if no court can be filled."""
    if courts_used(len(players), number_of_courts) == 0:
        logger.debug("Not enough players (%d) for a %s first round", len(players), tournament_type.value)
        return []
    return [generate_americano_round(players, number_of_courts, 1, rng)]


def generate_next_round(
    players: Sequence[str],
    number_of_courts: int,
    round_number: int,
    rounds: Sequence[Round],
    tournament_type: TournamentType,
    rng: Optional[random.Random] = None,
) -> Optional[Round]:
    """Build round ``round_number`` or return None when no court can be filled."""
    if courts_used(len(players), number_of_courts) == 0:
        logger.warning(
            "Cannot generate round %d: %d player(s) for %d court(s)",
            round_number, len(players), number_of_courts,
        )
        return None

    if tournament_type is TournamentType.MEXICANO and rounds:
        return generate_mexicano_round(players, number_of_courts, round_number, rounds)
    return generate_americano_round(players, number_of_courts, round_number, rng)
