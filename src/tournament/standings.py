from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from tournament.models import Match, Round, StandingRow, Tournament

PODIUM_SIZE = 3


def _credit(row: StandingRow, score_for: int, score_against: int):
    row.matches_played += 1
    row.points += score_for
    if score_for > score_against:
        row.wins += 1
    elif score_for < score_against:
        row.losses += 1
    else:
        row.draws += 1


def compute_standings(players: Iterable[str], rounds: Iterable[Round]) -> List[StandingRow]:
    """Fold every completed match into a ranked table of the current players.

    Rows start at zero for each player in input order. Names that no longer
    appear in ``players`` are skipped, so removed players stop accruing while
    their past matches stay in place. Duplicate names share one row.

    Ranking is points descending, then wins descending, then losses
    ascending; anything still tied keeps its input order.
    """
    rows: Dict[str, StandingRow] = {}
    for name in players:
        rows.setdefault(name, StandingRow(name=name))

    for rnd in rounds:
        for match in rnd.matches:
            if not match.completed:
                continue
            _apply_match(rows, match)

    return sorted(rows.values(), key=lambda r: (-r.points, -r.wins, r.losses))


def _apply_match(rows: Dict[str, StandingRow], match: Match):
    for name in match.team1:
        if name in rows:
            _credit(rows[name], match.score1, match.score2)
    for name in match.team2:
        if name in rows:
            _credit(rows[name], match.score2, match.score1)


def ranked_names(players: Iterable[str], rounds: Iterable[Round]) -> List[str]:
    return [row.name for row in compute_standings(players, rounds)]


@dataclass
class TournamentSummary:
    total_rounds: int
    completed_matches: int
    standings: List[StandingRow] = field(default_factory=list)

    @property
    def podium(self) -> List[StandingRow]:
        return self.standings[:PODIUM_SIZE]

    def to_dict(self) -> dict:
        return {
            "totalRounds": self.total_rounds,
            "completedMatches": self.completed_matches,
            "podium": [row.to_dict() for row in self.podium],
            "standings": [row.to_dict() for row in self.standings],
        }


def summarize(tournament: Tournament) -> TournamentSummary:
    return TournamentSummary(
        total_rounds=len(tournament.rounds),
        completed_matches=tournament.completed_match_count,
        standings=compute_standings(tournament.players, tournament.rounds),
    )
