from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
import uuid

PLAYERS_PER_COURT = 4
MIN_COURTS = 1
MAX_COURTS = 10


def generate_id():
    return str(uuid.uuid4())[:8]


def _parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp, including JavaScript's trailing ``Z``, as aware UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class TournamentType(str, Enum):
    AMERICANO = "americano"
    MEXICANO = "mexicano"


class ScoringOption(str, Enum):
    POINTS = "points"
    SETS = "sets"


class MatchStatus(str, Enum):
    UPCOMING = "upcoming"
    COMPLETED = "completed"


# inclusive (min, max) target per scoring option
TARGET_RANGES = {
    ScoringOption.POINTS: (1, 21),
    ScoringOption.SETS: (1, 6),
}

DEFAULT_TARGETS = {
    ScoringOption.POINTS: 21,
    ScoringOption.SETS: 3,
}


@dataclass
class Match:
    id: str
    court: int
    team1: List[str]  # player names
    team2: List[str]  # player names
    score1: Optional[int] = None
    score2: Optional[int] = None
    status: MatchStatus = MatchStatus.UPCOMING

    @property
    def completed(self) -> bool:
        return self.status is MatchStatus.COMPLETED

    @property
    def players(self) -> List[str]:
        return [*self.team1, *self.team2]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "court": self.court,
            "team1": list(self.team1),
            "team2": list(self.team2),
            "score1": self.score1,
            "score2": self.score2,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Match":
        status = MatchStatus(data.get("status", MatchStatus.UPCOMING.value))
        score1, score2 = data.get("score1"), data.get("score2")
        scored = score1 is not None and score2 is not None
        if (status is MatchStatus.COMPLETED) != scored:
            raise ValueError(
                f"Match {data['id']!r}: status {status.value!r} does not match scores {score1!r}-{score2!r}"
            )
        return cls(
            id=str(data["id"]),
            court=int(data["court"]),
            team1=list(data["team1"]),
            team2=list(data["team2"]),
            score1=score1,
            score2=score2,
            status=status,
        )


@dataclass
class Round:
    round: int
    matches: List[Match] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "round": self.round,
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Round":
        return cls(
            round=int(data["round"]),
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
        )


@dataclass
class StandingRow:
    name: str
    points: int = 0
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "points": self.points,
            "matchesPlayed": self.matches_played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
        }


@dataclass
class Tournament:
    id: str
    name: str
    tournament_type: TournamentType
    number_of_courts: int
    players: List[str] = field(default_factory=list)
    scoring_option: ScoringOption = ScoringOption.POINTS
    target_value: int = DEFAULT_TARGETS[ScoringOption.POINTS]
    rounds: List[Round] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_played_matches(self) -> bool:
        return any(m.completed for rnd in self.rounds for m in rnd.matches)

    @property
    def completed_match_count(self) -> int:
        return sum(1 for rnd in self.rounds for m in rnd.matches if m.completed)

    def find_match(self, match_id: str) -> Optional[Match]:
        return next(
            (m for rnd in self.rounds for m in rnd.matches if m.id == match_id),
            None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "tournamentType": self.tournament_type.value,
            "numberOfCourts": self.number_of_courts,
            "players": list(self.players),
            "scoringOption": self.scoring_option.value,
            "targetValue": self.target_value,
            "rounds": [r.to_dict() for r in self.rounds],
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Tournament":
        created_at = data.get("createdAt")
        if isinstance(created_at, str):
            created_at = _parse_timestamp(created_at)
        return cls(
            id=str(data["id"]),
            name=data["name"],
            tournament_type=TournamentType(data["tournamentType"]),
            number_of_courts=int(data["numberOfCourts"]),
            players=list(data.get("players", [])),
            scoring_option=ScoringOption(data.get("scoringOption", ScoringOption.POINTS.value)),
            target_value=int(data["targetValue"]),
            rounds=[Round.from_dict(r) for r in data.get("rounds") or []],
            created_at=created_at or datetime.now(timezone.utc),
        )
