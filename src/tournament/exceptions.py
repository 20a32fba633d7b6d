"""Errors raised by the tournament core.

Route handlers translate these into HTTP responses; the core itself never
returns partially updated state.
"""


class TournamentError(Exception):
    """Base class for tournament state errors."""


class MatchNotFoundError(TournamentError):
    def __init__(self, match_id: str):
        self.match_id = match_id
        super().__init__(f"Match {match_id!r} not found")


class MatchCompletedError(TournamentError):
    """Raised when a score is submitted for a match that is already final."""

    def __init__(self, match_id: str):
        self.match_id = match_id
        super().__init__(f"Match {match_id!r} is already completed")


class InvalidScoreError(TournamentError):
    def __init__(self, score: int, target_value: int):
        self.score = score
        self.target_value = target_value
        super().__init__(
            f"Score {score} is outside the allowed range 0..{target_value}"
        )
