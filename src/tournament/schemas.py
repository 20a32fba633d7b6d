from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tournament.models import (
    DEFAULT_TARGETS,
    MAX_COURTS,
    MIN_COURTS,
    TARGET_RANGES,
    ScoringOption,
    TournamentType,
)


def _clean_names(names: List[str]) -> List[str]:
    return [n.strip() for n in names if n and n.strip()]


class TournamentCreate(BaseModel):
    name: str
    tournament_type: TournamentType = Field(TournamentType.AMERICANO, alias="tournamentType")
    number_of_courts: int = Field(1, alias="numberOfCourts", ge=MIN_COURTS, le=MAX_COURTS)
    players: List[str]
    scoring_option: ScoringOption = Field(ScoringOption.POINTS, alias="scoringOption")
    target_value: Optional[int] = Field(None, alias="targetValue")

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a tournament name")
        return v

    @field_validator("players")
    @classmethod
    def at_least_two_players(cls, v: List[str]) -> List[str]:
        names = _clean_names(v)
        if len(names) < 2:
            raise ValueError("Please add at least 2 players")
        if len(set(names)) != len(names):
            raise ValueError("Player names must be unique")
        return names

    @model_validator(mode="after")
    def target_in_range(self):
        if self.target_value is None:
            self.target_value = DEFAULT_TARGETS[self.scoring_option]
        low, high = TARGET_RANGES[self.scoring_option]
        if not low <= self.target_value <= high:
            raise ValueError(
                f"targetValue for {self.scoring_option.value} must be between {low} and {high}"
            )
        return self


class PlayersUpdate(BaseModel):
    players: List[str]

    @field_validator("players")
    @classmethod
    def at_least_two_players(cls, v: List[str]) -> List[str]:
        names = _clean_names(v)
        if len(names) < 2:
            raise ValueError("At least 2 players are required")
        if len(set(names)) != len(names):
            raise ValueError("Player names must be unique")
        return names


class ScoreSubmit(BaseModel):
    # team 1's score; team 2 gets targetValue - score1
    score1: Optional[int] = None
