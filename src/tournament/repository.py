from abc import ABC, abstractmethod
import copy
from typing import Dict, List, Optional

from tournament.models import Tournament


class TournamentRepository(ABC):
    """Whole-value storage of tournaments keyed by id."""

    @abstractmethod
    async def get(self, tid: str) -> Optional[Tournament]:
        raise NotImplementedError

    @abstractmethod
    async def list(self) -> List[Tournament]:
        raise NotImplementedError

    @abstractmethod
    async def upsert(self, tournament: Tournament) -> Tournament:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, tid: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def clear(self) -> None:
        raise NotImplementedError


class InMemoryTournamentRepository(TournamentRepository):
    # Copies on the way in and out so callers can't mutate stored state.

    def __init__(self):
        self._tournaments: Dict[str, Tournament] = {}

    async def get(self, tid: str) -> Optional[Tournament]:
        t = self._tournaments.get(tid)
        return copy.deepcopy(t) if t else None

    async def list(self) -> List[Tournament]:
        return [
            copy.deepcopy(t)
            for t in sorted(self._tournaments.values(), key=lambda t: t.created_at)
        ]

    async def upsert(self, tournament: Tournament) -> Tournament:
        self._tournaments[tournament.id] = copy.deepcopy(tournament)
        return tournament

    async def delete(self, tid: str) -> None:
        self._tournaments.pop(tid, None)

    async def clear(self) -> None:
        self._tournaments.clear()
