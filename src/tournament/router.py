import logging
import random

from fastapi import APIRouter, Depends, HTTPException, Response, status

from americano.functions import courts_used
from config import TOURNAMENT_STORAGE
from database import SqlTournamentRepository, session_scope
from tournament.exceptions import InvalidScoreError, MatchCompletedError, MatchNotFoundError
from tournament.models import Tournament
from tournament.repository import InMemoryTournamentRepository, TournamentRepository
from tournament.schemas import PlayersUpdate, ScoreSubmit, TournamentCreate
from tournament.standings import compute_standings, summarize
from tournament.state import (
    append_next_round,
    create_tournament,
    ensure_first_round,
    replace_players,
    submit_score,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/tournaments', tags=['Tournaments'])

# In-memory storage, used unless TOURNAMENT_STORAGE=sql
memory_repository = InMemoryTournamentRepository()


# -- Dependencies --------------------------------------------------------------

async def get_repository():
    if TOURNAMENT_STORAGE == "sql":
        async with session_scope() as session:
            yield SqlTournamentRepository(session)
    else:
        yield memory_repository


def get_rng() -> random.Random:
    return random.Random()


# -- Helpers -------------------------------------------------------------------

async def _get_tournament(tid: str, repo: TournamentRepository) -> Tournament:
    t = await repo.get(tid)
    if not t:
        raise HTTPException(status_code=404, detail="Tournament not found")
    return t


def _tournament_view(t: Tournament) -> dict:
    return {
        "tournament": t.to_dict(),
        "standings": [row.to_dict() for row in compute_standings(t.players, t.rounds)],
        "hasPlayedMatches": t.has_played_matches,
        "enoughPlayers": courts_used(len(t.players), t.number_of_courts) > 0,
    }


# Routes

@router.get("")
async def list_tournaments(repo: TournamentRepository = Depends(get_repository)):
    return [
        {
            "id": t.id,
            "name": t.name,
            "tournamentType": t.tournament_type.value,
            "players": len(t.players),
            "rounds": len(t.rounds),
            "createdAt": t.created_at.isoformat(),
        }
        for t in await repo.list()
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create(data: TournamentCreate, repo: TournamentRepository = Depends(get_repository)):
    t = create_tournament(
        name=data.name,
        players=data.players,
        tournament_type=data.tournament_type,
        number_of_courts=data.number_of_courts,
        scoring_option=data.scoring_option,
        target_value=data.target_value,
    )
    await repo.upsert(t)
    logger.info("Created %s tournament %s with %d players", t.tournament_type.value, t.id, len(t.players))
    return t.to_dict()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_tournaments(repo: TournamentRepository = Depends(get_repository)):
    await repo.clear()
    logger.info("Cleared all tournaments")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.head("/{tid}")
async def tournament_head(tid: str, repo: TournamentRepository = Depends(get_repository)):
    await _get_tournament(tid, repo)
    return Response(status_code=200)


@router.get("/{tid}")
async def tournament_view(
    tid: str,
    repo: TournamentRepository = Depends(get_repository),
    rng: random.Random = Depends(get_rng),
):
    t = await _get_tournament(tid, repo)
    updated = ensure_first_round(t, rng)
    if updated is not t:
        await repo.upsert(updated)
    return _tournament_view(updated)


@router.delete("/{tid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tournament(tid: str, repo: TournamentRepository = Depends(get_repository)):
    await _get_tournament(tid, repo)
    await repo.delete(tid)
    logger.info("Deleted tournament %s", tid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{tid}/standings")
async def tournament_standings(tid: str, repo: TournamentRepository = Depends(get_repository)):
    t = await _get_tournament(tid, repo)
    return [row.to_dict() for row in compute_standings(t.players, t.rounds)]


@router.get("/{tid}/summary")
async def tournament_summary(tid: str, repo: TournamentRepository = Depends(get_repository)):
    t = await _get_tournament(tid, repo)
    return {
        "id": t.id,
        "name": t.name,
        "tournamentType": t.tournament_type.value,
        **summarize(t).to_dict(),
    }


@router.post("/{tid}/rounds", status_code=status.HTTP_201_CREATED)
async def next_round(
    tid: str,
    repo: TournamentRepository = Depends(get_repository),
    rng: random.Random = Depends(get_rng),
):
    t = await _get_tournament(tid, repo)
    updated, new_round = append_next_round(t, rng)
    if new_round is None:
        raise HTTPException(status_code=409, detail="Not enough players to fill a court")
    await repo.upsert(updated)
    return new_round.to_dict()


@router.post("/{tid}/matches/{match_id}/score")
async def score_match(
    tid: str,
    match_id: str,
    data: ScoreSubmit,
    repo: TournamentRepository = Depends(get_repository),
):
    t = await _get_tournament(tid, repo)
    try:
        updated = submit_score(t, match_id, data.score1)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MatchCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidScoreError as e:
        raise HTTPException(status_code=422, detail=str(e))

    match = updated.find_match(match_id)
    if match is None:
        raise HTTPException(status_code=404, detail="Match not found")
    if updated is not t:
        await repo.upsert(updated)
    return match.to_dict()


@router.put("/{tid}/players")
async def edit_players(
    tid: str,
    data: PlayersUpdate,
    repo: TournamentRepository = Depends(get_repository),
):
    t = await _get_tournament(tid, repo)
    updated = replace_players(t, data.players)
    await repo.upsert(updated)
    return _tournament_view(updated)
