import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List, Optional
from uuid import uuid4

from asyncpg import Connection
from sqlalchemy import JSON, Column, DateTime, Integer, String, delete, func, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from config import DATABASE_URL
from tournament.models import Round, ScoringOption, Tournament, TournamentType
from tournament.repository import TournamentRepository

logger = logging.getLogger(__name__)


class Base(DeclarativeBase): pass


class FixedConnection(Connection):
    def _get_unique_id(self, prefix: str) -> str:
        return f'__asyncpg_{prefix}_{uuid4()}__'


def _connect_args(url: str) -> dict:
    if not url.startswith("postgresql+asyncpg"):
        return {}
    return {
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
        "connection_class": FixedConnection,
    }


@lru_cache(maxsize=None)
def get_engine(url: str = DATABASE_URL):
    return create_async_engine(
        url,
        echo=False,
        future=True,
        connect_args=_connect_args(url),
    )


# session factory
@lru_cache(maxsize=None)
def get_sessionmaker(url: str = DATABASE_URL) -> async_sessionmaker:
    return async_sessionmaker(
        bind=get_engine(url),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


@asynccontextmanager
async def session_scope(url: str = DATABASE_URL):
    async with get_sessionmaker(url)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_tables(url: str = DATABASE_URL):
    async with get_engine(url).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


#ORM

JSON_VALUE = JSON().with_variant(JSONB(), "postgresql")


class TournamentORM(Base):
    __tablename__ = "tournaments"

    id             = Column(String, primary_key=True)
    mode           = Column(String, nullable=False, default="americano")  # americano | mexicano
    name           = Column(String, nullable=False)
    courts         = Column(Integer, nullable=False)
    players        = Column(JSON_VALUE, nullable=False, default=list)  # list[str] -- player names
    scoring_option = Column(String, nullable=False, default="points")  # points | sets
    target_value   = Column(Integer, nullable=False)
    rounds         = Column(JSON_VALUE, nullable=False, default=list)  # list[Round.to_dict()]
    created_at     = Column(DateTime(timezone=True), server_default=func.now())


def _orm_to_tournament(t_row: TournamentORM) -> Tournament:
    """Convert SQLAlchemy ORM row into the Tournament dataclass."""
    kwargs = {}
    if t_row.created_at is not None:
        kwargs["created_at"] = t_row.created_at
    return Tournament(
        id=t_row.id,
        name=t_row.name,
        tournament_type=TournamentType(t_row.mode),
        number_of_courts=t_row.courts,
        players=list(t_row.players or []),
        scoring_option=ScoringOption(t_row.scoring_option),
        target_value=t_row.target_value,
        rounds=[Round.from_dict(r) for r in t_row.rounds or []],
        **kwargs,
    )


def _apply_tournament(t_row: TournamentORM, t: Tournament):
    t_row.mode = t.tournament_type.value
    t_row.name = t.name
    t_row.courts = t.number_of_courts
    t_row.players = list(t.players)
    t_row.scoring_option = t.scoring_option.value
    t_row.target_value = t.target_value
    t_row.rounds = [r.to_dict() for r in t.rounds]
    t_row.created_at = t.created_at


class SqlTournamentRepository(TournamentRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, tid: str) -> Optional[Tournament]:
        row = await self.session.get(TournamentORM, tid)
        return _orm_to_tournament(row) if row else None

    async def list(self) -> List[Tournament]:
        result = await self.session.execute(
            select(TournamentORM).order_by(TournamentORM.created_at)
        )
        return [_orm_to_tournament(row) for row in result.scalars()]

    async def upsert(self, tournament: Tournament) -> Tournament:
        row = await self.session.get(TournamentORM, tournament.id)
        if row is None:
            row = TournamentORM(id=tournament.id)
            self.session.add(row)
        _apply_tournament(row, tournament)
        await self.session.flush()
        return tournament

    async def delete(self, tid: str) -> None:
        row = await self.session.get(TournamentORM, tid)
        if row:
            await self.session.delete(row)
            await self.session.flush()

    async def clear(self) -> None:
        result = await self.session.execute(delete(TournamentORM))
        logger.info("Cleared %d tournament(s)", result.rowcount)
