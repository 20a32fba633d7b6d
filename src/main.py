import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import LOG_LEVEL, TOURNAMENT_STORAGE
from database import create_tables
from tournament.router import router as tournament_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if TOURNAMENT_STORAGE == "sql":
        await create_tables()
        logger.info("Tournament tables ready")
    logger.info("Using %s tournament storage", TOURNAMENT_STORAGE)
    yield


app = FastAPI(title="Padel Americano & Mexicano", lifespan=lifespan)
app.include_router(tournament_router)


@app.get("/")
async def index():
    return {"message": "Padel Americano & Mexicano API"}
