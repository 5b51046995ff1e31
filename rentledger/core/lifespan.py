import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from tenacity import retry, stop_after_attempt, wait_exponential

from .database import Database

logger = logging.getLogger("startup")


@retry(stop=stop_after_attempt(5), wait=wait_exponential(multiplier=2, min=2, max=10))
async def wait_for_database(database: Database) -> None:
    try:
        await database.ping()
    except Exception as e:
        logger.warning(f"Database not reachable yet: {e}")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Waiting for application startup...")
    database: Database = app.state.database

    await wait_for_database(database)
    logger.info("Database connected.")

    if app.state.settings.AUTO_CREATE_TABLES:
        await database.create_all()
        logger.info("Tables created.")

    try:
        yield
    finally:
        await database.dispose()
        logger.info("Database engine disposed.")
