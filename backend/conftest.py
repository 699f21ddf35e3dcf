"""Shared fixtures: a throwaway aiosqlite database and an API client bound to it."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import models  # noqa: F401  (registers tables)
from database import Base, get_db


def run(coro):
    return asyncio.run(coro)


async def _create_and_seed(url: str, rows: list):
    engine = create_async_engine(url, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        session.add_all(rows)
        await session.commit()
    await engine.dispose()


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'floorplan_test.db'}"


@pytest.fixture
def seed(db_url):
    """Call ``seed([...rows])`` to create the schema and insert ORM rows."""
    def _seed(rows):
        run(_create_and_seed(db_url, rows))
    return _seed


@pytest.fixture
def session_factory(db_url):
    engine = create_async_engine(db_url, poolclass=NullPool)
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def client(session_factory):
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: the lifespan hook (init_db on the real DB) stays off
    yield TestClient(app)
    app.dependency_overrides.clear()
