"""Pytest configuration and shared fixtures.

This module provides fixtures and configuration used across all tests.
"""

import os
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

# Set required environment variables for tests BEFORE importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")

from plant_survey.models.database import Base, init_models
from plant_survey.schemas.answer import AnswerType, SelectedAddress, SurveyAnswer


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine backed by a temporary SQLite file.

    Yields:
        AsyncEngine: SQLAlchemy engine for testing

    Note:
        A file database (rather than :memory:) lets every session opened
        by the repositories see the same tables. Created fresh per test.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,  # Set to True for SQL debugging
    )

    # Enable foreign key support for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await init_models(engine)

    yield engine

    # Drop all tables after test
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine.

    Args:
        db_engine: Test database engine fixture

    Returns:
        async_sessionmaker: Factory handed to the repositories under test
    """
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


def option_answer(question_id: str, option: str) -> SurveyAnswer:
    """Build an option answer."""
    return SurveyAnswer(question_id=question_id, type=AnswerType.OPTION, selected_option=option)


def address_answer(question_id: str, state: str, city: str) -> SurveyAnswer:
    """Build an address answer."""
    return SurveyAnswer(
        question_id=question_id,
        type=AnswerType.ADDRESS,
        selected_address=SelectedAddress(state=state, city=city),
    )


@pytest.fixture
def sample_answers() -> List[SurveyAnswer]:
    """Provide a complete five-answer response asking for aesthetic work.

    Returns:
        list: Answers in submission order (space type, area size,
        challenge, tech preference, location)
    """
    return [
        option_answer("q_space", "Balcony"),
        option_answer("q_area", "Small"),
        option_answer("q_goal", "Aesthetic improvement"),
        option_answer("q_tech", "Smart irrigation"),
        address_answer("q_location", "SP", "São Paulo"),
    ]


@pytest.fixture
def durability_answers() -> List[SurveyAnswer]:
    """Provide a response whose third answer does not ask for aesthetic work."""
    return [
        option_answer("q_space", "Garden"),
        option_answer("q_area", "Large"),
        option_answer("q_goal", "Durability"),
        option_answer("q_tech", "None"),
        address_answer("q_location", "RJ", "Rio de Janeiro"),
    ]
