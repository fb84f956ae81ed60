"""
Test Configuration

Pytest configuration and shared fixtures for all tests.
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth import create_access_token
from core.database import Base
from services.personalization import CorrectionStore, PersonalizationService
from services.transcripts import TranscriptService, TranscriptStore

# Use in-memory SQLite for testing to avoid messing with real DB
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Get test database session."""
    async with session_factory() as session:
        yield session


# =============================================================================
# Services
# =============================================================================

@pytest.fixture
def correction_store():
    return CorrectionStore()


@pytest.fixture
def transcript_store():
    return TranscriptStore()


@pytest.fixture
def personalization(correction_store, transcript_store):
    return PersonalizationService(
        correction_store,
        transcript_store,
        enabled=True,
        min_count=2,
    )


@pytest.fixture
def transcript_service(transcript_store, personalization):
    return TranscriptService(transcript_store, personalization)


# =============================================================================
# API Client
# =============================================================================

@pytest_asyncio.fixture
async def client(
    session_factory,
    correction_store,
    personalization,
    transcript_service,
) -> AsyncGenerator[AsyncClient, None]:
    """Get async test client bound to the in-memory database."""
    from main import app
    from core.database import get_db
    from core.dependencies import (
        get_correction_store,
        get_personalization_service,
        get_transcript_service,
    )
    
    async def override_get_db():
        async with session_factory() as session:
            yield session
    
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_correction_store] = lambda: correction_store
    app.dependency_overrides[get_personalization_service] = lambda: personalization
    app.dependency_overrides[get_transcript_service] = lambda: transcript_service
    
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides.clear()


def make_auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def auth_headers():
    """Bearer headers for the default test user."""
    return make_auth_headers("user-1")


@pytest.fixture
def other_auth_headers():
    """Bearer headers for a second, unrelated user."""
    return make_auth_headers("user-2")
