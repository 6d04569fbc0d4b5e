from __future__ import annotations

import os

# Keep the module-level engine off the filesystem.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEFAULT_LANGUAGE", "en-US")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sevasetu.db import Base
from sevasetu.intake.agent import IntakeAgent
from sevasetu.services.storage import ProfileStore
from sevasetu.session.context import SessionContext
from sevasetu.session.dispatcher import ConversationDispatcher

from fakes import FakeAnalyzer, FakeLLMClient, FakeSpeech


@pytest.fixture
def store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield ProfileStore(sessionmaker(bind=engine, autoflush=False, future=True))
    engine.dispose()


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
def analyzer():
    return FakeAnalyzer()


@pytest.fixture
def dispatcher(analyzer, speech, store):
    return ConversationDispatcher(
        agent=IntakeAgent(),
        analyzer=analyzer,
        speech=speech,
        store=store,
    )


@pytest.fixture
def ctx():
    return SessionContext(session_id="s-1", device_id="device-1", language="en-US")


@pytest.fixture
def llm():
    return FakeLLMClient()


@pytest.fixture
def client(llm, store):
    from sevasetu.main import app
    from sevasetu.services.session_service import SessionService, get_session_service

    service = SessionService(llm_client=llm, store=store)
    app.dependency_overrides[get_session_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
