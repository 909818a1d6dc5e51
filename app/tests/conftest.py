import os

# Configure before the app modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("GROQ_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.logger import setup_logger

# Console only; attached before app.main so its file handler is never added
setup_logger(log_to_file=False)

from app.api.deps import get_llm_service
from app.core.database import build_engine, get_db, init_db
from app.main import app
from app.services.pipeline.llm_service import LLMService
from app.tests.stubs import StubChatModel

USER_HEADERS = {"X-User-Id": "user_123", "X-User-Email": "candidate@example.com"}


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def chat_model():
    return StubChatModel(reply='[{"question": "Explain REST", "answer": "An architectural style."}]')


@pytest.fixture
def client(session_factory, chat_model):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_service] = lambda: LLMService(chat_model)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return dict(USER_HEADERS)
