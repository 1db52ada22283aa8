"""Shared test fixtures."""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from showcompliance.core.database import get_session
from showcompliance.documents.storage import LocalDocumentStorage
from showcompliance.main import app
from showcompliance.models import Show, ShowJudge, ShowStatus, ShowType
from showcompliance.routes.uploads import get_document_storage


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="storage")
def storage_fixture(tmp_path) -> LocalDocumentStorage:
    """Document storage writing to a temporary directory."""
    return LocalDocumentStorage(root=tmp_path, base_url="/files")


@pytest.fixture(name="client")
def client_fixture(session: Session, storage: LocalDocumentStorage):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_document_storage] = lambda: storage
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="open_show")
def open_show_fixture(session: Session) -> Show:
    """An open show a few months away with no judges assigned yet."""
    show = Show(
        name="Riverside Open Show",
        start_date=date.today() + timedelta(days=120),
        show_type=ShowType.open,
    )
    session.add(show)
    session.commit()
    session.refresh(show)
    return show


@pytest.fixture(name="championship_show")
def championship_show_fixture(session: Session) -> Show:
    """A championship show on 2026-06-01 with two judges."""
    show = Show(
        name="County Championship Show",
        start_date=date(2026, 6, 1),
        show_type=ShowType.championship,
        status=ShowStatus.published,
        venue_name="County Showground",
    )
    session.add(show)
    session.flush()

    for name in ["Alice", "Bob"]:
        session.add(ShowJudge(show_id=show.id, name=name))

    session.commit()
    session.refresh(show)
    return show
