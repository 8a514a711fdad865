from pathlib import Path
import os
import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

# Point the app at a throwaway database before any test module imports it.
TEST_DB = Path(__file__).resolve().parents[1] / "test_app.db"
if TEST_DB.exists():
    TEST_DB.unlink()
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"


@pytest.fixture(scope="session", autouse=True)
def reset_db():
    """Remove the test SQLite database once the session finishes."""
    yield
    if TEST_DB.exists():
        try:
            TEST_DB.unlink()
        except OSError:
            pass


@pytest.fixture
def session():
    """A session on a private in-memory database with all tables created."""
    from portfolio_api import models  # noqa: F401
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as s:
        yield s
