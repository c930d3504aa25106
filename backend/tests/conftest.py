"""
Pytest configuration and fixtures.

Tests run against a throwaway SQLite file and the in-process cache backend.
The environment is set before any cms module is imported so the engine and
settings pick it up.
"""

import os
import tempfile

_TEST_DB_DIR = tempfile.mkdtemp(prefix="cms-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["SEED_REFERENCE_DATA"] = "false"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import cms.models  # noqa: E402,F401
from cms.cache import get_cache  # noqa: E402
from cms.database import Base, SessionLocal, engine  # noqa: E402
from cms.main import app  # noqa: E402
from cms.models.category import Category  # noqa: E402
from cms.models.tag import Tag  # noqa: E402
from cms.schemas.program import ProgramCreate  # noqa: E402
from cms.services.program_service import ProgramService  # noqa: E402
from tests.factories import program_fields  # noqa: E402


@pytest.fixture(autouse=True)
def setup_database():
    """Fresh schema and empty cache for every test."""
    Base.metadata.create_all(bind=engine)
    get_cache().backend.clear()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def program_service(db_session):
    return ProgramService(db_session)


@pytest.fixture
def make_category(db_session):
    """Create and commit a category, returning its ID."""

    def _make(name: str, color: str = "#007bff"):
        category = Category(name=name, description=f"{name} programs", color=color)
        db_session.add(category)
        db_session.commit()
        return category.id

    return _make


@pytest.fixture
def make_tag(db_session):
    """Create and commit a tag, returning its ID."""

    def _make(name: str):
        tag = Tag(name=name)
        db_session.add(tag)
        db_session.commit()
        return tag.id

    return _make


@pytest.fixture
def create_program(program_service):
    """Create a program through the write workflow."""

    def _create(actor: str = "tester", **overrides):
        return program_service.create(ProgramCreate(**program_fields(**overrides)), actor)

    return _create
