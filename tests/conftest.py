"""Shared fixtures: an isolated in-memory database per test and an API client bound to it."""

from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db, init_db
from app.main import app
from app.utils.date_utils import add_months


TARGET_DATE = date(2025, 6, 15)


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    """API client whose requests all use the test database session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_classroom(id, name, min_age, max_age, capacity, ratio="1:4", color="bg-blue-100"):
    """Plain classroom record for forecaster tests."""
    return SimpleNamespace(
        id=id,
        name=name,
        color=color,
        ratio=ratio,
        min_age_months=min_age,
        max_age_months=max_age,
        capacity=capacity,
    )


def make_child(id, months_old, target=TARGET_DATE, name=None):
    """Child born exactly months_old months before target."""
    return SimpleNamespace(
        id=id,
        name=name or f"Child {id}",
        birth_date=add_months(target, -months_old),
        enrollment_date=target,
    )


@pytest.fixture
def classrooms():
    """Contiguous bands from birth to four years."""
    return [
        make_classroom(1, "Infants", 0, 12, 8, "1:4"),
        make_classroom(2, "Wobblers", 12, 24, 10, "1:5"),
        make_classroom(3, "Toddlers", 24, 36, 14, "1:7"),
        make_classroom(4, "Preschool", 36, 48, 20, "1:10"),
    ]
