import os

# point the app at a throwaway database before anything imports settings
os.environ.setdefault("SQLITE_PATH", ":memory:")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import Base, get_db
from main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def student_client(client):
    """Client with a registered, logged-in student"""
    resp = client.post("/v1/auth/register", json={
        "name": "Ananya Sen",
        "registration_number": "231000110001",
        "roll_number": "10000123001",
    })
    assert resp.status_code == 201
    return client


def subjects(*rows):
    """(grade, credits) pairs -> request payload subjects"""
    return [
        {"code": f"PC{i}", "name": f"Subject {i}", "credits": credits, "grade": grade}
        for i, (grade, credits) in enumerate(rows, start=1)
    ]
