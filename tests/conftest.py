# tests/conftest.py
import os

# in-memory store shared across sessions; must be set before directory.db is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from directory import models, schemas
from directory.db import Base, engine, SessionLocal, get_db
from directory.main import app


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def add_listing(db):
    """Insert a listing row; unspecified fields get plausible defaults."""
    def _add(id, **fields):
        data = {
            "name": f"Butcher {id}",
            "city": "Leeds",
            "region": "Yorkshire",
            "slug": f"butcher-{id}",
            "images": [],
            "is_active": True,
        }
        data.update(fields)
        obj = models.Listing(id=id, **data)
        db.add(obj)
        db.commit()
        return obj
    return _add


@pytest.fixture
def snapshot():
    """Build detached `ListingOut` snapshots for the pure selection rules."""
    def _make(id, **fields):
        data = {
            "name": f"Butcher {id}",
            "city": "Leeds",
            "region": "Yorkshire",
            "slug": f"butcher-{id}",
            "website": "https://example.co.uk",
            "images": ["https://img.example/1.jpg"],
            "rating": 4.8,
            "review_count": 25,
        }
        data.update(fields)
        return schemas.ListingOut(id=id, **data)
    return _make
