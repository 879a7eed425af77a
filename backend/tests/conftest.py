# Ensure backend is at sys.path[0] when pytest runs (from repo root or from backend dir)
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

_backend = str(Path(__file__).resolve().parent.parent)
if sys.path[0:1] != [_backend]:
    sys.path.insert(0, _backend)

os.environ.setdefault("SCHEDULER_ENABLED", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dealfinder.db.base import Base
from dealfinder.models import Provider
from dealfinder.services.provider_service import seed_providers


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def providers(db) -> dict[str, Provider]:
    """The four seeded marketplaces by name (ids 1..4 in priority order)."""
    seed_providers(db)
    return {p.name: p for p in db.query(Provider).order_by(Provider.id).all()}


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)
