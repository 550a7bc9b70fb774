import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_ACTION_TOKEN"] = "rahasia-admin"

from datetime import datetime

import pytest
import pytz
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pramuka.database import Base, get_db
from pramuka.main import app
from pramuka.models import LeaveRequest, Profile
from pramuka.utils.auth import create_access_token
from pramuka.utils.datetime_utils import get_clock

JAKARTA = pytz.FixedOffset(7 * 60)

# Friday 3 May 2024
FRIDAY_AFTERNOON = JAKARTA.localize(datetime(2024, 5, 3, 16, 0)).astimezone(pytz.UTC)
FRIDAY_MORNING = JAKARTA.localize(datetime(2024, 5, 3, 10, 0)).astimezone(pytz.UTC)
THURSDAY_EVENING = JAKARTA.localize(datetime(2024, 5, 2, 20, 0)).astimezone(pytz.UTC)


def jakarta(year, month, day, hour=0, minute=0, second=0, microsecond=0):
    """UTC instant for a Jakarta wall-clock time"""
    local = JAKARTA.localize(datetime(year, month, day, hour, minute, second, microsecond))
    return local.astimezone(pytz.UTC)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def now():
    """Mutable holder for the clock seen by the API"""
    return {"value": FRIDAY_AFTERNOON}


@pytest.fixture
def client(db, now):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: now["value"])
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_izin(db):
    def _make_izin(nama="Budi", absen=1, kelas="X1", alasan="Sakit", status="pending",
                   created_at=None, archive_date=None, archived_at=None):
        record = LeaveRequest(
            nama=nama,
            absen=absen,
            kelas=kelas,
            alasan=alasan,
            status=status,
            is_archived=archive_date is not None,
            archive_date=archive_date,
            archived_at=archived_at or (FRIDAY_AFTERNOON if archive_date else None),
            created_at=created_at or FRIDAY_MORNING,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    return _make_izin


@pytest.fixture
def make_profile(db):
    def _make_profile(user_id="user-1", role="anggota", full_name="Siti", email="siti@example.com"):
        profile = Profile(id=user_id, role=role, full_name=full_name, email=email)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make_profile


@pytest.fixture
def auth_headers():
    def _auth_headers(user_id):
        token = create_access_token({"sub": user_id})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
