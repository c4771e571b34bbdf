"""
Shared fixtures: SQLite test database, API client and a recording email service
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings, get_settings
from app.core.db import Base, get_db
from app.models import FamilyMember, Guest, Registration
from app.services.email_service import BrevoEmailService, get_email_service
from main import app

ADMIN_PASSWORD = "test-secret"

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_rsvp.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingEmailService(BrevoEmailService):
    """Collects emails instead of calling the provider"""

    def __init__(self, config: Settings, fail: bool = False):
        super().__init__(config=config)
        self.sent = []
        self.fail = fail

    async def send_email(self, to, subject, html_content):
        self.sent.append({"to": to, "subject": subject, "html": html_content})
        if self.fail:
            raise RuntimeError("provider unavailable")
        return True


@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_settings():
    return Settings(
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        BREVO_API_KEY="test-key",
        COUPLE_NAMES="Giulia e Marco",
        COUPLE_SIGNATURE="Marco e Giulia",
    )


@pytest.fixture
def email_service(test_settings):
    return RecordingEmailService(test_settings)


@pytest.fixture
def client(db_session, test_settings, email_service):
    """API client bound to the test session, settings and email service"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_email_service] = lambda: email_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def seed_guest(
    db,
    name,
    email=None,
    attending=None,
    dietary_preference="nessuna",
    dietary_notes=None,
    plus_one_name=None,
    plus_one_dietary_preference=None,
    family=(),
):
    """Insert a guest, optionally with a registration and family members"""
    guest = Guest(name=name, email=email)
    if attending is not None:
        guest.registration = Registration(
            attending=attending,
            dietary_preference=dietary_preference,
            dietary_notes=dietary_notes,
            plus_one_name=plus_one_name,
            plus_one_dietary_preference=plus_one_dietary_preference,
            family_members=[
                FamilyMember(name=member_name, dietary_preference=member_pref)
                for member_name, member_pref in family
            ],
        )
    db.add(guest)
    db.commit()
    db.refresh(guest)
    return guest
