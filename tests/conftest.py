"""Shared test fixtures for the back-office test suite.

Provides:
- app: Flask app configured for testing (in-memory SQLite, CSRF off)
- client: Flask test client
- db_session: clean database per test (tables created/dropped)
- seed_data: admin user, hub + garage stores, task types, a few leads
- admin_client: test client already logged in as the admin
- freeze_now: pin the business clock used for slot availability
"""

from datetime import datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from app.extensions import db as _db
from app.models.admin_user import AdminUser
from app.models.lead import Lead
from app.models.store import Store
from app.models.task_type import TaskType

IST = ZoneInfo("Asia/Kolkata")


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")
    yield app


@pytest.fixture(autouse=True)
def db_session(app):
    """Create all tables before each test, drop after."""
    with app.app_context():
        _db.create_all()
        yield _db.session
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


def login(client, username="admin", password="admin123"):
    return client.post(
        "/auth/login", json={"username": username, "password": password}
    )


@pytest.fixture
def admin_client(client, seed_data):
    """Test client with an admin session."""
    resp = login(client)
    assert resp.status_code == 200
    return client


@pytest.fixture
def freeze_now():
    """Pin "now" for slot checks. Call with a naive local datetime."""
    patcher = None

    def _freeze(moment):
        nonlocal patcher
        if patcher is not None:
            patcher.stop()
        patcher = patch(
            "app.services.slots.current_time",
            return_value=moment.replace(tzinfo=IST),
        )
        patcher.start()
        return moment.replace(tzinfo=IST)

    yield _freeze
    if patcher is not None:
        patcher.stop()


@pytest.fixture
def seed_data(app, db_session):
    """Seed an admin, one hub, one garage, task types and three leads.

    Returns a dict of plain ids so tests don't depend on session state.
    """
    # --- Admin user ---
    admin = AdminUser(
        username="admin",
        password_hash=generate_password_hash("admin123"),
        role="admin",
    )
    _db.session.add(admin)

    # --- Stores ---
    hub = Store(name="AutoCare24 - MP Nagar", type="hub", city="Bhopal")
    garage = Store(name="AutoCare24 - Kolar Garage", type="garage", city="Bhopal")
    _db.session.add_all([hub, garage])

    # --- Task types ---
    wash = TaskType(
        name="Car Wash", slot_type="per_hour", count=4,
        allowed_in_hub=True, allowed_in_garage=False,
    )
    service = TaskType(
        name="General Service", slot_type="max_per_day", count=10,
        allowed_in_hub=False, allowed_in_garage=True,
    )
    oil = TaskType(
        name="Oil Change", slot_type="per_hour", count=2,
        allowed_in_hub=True, allowed_in_garage=True,
    )
    _db.session.add_all([wash, service, oil])

    # --- Leads ---
    fresh = Lead(
        name="Ravi Sharma", phone="9876543210", city="Bhopal", vehicle="Car",
        issue="Car Washing", date="2026-10-20", time="10:00 AM - 11:00 AM",
        source="Website", remark="", status="new",
    )
    contacted = Lead(
        name="Anita Verma", phone="9123456780", city="Bhopal", vehicle="Bike",
        issue="Battery Problem", date="2026-10-21", time="02:00 PM - 03:00 PM",
        source="Website", remark="Follow up", status="contacted",
    )
    lost = Lead(
        name="Imran Khan", phone="9988776655", city="Bhopal", vehicle="Auto",
        issue="General Service", date="2026-10-22", time="09:00 AM - 10:00 AM",
        source="Website", remark="Switched provider", status="lost",
    )
    _db.session.add_all([fresh, contacted, lost])
    _db.session.commit()

    return {
        "admin_id": admin.id,
        "hub_id": hub.id,
        "garage_id": garage.id,
        "wash_task_id": wash.id,
        "service_task_id": service.id,
        "oil_task_id": oil.id,
        "new_lead_id": fresh.id,
        "contacted_lead_id": contacted.id,
        "lost_lead_id": lost.id,
    }
