"""
Pytest Configuration for Backend Tests

Points the app at a throwaway SQLite database before anything from the app
is imported, then rebuilds the schema for every test.
"""
import os
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="payments-admin-tests-"))
os.environ.update({
    "DATABASE_URL": f"sqlite:///{_TMP / 'test.db'}",
    "LOG_DIR": str(_TMP / "logs"),
    "JWT_SECRET": "t" * 64,
    "LOGIN_RATE_LIMIT_REQUESTS": "10",
    "LOGIN_RATE_LIMIT_WINDOW_SECONDS": "60",
    "INR_PER_USD": "75",
})
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.payment import PaymentRecord  # noqa: E402
from app.services.auth_service import AuthService  # noqa: E402
from app.utils.rate_limiter import reset_rate_limits  # noqa: E402

ADMIN_EMAIL = "admin@bouncecure.io"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def _fresh_state():
    """Empty schema and rate-limit counters for every test."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    reset_rate_limits()
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin(db):
    return AuthService.create_admin(db, ADMIN_EMAIL, ADMIN_PASSWORD, "Ops Admin")


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_headers(client, admin):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def payments(db):
    """Four payments across INR, USD and EUR with mixed-case statuses."""
    rows = [
        PaymentRecord(
            user_id=11, name="Asha Verma", email="asha@example.com",
            amount=750, currency="INR", plan_name="Pro Monthly", plan_type="monthly",
            plan_price=900, discount=10, status="Succeeded", provider="razorpay",
            transaction_id="pay_A1", custom_invoice_id="INV-001",
            email_send_credits=5000, sms_credits=200, whatsapp_credits=100,
            email_verification_credits=1000,
        ),
        PaymentRecord(
            user_id=12, name="John Carter", email="john@acme.io",
            amount=49.99, currency="USD", plan_name="Starter", plan_type="monthly",
            plan_price=49.99, discount=0, status="pending", provider="stripe",
            transaction_id="pi_B2", custom_invoice_id="INV-002",
        ),
        PaymentRecord(
            user_id=305, name="Mei Lin", email="mei@example.org",
            amount=1500, currency="INR", plan_name="Enterprise", plan_type="yearly",
            plan_price=1500, discount=0, status="FAILED", provider="razorpay",
            transaction_id="pay_C3", custom_invoice_id="INV-003",
        ),
        PaymentRecord(
            user_id=13, name="Omar Haddad", email="omar@haddad.net",
            amount=20, currency="EUR", plan_name="Starter", plan_type="one-time",
            plan_price=20, discount=0, status="refunded", provider="stripe",
            transaction_id="pi_D4", custom_invoice_id="INV-004",
        ),
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows
