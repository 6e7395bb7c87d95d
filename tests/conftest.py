"""
Shared pytest fixtures.

The application is configured against a throwaway SQLite database before
``medicall`` is imported. Every test gets freshly created tables.

Provides:
- an httpx client bound to the ASGI app
- staff accounts by role, with ready-made Authorization headers
- request payload builders for patients and doctors
"""
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="medicall-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/medicall.db"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["DEBUG"] = "false"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["BLAND_AI_API_KEY"] = "test-bland-key"
os.environ["ELEVENLABS_API_KEY"] = "test-elevenlabs-key"

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from medicall.auth.auth_service import create_access_token, hash_password
from medicall.common.database.database import async_session, engine
from medicall.main import app
from medicall.models.models import Base, User, UserRole


# ============================================================================
# Database and client
# ============================================================================

@pytest.fixture(autouse=True)
async def tables():
    """Create every table before the test and drop them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session():
    async with async_session() as session:
        yield session


@pytest.fixture
async def client():
    """Unauthenticated client talking to the ASGI app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Accounts
# ============================================================================

@pytest.fixture
def make_user(db_session):
    """Insert a user directly and return it."""
    async def _make_user(
        email: str,
        role: UserRole = UserRole.AGENT,
        password: str = "secret123",
        name: str = "Test User",
        is_active: bool = True,
    ) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
            department="Call Center",
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        return user
    return _make_user


def auth_headers(user: User) -> dict:
    token = create_access_token(
        {"sub": str(user.id), "role": user.role.value},
        expires_delta=timedelta(minutes=30),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin(make_user):
    return await make_user("admin@medicall.com", UserRole.ADMIN, name="System Administrator")


@pytest.fixture
async def agent(make_user):
    return await make_user("agent@medicall.com", UserRole.AGENT, name="Call Center Agent")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def agent_headers(agent):
    return auth_headers(agent)


# ============================================================================
# Payload builders
# ============================================================================

@pytest.fixture
def patient_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "name": "John Carter",
            "email": "john.carter@hospital.org",
            "mobileNumber": "5551234567",
            "medications": [
                {"name": "Metformin", "dosage": "500mg", "times": ["08:00", "20:00"]},
            ],
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def doctor_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "name": "Sarah Lee",
            "email": "sarah.lee@hospital.org",
            "phoneNumber": "5559876543",
            "specialty": "Cardiology",
            "department": "Cardiology",
            "licenseNumber": "LIC-1001",
            "qualifications": ["MD", "FACC"],
            "consultationFee": 150,
            "experience": 10,
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def create_patient(client, agent_headers, patient_payload):
    """POST a patient and return the response body's patient."""
    async def _create(**overrides) -> dict:
        response = await client.post("/patients", json=patient_payload(**overrides), headers=agent_headers)
        assert response.status_code == 201, response.text
        return response.json()["patient"]
    return _create


@pytest.fixture
def create_doctor(client, agent_headers, doctor_payload):
    async def _create(**overrides) -> dict:
        response = await client.post("/doctors", json=doctor_payload(**overrides), headers=agent_headers)
        assert response.status_code == 201, response.text
        return response.json()["doctor"]
    return _create


@pytest.fixture
def headers_for():
    """Authorization headers for any user."""
    return auth_headers
