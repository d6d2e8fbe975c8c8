import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["ENVIRONMENT"] = "test"
os.environ["GEMINI_API_KEY"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

import io
import itertools
from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hostel_manager.api import deps
from hostel_manager.db.init_db import create_tables, seed_admin
from hostel_manager.db.session import get_db
from hostel_manager.main import app
from hostel_manager.schemas.resident import MealPlan, ResidentWrite
from hostel_manager.services.file import LogoService
from hostel_manager.services.integrations import TextGenerationService
from hostel_manager.services.occupancy import OccupancyService

ADMIN_EMAIL = "admin@hostel.local"
ADMIN_PASSWORD = "admin-pass-123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def occupancy(db_session):
    return OccupancyService(db_session)


@pytest.fixture
def room_with_cots(occupancy):
    """Room 101 with cots A and B."""
    room = occupancy.add_room("Room 101").unwrap()
    cots = [occupancy.add_cot(name, room.id).unwrap() for name in ("A", "B")]
    return room, cots


@pytest.fixture
def resident_data():
    counter = itertools.count(1)

    def _build(**overrides) -> ResidentWrite:
        n = next(counter)
        data = {
            "name": f"Resident {n}",
            "email": f"resident{n}@example.com",
            "phone": f"98765{n:05d}",
            "rent": Decimal("8000"),
            "deposit_amount": Decimal("5000"),
            "meal_plan": MealPlan(breakfast=True, lunch=False, dinner=True),
        }
        data.update(overrides)
        return ResidentWrite(**data)

    return _build


@pytest.fixture
def make_resident(occupancy, resident_data):
    def _make(**overrides):
        return occupancy.assign_or_update_resident(resident_data(**overrides)).unwrap()

    return _make


@pytest.fixture
def make_generator():
    """Text generator backed by a canned upstream response; records the requests it sent."""

    def _make(text="Generated text", status_code=200, body=None):
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            if status_code != 200:
                return httpx.Response(status_code, json={"error": {"message": "unavailable"}})
            if body is not None:
                return httpx.Response(200, json=body)
            return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})

        generator = TextGenerationService(api_key="test-key", transport=httpx.MockTransport(handler))
        generator.sent = sent
        return generator

    return _make


@pytest.fixture
def make_image():
    """Encoded bytes of a small solid-colour image in the given Pillow format."""

    def _make(image_format="PNG", size=(8, 8)):
        buffer = io.BytesIO()
        Image.new("RGB", size, (200, 30, 30)).save(buffer, format=image_format)
        return buffer.getvalue()

    return _make


@pytest.fixture
def logo_service(tmp_path):
    return LogoService(upload_dir=str(tmp_path), max_bytes=4096)


@pytest.fixture
def client(session_factory, logo_service):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_logo_service] = lambda: logo_service
    # No API key: every generation fails and fallbacks apply
    app.dependency_overrides[deps.get_text_generator] = lambda: TextGenerationService(api_key="")
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client, db_session):
    seed_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD)
    response = client.post(
        "/api/v1/auth/admin/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
