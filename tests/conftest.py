"""Pytest configuration and shared fixtures.

Provides an in-memory SQLite session, an in-memory Redis double for the
draft slot, signed bearer tokens and a wired-up TestClient.
"""

import os
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Generator, Optional
from unittest.mock import MagicMock

# Must be set before the application modules read their settings
os.environ["SQLALCHEMY_DATABASE_URL"] = "sqlite://"
os.environ["META_API_KEY"] = ""
os.environ["WHATSAPP_PHONE_ID"] = ""

import jwt
import pytest
import redis
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import app
from config import settings
from core.documents.service.exportpipeline import ExportPipeline
from core.invoices.controller.invoicecontroller import get_export_pipeline
from core.invoices.dto.response.invoiceresponse import InvoiceResponse
from core.invoices.service.draftstore import DraftStore, get_draft_store
from core.sharing.service.whatsapp_service import WhatsAppService
from utilities.dbconfig import Base, get_db


class FakeRedis:
    """Just enough of redis.Redis for the draft slot."""

    def __init__(self, fail: bool = False):
        self.data: Dict[str, str] = {}
        self.fail = fail

    def _check(self) -> None:
        if self.fail:
            raise redis.ConnectionError("redis is down")

    def get(self, key: str) -> Optional[str]:
        self._check()
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._check()
        self.data[key] = value
        return True

    def delete(self, key: str) -> int:
        self._check()
        return 1 if self.data.pop(key, None) is not None else 0


# ── Persistence ──────────────────────────────────────────────────

@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Healthy in-memory Redis double."""
    return FakeRedis()


@pytest.fixture
def draft_store(fake_redis: FakeRedis) -> DraftStore:
    """Draft store backed by the Redis double."""
    return DraftStore(fake_redis, key="test_invoice_draft")


# ── Export ───────────────────────────────────────────────────────

@pytest.fixture
def mock_rasterizer() -> MagicMock:
    """Rasterizer double returning a sentinel image."""
    rasterizer = MagicMock()
    rasterizer.rasterize.return_value = "bitmap"
    return rasterizer


@pytest.fixture
def fallback_whatsapp() -> WhatsAppService:
    """WhatsApp client without credentials, so sharing always falls back."""
    return WhatsAppService(api_key="", phone_id="")


@pytest.fixture
def pipeline(mock_rasterizer: MagicMock, fallback_whatsapp: WhatsAppService) -> ExportPipeline:
    """Export pipeline with a fake rasterizer and encoder."""
    return ExportPipeline(
        rasterizer=mock_rasterizer,
        encoder=lambda image: b"%PDF-1.4 fake",
        whatsapp=fallback_whatsapp,
    )


# ── API ──────────────────────────────────────────────────────────

def make_token(expires_in: timedelta = timedelta(hours=1), **claims: Any) -> str:
    payload = {
        "sub": "user-1",
        "aud": settings.JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + expires_in,
        **claims,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    """Authorization header carrying a valid token."""
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def client(db_session: Session, draft_store: DraftStore, pipeline: ExportPipeline) -> Generator[TestClient, None, None]:
    """Test client with database, draft slot and export pipeline overridden."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_draft_store] = lambda: draft_store
    app.dependency_overrides[get_export_pipeline] = lambda: pipeline

    yield TestClient(app)

    app.dependency_overrides.clear()


# ── Data ─────────────────────────────────────────────────────────

def invoice_payload(**overrides: Any) -> Dict[str, Any]:
    """A complete, valid form state in the draft's own key spelling."""
    payload = {
        "invoice_date": date.today().isoformat(),
        "journey_date": date.today().isoformat(),
        "customer_name": "Asha Patil",
        "customer_phone": "9876543210",
        "pickup_location": "Airport",
        "pickup_city": "Mumbai",
        "destination": "College Road",
        "drop_city": "Nashik",
        "payment_mode": "upi",
        "tripType": "one-way",
        "baseFare": 4500,
        "driverAllowance": 300,
        "additionalCharges": [{"type": "Toll", "amount": 250}],
        "stops": [{"id": "s1", "location": "Lonavala", "city": "Pune"}],
    }
    payload.update(overrides)
    return payload


def make_invoice(**overrides: Any) -> InvoiceResponse:
    """A stored invoice as the rest of the code sees it."""
    data = {
        "id": "0b5c2f0e-1111-4a8e-9a51-3c1f6d3f0a01",
        "invoice_number": 7,
        "invoice_date": date(2026, 10, 18),
        "journey_date": date(2026, 10, 18),
        "customer_name": "Rohit @ Kumar!!",
        "customer_phone": "9876543210",
        "pickup_location": "Airport",
        "pickup_city": "Mumbai",
        "destination": "College Road",
        "drop_city": "Nashik",
        "stops": [],
        "trip_type": "one-way",
        "journey_type": "one-way",
        "fare_amount": 4500,
        "driver_allowance": 300,
        "additional_charges": [{"type": "Toll", "amount": 250}],
        "total_amount": 5050,
        "payment_mode": "upi",
    }
    data.update(overrides)
    return InvoiceResponse.model_validate(data)
