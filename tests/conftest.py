import os
import sys
from io import BytesIO
from unittest.mock import MagicMock

import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# Settings are read once at import time.
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import campus_auth.infrastructure.db
import campus_auth.main
from campus_auth.infrastructure.db import get_db
from campus_auth.infrastructure.models import Base
from campus_auth.interfaces.http.deps import get_document_uploader
from campus_auth.main import app

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

campus_auth.infrastructure.db.engine = test_engine
campus_auth.infrastructure.db.SessionLocal = TestingSessionLocal
campus_auth.main.engine = test_engine

DOCUMENT_URL = "https://res.cloudinary.com/demo/image/upload/v1/analisis/credential.png"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def uploader():
    """Uploader double returning a fixed Cloudinary URL."""
    mock_uploader = MagicMock()
    mock_uploader.upload.return_value = DOCUMENT_URL
    return mock_uploader


@pytest.fixture
def client(uploader):
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_document_uploader] = lambda: uploader
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def register_form(**overrides):
    data = {
        "nombre": "Ana",
        "apellido": "Lopez",
        "email": "ana@x.com",
        "contraseña": "secret1",
        "tipoUsuario": "student",
    }
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


def png_file(filename="credential.png", content_type="image/png"):
    return {"imagen": (filename, BytesIO(b"\x89PNG\r\n\x1a\nfake"), content_type)}
