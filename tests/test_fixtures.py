"""
Shared test fixtures and utilities for the NutriLife test suite.

This module contains common mock objects, helper functions, and test client setup
that are reused across multiple test files to ensure consistency and reduce duplication.
"""

import io
import uuid
from types import SimpleNamespace
from datetime import datetime, timezone
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from fastapi.testclient import TestClient
from main import app
from adapters import attachment_store
from adapters.attachment_store import StagedFile
from domain.enums import UserRole
from domain.models import Base, engine, SessionLocal
from domain.schemas.user_schemas import UserCreate
from services.user_service import UserService

# Lifespan is not run (no context manager); db_session creates the schema
client = TestClient(app)

# Minimal valid PNG header, enough for an upload
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4()}@example.com"


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """
    Create a fresh schema and a database session for integration tests.

    Tables are dropped afterwards so every test starts from an empty
    database; stored images are removed as well.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)
        for kind_dir in attachment_store.root().iterdir():
            for stored in kind_dir.iterdir():
                stored.unlink()


def staged(filename: str = "lunch.png", content: bytes = PNG_BYTES) -> StagedFile:
    """An in-memory upload as the routes would hand it to a service"""
    return StagedFile(filename=filename, stream=io.BytesIO(content))


def image_upload(filename: str = "lunch.png", content: bytes = PNG_BYTES) -> dict:
    """`files=` argument for a multipart request carrying one image"""
    return {"image": (filename, io.BytesIO(content), "image/png")}


def create_user(db: Session, name: str = "Sarah Martinez", bio: str = None):
    """Persist a real user through the service"""
    return UserService.create_user(
        db,
        UserCreate(name=name, email=unique_email(name.split()[0].lower()), bio=bio),
    )


def make_user(user_id=None, name="Sarah Martinez", email=None, role=UserRole.USER, bio=None):
    """
    Create a mock user object for route tests.

    Returns:
        SimpleNamespace: attributes mirror the User ORM model
    """
    uid = user_id or str(uuid.uuid4())
    profile = None
    if bio is not None:
        profile = SimpleNamespace(id=1, user_id=uid, bio=bio)
    return SimpleNamespace(
        id=uid,
        name=name,
        email=email or unique_email("sarah.martinez"),
        role=role,
        created_at=datetime.now(timezone.utc),
        profile=profile,
    )


def make_meal(meal_id=1, user_id=None, title="Lunch", calories=450, image=None):
    """Mock meal with realistic defaults"""
    return SimpleNamespace(
        id=meal_id,
        user_id=user_id or str(uuid.uuid4()),
        title=title,
        description="Grilled chicken with rice",
        calories=calories,
        datetime=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        image=image,
    )


def make_post(post_id=None, author_id=None, title="Meal prep tips", categories=None):
    """Mock post with author, unpublished by default"""
    author_id = author_id or str(uuid.uuid4())
    return SimpleNamespace(
        id=post_id or str(uuid.uuid4()),
        author_id=author_id,
        title=title,
        description="Cook once, eat all week",
        published=False,
        image=None,
        created_at=datetime.now(timezone.utc),
        categories=categories or [],
        author=SimpleNamespace(id=author_id, name="Sarah Martinez", email="s@example.com"),
    )
