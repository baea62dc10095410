"""Shared fixtures: an in-memory SQLite database per test, services and an API client."""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models.shoe  # noqa: F401
from database import Base, get_db, make_engine
from main import app
from models.shoe import Image, Shoe, ShoeCategory, ShoeModel
from schemas.shoe import ShoeCreate
from services.shoe_service import ShoeService
from services.shoe_write_service import ShoeWriteService
from utils.mailer import get_mailer
from utils.tokenJWT import create_access_token

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 32


class RecordingMailer:
    """Collects sent mails instead of talking to an SMTP server."""

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send(self, subject, body):
        if self.fail:
            raise ConnectionRefusedError("SMTP server not reachable")
        self.sent.append((subject, body))


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def read_service(db):
    return ShoeService(db)


@pytest.fixture
def write_service(db, read_service, mailer):
    return ShoeWriteService(db, read_service=read_service, mailer=mailer)


def shoe_create(**overrides) -> ShoeCreate:
    data = {
        "article_code": "SH001-AIRM",
        "rating": 4,
        "category": "Sneaker",
        "price": Decimal("99.90"),
        "discount_rate": Decimal("0.1"),
        "available": True,
        "release_date": date(2022, 3, 1),
        "homepage": "https://acme.example/air-max",
        "tags": ["SPORT"],
        "model": {"label": "Air Max", "color": "white"},
        "images": [{"caption": "Front view", "content_type": "image/png"}],
    }
    data.update(overrides)
    return ShoeCreate(**data)


@pytest.fixture
def make_shoe(db):
    """Insert a shoe directly through the ORM and return its id."""

    def _make_shoe(article_code, label="Air Max", rating=3, price="50.00", category=ShoeCategory.SNEAKER,
                   available=True, release_date=None, tags=None, images=0):
        shoe = Shoe(
            article_code=article_code,
            rating=rating,
            category=category,
            price=Decimal(price),
            discount_rate=Decimal("0"),
            available=available,
            release_date=release_date,
            tags=tags,
            model=ShoeModel(label=label),
            images=[Image(caption=f"Image {i}", content_type="image/png") for i in range(images)],
        )
        db.add(shoe)
        db.commit()
        return shoe.id

    return _make_shoe


@pytest.fixture
def client(session_factory, mailer):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


def _headers(*roles):
    token = create_access_token({"sub": "tester", "roles": list(roles)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return _headers("admin")


@pytest.fixture
def user_headers():
    return _headers("user")
