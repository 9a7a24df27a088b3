import os
from io import BytesIO

# must be set before the backend settings are loaded
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import models  # noqa: F401  registers every table
from api.dependencies.session import get_session
from main import app


def make_image(width: int, height: int, image_format: str = "PNG", mode: str = "RGB") -> bytes:
    color = (200, 30, 30, 255)[:len(mode)] if mode != "L" else 128
    image = Image.new(mode, (width, height), color)
    with BytesIO() as buffer:
        image.save(buffer, format=image_format)
        return buffer.getvalue()


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image(64, 32, "PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image(30, 90, "JPEG")
