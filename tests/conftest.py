import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

import bookstore.data.models  # noqa: F401
from bookstore.api.deps import get_lock_service
from bookstore.data.database import Base, SessionLocal, engine
from bookstore.domain.enums import RoleName
from bookstore.main import app
from bookstore.services.book_service import BookService
from bookstore.services.user_service import UserService
from tests.factories import FakeLockService, RecordingNotificationService, book_request, registration


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def notifications():
    return RecordingNotificationService()


@pytest.fixture
def client(lock_service):
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    return UserService(db).register(registration("user@example.com"))


@pytest.fixture
def admin(db):
    return UserService(db).register(
        registration("admin@example.com"),
        roles=(RoleName.ADMIN, RoleName.USER),
    )


@pytest.fixture
def books(db):
    svc = BookService(db)
    return {
        "a": svc.create_book(book_request(title="Book A", author="Author A", isbn="A-1", price="5.00")),
        "b": svc.create_book(book_request(title="Book B", author="Author B", isbn="B-1", price="3.50")),
    }
