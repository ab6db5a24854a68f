# bookstore/data/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore.utils.settings import DATABASE_URL


class Base(DeclarativeBase):
    pass


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs = {"connect_args": {"check_same_thread": False}}
    #baza w pamieci musi byc wspoldzielona przez wszystkie sesje
    if url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in url:
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))

if engine.dialect.name == "sqlite":
    # sqlite domyslnie nie sprawdza kluczy obcych
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    # rejestracja wszystkich modeli w Base.metadata przed create_all
    import bookstore.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
