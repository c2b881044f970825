import os
from functools import lru_cache
from pathlib import Path
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .env_settings import get_env


class Base(DeclarativeBase):
    pass


def _db_url() -> str:
    s = get_env()
    url = (s.database_url or "").strip()
    if url:
        return url

    sqlite_path = (s.sqlite_path or "").strip() or "data/settings.db"
    p = Path(sqlite_path)
    if not p.is_absolute():
        # Resolve relative DB paths against the project root, not process CWD.
        project_root = Path(__file__).resolve().parents[1]
        p = (project_root / p).resolve()

    db_dir = str(p.parent)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    return f"sqlite:///{p.as_posix()}"


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    # WAL can fail on some filesystems (e.g. bind mounts on Windows/WSL2); fall back quietly.
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
    except Exception:
        try:
            cursor.execute("PRAGMA journal_mode=DELETE")
        except Exception:
            pass
    try:
        cursor.execute("PRAGMA busy_timeout=5000")
    except Exception:
        pass
    cursor.close()


def make_engine(url: str | None = None, **kwargs) -> Engine:
    url = url or _db_url()
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, echo=False, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return make_engine()


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    return make_session_factory(get_engine())
