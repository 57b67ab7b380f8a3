from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from posadmin.config import settings

DEFAULT_URL = "sqlite:///./posadmin.db"
PG_DRIVER = "postgresql+psycopg://"


class Base(DeclarativeBase):
    pass


def normalize_url(url: str | None) -> str:
    """Route bare postgres urls through psycopg 3; anything else passes through."""
    url = url or DEFAULT_URL
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return PG_DRIVER + url[len(scheme):]
    return url


def engine_for(url: str | None):
    url = normalize_url(url)
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True, future=True)


engine = engine_for(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def init_db(bind=None):
    from posadmin.models import user, catalog, transaction  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
