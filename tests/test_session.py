import pytest

from posadmin.db.session import DEFAULT_URL, engine_for, normalize_url


@pytest.mark.parametrize("raw,expected", [
    ("postgres://u:p@db:5432/pos", "postgresql+psycopg://u:p@db:5432/pos"),
    ("postgresql://u:p@db/pos", "postgresql+psycopg://u:p@db/pos"),
    ("postgresql+psycopg://u@db/pos", "postgresql+psycopg://u@db/pos"),
    ("sqlite:///./shop.db", "sqlite:///./shop.db"),
])
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_missing_url_falls_back_to_local_sqlite():
    assert normalize_url(None) == DEFAULT_URL
    assert normalize_url("") == DEFAULT_URL


def test_sqlite_engine_allows_cross_thread_use():
    eng = engine_for("sqlite://")
    assert eng.dialect.name == "sqlite"
    with eng.connect() as conn:
        assert conn.exec_driver_sql("select 1").scalar() == 1
