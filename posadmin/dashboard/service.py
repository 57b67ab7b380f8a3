"""Sales dashboard figures.

Sales series are bucketed in Python over the windowed rows (day, ISO week
starting Monday, calendar month) so the same code runs on SQLite and Postgres.
Each report section is computed on its own; a failing section is logged and
replaced by an empty placeholder.
"""
import calendar
import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, TypeVar
from sqlalchemy import func
from sqlalchemy.orm import Session
from posadmin.models.catalog import Product
from posadmin.models.transaction import Transaction, TransactionItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

DAY, WEEK, MONTH = "day", "week", "month"
DAILY_WINDOW = timedelta(days=7)
WEEKLY_WINDOW = timedelta(days=28)
MONTHLY_WINDOW_MONTHS = 6
TOP_PRODUCTS_LIMIT = 5


def months_ago(dt: datetime, months: int) -> datetime:
    year, month = divmod(dt.year * 12 + (dt.month - 1) - months, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)

def bucket_start(dt: datetime, unit: str) -> date:
    d = dt.date()
    if unit == DAY:
        return d
    if unit == WEEK:
        return d - timedelta(days=d.weekday())
    if unit == MONTH:
        return d.replace(day=1)
    raise ValueError(f"unknown bucket unit: {unit}")

def bucket_sales(rows: Iterable[tuple[datetime, float]], unit: str) -> list[tuple[date, float]]:
    """Sum ``(timestamp, total)`` rows per bucket, ascending by bucket start."""
    sums: dict[date, float] = defaultdict(float)
    for when, total in rows:
        sums[bucket_start(when, unit)] += float(total or 0)
    return sorted(sums.items())

def _sales_since(db: Session, since: datetime) -> list[tuple[datetime, float]]:
    return [
        (row.date, row.total)
        for row in db.query(Transaction.date, Transaction.total).filter(Transaction.date >= since)
    ]

def daily_sales(db: Session, now: datetime) -> list[dict]:
    rows = _sales_since(db, now - DAILY_WINDOW)
    return [{"date": d.isoformat(), "total": round(t, 2)} for d, t in bucket_sales(rows, DAY)]

def weekly_sales(db: Session, now: datetime) -> list[dict]:
    rows = _sales_since(db, now - WEEKLY_WINDOW)
    return [{"week": d.isoformat(), "total": round(t, 2)} for d, t in bucket_sales(rows, WEEK)]

def monthly_sales(db: Session, now: datetime) -> list[dict]:
    rows = _sales_since(db, months_ago(now, MONTHLY_WINDOW_MONTHS))
    return [{"month": d.strftime("%B %Y"), "total": round(t, 2)} for d, t in bucket_sales(rows, MONTH)]

def top_products(db: Session, limit: int = TOP_PRODUCTS_LIMIT) -> list[dict]:
    qty = func.sum(TransactionItem.quantity).label("quantity")
    revenue = func.sum(TransactionItem.price * TransactionItem.quantity).label("total")
    rows = (
        db.query(TransactionItem.product_id, Product.id, Product.name, qty, revenue)
        .outerjoin(Product, Product.id == TransactionItem.product_id)
        .group_by(TransactionItem.product_id, Product.id, Product.name)
        .order_by(qty.desc(), TransactionItem.product_id.asc())
        .limit(limit)
        .all()
    )
    # product rows removed since the sale still count, with blank identity
    return [
        {
            "id": product_id if product_id is not None else "",
            "name": name or "",
            "quantity": int(quantity or 0),
            "total": round(float(total or 0), 2),
        }
        for _, product_id, name, quantity, total in rows
    ]

def _section(db: Session, name: str, fallback: T, compute: Callable[[], T]) -> T:
    try:
        return compute()
    except Exception:
        logger.exception("Dashboard section %s failed", name)
        db.rollback()
        return fallback

def build_dashboard_stats(db: Session, now: datetime | None = None) -> dict:
    now = now or datetime.utcnow()
    return {
        "totalRevenue": _section(
            db, "totalRevenue", 0.0,
            lambda: round(float(db.query(func.coalesce(func.sum(Transaction.total), 0)).scalar()), 2),
        ),
        "totalTransactions": _section(db, "totalTransactions", 0, lambda: db.query(Transaction).count()),
        "totalProducts": _section(db, "totalProducts", 0, lambda: db.query(Product).count()),
        "dailySales": _section(db, "dailySales", [], lambda: daily_sales(db, now)),
        "weeklySales": _section(db, "weeklySales", [], lambda: weekly_sales(db, now)),
        "monthlySales": _section(db, "monthlySales", [], lambda: monthly_sales(db, now)),
        "topProducts": _section(db, "topProducts", [], lambda: top_products(db)),
    }
