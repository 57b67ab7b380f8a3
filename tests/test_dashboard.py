from datetime import date, datetime, timedelta

import pytest
from conftest import make_product

from posadmin.dashboard import service
from posadmin.dashboard.service import (
    DAY,
    MONTH,
    WEEK,
    bucket_sales,
    bucket_start,
    build_dashboard_stats,
    months_ago,
)
from posadmin.models.transaction import Transaction, TransactionItem

NOW = datetime(2026, 10, 18, 15, 0, 0)  # a Sunday


def add_sale(db_session, when, total, lines=()):
    tx = Transaction(date=when, total=total)
    for product, qty in lines:
        tx.items.append(TransactionItem(product_id=product.id, quantity=qty, price=product.price))
    db_session.add(tx)
    db_session.commit()
    return tx


class TestBucketing:
    def test_bucket_starts(self):
        when = datetime(2026, 10, 15, 23, 59)  # Thursday
        assert bucket_start(when, DAY) == date(2026, 10, 15)
        assert bucket_start(when, WEEK) == date(2026, 10, 12)
        assert bucket_start(when, MONTH) == date(2026, 10, 1)

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            bucket_start(NOW, "year")

    def test_sums_and_orders_ascending(self):
        rows = [
            (datetime(2026, 10, 17, 9), 250),
            (datetime(2026, 10, 16, 9), 100),
            (datetime(2026, 10, 17, 18), 50),
        ]
        assert bucket_sales(rows, DAY) == [(date(2026, 10, 16), 100.0), (date(2026, 10, 17), 300.0)]
        assert bucket_sales(rows, WEEK) == [(date(2026, 10, 12), 400.0)]

    @pytest.mark.parametrize("start,months,expected", [
        (datetime(2026, 10, 18), 6, datetime(2026, 4, 18)),
        (datetime(2026, 3, 2), 6, datetime(2025, 9, 2)),
        (datetime(2026, 8, 31), 6, datetime(2026, 2, 28)),
    ])
    def test_months_ago(self, start, months, expected):
        assert months_ago(start, months) == expected


class TestReport:
    def test_empty(self, db_session):
        stats = build_dashboard_stats(db_session, now=NOW)
        assert stats == {
            "totalRevenue": 0.0,
            "totalTransactions": 0,
            "totalProducts": 0,
            "dailySales": [],
            "weeklySales": [],
            "monthlySales": [],
            "topProducts": [],
        }

    def test_daily_sales_two_days(self, db_session):
        add_sale(db_session, NOW - timedelta(days=1), 250)
        add_sale(db_session, NOW - timedelta(days=3), 100)
        stats = build_dashboard_stats(db_session, now=NOW)
        assert stats["dailySales"] == [
            {"date": "2026-10-15", "total": 100.0},
            {"date": "2026-10-17", "total": 250.0},
        ]
        assert sum(d["total"] for d in stats["dailySales"]) == 350
        assert stats["totalRevenue"] == 350.0
        assert stats["totalTransactions"] == 2

    def test_windows(self, db_session):
        add_sale(db_session, NOW - timedelta(days=2), 10)     # day, week, month
        add_sale(db_session, NOW - timedelta(days=20), 20)    # week, month
        add_sale(db_session, NOW - timedelta(days=60), 40)    # month only
        add_sale(db_session, NOW - timedelta(days=400), 80)   # revenue only
        stats = build_dashboard_stats(db_session, now=NOW)

        assert stats["totalRevenue"] == 150.0
        assert stats["dailySales"] == [{"date": "2026-10-16", "total": 10.0}]
        assert stats["weeklySales"] == [
            {"week": "2026-09-28", "total": 20.0},
            {"week": "2026-10-12", "total": 10.0},
        ]
        assert stats["monthlySales"] == [
            {"month": "August 2026", "total": 40.0},
            {"month": "September 2026", "total": 20.0},
            {"month": "October 2026", "total": 10.0},
        ]

    def test_top_products(self, db_session, category):
        cola = make_product(db_session, category, name="Cola", price=1.5)
        chips = make_product(db_session, category, name="Chips", price=2.0)
        add_sale(db_session, NOW, 7.0, [(cola, 2), (chips, 2)])
        add_sale(db_session, NOW, 4.5, [(cola, 3)])

        stats = build_dashboard_stats(db_session, now=NOW)
        assert stats["totalProducts"] == 2
        assert stats["topProducts"] == [
            {"id": cola.id, "name": "Cola", "quantity": 5, "total": 7.5},
            {"id": chips.id, "name": "Chips", "quantity": 2, "total": 4.0},
        ]

    def test_failing_section_degrades_to_placeholder(self, db_session, monkeypatch):
        add_sale(db_session, NOW - timedelta(days=1), 100)

        def boom(*args, **kwargs):
            raise RuntimeError("lookup failed")

        monkeypatch.setattr(service, "top_products", boom)
        stats = build_dashboard_stats(db_session, now=NOW)
        assert stats["topProducts"] == []
        assert stats["totalRevenue"] == 100.0
        assert stats["dailySales"] == [{"date": "2026-10-17", "total": 100.0}]


def test_stats_endpoint(cashier_client, product):
    cashier_client.post("/api/transactions", json={"items": [{"productId": product.id, "quantity": 2}]})
    resp = cashier_client.get("/api/dashboard/stats")
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalRevenue"] == 3.0
    assert body["totalTransactions"] == 1
    assert body["topProducts"][0]["name"] == "Cola"
    assert len(body["dailySales"]) == 1
