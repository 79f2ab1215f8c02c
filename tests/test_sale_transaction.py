"""
Sale transaction tests against the repository.

The concurrency tests run real threads, each with its own session and
connection, against the same SQLite file.
"""

import threading
from decimal import Decimal

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from ration_store.core.exceptions import (
    InsufficientStockError, NotFoundError, StoreError, ValidationError
)
from ration_store.modules.sales.repository import SalesRepository
from ration_store.modules.stock.repository import StockRepository
from ration_store.shared.database.models import Sale, StockItem


def _current_stock(session_factory, item_id):
    session = session_factory()
    try:
        return session.query(StockItem).filter(StockItem.id == item_id).one().current_stock
    finally:
        session.close()


def _sale_count(session_factory):
    session = session_factory()
    try:
        return session.query(Sale).count()
    finally:
        session.close()


def test_sale_decrements_stock_and_snapshots_item_name(db, session_factory, make_item, make_family):
    item = make_item(item_name="Rice", current_stock=50)
    make_family(family_id="RC1001")

    sale = SalesRepository(db).create_sale_atomic("RC1001", item.id, 20, 25, 500)

    assert sale.id is not None
    assert sale.item_name == "Rice"
    assert sale.family_id == "RC1001"
    assert sale.quantity == Decimal("20")
    assert sale.sale_date is not None
    assert _current_stock(session_factory, item.id) == Decimal("30")
    assert _sale_count(session_factory) == 1


def test_item_name_snapshot_survives_rename(db, session_factory, make_item, make_family):
    item = make_item(item_name="Rice")
    make_family()
    sale = SalesRepository(db).create_sale_atomic("RC1001", item.id, 5, 10, 50)

    item.item_name = "Basmati Rice"
    db.commit()

    db.expire_all()
    stored = db.query(Sale).filter(Sale.id == sale.id).one()
    assert stored.item_name == "Rice"


def test_insufficient_stock_reports_available_and_changes_nothing(db, session_factory, make_item, make_family):
    item = make_item(current_stock=30)
    make_family()

    with pytest.raises(InsufficientStockError) as exc_info:
        SalesRepository(db).create_sale_atomic("RC1001", item.id, 40, 25, 1000)

    assert exc_info.value.available == 30
    assert exc_info.value.to_dict() == {"error": "Insufficient stock. Available: 30", "available": 30.0}
    assert _current_stock(session_factory, item.id) == Decimal("30")
    assert _sale_count(session_factory) == 0


def test_selling_exactly_the_remaining_stock(db, session_factory, make_item, make_family):
    item = make_item(current_stock=12.5)
    make_family()

    SalesRepository(db).create_sale_atomic("RC1001", item.id, 12.5, 2, 25)

    assert _current_stock(session_factory, item.id) == 0


def test_fractional_sales_drain_stock_exactly(db, session_factory, make_item, make_family):
    item = make_item(current_stock=0.3)
    make_family()
    repository = SalesRepository(db)

    for _ in range(3):
        repository.create_sale_atomic("RC1001", item.id, Decimal("0.1"), 10, 1)

    assert _current_stock(session_factory, item.id) == 0
    assert _sale_count(session_factory) == 3

    with pytest.raises(InsufficientStockError) as exc_info:
        repository.create_sale_atomic("RC1001", item.id, Decimal("0.1"), 10, 1)
    assert exc_info.value.available == 0


def test_item_deleted_mid_sale_is_not_found(db, engine, session_factory, make_item, make_family):
    item = make_item(current_stock=50)
    make_family()
    deleted = []

    def delete_item_before_decrement(conn, cursor, statement, parameters, context, executemany):
        if statement.startswith("UPDATE stock_items") and not deleted:
            deleted.append(True)
            with engine.begin() as other:
                other.execute(StockItem.__table__.delete().where(StockItem.id == item.id))

    event.listen(engine, "before_cursor_execute", delete_item_before_decrement)
    try:
        with pytest.raises(NotFoundError) as exc_info:
            SalesRepository(db).create_sale_atomic("RC1001", item.id, 5, 10, 50)
    finally:
        event.remove(engine, "before_cursor_execute", delete_item_before_decrement)

    assert exc_info.value.entity == "item"
    assert _sale_count(session_factory) == 0


def test_reload_failure_is_a_store_error(db, make_item, make_family, monkeypatch):
    item = make_item(current_stock=50)
    make_family()

    def failing_refresh(instance):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "refresh", failing_refresh)

    with pytest.raises(StoreError):
        SalesRepository(db).create_sale_atomic("RC1001", item.id, 5, 10, 50)
    with pytest.raises(StoreError):
        StockRepository(db).create({
            "item_name": "Oil", "category": "Oil",
            "total_stock": 10, "current_stock": 5, "threshold": 1,
        })


def test_unknown_family_leaves_no_trace(db, session_factory, make_item, make_family):
    item = make_item(current_stock=50)
    make_family(family_id="RC1001")

    with pytest.raises(NotFoundError) as exc_info:
        SalesRepository(db).create_sale_atomic("RC9999", item.id, 5, 10, 50)

    assert exc_info.value.entity == "family"
    assert exc_info.value.message == "Family not found"
    assert _current_stock(session_factory, item.id) == Decimal("50")
    assert _sale_count(session_factory) == 0


def test_unknown_item(db, session_factory, make_family):
    make_family()

    with pytest.raises(NotFoundError) as exc_info:
        SalesRepository(db).create_sale_atomic("RC1001", 404, 5, 10, 50)

    assert exc_info.value.entity == "item"
    assert _sale_count(session_factory) == 0


@pytest.mark.parametrize(
    "family_id, quantity, unit_price, total_amount",
    [
        ("", 1, 10, 10),
        ("RC1001", 0, 10, 10),
        ("RC1001", 1, 0, 10),
        ("RC1001", 1, 10, 0),
        ("RC1001", None, 10, 10),
    ],
)
def test_missing_or_zero_fields(db, make_item, make_family, family_id, quantity, unit_price, total_amount):
    item = make_item()
    make_family()

    with pytest.raises(ValidationError):
        SalesRepository(db).create_sale_atomic(family_id, item.id, quantity, unit_price, total_amount)


def test_negative_quantity_is_rejected(db, session_factory, make_item, make_family):
    item = make_item(current_stock=50)
    make_family()

    with pytest.raises(ValidationError):
        SalesRepository(db).create_sale_atomic("RC1001", item.id, -10, 10, 10)

    assert _current_stock(session_factory, item.id) == Decimal("50")


def _run_concurrent_sales(session_factory, item_id, quantities):
    barrier = threading.Barrier(len(quantities))
    outcomes = [None] * len(quantities)

    def worker(index, quantity):
        session = session_factory()
        try:
            barrier.wait()
            SalesRepository(session).create_sale_atomic("RC1001", item_id, quantity, 1, quantity)
            outcomes[index] = "ok"
        except Exception as e:
            outcomes[index] = e
        finally:
            session.close()

    threads = [
        threading.Thread(target=worker, args=(i, q)) for i, q in enumerate(quantities)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    return outcomes


def test_two_racing_sales_cannot_oversell(session_factory, make_item, make_family):
    item = make_item(current_stock=50)
    make_family()

    outcomes = _run_concurrent_sales(session_factory, item.id, [30, 30])

    assert outcomes.count("ok") == 1
    losers = [o for o in outcomes if o != "ok"]
    assert len(losers) == 1
    assert isinstance(losers[0], InsufficientStockError)
    assert _current_stock(session_factory, item.id) == Decimal("20")
    assert _sale_count(session_factory) == 1


def test_racing_sales_that_fit_both_succeed(session_factory, make_item, make_family):
    item = make_item(current_stock=50)
    make_family()

    outcomes = _run_concurrent_sales(session_factory, item.id, [20, 30])

    assert outcomes == ["ok", "ok"]
    assert _current_stock(session_factory, item.id) == 0
    assert _sale_count(session_factory) == 2


def test_many_racing_sales_stop_at_zero(session_factory, make_item, make_family):
    item = make_item(current_stock=50)
    make_family()

    outcomes = _run_concurrent_sales(session_factory, item.id, [10] * 8)

    assert outcomes.count("ok") == 5
    assert all(isinstance(o, InsufficientStockError) for o in outcomes if o != "ok")
    assert _current_stock(session_factory, item.id) == 0
    assert _sale_count(session_factory) == 5


def _race_edit_against_sale(session_factory, item_id, edited_stock, sale_quantity):
    barrier = threading.Barrier(2)
    outcomes = {}

    def edit():
        session = session_factory()
        try:
            barrier.wait()
            StockRepository(session).update_locked(item_id, {
                "item_name": "Rice", "category": "Grain",
                "total_stock": Decimal("100"), "current_stock": Decimal(edited_stock),
                "threshold": Decimal("10"),
            })
            outcomes["edit"] = "ok"
        except Exception as e:
            outcomes["edit"] = e
        finally:
            session.close()

    def sell():
        session = session_factory()
        try:
            barrier.wait()
            SalesRepository(session).create_sale_atomic("RC1001", item_id, sale_quantity, 1, sale_quantity)
            outcomes["sale"] = "ok"
        except Exception as e:
            outcomes["sale"] = e
        finally:
            session.close()

    threads = [threading.Thread(target=edit), threading.Thread(target=sell)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    return outcomes


@pytest.mark.parametrize("edited_stock", [40, 20])
def test_stock_edit_and_sale_never_interleave(session_factory, make_item, make_family, edited_stock):
    item = make_item(total_stock=100, current_stock=50)
    make_family()
    sale_quantity = 30

    outcomes = _race_edit_against_sale(session_factory, item.id, edited_stock, sale_quantity)

    assert outcomes["edit"] == "ok"
    assert outcomes["sale"] == "ok" or isinstance(outcomes["sale"], InsufficientStockError)

    final = _current_stock(session_factory, item.id)
    sales = _sale_count(session_factory)
    assert final >= 0
    assert final in (Decimal(edited_stock), Decimal(edited_stock - sale_quantity))
    if final == Decimal(edited_stock - sale_quantity):
        assert sales == 1
    assert sales == (1 if outcomes["sale"] == "ok" else 0)
