from contextlib import contextmanager
from datetime import date

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import IntegrityError, OperationalError

from inventory_backend.app.api import deps
from inventory_backend.app.db import session as db_session_module
from inventory_backend.app.core.exceptions import MissingProductsError, OrderPlacementError
from inventory_backend.app.db.models.models_v1 import Order, OrderDetail, Product
from inventory_backend.app.schemas.order import OrderCreate
from inventory_backend.services.orders import find_missing_product_ids, place_order


def _count(db, model) -> int:
    db.expire_all()
    return db.execute(select(func.count()).select_from(model)).scalar_one()


@contextmanager
def _recording_statements():
    statements = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(db_session_module.engine, "before_cursor_execute", _record)
    try:
        yield statements
    finally:
        event.remove(db_session_module.engine, "before_cursor_execute", _record)


@contextmanager
def _failing_on(prefix: str):
    """Simulate the store dropping out when a statement starting with ``prefix`` runs."""

    def _fail(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(prefix):
            raise OperationalError(statement, parameters, Exception("server closed the connection"))

    event.listen(db_session_module.engine, "before_cursor_execute", _fail)
    try:
        yield
    finally:
        event.remove(db_session_module.engine, "before_cursor_execute", _fail)


def test_order_with_existing_products_is_persisted(client, db_session, seed_products, make_order):
    """
    GIVEN
    - products 1 and 2 exist

    THEN
    - 200 with the generated order_id
    - 1 order row, 2 order_details rows
    """
    resp = client.post(
        "/api/orders",
        json=make_order([{"productId": 1, "quantity": 2}, {"productId": 2, "quantity": 1}]),
    )

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["message"] == "Order and details added successfully"
    assert isinstance(body["order_id"], int)

    assert _count(db_session, Order) == 1
    assert _count(db_session, OrderDetail) == 2

    order = db_session.get(Order, body["order_id"])
    assert order.customer_name == "Alice"
    assert order.order_date == date(2024, 1, 1)
    assert order.status == "pending"
    assert [(d.product_id, d.quantity) for d in order.details] == [(1, 2), (2, 1)]


def test_missing_product_rejects_whole_order(client, db_session, seed_products, make_order):
    """
    GIVEN
    - product 1 exists, product 99 does not

    THEN
    - 400 naming 99 only
    - nothing persisted
    """
    resp = client.post(
        "/api/orders",
        json=make_order([{"productId": 1, "quantity": 1}, {"productId": 99, "quantity": 1}]),
    )

    assert resp.status_code == 400
    assert resp.json() == {
        "error": "One or more productId do not exist",
        "missing_product_ids": [99],
    }
    assert _count(db_session, Order) == 0
    assert _count(db_session, OrderDetail) == 0


def test_missing_ids_are_distinct_and_exclude_existing(client, db_session, seed_products, make_order):
    resp = client.post(
        "/api/orders",
        json=make_order(
            [
                {"productId": 7, "quantity": 1},
                {"productId": 2, "quantity": 1},
                {"productId": 7, "quantity": 3},
                {"productId": 5, "quantity": 1},
            ]
        ),
    )

    assert resp.status_code == 400
    assert resp.json()["missing_product_ids"] == [7, 5]
    assert _count(db_session, Order) == 0


def test_empty_product_list_fails_validation_without_touching_store(client, seed_products, make_order):
    with _recording_statements() as statements:
        resp = client.post("/api/orders", json=make_order([]))

    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert any(e["path"] == "products" for e in errors)
    assert statements == []


def test_store_failure_after_existence_check_rolls_back(
    client, db_session, seed_products, make_order, monkeypatch
):
    """
    GIVEN
    - products exist, so the existence check passes
    - the store fails while the order lines are inserted

    THEN
    - 500 generic error
    - neither the order header nor any line survives
    - the request session was closed
    """
    sessions = []
    closed = []
    real_factory = deps.SessionLocal

    def _tracking_factory():
        session = real_factory()
        real_close = session.close

        def _close():
            closed.append(session)
            real_close()

        session.close = _close
        sessions.append(session)
        return session

    monkeypatch.setattr(deps, "SessionLocal", _tracking_factory)

    with _failing_on("INSERT INTO ORDER_DETAILS"):
        resp = client.post(
            "/api/orders",
            json=make_order([{"productId": 1, "quantity": 2}, {"productId": 2, "quantity": 1}]),
        )

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to add order"}
    assert _count(db_session, Order) == 0
    assert _count(db_session, OrderDetail) == 0
    assert len(sessions) == 1
    assert closed == sessions
    assert not sessions[0].in_transaction()


def test_duplicate_products_are_kept_as_separate_lines(client, db_session, seed_products, make_order):
    resp = client.post(
        "/api/orders",
        json=make_order(
            [
                {"productId": 1, "quantity": 1},
                {"productId": 1, "quantity": 4},
                {"productId": 2, "quantity": 2},
            ]
        ),
    )

    assert resp.status_code == 200, resp.text
    assert _count(db_session, Order) == 1
    quantities = db_session.execute(
        select(OrderDetail.product_id, OrderDetail.quantity).order_by(OrderDetail.order_detail_id)
    ).all()
    assert [tuple(r) for r in quantities] == [(1, 1), (1, 4), (2, 2)]


def test_same_order_twice_creates_two_orders(client, db_session, seed_products, make_order):
    body = make_order([{"productId": 1, "quantity": 1}])

    first = client.post("/api/orders", json=body)
    second = client.post("/api/orders", json=body)

    assert first.status_code == second.status_code == 200
    assert first.json()["order_id"] != second.json()["order_id"]
    assert _count(db_session, Order) == 2
    assert _count(db_session, OrderDetail) == 2


@pytest.mark.parametrize(
    "products, path",
    [
        ([{"productId": 0, "quantity": 1}], "products[0].productId"),
        ([{"productId": 1, "quantity": 0}], "products[0].quantity"),
        ([{"productId": 1}], "products[0].quantity"),
        ([{"productId": "abc", "quantity": 1}], "products[0].productId"),
        ([{"productId": True, "quantity": 1}], "products[0].productId"),
        ([{"productId": 1, "quantity": True}], "products[0].quantity"),
        ([{"productId": 1, "quantity": 2.0}], "products[0].quantity"),
        ([{"productId": "1", "quantity": 1}], "products[0].productId"),
    ],
)
def test_line_level_validation_errors(client, db_session, seed_products, make_order, products, path):
    resp = client.post("/api/orders", json=make_order(products))

    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert path in [e["path"] for e in errors]
    assert all(e["location"] == "body" for e in errors)
    assert _count(db_session, Order) == 0


@pytest.mark.parametrize(
    "overrides, path",
    [
        ({"customerName": ""}, "customerName"),
        ({"orderDate": "not-a-date"}, "orderDate"),
        ({"orderDate": 1704067200}, "orderDate"),
        ({"orderDate": "1704067200"}, "orderDate"),
        ({"status": ""}, "status"),
    ],
)
def test_header_validation_errors(client, db_session, seed_products, make_order, overrides, path):
    resp = client.post("/api/orders", json=make_order([{"productId": 1, "quantity": 1}], **overrides))

    assert resp.status_code == 400
    assert path in [e["path"] for e in resp.json()["errors"]]
    assert _count(db_session, Order) == 0


# ---------- service level ----------
def test_find_missing_product_ids_preserves_request_order(db_session, seed_products):
    assert find_missing_product_ids(db_session, [3, 1, 3, 2, 8]) == [3, 8]
    assert find_missing_product_ids(db_session, []) == []


def test_place_order_raises_missing_products(db_session, seed_products):
    payload = OrderCreate.model_validate(
        {
            "customerName": "Bob",
            "orderDate": "2024-02-02",
            "status": "pending",
            "products": [{"productId": 42, "quantity": 1}],
        }
    )

    with pytest.raises(MissingProductsError) as excinfo:
        place_order(db_session, payload)

    assert excinfo.value.missing_ids == [42]
    assert excinfo.value.status_code == 400
    assert _count(db_session, Order) == 0


def test_place_order_wraps_store_errors(db_session, seed_products):
    payload = OrderCreate.model_validate(
        {
            "customerName": "Bob",
            "orderDate": "2024-02-02",
            "status": "pending",
            "products": [{"productId": 1, "quantity": 1}],
        }
    )

    with _failing_on("INSERT INTO ORDERS"):
        with pytest.raises(OrderPlacementError) as excinfo:
            place_order(db_session, payload)

    assert isinstance(excinfo.value.__cause__, OperationalError)
    assert _count(db_session, Order) == 0


def test_place_order_returns_id(db_session, seed_products):
    payload = OrderCreate(
        customer_name="Carol",
        order_date=date(2024, 3, 3),
        status="processing",
        products=[{"product_id": 2, "quantity": 5}],
    )

    order_id = place_order(db_session, payload)

    order = db_session.get(Order, order_id)
    assert order.status == "processing"
    assert [(d.product_id, d.quantity) for d in order.details] == [(2, 5)]


def test_store_rejects_lines_for_unknown_products(db_session, seed_products):
    order = Order(customer_name="Direct", order_date=date(2024, 2, 2), status="pending")
    db_session.add(order)
    db_session.flush()
    db_session.add(OrderDetail(order_id=order.order_id, product_id=404, quantity=1))

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

    assert _count(db_session, Order) == 0


def test_store_keeps_products_referenced_by_order_lines(client, db_session, seed_products, make_order):
    assert client.post("/api/orders", json=make_order([{"productId": 1, "quantity": 1}])).status_code == 200

    db_session.delete(db_session.get(Product, 1))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

    assert _count(db_session, OrderDetail) == 1
