import pytest

from conftest import bearer
from database import SessionLocal
from models.log import Log
from models.order import Order
from models.product import Product
from models.users import User
from schemas.order import OrderItemIn
from services import order_service
from utils.exceptions import InsufficientStock
from utils.tokenJWT import create_user_token

SHIPPING = {
    "fullName": "Jane Buyer",
    "address": "123 Test Street",
    "city": "Test City",
    "state": "Test State",
    "zipCode": "12345",
    "phone": "+1234567891",
}


def _stock(db, product_id):
    db.expire_all()
    return db.get(Product, product_id).stock


def test_place_order_round_trip(client, buyer_headers, db):
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 1, "quantity": 1, "price": 120}],
        "totalAmount": 120,
        "shippingAddress": SHIPPING,
        "paymentMethod": "cash_on_delivery",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Order placed successfully"
    order = data["order"]
    assert order["status"] == "pending"
    assert order["totalAmount"] == 120
    assert order["userId"] == 2
    assert order["paymentMethod"] == "cash_on_delivery"
    assert order["shippingAddress"] == SHIPPING
    assert order["items"] == [
        {"productId": 1, "quantity": 1, "price": 120, "title": "Leather Jacket", "lineTotal": 120}
    ]
    assert _stock(db, 1) == 9
    assert db.query(Order).count() == 1


def test_submitted_total_is_stored_as_is(client, buyer_headers):
    # Client totals can include shipping
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 2, "quantity": 1, "price": 80}],
        "totalAmount": 90.99,
        "shippingAddress": SHIPPING,
        "paymentMethod": "credit_card",
    })

    order = response.json()["order"]
    assert order["totalAmount"] == 90.99
    assert order["paymentMethod"] == "credit_card"


def test_order_decrements_every_product(client, buyer_headers, db):
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 3, "quantity": 2}, {"productId": 4, "quantity": 5}],
        "totalAmount": 600,
    })

    assert response.status_code == 201
    assert _stock(db, 3) == 6
    assert _stock(db, 4) == 15


def test_defaults_for_address_and_payment(client, buyer_headers):
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 1, "quantity": 1}],
        "totalAmount": 120,
    })

    order = response.json()["order"]
    assert order["paymentMethod"] == "cash_on_delivery"
    assert order["shippingAddress"] == {
        "fullName": "Jane Buyer",
        "address": "456 Buyer Ave, Shopping Town",
        "city": "",
        "state": "",
        "zipCode": "",
        "phone": "+1234567891",
    }


def test_price_comes_from_product_not_client(client, buyer_headers):
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 1, "quantity": 2, "price": 1}],
        "totalAmount": 240,
    })

    assert response.json()["order"]["items"][0]["price"] == 120


def test_insufficient_stock_changes_nothing(client, buyer_headers, db):
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 1, "quantity": 2}, {"productId": 5, "quantity": 6}],
        "totalAmount": 4434,
    })

    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient stock for Smartphone"
    assert _stock(db, 1) == 10
    assert _stock(db, 5) == 5
    assert db.query(Order).count() == 0
    assert db.query(Log).filter(Log.action == "ORDER_CREATE", Log.status == "FAIL").count() == 1


def test_repeated_lines_count_against_stock_together(client, buyer_headers, db):
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 5, "quantity": 3}, {"productId": 5, "quantity": 3}],
        "totalAmount": 4194,
    })

    assert response.status_code == 400
    assert _stock(db, 5) == 5


def test_unknown_product_fails_with_its_id(client, buyer_headers, db):
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 1, "quantity": 1}, {"productId": 77, "quantity": 1}],
        "totalAmount": 120,
    })

    assert response.status_code == 404
    assert "77" in response.json()["detail"]
    assert _stock(db, 1) == 10


def test_empty_items_rejected(client, buyer_headers):
    response = client.post("/api/orders", headers=buyer_headers, json={"items": [], "totalAmount": 0})

    assert response.status_code == 400
    assert response.json()["detail"] == "At least one item is required"


def test_invalid_quantity_rejected(client, buyer_headers, db):
    response = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 1, "quantity": -3}],
        "totalAmount": 0,
    })

    assert response.status_code == 400
    assert _stock(db, 1) == 10


def test_seller_cannot_order_even_with_bad_body(client, seller_headers):
    response = client.post("/api/orders", headers=seller_headers, json={"items": []})

    assert response.status_code == 403
    assert response.json()["detail"] == "Only buyers can place orders"


def test_order_snapshot_survives_product_changes(client, buyer_headers, db):
    client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 1, "quantity": 1}],
        "totalAmount": 120,
    })
    product = db.get(Product, 1)
    product.title = "Vintage Leather Jacket"
    product.price = 250
    db.commit()

    orders = client.get("/api/orders", headers=buyer_headers).json()

    assert orders[0]["items"][0]["title"] == "Leather Jacket"
    assert orders[0]["items"][0]["price"] == 120


def test_list_orders_only_own_newest_first(client, buyer_headers, register_buyer):
    other_headers = register_buyer()
    for product_id in (1, 2):
        client.post("/api/orders", headers=buyer_headers, json={
            "items": [{"productId": product_id, "quantity": 1}], "totalAmount": 1,
        })
    client.post("/api/orders", headers=other_headers, json={
        "items": [{"productId": 3, "quantity": 1}], "totalAmount": 1,
    })

    mine = client.get("/api/orders", headers=buyer_headers).json()
    theirs = client.get("/api/orders", headers=other_headers).json()

    assert [o["items"][0]["productId"] for o in mine] == [2, 1]
    assert [o["items"][0]["productId"] for o in theirs] == [3]


def test_get_order_detail_hides_other_users_orders(client, buyer_headers, register_buyer):
    created = client.post("/api/orders", headers=buyer_headers, json={
        "items": [{"productId": 1, "quantity": 1}], "totalAmount": 120,
    }).json()["order"]

    own = client.get(f"/api/orders/{created['id']}", headers=buyer_headers)
    other = client.get(f"/api/orders/{created['id']}", headers=register_buyer())

    assert own.status_code == 200
    assert own.json()["id"] == created["id"]
    assert other.status_code == 404


def test_orders_require_auth(client):
    assert client.get("/api/orders").status_code == 401


def test_last_unit_cannot_be_reserved_twice(db):
    product = db.get(Product, 5)
    product.stock = 1
    db.commit()

    # Both sessions saw stock == 1 before either reservation landed
    first, second = SessionLocal(), SessionLocal()
    try:
        assert first.get(Product, 5).stock == 1
        assert second.get(Product, 5).stock == 1

        assert order_service.reserve_stock(first, 5, 1) is True
        first.commit()
        assert order_service.reserve_stock(second, 5, 1) is False
        second.rollback()
    finally:
        first.close()
        second.close()

    assert _stock(db, 5) == 0


def test_place_order_rolls_back_when_reservation_loses_race(db, monkeypatch):
    buyer = db.query(User).filter(User.email == "jane.buyer@example.com").one()
    real_reserve = order_service.reserve_stock

    def reserve_then_lose(session, product_id, quantity):
        # Jacket reserves fine, the headphones were sold in the meantime
        if product_id == 3:
            return False
        return real_reserve(session, product_id, quantity)

    monkeypatch.setattr(order_service, "reserve_stock", reserve_then_lose)

    with pytest.raises(InsufficientStock):
        order_service.place_order(
            db, buyer,
            [OrderItemIn(product_id=1, quantity=1), OrderItemIn(product_id=3, quantity=1)],
            270,
        )

    assert _stock(db, 1) == 10
    assert db.query(Order).count() == 0


def test_placed_order_is_visible_over_http(client, db):
    buyer = db.query(User).filter(User.email == "jane.buyer@example.com").one()
    order = order_service.place_order(db, buyer, [OrderItemIn(product_id=6, quantity=2)], 190)

    orders = client.get("/api/orders", headers=bearer(create_user_token(buyer))).json()

    assert [o["id"] for o in orders] == [order.id]
    assert orders[0]["items"][0]["title"] == "Sneakers"
