"""Integration tests for the checkout and order history endpoints via TestClient."""

from decimal import Decimal

from sqlalchemy import select, func

from storefront.api.deps import get_checkout_service
from storefront.data.models import CartItemModel, OrderModel, ProductModel
from storefront.domain.errors import DataAccessFailure


def _checkout(client, address="1 Main St"):
    return client.post("/api/orders", json={"shippingAddress": address})


def _order_count(db):
    return db.scalar(select(func.count()).select_from(OrderModel))


class TestCheckoutEndpoint:
    def test_checkout_creates_order(self, client, db, logged_in, make_product, add_to_cart):
        product = make_product(price="29.99", stock=10)
        add_to_cart(logged_in, product, 2)

        response = _checkout(client)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Order placed successfully"
        assert body["totalAmount"] == "59.98"
        assert isinstance(body["orderId"], int)

        db.expire_all()
        assert db.get(ProductModel, product.id).stock == 8
        assert db.scalar(select(func.count()).select_from(CartItemModel)) == 0

    def test_checkout_invalidates_product_cache(self, client, cache, logged_in, make_product, add_to_cart):
        product = make_product(stock=10)
        add_to_cart(logged_in, product, 1)
        assert client.get("/api/products").status_code == 200
        assert "products:all" in cache.store

        assert _checkout(client).status_code == 201
        assert "products:all" not in cache.store

    def test_insufficient_stock(self, client, db, logged_in, make_product, add_to_cart):
        product = make_product(stock=3)
        add_to_cart(logged_in, product, 5)

        response = _checkout(client)

        assert response.status_code == 400
        assert response.json() == {"error": f"Insufficient stock for product {product.id}"}
        db.expire_all()
        assert db.get(ProductModel, product.id).stock == 3
        assert _order_count(db) == 0

    def test_empty_cart(self, client, db, logged_in):
        response = _checkout(client)

        assert response.status_code == 400
        assert response.json() == {"error": "Cart is empty"}
        assert _order_count(db) == 0

    def test_missing_shipping_address(self, client, db, logged_in, make_product, add_to_cart):
        add_to_cart(logged_in, make_product(), 1)

        for payload in ({"shippingAddress": ""}, {}):
            response = client.post("/api/orders", json=payload)
            assert response.status_code == 400
            assert response.json() == {"error": "Shipping address required"}

        assert _order_count(db) == 0

    def test_requires_session(self, client, db):
        response = _checkout(client)

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_session_checked_before_body(self, client, db):
        for kwargs in ({"json": {"shippingAddress": 123}}, {"content": b"not json"}, {"json": [1, 2]}):
            response = client.post("/api/orders", **kwargs)
            assert response.status_code == 401
            assert response.json() == {"error": "Authentication required"}

        assert _order_count(db) == 0

    def test_malformed_body_with_session(self, client, db, logged_in, make_product, add_to_cart):
        product = make_product(stock=10)
        add_to_cart(logged_in, product, 1)

        for kwargs in ({"json": {"shippingAddress": 123}}, {"content": b"not json"}):
            response = client.post("/api/orders", **kwargs)
            assert response.status_code == 400
            assert "error" in response.json()

        db.expire_all()
        assert db.get(ProductModel, product.id).stock == 10
        assert _order_count(db) == 0

    def test_overlong_shipping_address(self, client, db, logged_in, make_product, add_to_cart):
        add_to_cart(logged_in, make_product(stock=10), 1)

        response = _checkout(client, "x" * 600)

        assert response.status_code == 400
        assert response.json() == {"error": "Shipping address must be at most 500 characters"}
        assert _order_count(db) == 0

    def test_unexpected_failure_hides_detail(self, app, client, logged_in):
        class BrokenCheckout:
            def checkout(self, user_id, shipping_address):
                raise DataAccessFailure("connection to 10.0.0.5 refused")

        app.dependency_overrides[get_checkout_service] = lambda: BrokenCheckout()

        response = _checkout(client)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create order"}


class TestOrderHistory:
    def test_list_and_detail(self, client, logged_in, make_product, add_to_cart):
        product = make_product(name="Wireless Mouse", price="29.99", stock=10)
        add_to_cart(logged_in, product, 2)
        order_id = _checkout(client, "123 Test Street").json()["orderId"]

        orders = client.get("/api/orders").json()
        assert len(orders) == 1
        assert orders[0]["orderId"] == order_id
        assert orders[0]["status"] == "Pending"
        assert orders[0]["shippingAddress"] == "123 Test Street"
        assert orders[0]["totalAmount"] == "59.98"

        detail = client.get(f"/api/orders/{order_id}").json()
        assert detail["orderId"] == order_id
        assert len(detail["items"]) == 1
        item = detail["items"][0]
        assert item["productId"] == product.id
        assert item["name"] == "Wireless Mouse"
        assert item["quantity"] == 2
        assert item["price"] == "29.99"

    def test_other_users_order_not_found(self, client, db, logged_in, make_user):
        other = make_user(email="other@example.com")
        order = OrderModel(user_id=other.id, total_amount=Decimal("10.00"), shipping_address="Elsewhere")
        db.add(order)
        db.commit()

        response = client.get(f"/api/orders/{order.id}")

        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    def test_history_requires_session(self, client):
        assert client.get("/api/orders").status_code == 401
