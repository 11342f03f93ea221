"""Tests for the /api/cart endpoints."""

import pytest


def _add(client, headers, product_id, size, quantity):
    return client.post(
        "/api/cart/add",
        json={"productId": product_id, "size": size, "quantity": quantity},
        headers=headers,
    )


def _variants(cart):
    return {item["productId"]: {v["size"]: v["quantity"] for v in item["variants"]} for item in cart["items"]}


class TestGetCart:
    def test_placeholder_when_no_cart(self, client, customer_headers):
        response = client.get("/api/cart", headers=customer_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Cart retrieved successfully"
        assert data["cart"]["items"] == []
        assert data["cart"]["id"] is None

    def test_products_are_resolved(self, client, customer, customer_headers, make_product):
        product = make_product(name="Linen Shirt", price=4590, sizes={"M": 5})
        _add(client, customer_headers, product.id, "M", 1)

        cart = client.get("/api/cart", headers=customer_headers).json()["cart"]
        assert cart["id"] == customer.id
        assert cart["user"] == customer.id
        item = cart["items"][0]
        assert item["product"]["name"] == "Linen Shirt"
        assert item["product"]["price"] == 4590
        assert item["product"]["sizes"] == [{"size": "M", "stock": 5}]

    def test_requires_authentication(self, client):
        response = client.get("/api/cart")
        assert response.status_code in (401, 403)
        assert "message" in response.json()


class TestAddToCart:
    def test_first_add_creates_single_variant(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 3})
        response = _add(client, customer_headers, product.id, "M", 2)
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Product added to cart successfully"
        assert _variants(data["cart"]) == {product.id: {"M": 2}}

    def test_repeated_add_exceeding_stock_is_rejected(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 3})
        _add(client, customer_headers, product.id, "M", 2)

        response = _add(client, customer_headers, product.id, "M", 2)
        assert response.status_code == 400
        assert response.json()["message"] == "Only 1 items available for size 'M'"

        cart = client.get("/api/cart", headers=customer_headers).json()["cart"]
        assert _variants(cart) == {product.id: {"M": 2}}

    def test_repeated_adds_sum_quantities(self, client, customer_headers, make_product):
        product = make_product(sizes={"L": 5})
        for quantity in (1, 2, 2):
            assert _add(client, customer_headers, product.id, "L", quantity).status_code == 200

        cart = client.get("/api/cart", headers=customer_headers).json()["cart"]
        assert _variants(cart) == {product.id: {"L": 5}}
        assert _add(client, customer_headers, product.id, "L", 1).status_code == 400

    def test_new_size_appends_variant_to_same_item(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 3, "L": 3})
        _add(client, customer_headers, product.id, "M", 1)
        response = _add(client, customer_headers, product.id, "L", 2)

        cart = response.json()["cart"]
        assert len(cart["items"]) == 1
        assert _variants(cart) == {product.id: {"M": 1, "L": 2}}

    def test_quantity_above_stock_on_first_add(self, client, customer_headers, make_product):
        product = make_product(sizes={"S": 1})
        response = _add(client, customer_headers, product.id, "S", 2)
        assert response.status_code == 400
        assert response.json()["message"] == "Only 1 items available for size 'S'"

    def test_unknown_size(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 3})
        response = _add(client, customer_headers, product.id, "XXL", 1)
        assert response.status_code == 400
        assert response.json()["message"] == "Size 'XXL' not available"

    def test_unknown_product(self, client, customer_headers):
        response = _add(client, customer_headers, 999, "M", 1)
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_missing_fields(self, client, customer_headers):
        response = client.post("/api/cart/add", json={"productId": 1}, headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "size, quantity are required"

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity(self, client, customer_headers, make_product, quantity):
        product = make_product()
        response = _add(client, customer_headers, product.id, "M", quantity)
        assert response.status_code == 400
        assert "quantity" in response.json()["message"]

    def test_carts_are_per_user(self, client, make_user, headers_for, make_product):
        product = make_product(sizes={"M": 3})
        alice, bob = make_user(), make_user()
        _add(client, headers_for(alice), product.id, "M", 1)

        bob_cart = client.get("/api/cart", headers=headers_for(bob)).json()["cart"]
        assert bob_cart["items"] == []


class TestUpdateQuantity:
    def _update(self, client, headers, product_id, size, action):
        return client.post(
            "/api/cart/update-quantity",
            json={"productId": product_id, "size": size, "action": action},
            headers=headers,
        )

    def test_increment_and_decrement(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 3})
        _add(client, customer_headers, product.id, "M", 1)

        response = self._update(client, customer_headers, product.id, "M", "increment")
        assert response.status_code == 200
        assert response.json()["message"] == "Cart updated successfully"
        assert _variants(response.json()["cart"]) == {product.id: {"M": 2}}

        response = self._update(client, customer_headers, product.id, "M", "decrement")
        assert _variants(response.json()["cart"]) == {product.id: {"M": 1}}

    def test_increment_beyond_stock(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 2})
        _add(client, customer_headers, product.id, "M", 2)

        response = self._update(client, customer_headers, product.id, "M", "increment")
        assert response.status_code == 400
        assert response.json()["message"] == "Only 2 items available for size 'M'"

    def test_decrement_last_unit_removes_variant_then_item(self, client, customer_headers, make_product):
        shirt = make_product(name="Shirt", sizes={"M": 3, "L": 3})
        cap = make_product(name="Cap", sizes={"One Size": 5})
        _add(client, customer_headers, shirt.id, "M", 1)
        _add(client, customer_headers, shirt.id, "L", 1)
        _add(client, customer_headers, cap.id, "One Size", 1)

        cart = self._update(client, customer_headers, shirt.id, "M", "decrement").json()["cart"]
        assert _variants(cart) == {shirt.id: {"L": 1}, cap.id: {"One Size": 1}}

        cart = self._update(client, customer_headers, shirt.id, "L", "decrement").json()["cart"]
        assert len(cart["items"]) == 1
        assert _variants(cart) == {cap.id: {"One Size": 1}}

    def test_invalid_action(self, client, customer_headers, make_product):
        product = make_product()
        _add(client, customer_headers, product.id, "M", 1)

        response = self._update(client, customer_headers, product.id, "M", "double")
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid action, must be 'increment' or 'decrement'"

    def test_not_found_cases(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 3, "L": 3})
        other = make_product(name="Other")

        response = self._update(client, customer_headers, product.id, "M", "increment")
        assert response.status_code == 404
        assert response.json()["message"] == "Cart not found"

        _add(client, customer_headers, product.id, "M", 1)
        response = self._update(client, customer_headers, other.id, "M", "increment")
        assert response.status_code == 404
        assert response.json()["message"] == "Product not in cart"

        response = self._update(client, customer_headers, product.id, "L", "increment")
        assert response.status_code == 404
        assert response.json()["message"] == "Product size not in cart"


class TestRemoveFromCart:
    def _remove(self, client, headers, product_id, size):
        return client.post("/api/cart/remove", json={"productId": product_id, "size": size}, headers=headers)

    def test_remove_variant_and_item(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 3, "L": 3})
        _add(client, customer_headers, product.id, "M", 1)
        _add(client, customer_headers, product.id, "L", 2)

        response = self._remove(client, customer_headers, product.id, "M")
        assert response.status_code == 200
        assert response.json()["message"] == "Product removed from cart successfully"
        assert _variants(response.json()["cart"]) == {product.id: {"L": 2}}

        response = self._remove(client, customer_headers, product.id, "L")
        assert response.json()["cart"]["items"] == []

    def test_absent_size_is_noop(self, client, customer_headers, make_product):
        product = make_product(sizes={"M": 3})
        _add(client, customer_headers, product.id, "M", 1)

        response = self._remove(client, customer_headers, product.id, "XL")
        assert response.status_code == 200
        assert _variants(response.json()["cart"]) == {product.id: {"M": 1}}

    def test_missing_cart_or_item(self, client, customer_headers, make_product):
        product = make_product()
        response = self._remove(client, customer_headers, product.id, "M")
        assert response.status_code == 404
        assert response.json()["message"] == "Cart not found"

        other = make_product(name="Other")
        _add(client, customer_headers, other.id, "M", 1)
        response = self._remove(client, customer_headers, product.id, "M")
        assert response.status_code == 404
        assert response.json()["message"] == "Product not in cart"

    def test_missing_fields(self, client, customer_headers):
        response = client.post("/api/cart/remove", json={}, headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "productId, size are required"


class TestClearCart:
    def test_clear_is_idempotent(self, client, customer_headers, make_product):
        product = make_product()
        _add(client, customer_headers, product.id, "M", 2)

        for _ in range(2):
            response = client.post("/api/cart/clear", headers=customer_headers)
            assert response.status_code == 200
            assert response.json()["message"] == "Cart cleared successfully"
            assert response.json()["cart"]["items"] == []

    def test_clear_without_cart(self, client, customer_headers):
        response = client.post("/api/cart/clear", headers=customer_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Cart not found"
