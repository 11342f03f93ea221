"""Tests for the /api/users administration endpoints."""

from models.cart import Cart
from models.log import Log
from models.order import Order
from models.users import User


class TestUserAdministration:
    def test_list_requires_admin(self, client, customer_headers, admin_headers, customer, admin):
        assert client.get("/api/users", headers=customer_headers).status_code == 403

        response = client.get("/api/users", headers=admin_headers)
        assert response.status_code == 200
        assert {u["email"] for u in response.json()} == {customer.email, admin.email}

    def test_get_user(self, client, admin_headers, customer):
        response = client.get(f"/api/users/{customer.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["firstName"] == "Test"

        response = client.get("/api/users/9999", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_delete_user_removes_cart(self, client, admin_headers, customer, customer_headers, make_product, db_session):
        customer_id = customer.id
        product = make_product()
        client.post("/api/cart/add", json={"productId": product.id, "size": "M", "quantity": 1}, headers=customer_headers)

        response = client.delete(f"/api/users/{customer_id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == f"User {customer_id} deleted successfully"

        db_session.expire_all()
        assert db_session.query(User).filter(User.id == customer_id).first() is None
        assert db_session.query(Cart).count() == 0

    def test_cannot_delete_self(self, client, admin, admin_headers):
        response = client.delete(f"/api/users/{admin.id}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "You cannot delete your own account"

    def test_toggle_active_blocks_access(self, client, admin_headers, customer, customer_headers):
        response = client.patch(f"/api/users/toggle-active/{customer.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"message": f"User {customer.id} is now inactive", "isActive": False}

        response = client.get("/api/cart", headers=customer_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Account is inactive"

        response = client.patch(f"/api/users/toggle-active/{customer.id}", headers=admin_headers)
        assert response.json()["isActive"] is True
        assert client.get("/api/cart", headers=customer_headers).status_code == 200

    def test_deleted_users_orders_do_not_pass_to_new_account(
        self, client, admin_headers, customer, customer_headers, make_user, headers_for,
        make_product, shipping_address, db_session,
    ):
        customer_id = customer.id
        product = make_product()
        payload = {
            "items": [{"product": product.id, "size": "M", "quantity": 1}],
            "shippingAddress": shipping_address,
            "subtotal": 2500.0,
            "shippingFee": 350.0,
            "total": 2850.0,
        }
        order_id = client.post("/api/orders/create", json=payload, headers=customer_headers).json()["order"]["id"]
        client.get("/api/cart", headers=customer_headers)

        assert client.delete(f"/api/users/{customer_id}", headers=admin_headers).status_code == 200

        db_session.expire_all()
        assert db_session.get(Order, order_id).user_id is None
        assert db_session.query(Log).filter(Log.user_id == customer_id).count() == 0

        newcomer = make_user()
        headers = headers_for(newcomer)
        assert client.get("/api/orders/user/all", headers=headers).json()["orders"] == []
        assert client.get(f"/api/orders/{order_id}", headers=headers).status_code == 404

        # Still visible to administrators as history
        assert client.get(f"/api/orders/{order_id}", headers=admin_headers).status_code == 200
