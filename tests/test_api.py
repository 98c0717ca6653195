import pytest
from fastapi.testclient import TestClient
from jose import jwt

from main import create_app

ADMIN_EMAIL = "admin@piwkina.ge"


@pytest.fixture
def client(backend, storage):
    with TestClient(create_app(backend, storage, admin_email=ADMIN_EMAIL)) as test_client:
        yield test_client


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def sign_up(client, email="nino@piwkina.ge"):
    """Sign up and make `client` send the new token from now on."""
    response = client.post("/auth/signup", json={"email": email, "password": "khachapuri"})
    assert response.status_code == 200
    token = response.json()["accessToken"]
    client.headers.update(bearer(token))
    return token


def test_signed_out_requests_get_sign_in_prompt(client):
    assert client.get("/session").json()["status"] == "signed_out"

    response = client.get("/home")

    assert response.status_code == 401
    assert response.json()["detail"]["action"] == "Sign In"


def test_login_and_logout(client):
    sign_up(client)
    assert client.post("/auth/logout").json()["status"] == "signed_out"
    assert client.get("/home").status_code == 401
    assert client.post("/auth/login", json={"email": "nino@piwkina.ge", "password": "bad"}).status_code == 401

    response = client.post("/auth/login", json={"email": "nino@piwkina.ge", "password": "khachapuri"})

    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["email"] == "nino@piwkina.ge"
    client.headers.update(bearer(body["accessToken"]))
    assert client.get("/session").json()["status"] == "ready"


def test_admin_routes_only_serve_the_admin_token(client):
    admin_token = sign_up(client, ADMIN_EMAIL)
    assert client.get("/admin/products").status_code == 200

    del client.headers["Authorization"]
    assert client.get("/admin/products").status_code == 401

    sign_up(client)
    assert client.get("/admin/products").status_code == 403
    assert client.get("/admin/products", headers=bearer(admin_token)).status_code == 200


def test_forged_and_garbage_tokens_are_signed_out(client, admin):
    forged = jwt.encode({"sub": admin.id, "sid": "deadbeef"}, "not-the-secret", algorithm="HS256")

    assert client.get("/admin", headers=bearer(forged)).status_code == 401
    assert client.get("/admin", headers=bearer("not-a-token")).status_code == 401
    assert client.get("/session", headers=bearer("not-a-token")).json()["status"] == "signed_out"


def test_clients_keep_separate_carts_and_languages(client, make_product):
    make_product("prod_1")
    first = sign_up(client, "nino@piwkina.ge")
    client.post("/cart/items", json={"productId": "prod_1"})

    sign_up(client, "giorgi@piwkina.ge")
    client.post("/language/toggle")

    assert client.get("/cart").json()["empty"] is True
    assert client.get("/session").json()["language"] == "ka"
    assert len(client.get("/cart", headers=bearer(first)).json()["items"]) == 1
    assert client.get("/session", headers=bearer(first)).json()["language"] == "en"


def test_session_and_cart_survive_restart(backend, storage, make_product):
    make_product("prod_1")
    with TestClient(create_app(backend, storage, admin_email=ADMIN_EMAIL)) as first:
        token = sign_up(first)
        first.post("/cart/items", json={"productId": "prod_1"})

    with TestClient(create_app(backend, storage, admin_email=ADMIN_EMAIL)) as second:
        second.headers.update(bearer(token))

        assert second.get("/session").json()["status"] == "ready"
        assert len(second.get("/cart").json()["items"]) == 1


def test_browse_add_and_checkout(client, make_product, backend):
    make_product("prod_1", name_en="Roasted Pork", price=30.0)
    make_product("prod_2", name_en="Hidden", is_active=False)
    sign_up(client)

    listing = client.get("/products", params={"search": "pork"}).json()
    assert [p["id"] for p in listing["products"]] == ["prod_1"]

    assert client.post("/products/prod_1/quantity", json={"change": 0.5}).json()["weightKg"] == 1.5
    added = client.post("/cart/items", json={"productId": "prod_1"}).json()
    assert added["item"]["totalPrice"] == 45.0
    assert added["cartItemsCount"] == 1

    assert client.post("/cart/items", json={"productId": "prod_2"}).status_code == 404

    result = client.post("/cart/checkout", json={"name": "Nino", "phone": "555", "address": "Rustaveli 1"}).json()

    assert result["placed"] is True
    assert result["empty"] is True
    assert result["toasts"][0]["title"] == "Order placed successfully!"
    assert len(backend.orders.list()) == 1


def test_checkout_validation_toast(client, make_product):
    make_product("prod_1")
    sign_up(client)
    client.post("/cart/items", json={"productId": "prod_1", "weightKg": 2})

    result = client.post("/cart/checkout", json={"phone": "555"}).json()

    assert result["placed"] is False
    assert result["toasts"] == [{"title": "Missing Information", "description": "Please fill in all required fields",
                                 "variant": "destructive"}]
    assert len(result["items"]) == 1


def test_remove_and_clear_cart(client, make_product):
    make_product("prod_1")
    sign_up(client)
    first = client.post("/cart/items", json={"productId": "prod_1"}).json()["item"]
    client.post("/cart/items", json={"productId": "prod_1"})

    after_remove = client.delete(f"/cart/items/{first['id']}").json()
    assert len(after_remove["items"]) == 1

    assert client.delete("/cart").json()["empty"] is True


def test_language_toggle_changes_content(client, make_product):
    make_product("prod_1", name_en="Roasted Pork", name_ka="შემწვარი გოჭი")
    sign_up(client)

    client.post("/language/toggle")
    home = client.get("/home").json()
    layout = client.get("/layout").json()

    assert home["featured"][0]["name"] == "შემწვარი გოჭი"
    assert layout["header"]["languageSwitch"] == "ENG"
    assert layout["footer"]["address"] == "თბილისი, საქართველო"


def test_contact_form(client, backend):
    sign_up(client)

    missing = client.post("/contact", json={"name": "Nino"}).json()
    assert missing["sent"] is False

    sent = client.post("/contact", json={"name": "Nino", "email": "nino@piwkina.ge", "message": "Hi"}).json()
    assert sent["sent"] is True
    assert backend.messages.list()[0]["message"] == "Hi"


def test_admin_routes_need_admin_role(client):
    sign_up(client)

    assert client.get("/admin").status_code == 403
    layout = client.get("/layout", params={"path": "/admin/products"}).json()
    assert layout["header"]["showAdmin"] is True


def test_admin_product_lifecycle(client, backend):
    sign_up(client, ADMIN_EMAIL)

    created = client.post("/admin/products", json={"nameEn": "Pork", "nameKa": "გოჭი", "pricePerKg": 30}).json()
    assert created["saved"] is True
    product_id = created["items"][0]["id"]

    edited = client.put(f"/admin/products/{product_id}", json={"pricePerKg": "35"}).json()
    assert edited["items"][0]["pricePerKg"] == 35.0
    assert edited["items"][0]["nameEn"] == "Pork"

    toggled = client.post(f"/admin/products/{product_id}/toggle").json()
    assert toggled["items"][0]["isActive"] is False

    declined = client.delete(f"/admin/products/{product_id}").json()
    assert declined["deleted"] is False
    deleted = client.delete(f"/admin/products/{product_id}", params={"confirm": "true"}).json()
    assert deleted["deleted"] is True
    assert backend.products.list() == []

    assert client.put("/admin/products/prod_missing", json={}).status_code == 404


def test_admin_orders_flow(client, backend):
    sign_up(client, ADMIN_EMAIL)
    for order_id, status in [("order_1", "pending"), ("order_2", "completed")]:
        backend.orders.create({"id": order_id, "customer_name": "Nino", "customer_phone": "555",
                               "customer_address": "Rustaveli 1", "total_amount": 10.0, "status": status})

    pending = client.get("/admin/orders", params={"status": "pending"}).json()
    assert [o["id"] for o in pending["items"]] == ["order_1"]

    details = client.get("/admin/orders/order_1").json()
    assert details["order"]["items"] == []

    updated = client.post("/admin/orders/order_1/status", json={"status": "cancelled"}).json()
    assert updated["updated"] is True
    assert client.get("/admin/orders/order_missing").status_code == 404


def test_admin_pages_and_menus(client):
    sign_up(client, ADMIN_EMAIL)

    page = client.post("/admin/pages", json={"titleEn": "About Us!", "titleKa": "ჩვენ შესახებ"}).json()
    assert page["items"][0]["slug"] == "about-us"

    menu = client.post("/admin/menus", json={"titleEn": "Blog", "titleKa": "ბლოგი", "url": "/blog"}).json()
    assert menu["saved"] is True
    assert client.get("/admin/menus").json()["items"][0]["url"] == "/blog"

    dashboard = client.get("/admin").json()
    assert dashboard["stats"]["totalOrders"] == 0
