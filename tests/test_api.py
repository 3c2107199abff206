# tests/test_api.py
from decimal import Decimal

from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.main import create_app

app = create_app(settings=Settings(seed_demo_data=True))
client = TestClient(app)


def reset(seed=True):
    client.post("/reset", params={"seed": str(seed).lower()})


def login(username="user1", password="pass1"):
    r = client.post("/accounts/login", json={"username": username, "password": password})
    assert r.status_code == 200
    return {"Session-Token": r.json()["token"]}


def test_register_and_login():
    reset()
    r = client.post("/accounts/register", json={"username": "dave", "password": "pw"})
    assert r.status_code == 201
    r = client.post("/accounts/register", json={"username": "dave", "password": "other"})
    assert r.status_code == 409
    assert r.json()["detail"] == "Username already exists."

    r = client.post("/accounts/login", json={"username": "dave", "password": "pw"})
    assert r.status_code == 200
    assert r.json()["is_admin"] is False

    wrong = client.post("/accounts/login", json={"username": "dave", "password": "nope"})
    unknown = client.post("/accounts/login", json={"username": "nobody", "password": "nope"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_browse():
    reset()
    assert client.get("/categories").json() == ["Clothing", "Electronics", "Footwear", "Home Appliances"]
    names = [p["name"] for p in client.get("/products", params={"category": "Clothing"}).json()]
    assert names == ["Shirt", "Jeans"]
    assert client.get("/products", params={"category": "Toys"}).json() == []
    laptop = client.get("/products/1001").json()
    assert laptop["stock"] == 7
    assert Decimal(laptop["price"]) == Decimal("55000")
    assert client.get("/products/77").status_code == 404
    assert [p["id"] for p in client.get("/products/search", params={"name": "phone"}).json()] == [1002, 1003]


def test_cart_requires_login():
    reset()
    assert client.get("/cart").status_code == 401
    assert client.post("/cart/add", json={"product_id": 1001, "quantity": 1}).status_code == 401


def test_cart_and_checkout_flow():
    reset()
    h = login()
    client.post("/cart/add", json={"product_id": 1004, "quantity": 2}, headers=h)
    r = client.post("/cart/add", json={"product_id": 1004, "quantity": 3}, headers=h)
    assert r.status_code == 200
    cart = r.json()
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 5

    r = client.post("/cart/add", json={"product_id": 1001, "quantity": 8}, headers=h)
    assert r.status_code == 400

    client.post("/cart/add", json={"product_id": 1006, "quantity": 1}, headers=h)
    cart = client.get("/cart", headers=h).json()
    assert Decimal(cart["total"]) == Decimal("799") * 5 + Decimal("2499")

    r = client.post("/cart/checkout", headers={**h, "Idempotency-Key": "order-1"})
    assert r.status_code == 200
    receipt = r.json()
    assert receipt["status"] == "placed"
    assert Decimal(receipt["total"]) == Decimal(cart["total"])
    assert client.get("/products/1004").json()["stock"] == 55
    assert client.get("/cart", headers=h).json()["items"] == []

    # replay returns the same receipt without touching stock again
    again = client.post("/cart/checkout", headers={**h, "Idempotency-Key": "order-1"}).json()
    assert again["order_id"] == receipt["order_id"]
    assert client.get("/products/1004").json()["stock"] == 55

    orders = client.get("/orders", headers=h).json()
    assert [o["order_id"] for o in orders] == [receipt["order_id"]]


def test_remove_line():
    reset()
    h = login()
    client.post("/cart/add", json={"product_id": 1001, "quantity": 1}, headers=h)
    client.post("/cart/add", json={"product_id": 1002, "quantity": 1}, headers=h)
    r = client.delete("/cart/items/0", headers=h)
    assert r.status_code == 200
    assert r.json()["removed"]["product"]["name"] == "Laptop"
    assert [i["product"]["id"] for i in r.json()["items"]] == [1002]
    assert client.delete("/cart/items/1", headers=h).status_code == 404


def test_insufficient_stock_reports_every_line():
    reset()
    shopper = login()
    admin = login("admin", "admin")
    client.post("/cart/add", json={"product_id": 1007, "quantity": 5}, headers=shopper)
    client.post("/cart/add", json={"product_id": 1001, "quantity": 7}, headers=shopper)
    client.post("/cart/add", json={"product_id": 1007, "quantity": 1}, headers=admin)
    client.post("/cart/add", json={"product_id": 1001, "quantity": 1}, headers=admin)
    assert client.post("/cart/checkout", headers=admin).status_code == 200

    r = client.post("/cart/checkout", headers=shopper)
    assert r.status_code == 409
    body = r.json()
    assert [(s["name"], s["available"]) for s in body["shortages"]] == [("Washing Machine", 4), ("Laptop", 6)]
    assert "Not enough stock for Laptop. Available: 6" in body["detail"]
    assert len(client.get("/cart", headers=shopper).json()["items"]) == 2


def test_admin_add_product():
    reset()
    payload = {"name": "Sandals", "category": "Footwear", "price": "349.90", "stock": "12"}
    assert client.post("/admin/products", json=payload).status_code == 401
    assert client.post("/admin/products", json=payload, headers=login()).status_code == 403

    admin = login("admin", "admin")
    r = client.post("/admin/products", json=payload, headers=admin)
    assert r.status_code == 201
    assert r.json()["id"] == 1008
    names = [p["name"] for p in client.get("/products", params={"category": "Footwear"}).json()]
    assert names == ["Running Shoes", "Sandals"]

    bad = dict(payload, price="cheap")
    assert client.post("/admin/products", json=bad, headers=admin).status_code == 400


def test_logout_invalidates_token():
    reset()
    h = login()
    client.post("/cart/add", json={"product_id": 1001, "quantity": 1}, headers=h)
    assert client.post("/accounts/logout", headers=h).status_code == 200
    assert client.get("/cart", headers=h).status_code == 401
    assert client.post("/accounts/logout", headers=h).status_code == 401
