# sdk/storefront_client.py
import uuid
from typing import Any, Optional

import requests


class StoreAPIError(Exception):
    def __init__(self, status_code: int, detail: str, payload: Any = None):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.payload = payload


class StoreClient:
    """Thin client for the storefront HTTP API.

    `session` may be any requests-compatible object (a TestClient works too).
    The token from `login` is kept and sent with later calls.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8085", timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.token: Optional[str] = None
        self.username: Optional[str] = None
        self.is_admin = False

    def _headers(self, extra: Optional[dict] = None) -> dict:
        headers = {}
        if self.token:
            headers["Session-Token"] = self.token
        if extra:
            headers.update(extra)
        return headers

    def _request(self, method: str, path: str, headers: Optional[dict] = None, **kwargs):
        r = self.session.request(method, f"{self.base_url}{path}", headers=self._headers(headers),
                                 timeout=self.timeout, **kwargs)
        try:
            body = r.json()
        except ValueError:
            body = None
        if r.status_code >= 400:
            detail = body.get("detail") if isinstance(body, dict) else r.text
            raise StoreAPIError(r.status_code, str(detail), body)
        return body

    def _make_idempotency_key(self, provided: Optional[str]) -> str:
        return provided if provided else uuid.uuid4().hex

    def reset(self, seed: bool = True):
        self.token = None
        self.username = None
        self.is_admin = False
        return self._request("POST", "/reset", params={"seed": "true" if seed else "false"})

    # Accounts
    def register(self, username: str, password: str):
        return self._request("POST", "/accounts/register", json={"username": username, "password": password})

    def login(self, username: str, password: str):
        body = self._request("POST", "/accounts/login", json={"username": username, "password": password})
        self.token = body["token"]
        self.username = body["username"]
        self.is_admin = body["is_admin"]
        return body

    def logout(self):
        body = self._request("POST", "/accounts/logout")
        self.token = None
        self.username = None
        self.is_admin = False
        return body

    # Products
    def list_categories(self):
        return self._request("GET", "/categories")

    def list_products(self, category: Optional[str] = None):
        params = {"category": category} if category else {}
        return self._request("GET", "/products", params=params)

    def search_products(self, name: str):
        return self._request("GET", "/products/search", params={"name": name})

    def get_product(self, product_id: int):
        return self._request("GET", f"/products/{product_id}")

    def add_product(self, name: str, category: str, price: Any, stock: Any):
        return self._request("POST", "/admin/products", json={
            "name": name, "category": category, "price": str(price), "stock": stock
        })

    # Cart
    def add_to_cart(self, product_id: int, quantity: Any = 1):
        return self._request("POST", "/cart/add", json={"product_id": product_id, "quantity": quantity})

    def remove_from_cart(self, index: int):
        return self._request("DELETE", f"/cart/items/{index}")

    def view_cart(self):
        return self._request("GET", "/cart")

    def checkout(self, idempotency_key: Optional[str] = None):
        key = self._make_idempotency_key(idempotency_key)
        return self._request("POST", "/cart/checkout", headers={"Idempotency-Key": key})

    def list_orders(self):
        return self._request("GET", "/orders")
