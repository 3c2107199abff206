# storefront/service.py
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from .accounts import AccountStore
from .catalog import Catalog, FIRST_PRODUCT_ID
from .core import parse_int, parse_price, parse_stock, require_text
from .errors import InvalidCredentials, NotFound, ValidationError
from .models import Product, Receipt
from .orders import OrderProcessor
from .session import ADMIN_USERNAME, Session, SessionController

logger = logging.getLogger(__name__)

DEMO_USERS = [("user1", "pass1"), ("admin", "admin")]

DEMO_PRODUCTS = [
    ("Laptop", "Electronics", "55000", 7),
    ("Smartphone", "Electronics", "15000", 25),
    ("Headphones", "Electronics", "1200", 50),
    ("Shirt", "Clothing", "799", 60),
    ("Jeans", "Clothing", "1299", 40),
    ("Running Shoes", "Footwear", "2499", 20),
    ("Washing Machine", "Home Appliances", "25999", 5),
]


class Storefront:
    """All business operations behind one object.

    Checks raw user input, resolves session tokens and delegates to the
    catalog, account store, carts and order processor. Each method runs to
    completion without yielding, so callers on an event loop see every
    operation as atomic.
    """

    def __init__(self, admin_username: str = ADMIN_USERNAME,
                 first_product_id: int = FIRST_PRODUCT_ID, seed: bool = False):
        self.admin_username = admin_username
        self.first_product_id = first_product_id
        self._build()
        if seed:
            self.seed_demo_data()

    def _build(self) -> None:
        self.catalog = Catalog(first_id=self.first_product_id)
        self.accounts = AccountStore()
        self.orders = OrderProcessor()
        self.sessions = SessionController(admin_username=self.admin_username)
        self._idempotency: Dict[Tuple[str, str], Receipt] = {}

    def seed_demo_data(self) -> None:
        for username, password in DEMO_USERS:
            if not self.accounts.exists(username):
                self.accounts.register(username, password)
        for name, category, price, stock in DEMO_PRODUCTS:
            self.catalog.add_product(name, category, Decimal(price), stock)
        logger.info("seeded %d users and %d products", len(DEMO_USERS), len(DEMO_PRODUCTS))

    def reset(self, seed: bool = True) -> None:
        self._build()
        if seed:
            self.seed_demo_data()
        logger.info("store reset (seed=%s)", seed)

    # Accounts
    def register(self, username: Optional[str], password: Optional[str]) -> str:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Enter username and password to register.")
        self.accounts.register(username, password)
        return username

    def login(self, username: Optional[str], password: Optional[str]) -> str:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Enter username and password.")
        try:
            return self.sessions.login(self.accounts, username, password)
        except InvalidCredentials:
            logger.warning("failed login for %s", username)
            raise

    def logout(self, token: Optional[str]) -> None:
        self.sessions.logout(token)

    def session(self, token: Optional[str]) -> Session:
        return self.sessions.get(token)

    def is_admin(self, token: Optional[str]) -> bool:
        return self.sessions.is_admin(self.sessions.get(token))

    # Catalog
    def list_categories(self) -> List[str]:
        return self.catalog.list_categories()

    def list_products(self, category: Optional[str] = None) -> List[Product]:
        if category:
            return self.catalog.list_by_category(category)
        return self.catalog.all_products()

    def search_products(self, term: str) -> List[Product]:
        return self.catalog.search(term)

    def get_product(self, product_id: int) -> Product:
        p = self.catalog.get_by_id(product_id)
        if p is None:
            raise NotFound("Product not found.")
        return p

    def add_product(self, token: Optional[str], name: Optional[str], category: Optional[str],
                    price: Any, stock: Any) -> Product:
        self.sessions.require_admin(token)
        price = parse_price(price)
        stock = parse_stock(stock)
        name = require_text(name, "Name and category required.")
        category = require_text(category, "Name and category required.")
        p = self.catalog.add_product(name, category, price, stock)
        logger.info("product %d added: %s", p.id, p.name)
        return p

    # Cart
    def add_to_cart(self, token: Optional[str], product_id: int, qty: Any = 1):
        session = self.sessions.get(token)
        p = self.get_product(product_id)
        if p.stock <= 0:
            raise ValidationError("Product out of stock.")
        qty = parse_int(qty, "Invalid quantity.")
        if qty <= 0 or qty > p.stock:
            raise ValidationError("Quantity must be >0 and <= available stock.")
        return session.cart.add_item(p, qty)

    def remove_from_cart(self, token: Optional[str], index: int):
        return self.sessions.get(token).cart.remove_item(index)

    def view_cart(self, token: Optional[str]) -> Session:
        return self.sessions.get(token)

    # Orders
    def checkout(self, token: Optional[str], idempotency_key: Optional[str] = None) -> Receipt:
        session = self.sessions.get(token)
        if idempotency_key:
            prev = self._idempotency.get((session.username, idempotency_key))
            if prev is not None:
                return prev
        receipt = self.orders.checkout(session.cart, self.catalog, username=session.username)
        if idempotency_key:
            self._idempotency[(session.username, idempotency_key)] = receipt
        return receipt

    def list_orders(self, token: Optional[str]) -> List[Receipt]:
        return self.orders.orders_for(self.sessions.get(token).username)
