# storefront/catalog.py
import logging
from decimal import Decimal
from typing import Dict, List, Optional

from .errors import NotFound
from .models import Product

logger = logging.getLogger(__name__)

FIRST_PRODUCT_ID = 1001


class Catalog:
    """Product records plus a category index kept in step with them.

    The catalog stores whatever it is given; input checks belong to the caller.
    """

    def __init__(self, first_id: int = FIRST_PRODUCT_ID):
        self._products: Dict[int, Product] = {}
        self._by_category: Dict[str, List[Product]] = {}
        self._next_id = first_id

    def __len__(self) -> int:
        return len(self._products)

    def add_product(self, name: str, category: str, price: Decimal, stock: int) -> Product:
        product = Product(id=self._next_id, name=name, category=category, price=price, stock=stock)
        self._next_id += 1
        self._products[product.id] = product
        self._by_category.setdefault(category, []).append(product)
        logger.debug("catalog: added %s (%s) as %d", name, category, product.id)
        return product

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    def _require(self, product_id: int) -> Product:
        p = self._products.get(product_id)
        if p is None:
            raise NotFound(f"product {product_id} not found")
        return p

    def list_by_category(self, category: str) -> List[Product]:
        return list(self._by_category.get(category, []))

    def list_categories(self) -> List[str]:
        return sorted(self._by_category)

    def all_products(self) -> List[Product]:
        return [self._products[pid] for pid in sorted(self._products)]

    def search(self, term: str) -> List[Product]:
        term = term.lower()
        return [p for p in self.all_products() if term in p.name.lower()]

    def category_index(self) -> Dict[str, List[Product]]:
        return {cat: list(items) for cat, items in self._by_category.items()}

    def reduce_stock(self, product_id: int, qty: int) -> Product:
        # floors at zero instead of failing
        p = self._require(product_id)
        p.reduce_stock(qty)
        return p

    def increase_stock(self, product_id: int, qty: int) -> Product:
        p = self._require(product_id)
        p.increase_stock(qty)
        return p
