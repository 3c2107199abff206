# storefront/orders.py
import logging
import uuid
from decimal import Decimal
from typing import Dict, List

from .cart import Cart
from .catalog import Catalog
from .errors import InsufficientStock, NotFound, ValidationError
from .models import Receipt, ReceiptLine

logger = logging.getLogger(__name__)


class OrderProcessor:
    """Turns a cart into reduced stock and a receipt.

    Every line is checked against live catalog stock before anything is
    deducted, so a failed checkout leaves both the cart and the catalog as
    they were.
    """

    def __init__(self):
        self._orders: Dict[str, Receipt] = {}

    def checkout(self, cart: Cart, catalog: Catalog, username: str = "") -> Receipt:
        if not len(cart):
            raise ValidationError("Cart is empty.")

        # Validate
        shortages = []
        for line in cart:
            prod = catalog.get_by_id(line.product.id)
            if prod is None:
                raise NotFound(f"product {line.product.id} not found")
            if line.quantity > prod.stock:
                shortages.append({
                    "product_id": prod.id,
                    "name": prod.name,
                    "requested": line.quantity,
                    "available": prod.stock,
                })
        if shortages:
            logger.warning("checkout for %s refused: %d line(s) short", username or "?", len(shortages))
            raise InsufficientStock(shortages)

        # Commit
        total = Decimal("0")
        items = []
        for line in cart:
            prod = catalog.reduce_stock(line.product.id, line.quantity)
            line_total = prod.price * line.quantity
            total += line_total
            items.append(ReceiptLine(
                product_id=prod.id,
                name=prod.name,
                quantity=line.quantity,
                unit_price=prod.price,
                line_total=line_total,
            ))
        cart.clear()

        receipt = Receipt(order_id=uuid.uuid4().hex, username=username, items=items, total=total)
        self._orders[receipt.order_id] = receipt
        logger.info("order %s placed by %s, total %s", receipt.order_id, username or "?", total)
        return receipt

    def get(self, order_id: str) -> Receipt:
        r = self._orders.get(order_id)
        if r is None:
            raise NotFound("order not found")
        return r

    def orders_for(self, username: str) -> List[Receipt]:
        return [o for o in self._orders.values() if o.username == username]
