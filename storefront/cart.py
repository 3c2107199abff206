# storefront/cart.py
from decimal import Decimal
from typing import Iterator, List

from .errors import NotFound
from .models import CartLine, Product


class Cart:
    def __init__(self):
        self._lines: List[CartLine] = []

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self._lines)

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines)

    def add_item(self, product: Product, qty: int) -> CartLine:
        """Add `qty` of `product`, merging into an existing line for the same id.

        The caller checks 1 <= qty <= product.stock beforehand.
        """
        for line in self._lines:
            if line.product.id == product.id:
                line.quantity += qty
                return line
        line = CartLine(product=product, quantity=qty)
        self._lines.append(line)
        return line

    def remove_item(self, index: int) -> CartLine:
        if index < 0 or index >= len(self._lines):
            raise NotFound(f"no cart line at index {index}")
        return self._lines.pop(index)

    @staticmethod
    def line_total(line: CartLine) -> Decimal:
        return line.total

    def total(self) -> Decimal:
        return sum((line.total for line in self._lines), Decimal("0"))

    def clear(self) -> None:
        self._lines.clear()
