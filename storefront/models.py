# storefront/models.py
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field


class Product(BaseModel):
    id: int = Field(frozen=True)
    name: str
    category: str
    price: Decimal
    stock: int

    def reduce_stock(self, qty: int) -> None:
        self.stock = max(0, self.stock - qty)

    def increase_stock(self, qty: int) -> None:
        self.stock += qty


class CartLine(BaseModel):
    product: Product
    quantity: int

    @property
    def total(self) -> Decimal:
        return self.product.price * self.quantity


class ReceiptLine(BaseModel):
    product_id: int
    name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class Receipt(BaseModel):
    order_id: str
    username: str
    items: List[ReceiptLine]
    total: Decimal
    status: str = "placed"
