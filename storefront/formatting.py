# storefront/formatting.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Union

CURRENCY = "₹"

Number = Union[Decimal, int, float, str]


def format_money(amount: Number, currency: str = CURRENCY) -> str:
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{currency}{value}"


def product_label(p: Mapping[str, Any], currency: str = CURRENCY) -> str:
    """`[id] name - category - ₹price (Stock: n)`; takes a product dict from the API."""
    return (f"[{p['id']}] {p['name']} - {p['category']} - "
            f"{format_money(p['price'], currency)} (Stock: {p['stock']})")


def cart_line_label(line: Mapping[str, Any], currency: str = CURRENCY) -> str:
    product = line["product"]
    return f"{product['name']} x {line['quantity']} = {format_money(line['line_total'], currency)}"
