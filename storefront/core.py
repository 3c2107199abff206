# storefront/core.py
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from pydantic import BaseModel

from .errors import ValidationError
from .models import CartLine, Product

# ---------------------------
# Request bodies
# ---------------------------
class CredentialsIn(BaseModel):
    username: str
    password: str

class ProductIn(BaseModel):
    # kept as raw text/numbers; Storefront.add_product does the checking
    name: str
    category: str
    price: Any
    stock: Any

class AddToCartIn(BaseModel):
    product_id: int
    quantity: Any = 1

# ---------------------------
# Input parsing
# ---------------------------
def parse_price(raw: Any) -> Decimal:
    try:
        price = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Invalid price or stock.")
    if not price.is_finite() or price < 0:
        raise ValidationError("Invalid price or stock.")
    return price

def parse_int(raw: Any, message: str) -> int:
    if isinstance(raw, bool):
        raise ValidationError(message)
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError(message)

def parse_stock(raw: Any) -> int:
    stock = parse_int(raw, "Invalid price or stock.")
    if stock < 0:
        raise ValidationError("Invalid price or stock.")
    return stock

def require_text(value: Optional[str], message: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(message)
    return value

# ---------------------------
# Response helpers
# ---------------------------
def _product_dict(p: Product) -> Dict[str, Any]:
    return p.model_dump(mode="json")

def _line_dict(index: int, line: CartLine) -> Dict[str, Any]:
    return {
        "index": index,
        "product": _product_dict(line.product),
        "quantity": line.quantity,
        "line_total": str(line.total),
    }
