from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

QUANTITY_MIN = 1
# Units per request; each unit becomes one row
QUANTITY_MAX = 1000


def _to_int(raw) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    # Fractional numbers are rejected, not truncated
    if isinstance(raw, float) and not raw.is_integer():
        return None
    if isinstance(raw, Decimal) and not (raw.is_finite() and raw == raw.to_integral_value()):
        return None
    try:
        return int(raw)
    except (ValueError, TypeError):
        return None


@dataclass
class CartItemCommand:
    product_id: Optional[int]
    quantity: Optional[int]

    @staticmethod
    def from_raw(raw: Dict[str, Any]):
        """Parse a ``{product_id, quantity}`` body. Unparseable values become None."""
        if not isinstance(raw, dict):
            raise ValueError("Payload must be a dict")
        pid = raw.get("product_id")
        if pid is None:
            pid = raw.get("productId")
        return CartItemCommand(
            product_id=_to_int(pid),
            quantity=_to_int(raw.get("quantity")),
        )


@dataclass
class CartCreateCommand:
    items: List[CartItemCommand] = field(default_factory=list)

    @staticmethod
    def from_raw(payload: Optional[Dict[str, Any]]):
        if payload is None:
            return CartCreateCommand()
        if not isinstance(payload, dict):
            raise ValueError("Payload must be a dict")
        raw_items = payload.get("products") or []
        return CartCreateCommand(items=[CartItemCommand.from_raw(r) for r in raw_items])
