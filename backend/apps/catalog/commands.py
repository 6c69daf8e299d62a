from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional


@dataclass
class ProductCreateCommand:
    name: Optional[str]
    price: Optional[Decimal]
    labels: Optional[List[str]] = field(default_factory=list)

    @staticmethod
    def _parse_price(raw) -> Optional[Decimal]:
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, Decimal):
            return raw
        try:
            # str() first so floats keep their printed digits
            return Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            return None

    @staticmethod
    def _parse_labels(raw) -> Optional[List[str]]:
        if raw is None:
            return None
        if isinstance(raw, str):
            raw = [raw]
        return [str(label).strip() for label in raw]

    @staticmethod
    def from_raw(payload: Dict[str, Any]):
        data = dict(payload or {})
        # ids and timestamps are assigned by the store
        data.pop("product_id", None)
        data.pop("id", None)
        data.pop("added_at", None)
        name = data.get("name")
        return ProductCreateCommand(
            name=str(name).strip() if name is not None else None,
            price=ProductCreateCommand._parse_price(data.get("price")),
            labels=ProductCreateCommand._parse_labels(data.get("labels")),
        )
