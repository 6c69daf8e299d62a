from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List


@dataclass
class ProductDTO:
    id: int
    name: str
    price: Decimal
    added_at: datetime
    labels: List[str] = field(default_factory=list)
