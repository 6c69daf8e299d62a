from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass
class CartItemDTO:
    product_id: int
    quantity: int


@dataclass
class CartDTO:
    id: int
    checked_out: bool
    items: List[CartItemDTO] = field(default_factory=list)
    # None until checkout; serialized by omission, never as zero
    total_amount: Optional[Decimal] = None


@dataclass
class CheckoutDTO:
    cart: CartDTO
    total_cost: Decimal
