from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Protocol, TYPE_CHECKING

from .models import Cart, CartProduct

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO
    from apps.catalog.models import Product


class CartRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable[Cart]:
        ...

    def get(self, **filters) -> Optional[Cart]:
        ...

    def get_for_update(self, **filters) -> Optional[Cart]:
        ...

    def create(self, **data) -> Cart:
        ...

    def update(self, cart: Cart, **data) -> Cart:
        ...

    def delete(self, cart: Cart) -> None:
        ...


class CartProductRepositoryProtocol(Protocol):
    def add_units(self, cart: Cart, product_id: int, quantity: int) -> List[CartProduct]:
        ...

    def prices_for_cart(self, cart_id: int) -> List[Decimal]:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: Cart) -> "CartDTO":
        ...

    def many_to_dto(self, carts: Iterable[Cart]) -> List["CartDTO"]:
        ...
