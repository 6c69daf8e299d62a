from typing import Iterable, List

from .dtos import CartDTO, CartItemDTO
from .models import Cart
from .pricing import count_quantities


class CartMapper:
    def to_dto(self, cart: Cart) -> CartDTO:
        product_ids = [entry.product_id for entry in cart.cart_products.all()]
        items = [
            CartItemDTO(product_id=product_id, quantity=quantity)
            for product_id, quantity in count_quantities(product_ids)
        ]
        return CartDTO(
            id=cart.id,
            checked_out=cart.checked_out,
            items=items,
            total_amount=cart.total_amount,
        )

    def many_to_dto(self, carts: Iterable[Cart]) -> List[CartDTO]:
        return [self.to_dto(c) for c in carts]
