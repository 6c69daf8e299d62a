from typing import List

from django.db.models import Prefetch

from apps.common.repository import GenericRepository
from .models import Cart, CartProduct

BULK_CREATE_BATCH_SIZE = 500


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def _base_queryset(self):
        return self.model.objects.prefetch_related(
            Prefetch("cart_products", queryset=CartProduct.objects.order_by("id"))
        ).order_by("id")

    def list(self, **filters):
        return self._base_queryset().filter(**filters)

    def get(self, **filters):
        return self._base_queryset().filter(**filters).first()


class CartProductRepository(GenericRepository[CartProduct]):
    def __init__(self):
        super().__init__(CartProduct)

    def add_units(self, cart: Cart, product_id: int, quantity: int) -> List[CartProduct]:
        """Append ``quantity`` rows referencing the product."""
        rows = [CartProduct(cart=cart, product_id=product_id) for _ in range(quantity)]
        return self.model.objects.bulk_create(rows, batch_size=BULK_CREATE_BATCH_SIZE)

    def prices_for_cart(self, cart_id: int):
        """Unit price of every row in the cart, one entry per unit."""
        return list(
            self.model.objects.filter(cart_id=cart_id)
            .order_by("id")
            .values_list("product__price", flat=True)
        )
