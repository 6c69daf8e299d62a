from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from apps.common import get_logger
from apps.common.errors import InvalidStateError, NotFoundError, StorageError
from .commands import QUANTITY_MAX, QUANTITY_MIN, CartCreateCommand, CartItemCommand
from .dtos import CartDTO, CheckoutDTO
from .models import Cart
from .pricing import MAX_TOTAL, calculate_total, exceeds_max_total
from .protocols import (
    CartMapperProtocol,
    CartProductRepositoryProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

ALREADY_CHECKED_OUT_MESSAGE = "Cart is already checked out!"
ADD_AFTER_CHECKOUT_MESSAGE = (
    "You can't add more products because the cart is already checked out!"
)
QUANTITY_MIN_MESSAGE = f"Ensure this value is greater than or equal to {QUANTITY_MIN}."
QUANTITY_MAX_MESSAGE = f"Ensure this value is less than or equal to {QUANTITY_MAX}."
TOTAL_TOO_LARGE_MESSAGE = (
    f"Cart total exceeds the maximum amount of {MAX_TOTAL} and cannot be checked out"
)


class CartService:
    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_products: CartProductRepositoryProtocol,
        products: ProductRepositoryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_products = cart_products
        self.products = products
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    # --- Queries ---
    def find_all(self) -> List[CartDTO]:
        self.logger.debug("Listing carts")
        return self.cart_mapper.many_to_dto(self.carts.list())

    def find_by_id(self, cart_id: int) -> CartDTO:
        self.logger.debug("Fetching cart", cart_id=cart_id)
        cart = self.carts.get(id=cart_id)
        if not cart:
            self._raise_cart_not_found(cart_id)
        return self.cart_mapper.to_dto(cart)

    # --- Commands ---
    def create_cart(
        self, data: Union[Dict[str, Any], CartCreateCommand, None] = None
    ) -> CartDTO:
        """
        Create an open cart, optionally seeded with ``products`` items.

        Seeding follows the same rules as ``add_product``; any failing item
        rolls the whole creation back.
        """
        cmd = (
            data
            if isinstance(data, CartCreateCommand)
            else CartCreateCommand.from_raw(data)
        )
        for item in cmd.items:
            self._validate_item(item)
        self.logger.info("Creating cart", seeded_items=len(cmd.items))
        try:
            with transaction.atomic():
                cart: Cart = self.carts.create()
                for item in cmd.items:
                    self._require_product(item.product_id)
                    self.cart_products.add_units(cart, item.product_id, item.quantity)
        except DatabaseError as exc:
            self.logger.exception("Error persisting new cart", error=str(exc))
            raise StorageError("Error persisting new cart") from exc
        self.logger.info("Cart created", cart_id=cart.id)
        return self.find_by_id(cart.id)

    def add_product(
        self, cart_id: int, data: Union[Dict[str, Any], CartItemCommand]
    ) -> CartDTO:
        cmd = data if isinstance(data, CartItemCommand) else CartItemCommand.from_raw(data)
        self._validate_item(cmd)
        self.logger.info(
            "Adding product to cart",
            cart_id=cart_id,
            product_id=cmd.product_id,
            quantity=cmd.quantity,
        )
        self._require_product(cmd.product_id)
        try:
            with transaction.atomic():
                cart = self._lock_cart(cart_id)
                if cart.checked_out:
                    self.logger.warning(
                        "Rejecting add to checked out cart",
                        cart_id=cart_id,
                        product_id=cmd.product_id,
                    )
                    raise InvalidStateError(
                        ADD_AFTER_CHECKOUT_MESSAGE, details={"cart_id": cart_id}
                    )
                self.cart_products.add_units(cart, cmd.product_id, cmd.quantity)
        except DatabaseError as exc:
            self.logger.exception(
                "Error adding product to cart", cart_id=cart_id, error=str(exc)
            )
            raise StorageError("Error persisting cart") from exc
        self.logger.info("Product added to cart", cart_id=cart_id)
        return self.find_by_id(cart_id)

    def checkout(self, cart_id: int) -> CheckoutDTO:
        """
        Freeze the cart and compute its total.

        The cart row is locked for the duration, so of two concurrent
        checkouts only the first succeeds; the second sees ``checked_out``.
        """
        self.logger.info("Checking out cart", cart_id=cart_id)
        try:
            with transaction.atomic():
                cart = self._lock_cart(cart_id)
                if cart.checked_out:
                    self.logger.warning("Cart already checked out", cart_id=cart_id)
                    raise InvalidStateError(
                        ALREADY_CHECKED_OUT_MESSAGE, details={"cart_id": cart_id}
                    )
                total = calculate_total(self.cart_products.prices_for_cart(cart_id))
                if exceeds_max_total(total):
                    self.logger.warning(
                        "Rejecting checkout: total too large",
                        cart_id=cart_id,
                        total=str(total),
                    )
                    raise InvalidStateError(
                        TOTAL_TOO_LARGE_MESSAGE,
                        details={"cart_id": cart_id, "total_cost": str(total)},
                    )
                self.carts.update(cart, checked_out=True, total_amount=total)
        except DatabaseError as exc:
            self.logger.exception(
                "Error checking out cart", cart_id=cart_id, error=str(exc)
            )
            raise StorageError("An unexpected error occurred while checking out cart") from exc
        self.logger.info("Cart checked out", cart_id=cart_id, total=str(total))
        return CheckoutDTO(cart=self.find_by_id(cart_id), total_cost=total)

    def delete(self, cart_id: int) -> bool:
        """Delete the cart and its rows. A missing id is a no-op."""
        self.logger.info("Deleting cart", cart_id=cart_id)
        cart = self.carts.get(id=cart_id)
        if not cart:
            self.logger.warning("Attempted to delete non-existent cart", cart_id=cart_id)
            return False
        try:
            self.carts.delete(cart)
        except DatabaseError as exc:
            self.logger.exception("Error deleting cart", cart_id=cart_id, error=str(exc))
            raise StorageError("Error deleting cart") from exc
        self.logger.info("Cart deleted", cart_id=cart_id)
        return True

    # --- Helpers ---
    def _validate_item(self, item: CartItemCommand) -> None:
        errors: Dict[str, List[str]] = {}
        if item.product_id is None:
            errors["product_id"] = ["A valid integer is required."]
        if item.quantity is None:
            errors["quantity"] = ["A valid integer is required."]
        elif item.quantity < QUANTITY_MIN:
            errors["quantity"] = [QUANTITY_MIN_MESSAGE]
        elif item.quantity > QUANTITY_MAX:
            errors["quantity"] = [QUANTITY_MAX_MESSAGE]
        if errors:
            self.logger.warning("Rejecting invalid cart item", fields=sorted(errors))
            raise ValidationError(errors)

    def _require_product(self, product_id: int) -> None:
        if not self.products.get(id=product_id):
            self.logger.warning("Product not found", product_id=product_id)
            raise NotFoundError(
                f"Product not found with ID: {product_id}",
                details={"product_id": product_id},
            )

    def _lock_cart(self, cart_id: int) -> Cart:
        cart: Optional[Cart] = self.carts.get_for_update(id=cart_id)
        if not cart:
            self._raise_cart_not_found(cart_id)
        return cart

    def _raise_cart_not_found(self, cart_id: int):
        self.logger.warning("Cart not found", cart_id=cart_id)
        raise NotFoundError(
            f"Cart not found with ID: {cart_id}", details={"cart_id": cart_id}
        )
