from django.db import models
from apps.catalog.models import Product


class Cart(models.Model):
    # Use auto-incrementing PK so DB assigns IDs on insert
    id = models.AutoField(primary_key=True)
    checked_out = models.BooleanField(default=False)
    # Set exactly once, at checkout
    total_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )

    def __str__(self):
        state = "checked out" if self.checked_out else "open"
        return f"Cart {self.id} ({state})"


class CartProduct(models.Model):
    """One row per unit; repeated rows for the same product encode quantity."""

    cart = models.ForeignKey(
        Cart, on_delete=models.CASCADE, related_name="cart_products"
    )
    product = models.ForeignKey(
        Product, on_delete=models.PROTECT, related_name="cart_entries"
    )

    class Meta:
        db_table = "cart_products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["cart"], name="cart_product_cart_idx"),
        ]
