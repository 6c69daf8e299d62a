from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.carts.models import Cart
from apps.catalog.container import build_product_service
from apps.catalog.models import Product
from apps.catalog.repositories import ProductRepository

PRODUCTS = [
    ("Sparkling Water 500ml", Decimal("0.99"), ["drink"]),
    ("Cold Brew Coffee", Decimal("3.495"), ["drink"]),
    ("Sourdough Loaf", Decimal("4.20"), ["food"]),
    ("Aged Cheddar 200g", Decimal("5.005"), ["food"]),
    ("Dark Chocolate Bar", Decimal("2.75"), ["food", "limited"]),
    ("Cotton T-Shirt", Decimal("14.99"), ["clothes"]),
    ("Wool Beanie", Decimal("12.00"), ["clothes"]),
    ("Festival Hoodie", Decimal("39.90"), ["clothes", "limited"]),
]


class Command(BaseCommand):
    help = "Seed a small labelled product catalogue. Existing names are left untouched."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing carts and products before seeding",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            # Carts first; products are protected while referenced
            Cart.objects.all().delete()
            Product.objects.all().delete()

        service = build_product_service()
        products = ProductRepository()
        created = 0
        self.stdout.write("Seeding products...")
        for name, price, labels in PRODUCTS:
            if products.get_by_name(name):
                continue
            service.save({"name": name, "price": price, "labels": labels})
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed complete: {created} created, {len(PRODUCTS) - created} already present."
            )
        )
