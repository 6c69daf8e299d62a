from io import StringIO

from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase

from apps.catalog.management.commands.seed_catalog import PRODUCTS
from apps.catalog.models import Product


class SeedCatalogCommandTests(TestCase):
    def setUp(self):
        cache.clear()

    def test_seed_is_idempotent(self):
        call_command("seed_catalog", stdout=StringIO())
        self.assertEqual(Product.objects.count(), len(PRODUCTS))
        out = StringIO()
        call_command("seed_catalog", stdout=out)
        self.assertEqual(Product.objects.count(), len(PRODUCTS))
        self.assertIn(f"0 created, {len(PRODUCTS)} already present", out.getvalue())

    def test_flush_recreates_catalogue(self):
        Product.objects.create(name="Stale", price="1.000", labels=[])
        call_command("seed_catalog", "--flush", stdout=StringIO())
        self.assertFalse(Product.objects.filter(name="Stale").exists())
        self.assertEqual(Product.objects.count(), len(PRODUCTS))
