from decimal import Decimal

from django.core.cache import cache
from rest_framework import status
from rest_framework.test import APITestCase

from apps.carts.models import Cart, CartProduct
from apps.catalog.models import Product


class TestProducts(APITestCase):
    def setUp(self):
        cache.clear()
        self.list_url = "/api/products"
        self.detail_url = lambda pid: f"/api/products/{pid}"

    def _create(self, name="Lemonade", price="2.50", labels=None):
        return self.client.post(
            self.list_url,
            {"name": name, "price": price, "labels": labels if labels is not None else ["drink"]},
            format="json",
        )

    def test_create_and_get_product(self):
        res = self._create(labels=["drink", "limited"])
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        pid = res.data["product_id"]
        self.assertRegex(res.data["added_at"], r"^\d{4}/\d{2}/\d{2}$")
        res_get = self.client.get(self.detail_url(pid))
        self.assertEqual(res_get.status_code, status.HTTP_200_OK)
        self.assertEqual(res_get.data["name"], "Lemonade")
        self.assertEqual(res_get.data["price"], Decimal("2.500"))
        self.assertEqual(res_get.data["labels"], ["drink", "limited"])
        self.assertEqual(res_get.json()["price"], 2.5)

    def test_trailing_slash_is_optional(self):
        pid = self._create().data["product_id"]
        self.assertEqual(self.client.get(f"/api/products/{pid}/").status_code, 200)
        self.assertEqual(self.client.get("/api/products/").status_code, 200)

    def test_client_supplied_id_is_ignored(self):
        res = self.client.post(
            self.list_url,
            {"product_id": 500, "name": "Bread", "price": "1.00", "labels": ["food"]},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertNotEqual(res.data["product_id"], 500)

    def test_duplicate_name_conflict(self):
        self._create(name="Cola")
        res = self._create(name="Cola")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"]["code"], "CONFLICT")
        self.assertEqual(Product.objects.filter(name="Cola").count(), 1)

    def test_duplicate_name_legacy_status(self):
        self._create(name="Cola")
        with self.settings(API_LEGACY_ERROR_STATUS=True):
            res = self._create(name="Cola")
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data["error"]["status"], 500)

    def test_validation_errors(self):
        res = self._create(name="n" * 201, labels=["toys"])
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        details = res.data["error"]["details"]
        self.assertEqual(details["name"], ["The product name cannot exceed 200 characters"])
        self.assertEqual(
            details["labels"], ["Restricted set of labels: [drink, food, clothes, limited]"]
        )

    def test_negative_price_rejected(self):
        res = self._create(price="-1.00")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("price", res.data["error"]["details"])

    def test_list_empty_then_populated(self):
        res = self.client.get(self.list_url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, [])
        self._create(name="A")
        self._create(name="B")
        res = self.client.get(self.list_url)
        self.assertEqual([p["name"] for p in res.data], ["A", "B"])

    def test_get_missing_product_returns_404(self):
        res = self.client.get(self.detail_url(9999))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_delete_product_and_missing_id(self):
        pid = self._create().data["product_id"]
        self.assertEqual(self.client.delete(self.detail_url(pid)).status_code, 204)
        self.assertFalse(Product.objects.filter(id=pid).exists())
        self.assertEqual(self.client.delete(self.detail_url(pid)).status_code, 204)
        self.assertEqual(self.client.get(self.list_url).data, [])

    def test_delete_product_in_cart_conflicts(self):
        pid = self._create().data["product_id"]
        cart = Cart.objects.create()
        CartProduct.objects.create(cart=cart, product_id=pid)
        res = self.client.delete(self.detail_url(pid))
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"]["code"], "INVALID_STATE")
        self.assertTrue(Product.objects.filter(id=pid).exists())
