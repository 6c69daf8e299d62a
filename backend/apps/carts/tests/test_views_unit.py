import unittest
from decimal import Decimal
from unittest.mock import Mock, patch

from django.core.exceptions import ValidationError
from rest_framework.test import APIRequestFactory

from apps.carts.dtos import CartDTO, CartItemDTO, CheckoutDTO
from apps.carts.views import CartCheckoutView, CartDetailView, CartListView
from apps.common.errors import InvalidStateError, NotFoundError


def make_cart_dto(cart_id=1, checked_out=False, total=None):
    return CartDTO(
        id=cart_id,
        checked_out=checked_out,
        items=[CartItemDTO(product_id=4, quantity=2)],
        total_amount=total,
    )


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()

    def test_cart_list_omits_total_for_open_carts(self):
        service_mock = Mock()
        service_mock.find_all.return_value = [
            make_cart_dto(1),
            make_cart_dto(2, True, Decimal("20.00")),
        ]
        with patch.object(CartListView, "service", service_mock):
            response = CartListView.as_view()(self.factory.get("/api/carts"))
        self.assertEqual(response.status_code, 200)
        open_cart, closed_cart = response.data
        self.assertEqual(
            dict(open_cart),
            {
                "cart_id": 1,
                "check_out": False,
                "products": [{"product_id": 4, "quantity": 2}],
            },
        )
        self.assertEqual(closed_cart["total_cost"], Decimal("20.00"))

    def test_cart_create_without_body(self):
        service_mock = Mock()
        service_mock.create_cart.return_value = CartDTO(id=3, checked_out=False)
        with patch.object(CartListView, "service", service_mock):
            request = self.factory.post("/api/carts", {}, format="json")
            response = CartListView.as_view()(request)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["cart_id"], 3)
        self.assertEqual(response.data["products"], [])
        service_mock.create_cart.assert_called_once_with({})

    def test_cart_create_with_invalid_seed_quantity(self):
        service_mock = Mock()
        with patch.object(CartListView, "service", service_mock):
            request = self.factory.post(
                "/api/carts",
                {"products": [{"product_id": 1, "quantity": 0}]},
                format="json",
            )
            response = CartListView.as_view()(request)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        service_mock.create_cart.assert_not_called()

    def test_cart_detail_not_found(self):
        service_mock = Mock()
        service_mock.find_by_id.side_effect = NotFoundError("Cart not found with ID: 5")
        with patch.object(CartDetailView, "service", service_mock):
            response = CartDetailView.as_view()(self.factory.get("/api/carts/5"), cart_id="5")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["message"], "Cart not found with ID: 5")
        service_mock.find_by_id.assert_called_once_with(5)

    def test_cart_put_adds_product(self):
        service_mock = Mock()
        service_mock.add_product.return_value = make_cart_dto(5)
        with patch.object(CartDetailView, "service", service_mock):
            request = self.factory.put(
                "/api/carts/5", {"product_id": 4, "quantity": 2}, format="json"
            )
            response = CartDetailView.as_view()(request, cart_id="5")
        self.assertEqual(response.status_code, 200)
        service_mock.add_product.assert_called_once_with(
            5, {"product_id": 4, "quantity": 2}
        )

    def test_cart_put_requires_positive_quantity(self):
        service_mock = Mock()
        with patch.object(CartDetailView, "service", service_mock):
            request = self.factory.put(
                "/api/carts/5", {"product_id": 4, "quantity": 0}, format="json"
            )
            response = CartDetailView.as_view()(request, cart_id="5")
        self.assertEqual(response.status_code, 400)
        self.assertIn("quantity", response.data["error"]["details"])
        service_mock.add_product.assert_not_called()

    def test_cart_put_after_checkout_conflict(self):
        service_mock = Mock()
        service_mock.add_product.side_effect = InvalidStateError("checked out")
        with patch.object(CartDetailView, "service", service_mock):
            request = self.factory.put(
                "/api/carts/5", {"product_id": 4, "quantity": 1}, format="json"
            )
            response = CartDetailView.as_view()(request, cart_id="5")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"]["code"], "INVALID_STATE")

    def test_service_level_validation_maps_to_bad_request(self):
        service_mock = Mock()
        service_mock.add_product.side_effect = ValidationError(
            {"quantity": ["Ensure this value is greater than or equal to 1."]}
        )
        with patch.object(CartDetailView, "service", service_mock):
            request = self.factory.put(
                "/api/carts/5", {"product_id": 4, "quantity": 1}, format="json"
            )
            response = CartDetailView.as_view()(request, cart_id="5")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.data["error"]["details"],
            {"quantity": ["Ensure this value is greater than or equal to 1."]},
        )

    def test_cart_delete_returns_no_content(self):
        service_mock = Mock()
        service_mock.delete.return_value = False
        with patch.object(CartDetailView, "service", service_mock):
            response = CartDetailView.as_view()(
                self.factory.delete("/api/carts/8"), cart_id="8"
            )
        self.assertEqual(response.status_code, 204)
        service_mock.delete.assert_called_once_with(8)

    def test_checkout_returns_cart_and_total(self):
        service_mock = Mock()
        service_mock.checkout.return_value = CheckoutDTO(
            cart=make_cart_dto(5, True, Decimal("15.01")),
            total_cost=Decimal("15.01"),
        )
        with patch.object(CartCheckoutView, "service", service_mock):
            response = CartCheckoutView.as_view()(
                self.factory.post("/api/carts/5/checkout"), cart_id="5"
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total_cost"], Decimal("15.01"))
        self.assertTrue(response.data["cart"]["check_out"])
        self.assertEqual(response.data["cart"]["total_cost"], Decimal("15.01"))

    def test_checkout_twice_conflict(self):
        service_mock = Mock()
        service_mock.checkout.side_effect = InvalidStateError("Cart is already checked out!")
        with patch.object(CartCheckoutView, "service", service_mock):
            response = CartCheckoutView.as_view()(
                self.factory.post("/api/carts/5/checkout"), cart_id="5"
            )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"]["message"], "Cart is already checked out!")
