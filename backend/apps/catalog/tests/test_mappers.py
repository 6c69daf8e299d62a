import unittest
from datetime import datetime, timezone
from decimal import Decimal

from apps.catalog.mappers import ProductMapper


class StubProduct:
    def __init__(self, product_id, name, price, labels=None):
        self.id = product_id
        self.name = name
        self.price = price
        self.added_at = datetime(2024, 5, 6, 7, 8, tzinfo=timezone.utc)
        self.labels = labels


class ProductMapperTests(unittest.TestCase):
    def test_product_mapper_basic(self):
        dto = ProductMapper.to_dto(StubProduct(1, "Cola", Decimal("1.200"), ["drink"]))
        self.assertEqual(dto.id, 1)
        self.assertEqual(dto.name, "Cola")
        self.assertEqual(dto.price, Decimal("1.200"))
        self.assertEqual(dto.labels, ["drink"])
        self.assertEqual(dto.added_at.year, 2024)

    def test_null_labels_map_to_empty_list(self):
        dto = ProductMapper.to_dto(StubProduct(1, "Cola", Decimal("1"), None))
        self.assertEqual(dto.labels, [])

    def test_many_preserves_order(self):
        dtos = ProductMapper.many_to_dto(
            [StubProduct(2, "B", Decimal("1")), StubProduct(1, "A", Decimal("1"))]
        )
        self.assertEqual([d.id for d in dtos], [2, 1])
