"""Checkout arithmetic. Amounts are Decimals throughout, never floats."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Tuple, Union

CENT = Decimal("0.01")
# Largest value Cart.total_amount (12 digits, 2 decimal places) can hold
MAX_TOTAL = Decimal("9999999999.99")

Amount = Union[Decimal, int, str]


def calculate_total(prices: Iterable[Amount]) -> Decimal:
    """
    Sum unit prices and round half-up to two decimal places.

    One price per unit, so a product added three times contributes three
    times. An empty iterable yields ``Decimal("0.00")``.
    """
    total = sum((Decimal(price) for price in prices), Decimal("0"))
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def exceeds_max_total(total: Decimal) -> bool:
    return total > MAX_TOTAL


def count_quantities(product_ids: Iterable[int]) -> List[Tuple[int, int]]:
    """Group repeated product ids into (product_id, quantity) in first-seen order."""
    counts: Dict[int, int] = {}
    for product_id in product_ids:
        counts[product_id] = counts.get(product_id, 0) + 1
    return list(counts.items())
