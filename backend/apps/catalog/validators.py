from decimal import Decimal
from typing import Iterable, List

from .models import ProductLabel

ALLOWED_LABELS = tuple(ProductLabel.values)
LABELS_MESSAGE = "Restricted set of labels: [{}]".format(", ".join(ALLOWED_LABELS))
NAME_MAX_LENGTH = 200
NAME_TOO_LONG_MESSAGE = "The product name cannot exceed 200 characters"
NAME_REQUIRED_MESSAGE = "The product name cannot be blank"
PRICE_REQUIRED_MESSAGE = "The product price cannot be null"
PRICE_NEGATIVE_MESSAGE = "The product price cannot be negative"
LABELS_REQUIRED_MESSAGE = "The product labels cannot be null"

# Product.price column
PRICE_MAX_DIGITS = 12
PRICE_DECIMAL_PLACES = 3
PRICE_INVALID_MESSAGE = "A valid number is required."
PRICE_MAX_DIGITS_MESSAGE = (
    f"Ensure that there are no more than {PRICE_MAX_DIGITS} digits in total."
)
PRICE_DECIMAL_PLACES_MESSAGE = (
    f"Ensure that there are no more than {PRICE_DECIMAL_PLACES} decimal places."
)
PRICE_WHOLE_DIGITS_MESSAGE = (
    f"Ensure that there are no more than {PRICE_MAX_DIGITS - PRICE_DECIMAL_PLACES} "
    "digits before the decimal point."
)


def invalid_labels(labels: Iterable[str]) -> List[str]:
    """Return the labels outside the fixed enumeration, in input order."""
    return [label for label in labels if label not in ALLOWED_LABELS]


def price_precision_errors(price: Decimal) -> List[str]:
    """
    Check a price fits the stored column, counting digits the way DRF's
    ``DecimalField`` does. Returns the failing messages, empty when it fits.
    """
    if not price.is_finite():
        return [PRICE_INVALID_MESSAGE]
    _, digits, exponent = price.as_tuple()
    if exponent >= 0:
        total_digits = len(digits) + exponent
        decimal_places = 0
    elif len(digits) > -exponent:
        total_digits = len(digits)
        decimal_places = -exponent
    else:
        total_digits = decimal_places = -exponent
    whole_digits = total_digits - decimal_places
    errors = []
    if total_digits > PRICE_MAX_DIGITS:
        errors.append(PRICE_MAX_DIGITS_MESSAGE)
    if decimal_places > PRICE_DECIMAL_PLACES:
        errors.append(PRICE_DECIMAL_PLACES_MESSAGE)
    if whole_digits > PRICE_MAX_DIGITS - PRICE_DECIMAL_PLACES:
        errors.append(PRICE_WHOLE_DIGITS_MESSAGE)
    return errors


def product_field_errors(name, price, labels) -> dict:
    """
    Collect field-level problems for a product about to be stored.

    Returns a mapping of field name to a list of messages; empty when valid.
    """
    errors = {}
    if name is None or not str(name).strip():
        errors["name"] = [NAME_REQUIRED_MESSAGE]
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = [NAME_TOO_LONG_MESSAGE]
    if price is None:
        errors["price"] = [PRICE_REQUIRED_MESSAGE]
    else:
        price_errors = price_precision_errors(Decimal(price))
        if price_errors:
            errors["price"] = price_errors
        elif Decimal(price) < 0:
            errors["price"] = [PRICE_NEGATIVE_MESSAGE]
    if labels is None:
        errors["labels"] = [LABELS_REQUIRED_MESSAGE]
    elif invalid_labels(labels):
        errors["labels"] = [LABELS_MESSAGE]
    return errors
