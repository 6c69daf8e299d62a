from rest_framework import serializers

from .validators import (
    LABELS_MESSAGE,
    LABELS_REQUIRED_MESSAGE,
    NAME_MAX_LENGTH,
    NAME_TOO_LONG_MESSAGE,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    PRICE_REQUIRED_MESSAGE,
    invalid_labels,
)

ADDED_AT_FORMAT = "%Y/%m/%d"


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO; prices render as JSON numbers
    product_id = serializers.IntegerField(source="id")
    name = serializers.CharField()
    price = serializers.DecimalField(
        max_digits=12, decimal_places=3, coerce_to_string=False
    )
    added_at = serializers.DateTimeField(format=ADDED_AT_FORMAT)
    labels = serializers.ListField(child=serializers.CharField())

    def to_representation(self, instance):
        if instance is None:
            return None
        # If it's already a dataclass DTO, extract attributes directly for speed
        if hasattr(instance, "__dataclass_fields__"):
            added_at = getattr(instance, "added_at")
            return {
                "product_id": getattr(instance, "id"),
                "name": getattr(instance, "name"),
                "price": self.fields["price"].to_representation(
                    getattr(instance, "price")
                ),
                "added_at": self.fields["added_at"].to_representation(added_at)
                if added_at
                else None,
                "labels": list(getattr(instance, "labels")),
            }
        return super().to_representation(instance)


class ProductWriteSerializer(serializers.Serializer):
    # product_id and added_at are assigned by the store; clients may send them but they are ignored
    name = serializers.CharField(
        max_length=NAME_MAX_LENGTH,
        error_messages={"max_length": NAME_TOO_LONG_MESSAGE},
    )
    price = serializers.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        min_value=0,
        error_messages={
            "required": PRICE_REQUIRED_MESSAGE,
            "null": PRICE_REQUIRED_MESSAGE,
        },
    )
    labels = serializers.ListField(
        child=serializers.CharField(),
        allow_empty=True,
        error_messages={
            "required": LABELS_REQUIRED_MESSAGE,
            "null": LABELS_REQUIRED_MESSAGE,
        },
    )

    def validate_labels(self, value):
        if invalid_labels(value):
            raise serializers.ValidationError(LABELS_MESSAGE)
        return value
