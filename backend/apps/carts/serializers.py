from rest_framework import serializers

from .commands import QUANTITY_MAX, QUANTITY_MIN


class CartItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField()


class CartReadSerializer(serializers.Serializer):
    cart_id = serializers.IntegerField(source="id")
    check_out = serializers.BooleanField(source="checked_out")
    products = CartItemSerializer(many=True, source="items")
    total_cost = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        coerce_to_string=False,
        source="total_amount",
        required=False,
    )

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # An open cart has no total yet; omit the key rather than report zero
        if data.get("total_cost") is None:
            data.pop("total_cost", None)
        return data


class CheckoutSerializer(serializers.Serializer):
    cart = CartReadSerializer()
    total_cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False
    )


class CartItemWriteSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=QUANTITY_MIN, max_value=QUANTITY_MAX)


class CartCreateSerializer(serializers.Serializer):
    # Optional seed items; an empty body creates an empty cart
    products = CartItemWriteSerializer(many=True, required=False)
