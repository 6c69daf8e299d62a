from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_cart_service
from .serializers import (
    CartCreateSerializer,
    CartItemWriteSerializer,
    CartReadSerializer,
    CheckoutSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

CART_ID_PARAMETER = OpenApiParameter("cart_id", int, OpenApiParameter.PATH)


@extend_schema(tags=["Carts"])
class CartListView(APIView):
    service = build_cart_service()
    log = logger.bind(view="CartListView")

    @extend_schema(
        operation_id="carts_list",
        summary="List carts",
        responses={200: CartReadSerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Handling cart list request")
        data = self.service.find_all()
        return Response(CartReadSerializer(data, many=True).data)

    @extend_schema(
        operation_id="carts_create",
        summary="Create cart",
        description=(
            "Creates an open cart. Optionally include initial products to seed "
            "line items; an empty body creates an empty cart."
        ),
        request=CartCreateSerializer,
        responses={
            201: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="A seeded product does not exist",
            ),
        },
    )
    def post(self, request):
        serializer = CartCreateSerializer(data=request.data or {})
        serializer.is_valid(raise_exception=True)
        dto = self.service.create_cart(dict(serializer.validated_data))
        self.log.info("Cart created via API", cart_id=dto.id)
        return Response(CartReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Carts"])
class CartDetailView(APIView):
    service = build_cart_service()
    log = logger.bind(view="CartDetailView")

    @extend_schema(
        operation_id="carts_retrieve",
        summary="Get cart",
        parameters=[CART_ID_PARAMETER],
        responses={
            200: CartReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, cart_id):
        cart_id = int(cart_id)
        self.log.debug("Fetching cart detail", cart_id=cart_id)
        dto = self.service.find_by_id(cart_id)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        operation_id="carts_add_product",
        summary="Add product to cart",
        description="Appends `quantity` units of the product. Rejected once the cart is checked out.",
        parameters=[CART_ID_PARAMETER],
        request=CartItemWriteSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="The cart is already checked out",
            ),
        },
    )
    def put(self, request, cart_id):
        cart_id = int(cart_id)
        serializer = CartItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Adding product via API",
            cart_id=cart_id,
            product_id=serializer.validated_data["product_id"],
        )
        dto = self.service.add_product(cart_id, dict(serializer.validated_data))
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        operation_id="carts_destroy",
        summary="Delete cart",
        description="Deleting an unknown id succeeds without changes.",
        parameters=[CART_ID_PARAMETER],
        responses={204: None},
    )
    def delete(self, request, cart_id):
        cart_id = int(cart_id)
        self.log.info("Deleting cart", cart_id=cart_id)
        self.service.delete(cart_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Carts"])
class CartCheckoutView(APIView):
    service = build_cart_service()
    log = logger.bind(view="CartCheckoutView")

    @extend_schema(
        operation_id="carts_checkout",
        summary="Check out cart",
        description="Freezes the cart and returns the total rounded half-up to cents.",
        parameters=[CART_ID_PARAMETER],
        request=None,
        responses={
            200: CheckoutSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="The cart is already checked out",
            ),
        },
    )
    def post(self, request, cart_id):
        cart_id = int(cart_id)
        self.log.info("Checking out cart via API", cart_id=cart_id)
        result = self.service.checkout(cart_id)
        return Response(CheckoutSerializer(result).data)
