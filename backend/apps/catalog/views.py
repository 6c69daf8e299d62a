from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_product_service
from .serializers import ProductReadSerializer, ProductWriteSerializer

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Products"])
class ProductListView(APIView):
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Returns every product ordered by id. Cached results may be served.",
        responses={200: ProductReadSerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Handling product list request")
        data = self.service.find_all()
        return Response(ProductReadSerializer(data, many=True).data)

    @extend_schema(
        operation_id="products_create",
        summary="Create product",
        request=ProductWriteSerializer,
        responses={
            201: ProductReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="A product with the same name already exists",
            ),
        },
    )
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Creating product via API", name=serializer.validated_data.get("name")
        )
        dto = self.service.save(serializer.validated_data)
        self.log.info("Product created via API", product_id=dto.id)
        return Response(ProductReadSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Products"])
class ProductDetailView(APIView):
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: ProductReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id):
        product_id = int(product_id)
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.find_by_id(product_id)
        return Response(ProductReadSerializer(dto).data)

    @extend_schema(
        operation_id="products_destroy",
        summary="Delete product",
        description="Deleting an unknown id succeeds without changes.",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            204: None,
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="The product is still referenced by a cart",
            ),
        },
    )
    def delete(self, request, product_id):
        product_id = int(product_id)
        self.log.info("Deleting product", product_id=product_id)
        self.service.delete(product_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
