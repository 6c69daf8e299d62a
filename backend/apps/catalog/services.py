from __future__ import annotations

from typing import Any, Dict, List, Union

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import ProtectedError

from apps.common import get_logger
from apps.common.errors import (
    DuplicateNameError,
    InvalidStateError,
    NotFoundError,
    StorageError,
)
from .commands import ProductCreateCommand
from .dtos import ProductDTO
from .mappers import ProductMapper
from .protocols import CacheBackendProtocol, ProductRepositoryProtocol
from .validators import product_field_errors

logger = get_logger(__name__).bind(component="catalog", layer="service")

DUPLICATE_NAME_MESSAGE = (
    "Error persisting product: It is not possible to insert 2 or more "
    "products with exactly the same name!"
)


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        self._cache_prefix = "products:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def _bump_cache_version(self) -> None:
        if self.disable_cache:
            return
        v = self._get_cache_version()
        # Version key should not expire
        self.cache.set(self._cache_version_key, v + 1, timeout=None)
        self.logger.debug("Bumped product cache version", new_version=v + 1)

    def _cache_key(self) -> str:
        return f"{self._cache_prefix}:v{self._get_cache_version()}"

    def save(self, data: Union[Dict[str, Any], ProductCreateCommand]) -> ProductDTO:
        """
        Validate and store a new product.

        Raises django ``ValidationError`` with a field->messages dict for bad
        input, ``DuplicateNameError`` when the name is taken and
        ``StorageError`` for any other database failure.
        """
        cmd = (
            data
            if isinstance(data, ProductCreateCommand)
            else ProductCreateCommand.from_raw(data)
        )
        errors = product_field_errors(cmd.name, cmd.price, cmd.labels)
        if errors:
            self.logger.warning(
                "Rejecting invalid product", name=cmd.name, fields=sorted(errors)
            )
            raise ValidationError(errors)
        self.logger.info("Creating product", name=cmd.name)
        try:
            with transaction.atomic():
                product = self.products.create(
                    name=cmd.name, price=cmd.price, labels=list(cmd.labels)
                )
        except IntegrityError as exc:
            if self.products.get_by_name(cmd.name) is None:
                self.logger.exception(
                    "Integrity error persisting product", name=cmd.name, error=str(exc)
                )
                raise StorageError(f"Error persisting product: {exc}") from exc
            self.logger.warning(
                "Product creation rejected: duplicate name", name=cmd.name
            )
            raise DuplicateNameError(
                DUPLICATE_NAME_MESSAGE, details={"name": cmd.name}
            ) from exc
        except DatabaseError as exc:
            self.logger.exception(
                "Error persisting product", name=cmd.name, error=str(exc)
            )
            raise StorageError(f"Error persisting product: {exc}") from exc
        self._bump_cache_version()
        self.logger.info("Product created", product_id=product.id)
        return ProductMapper.to_dto(product)

    def find_by_id(self, product_id: int) -> ProductDTO:
        self.logger.debug("Fetching product", product_id=product_id)
        product = self.products.get(id=product_id)
        if not product:
            self.logger.warning("Product not found", product_id=product_id)
            raise NotFoundError(
                f"Product not found with ID: {product_id}",
                details={"product_id": product_id},
            )
        return ProductMapper.to_dto(product)

    def find_all(self) -> List[ProductDTO]:
        """Every product ordered by id. An empty catalogue yields ``[]``."""
        self.logger.debug("Listing products", cache_enabled=not self.disable_cache)
        if self.disable_cache:
            return ProductMapper.many_to_dto(self.products.list())
        key = self._cache_key()
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product list cache hit", cache_key=key)
            return cached
        self.logger.debug("Product list cache miss", cache_key=key)
        data = ProductMapper.many_to_dto(self.products.list())
        self.cache.set(key, data)
        return data

    def delete(self, product_id: int) -> bool:
        """
        Delete a product. A missing id is not an error; returns whether a
        row was removed. Products still referenced by a cart are kept and
        ``InvalidStateError`` is raised.
        """
        self.logger.info("Deleting product", product_id=product_id)
        product = self.products.get(id=product_id)
        if not product:
            self.logger.warning(
                "Attempted to delete non-existent product", product_id=product_id
            )
            return False
        try:
            with transaction.atomic():
                self.products.delete(product)
        except ProtectedError as exc:
            self.logger.warning(
                "Product deletion blocked: referenced by carts", product_id=product_id
            )
            raise InvalidStateError(
                "Product is referenced by one or more carts and cannot be deleted",
                details={"product_id": product_id},
            ) from exc
        except DatabaseError as exc:
            self.logger.exception(
                "Error deleting product", product_id=product_id, error=str(exc)
            )
            raise StorageError(f"Error deleting product: {exc}") from exc
        self._bump_cache_version()
        self.logger.info("Product deleted", product_id=product_id)
        return True
