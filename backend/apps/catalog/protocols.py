from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from .models import Product


class ProductRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable[Product]:
        ...

    def get(self, **filters) -> Optional[Product]:
        ...

    def get_by_name(self, name: str) -> Optional[Product]:
        ...

    def create(self, **data) -> Product:
        ...

    def delete(self, product: Product) -> None:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...
