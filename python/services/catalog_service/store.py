"""Thread-safe in-memory product store."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator, Optional

from catalog_common.models import Product, ProductBase, ProductUpdate

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReadWriteLock:
    """Shared/exclusive lock.

    Any number of readers may hold it together; a writer holds it alone.
    A waiting writer blocks new readers so writes are not starved.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ProductStore:
    """Holds the catalog and hands out ids.

    The record map and the id counter share one :class:`ReadWriteLock`, so
    id assignment and insertion happen as a unit. Stored products are frozen
    models; updates swap in a new instance, which means callers always get
    either the old record or the new one, never a half-written one.

    Lookups that miss return ``None`` (or ``False`` for deletes) rather than
    raising.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._lock = ReadWriteLock()
        self._products: dict[int, Product] = {}
        self._next_id = 1
        self._clock = clock

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._products)

    def list_products(self) -> list[Product]:
        with self._lock.read():
            return list(self._products.values())

    def get_product(self, product_id: int) -> Optional[Product]:
        with self._lock.read():
            return self._products.get(product_id)

    def create_product(self, draft: ProductBase) -> Product:
        with self._lock.write():
            now = self._clock()
            product = Product(
                id=self._next_id,
                name=draft.name,
                description=draft.description,
                price=draft.price,
                stock=draft.stock,
                category=draft.category,
                created_at=now,
                updated_at=now,
            )
            self._products[product.id] = product
            self._next_id += 1
        logger.debug("Created product %d (%s)", product.id, product.name)
        return product

    def update_product(self, product_id: int, patch: ProductUpdate) -> Optional[Product]:
        """Apply a sparse patch.

        Empty text, a non-positive price and a negative stock count as
        "not supplied" and leave the stored value alone. ``updated_at`` is
        refreshed even when nothing else changes.
        """
        with self._lock.write():
            current = self._products.get(product_id)
            if current is None:
                return None

            changes = {}
            for field in ("name", "description", "category"):
                value = getattr(patch, field)
                if value:
                    changes[field] = value
            if patch.price is not None and patch.price > 0:
                changes["price"] = patch.price
            if patch.stock is not None and patch.stock >= 0:
                changes["stock"] = patch.stock
            # strictly after the previous stamp even if the clock stalls or steps back
            changes["updated_at"] = max(
                self._clock(), current.updated_at + timedelta(microseconds=1)
            )

            updated = current.model_copy(update=changes)
            self._products[product_id] = updated
        logger.debug("Updated product %d fields=%s", product_id, sorted(changes))
        return updated

    def delete_product(self, product_id: int) -> bool:
        with self._lock.write():
            removed = self._products.pop(product_id, None) is not None
        if removed:
            logger.debug("Deleted product %d", product_id)
        return removed

    def search_products(self, category: str) -> list[Product]:
        """Exact, case-sensitive category match; ``""`` matches everything."""
        with self._lock.read():
            return [
                p for p in self._products.values()
                if not category or p.category == category
            ]


SAMPLE_PRODUCTS = (
    ProductBase(
        name="Laptop",
        description="High-performance laptop for developers",
        price=1299.99,
        stock=15,
        category="Electronics",
    ),
    ProductBase(
        name="Wireless Mouse",
        description="Ergonomic wireless mouse",
        price=29.99,
        stock=100,
        category="Accessories",
    ),
    ProductBase(
        name="Mechanical Keyboard",
        description="RGB mechanical gaming keyboard",
        price=149.99,
        stock=50,
        category="Accessories",
    ),
)


def seed_sample_products(store: ProductStore) -> list[Product]:
    """Load the demo catalog into *store*. Meant to run once at startup."""
    created = [store.create_product(draft) for draft in SAMPLE_PRODUCTS]
    logger.info("Seeded %d sample products", len(created))
    return created
