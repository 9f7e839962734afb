"""
                        Services Module

Contains the business logic behind the HTTP routes.

Services:
    - catalog: product CRUD over products.json with a snapshot cache
    - orders: order CRUD over orders.json
    - archive: optional document-store copy of created orders
    - storage: lock-guarded JSON documents
    - cache: single-slot snapshot cache

Usage:
    from food_ordering.services import build_catalog_service

    catalog = build_catalog_service(get_settings())
    catalog.load()
"""

import logging
import time
from typing import Callable, Optional

from food_ordering.core.config import Settings
from food_ordering.services.archive import OrderArchive
from food_ordering.services.cache import SnapshotCache
from food_ordering.services.catalog import CatalogService
from food_ordering.services.orders import OrderService
from food_ordering.services.storage import JsonCounter, JsonDocumentStore

logger = logging.getLogger(__name__)


def build_catalog_service(settings: Settings, clock: Callable[[], float] = time.monotonic) -> CatalogService:
    """Wire a CatalogService to the configured products document."""
    store = JsonDocumentStore(settings.products_file, settings.file_lock_timeout, label="products")
    cache = SnapshotCache(settings.cache_ttl_seconds, clock=clock, name="products")
    return CatalogService(store, cache, placeholder_image=settings.placeholder_image)


def build_order_service(
    settings: Settings,
    archive: Optional[OrderArchive] = None,
    clock: Callable[[], float] = time.monotonic,
) -> OrderService:
    """Wire an OrderService to the configured orders document and id sidecar."""
    store = JsonDocumentStore(settings.orders_file, settings.file_lock_timeout, label="orders")
    cache = SnapshotCache(settings.cache_ttl_seconds, clock=clock, name="orders")
    counter = JsonCounter(settings.order_counter_file, settings.file_lock_timeout)
    return OrderService(store, cache, archive=archive, counter=counter)


__all__ = [
    "build_catalog_service",
    "build_order_service",
    "CatalogService",
    "OrderService",
    "OrderArchive",
    "JsonCounter",
    "JsonDocumentStore",
    "SnapshotCache",
]
