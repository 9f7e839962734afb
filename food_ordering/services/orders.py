"""
Order Service

Owns the in-memory order list, its id counter, its JSON document and its
snapshot cache. Orders keep whatever fields the client sent plus a
server-assigned ``id`` and ``createdAt``.

Unlike the catalog, list_orders() always re-reads orders.json so staff
see new orders immediately; the cache is refreshed as a side effect.

Version: 1.0.0
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from food_ordering.exceptions import OrderNotFoundError
from food_ordering.schemas import OrderCreate
from food_ordering.services.cache import SnapshotCache
from food_ordering.services.storage import JsonCounter, JsonDocumentStore, next_numeric_id

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class OrderService:
    """
    CRUD operations over customer orders.

    Attributes:
        store: Backing orders.json document
        cache: Snapshot cache, refreshed on reads and creates
        archive: Optional document-store writer for created orders
        counter: Optional sidecar persisting next_id across restarts
        orders: In-memory mirror, seeded by load()
        next_id: Id handed to the next created order
    """

    def __init__(
        self,
        store: JsonDocumentStore,
        cache: SnapshotCache,
        archive: Optional[Any] = None,
        counter: Optional[JsonCounter] = None,
    ):
        self.store = store
        self.cache = cache
        self.archive = archive
        self.counter = counter
        self.orders: list[dict[str, Any]] = []
        self.next_id = 1

    def load(self) -> None:
        """Seed the mirror from orders.json and the id counter from its sidecar."""
        stored_next = self.counter.load() if self.counter is not None else None
        loaded = self.store.load_or_seed([])
        if loaded is None:
            logger.warning("Orders unavailable at startup, continuing with in-memory list")
            self.next_id = stored_next or 1
            return
        self.orders = loaded
        # the sidecar may lag a crash between the two writes
        self.next_id = max(next_numeric_id(self.orders), stored_next or 1)

    def _save(self) -> bool:
        saved = self.store.save(self.orders)
        if self.counter is not None:
            saved = self.counter.save(self.next_id) and saved
        return saved

    def list_orders(self) -> list[dict[str, Any]]:
        """Return all orders as currently persisted."""
        try:
            current = self.store.read()
        except Exception as e:
            logger.error(f"Error reading orders: {e}")
            return self.orders
        self.cache.refresh(current)
        return current

    async def add_order(self, payload: OrderCreate) -> dict[str, Any]:
        """Store a new order and hand it to the archive when one is configured."""
        order = payload.to_document()
        order["id"] = str(self.next_id)
        order["createdAt"] = utc_timestamp()
        # id first, as the storefront renders it
        order = {"id": order.pop("id"), **order}

        self.orders.append(order)
        self.next_id += 1
        self._save()
        self.cache.refresh(self.orders)
        logger.info(f"Order added: #{order['id']} for {order.get('customerName')}")

        if self.archive is not None:
            await self.archive.archive(order)

        return order

    def delete_order(self, order_id: str) -> None:
        """
        Remove one order.

        Raises:
            OrderNotFoundError: No order has this id
        """
        index = next(
            (i for i, o in enumerate(self.orders) if o.get("id") == order_id),
            None,
        )
        if index is None:
            raise OrderNotFoundError(order_id)

        del self.orders[index]
        self._save()
        self.cache.invalidate()
        logger.info(f"Order deleted: {order_id}")

    def delete_all_orders(self) -> None:
        """Remove every order and restart ids at 1."""
        self.orders.clear()
        self.next_id = 1
        self._save()
        self.cache.invalidate()
        logger.info("All orders deleted")
