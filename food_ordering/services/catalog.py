"""
Product Catalog Service

Owns the in-memory product list, its id counter, its JSON document and
its snapshot cache. One instance per process, built at application startup.

Read path:
    cache (fresh) -> products.json -> in-memory list (on I/O failure)

Write path:
    mutate in-memory list -> rewrite products.json -> refresh/invalidate cache

Version: 1.0.0
"""

import logging
from typing import Any

from food_ordering.exceptions import ProductNotFoundError
from food_ordering.schemas import ProductCreate, coerce_price
from food_ordering.services.cache import SnapshotCache
from food_ordering.services.storage import JsonDocumentStore, next_numeric_id

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/300"

SEED_PRODUCTS: list[dict[str, Any]] = [
    {
        "id": "1",
        "name": "Masala Dosa",
        "description": "Crispy rice crepe served with potato masala and chutneys",
        "price": 2.5,
        "image": PLACEHOLDER_IMAGE,
    },
    {
        "id": "2",
        "name": "Paneer Butter Masala",
        "description": "Cottage cheese cubes in rich tomato gravy",
        "price": 3.5,
        "image": PLACEHOLDER_IMAGE,
    },
    {
        "id": "3",
        "name": "Veg Biryani",
        "description": "Fragrant rice cooked with mixed vegetables and aromatic spices",
        "price": 3.0,
        "image": PLACEHOLDER_IMAGE,
    },
]


class CatalogService:
    """
    CRUD operations over the product catalog.

    Attributes:
        store: Backing products.json document
        cache: Snapshot cache used by list_products()
        products: In-memory mirror, seeded by load()
        next_id: Id handed to the next created product
        placeholder_image: Image stored when a product has none
    """

    def __init__(
        self,
        store: JsonDocumentStore,
        cache: SnapshotCache,
        placeholder_image: str = PLACEHOLDER_IMAGE,
    ):
        self.store = store
        self.cache = cache
        self.placeholder_image = placeholder_image
        self.products: list[dict[str, Any]] = []
        self.next_id = 1

    def load(self) -> None:
        """Seed the mirror and the id counter from products.json."""
        seed = [dict(p, image=self.placeholder_image) for p in SEED_PRODUCTS]
        loaded = self.store.load_or_seed(seed)
        if loaded is None:
            logger.warning("Products unavailable at startup, continuing with in-memory list")
            return
        self.products = loaded
        self.next_id = next_numeric_id(self.products)

    def _save(self) -> bool:
        return self.store.save(self.products)

    def list_products(self) -> list[dict[str, Any]]:
        """Return the catalog, served from cache while fresh."""
        try:
            return self.cache.read_through(self.store.read)
        except Exception as e:
            logger.error(f"Error reading products: {e}")
            return self.products

    def add_product(self, payload: ProductCreate) -> dict[str, Any]:
        """Append a product under the next id and persist the catalog."""
        product: dict[str, Any] = {"id": str(self.next_id)}
        if payload.name is not None:
            product["name"] = payload.name
        if payload.description is not None:
            product["description"] = payload.description
        product["price"] = coerce_price(payload.price)
        product["image"] = payload.image or self.placeholder_image

        self.products.append(product)
        self.next_id += 1
        self._save()
        self.cache.refresh(self.products)

        logger.info(f"Product added: {product}")
        return product

    def delete_product(self, product_id: str) -> None:
        """
        Remove one product.

        Raises:
            ProductNotFoundError: No product has this id
        """
        index = next(
            (i for i, p in enumerate(self.products) if p.get("id") == product_id),
            None,
        )
        if index is None:
            raise ProductNotFoundError(product_id)

        del self.products[index]
        self._save()
        self.cache.invalidate()
        logger.info(f"Product deleted: {product_id}")

    def delete_all_products(self) -> None:
        """Empty the catalog and restart ids at 1."""
        self.products.clear()
        self.next_id = 1
        self._save()
        self.cache.invalidate()
        logger.info("All products deleted")
