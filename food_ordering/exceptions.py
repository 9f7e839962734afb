"""Domain errors raised by the catalog and order services."""


class FoodOrderingError(Exception):
    """Base class for service-level errors."""


class NotFoundError(FoodOrderingError):
    """An entity addressed by id does not exist."""

    kind = "Entity"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"{self.kind} {entity_id!r} not found")


class ProductNotFoundError(NotFoundError):
    kind = "Product"


class OrderNotFoundError(NotFoundError):
    kind = "Order"
