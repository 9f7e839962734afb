"""
Pydantic Schemas for Request/Response Bodies

Request bodies are lenient. Product fields are coerced to the stored
types; order bodies are stored exactly as sent. The typed Order model
only maps stored orders onto the document store.

Version: 1.0.0
"""

import math
import re
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Leading decimal literal, matching how browsers' parseFloat reads a string
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def coerce_price(value: Any) -> Optional[float]:
    """
    Coerce a client-supplied price to a float.

    Strings are read up to the end of their leading decimal literal
    ("1.5", " 2.50 KWD" -> 2.5). Anything that does not yield a finite
    number becomes None, which is stored as JSON null.

    Examples:
        >>> coerce_price("1.5")
        1.5
        >>> coerce_price("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _FLOAT_PREFIX.match(str(value).strip())
        if not match:
            return None
        number = float(match.group(0).replace("Infinity", "inf"))
    return number if math.isfinite(number) else None


def _scalar_to_str(v: Any) -> Any:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


# =============================================================================
# PRODUCT SCHEMAS
# =============================================================================

class ProductCreate(BaseModel):
    """Request body for adding a product to the catalog."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, examples=["Idli"])
    description: Optional[str] = Field(None, examples=["Steamed rice cake"])
    price: Any = Field(None, examples=["1.5"])
    image: Optional[str] = Field(None, examples=["https://via.placeholder.com/300"])

    @field_validator("name", "description", "image", mode="before")
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        return _scalar_to_str(v)


# =============================================================================
# ORDER SCHEMAS
# =============================================================================

class OrderLine(BaseModel):
    """Snapshot of a product inside an order, as the document store reads it."""

    model_config = ConfigDict(extra="allow", allow_inf_nan=False)

    id: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    image: Optional[str] = None

    @field_validator("id", "name", "image", mode="before")
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        return _scalar_to_str(v)


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(v) for v in value)
    return False


class OrderCreate(BaseModel):
    """
    Request body for placing an order.

    The body is stored verbatim: known fields are named for the API docs
    only and accept any JSON value, unknown fields are kept alongside them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    customer_name: Any = Field(None, alias="customerName", examples=["Asha Menon"])
    delivery_address: Any = Field(None, alias="deliveryAddress", examples=["12 Beach Road"])
    phone_number: Any = Field(None, alias="phoneNumber", examples=["96512345678"])
    payment_method: Any = Field(None, alias="paymentMethod", examples=["cash"])
    items: Any = Field(None, examples=[[{"id": "1", "name": "Masala Dosa", "price": 2.5, "quantity": 2}]])
    total_amount: Any = Field(None, alias="totalAmount", examples=[7.5])

    @model_validator(mode="before")
    @classmethod
    def json_representable(cls, data: Any) -> Any:
        """NaN and Infinity literals cannot be written back as JSON."""
        if _has_non_finite(data):
            raise ValueError("Order contains a non-finite number")
        return data

    def to_document(self) -> dict[str, Any]:
        """Fields the client actually sent, under their wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class Order(BaseModel):
    """A stored order: the client's fields plus server-assigned id and createdAt."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, allow_inf_nan=False)

    id: str
    customer_name: Optional[str] = Field(None, alias="customerName")
    delivery_address: Optional[str] = Field(None, alias="deliveryAddress")
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    payment_method: Optional[str] = Field(None, alias="paymentMethod")
    items: Optional[List[OrderLine]] = None
    total_amount: Optional[float] = Field(None, alias="totalAmount")
    created_at: datetime = Field(..., alias="createdAt")

    @field_validator("customer_name", "delivery_address", "phone_number", "payment_method", mode="before")
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        return _scalar_to_str(v)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class MessageResponse(BaseModel):
    """Static outcome message (deletes and errors)."""
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    products: str
    orders: str
    document_store: str
    timestamp: datetime
