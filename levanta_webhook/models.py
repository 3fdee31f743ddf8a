"""
Data Models Module

This module defines the Pydantic models for Levanta webhook events.
Strong typing ensures data integrity and provides clear contracts between components.

Design Decisions:
- Events are frozen: nothing mutates them after parsing
- `data` stays a plain mapping on the event, its shape depends on `type`
- Typed data models are only applied where a field is actually needed
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================

class EventType(str, Enum):
    """Levanta event types with a dedicated notification format."""
    LINK_DISABLED = "link.disabled"
    PRODUCT_ACCESS_GAINED = "product.access.gained"
    PRODUCT_ADDED = "product.added"
    PRODUCT_REMOVED = "product.removed"


# =============================================================================
# Webhook Event
# =============================================================================

class Event(BaseModel):
    """A single Levanta webhook event."""

    model_config = ConfigDict(frozen=True)

    type: str
    id: Union[str, int]
    created: float = Field(description="Creation time in epoch milliseconds")
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def created_at(self) -> datetime:
        """Creation time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.created / 1000, tz=timezone.utc)


# =============================================================================
# Event Data Shapes
# =============================================================================

class _EventData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class LinkDisabledData(_EventData):
    """Payload of a link.disabled event."""
    id: Union[str, int]
    source_name: str = Field(alias="sourceName")
    url: str


class Pricing(_EventData):
    """Product price information."""
    currency: str
    price: float


class ProductData(_EventData):
    """Payload of product.added and product.access.gained events."""
    asin: str
    marketplace: str
    commission: float = Field(description="Commission rate as a fraction")
    pricing: Pricing

    @property
    def commission_percent(self) -> str:
        """Commission formatted as a percentage with two decimals."""
        return f"{self.commission * 100:.2f}%"


class ProductRemovedData(_EventData):
    """Payload of a product.removed event."""
    asin: str
    marketplace: str


# =============================================================================
# Helpers
# =============================================================================

def isoformat_utc(value: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    return (
        value.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
