"""Domain models for purchase orders."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class OrderDraft:
    """Order data captured by the purchase workflow before it is recorded."""

    food_id: UUID
    buyer_email: str
    buyer_name: str | None
    quantity_purchased: int
    food_name: str
    unit_price: float


@dataclass(frozen=True)
class Order:
    """A recorded purchase with a snapshot of the item at purchase time."""

    id: UUID
    food_id: UUID
    buyer_email: str
    buyer_name: str | None
    quantity_purchased: int
    food_name: str
    unit_price: float
    purchased_at: datetime
