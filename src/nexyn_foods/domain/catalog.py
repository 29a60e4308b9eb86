"""Domain models for the food catalog."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

# Stock columns are Postgres integers.
MAX_QUANTITY = 2_147_483_647


@dataclass(frozen=True)
class FoodItem:
    """Represents a food listing offered by a seller."""

    id: UUID
    name: str
    category: str | None
    price: float
    origin: str | None
    description: str | None
    image_url: str | None
    quantity: int
    purchase_count: int
    owner_email: str
    owner_name: str | None
    created_at: datetime | None = None


class StockOutcome(str, Enum):
    """Result of an atomic stock change."""

    APPLIED = "applied"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class StockChange:
    """Outcome of a reservation or release, with the item state after it."""

    outcome: StockOutcome
    food: FoodItem | None = None
