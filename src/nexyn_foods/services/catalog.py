"""Catalog service: listings, ownership-guarded edits and stock primitives."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nexyn_foods.domain.catalog import MAX_QUANTITY, FoodItem, StockChange
from nexyn_foods.domain.errors import NotFound, ValidationFailure
from nexyn_foods.services.authorization import authorize, authorize_claim

_logger = logging.getLogger(__name__)

SORTABLE_FIELDS = frozenset(
    {"name", "category", "price", "origin", "quantity", "purchase_count", "created_at"}
)
EDITABLE_FIELDS = frozenset(
    {"name", "category", "price", "origin", "description", "image_url", "quantity"}
)
_CREATE_FIELDS = EDITABLE_FIELDS | {"owner_email", "owner_name"}
DEFAULT_SORT_FIELD = "name"
MAX_TOP_FOODS = 50


class CatalogRepository(Protocol):
    """Persistence interface for food listings."""

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a listing with a zero purchase count and return it."""

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a listing by id, if present."""

    def list_foods(self, sort_field: str, descending: bool) -> list[FoodItem]:
        """Return all listings ordered by an allow-listed field."""

    def list_top_foods(self, limit: int) -> list[FoodItem]:
        """Return listings ordered by purchase count, highest first."""

    def list_foods_by_owner(self, owner_email: str) -> list[FoodItem]:
        """Return listings created by an owner."""

    def update_food(
        self, food_id: UUID, owner_email: str, payload: dict[str, object]
    ) -> FoodItem | None:
        """Update a listing still owned by owner_email; None when no row matched."""

    def delete_food(self, food_id: UUID, owner_email: str) -> bool:
        """Delete a listing still owned by owner_email; False when no row matched."""

    def reserve_stock(self, food_id: UUID, amount: int) -> StockChange:
        """Atomically take amount units and count one purchase if stock allows."""

    def release_stock(self, food_id: UUID, amount: int) -> StockChange:
        """Atomically return amount units and uncount one purchase."""


@dataclass
class CatalogService:
    """Application service for catalog operations."""

    repository: CatalogRepository
    top_foods_limit: int = 6

    def create_food(self, principal: str, payload: dict[str, object]) -> FoodItem:
        """Create a listing owned by the acting principal."""
        unknown = set(payload) - _CREATE_FIELDS
        if unknown:
            raise ValidationFailure(f"Unknown fields: {', '.join(sorted(unknown))}")
        owner = payload.get("owner_email")
        if not isinstance(owner, str) or not owner:
            raise ValidationFailure("Food item must declare its owner.")
        authorize(principal, owner)
        if not payload.get("name"):
            raise ValidationFailure("Food item must have a name.")
        _validate_fields(payload)
        food = self.repository.create_food(payload)
        _logger.info("Food item created: id=%s owner=%s", food.id, food.owner_email)
        return food

    def get_food(self, food_id: UUID) -> FoodItem:
        """Return a single listing."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFound("Food item not found.")
        return food

    def list_foods(
        self, sort_field: str | None = None, sort_order: str | None = None
    ) -> list[FoodItem]:
        """Return all listings sorted by an allow-listed field and direction."""
        field = sort_field or DEFAULT_SORT_FIELD
        if field not in SORTABLE_FIELDS:
            raise ValidationFailure(f"Cannot sort by '{field}'.")
        order = (sort_order or "asc").lower()
        if order not in {"asc", "desc"}:
            raise ValidationFailure("Sort order must be 'asc' or 'desc'.")
        return self.repository.list_foods(field, descending=order == "desc")

    def list_top_foods(self, limit: int | None = None) -> list[FoodItem]:
        """Return the most purchased listings."""
        resolved = self.top_foods_limit if limit is None else limit
        if not 1 <= resolved <= MAX_TOP_FOODS:
            raise ValidationFailure(f"Limit must be between 1 and {MAX_TOP_FOODS}.")
        return self.repository.list_top_foods(resolved)

    def list_foods_by_owner(self, principal: str, owner_email: str) -> list[FoodItem]:
        """Return the principal's own listings."""
        authorize(principal, owner_email)
        return self.repository.list_foods_by_owner(owner_email)

    def update_food(
        self,
        principal: str,
        food_id: UUID,
        payload: dict[str, object],
        claimed_email: str | None = None,
    ) -> FoodItem:
        """Apply an owner edit to a listing."""
        authorize_claim(principal, claimed_email)
        stored = self.get_food(food_id)
        authorize(
            principal,
            stored.owner_email,
            "Forbidden: You can only update your own food items.",
        )
        unknown = set(payload) - EDITABLE_FIELDS
        if unknown:
            raise ValidationFailure(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}"
            )
        if not payload:
            raise ValidationFailure("No fields to update.")
        _validate_fields(payload)
        updated = self.repository.update_food(food_id, stored.owner_email, payload)
        if updated is None:
            raise NotFound("Food item not found.")
        return updated

    def delete_food(
        self, principal: str, food_id: UUID, claimed_email: str | None = None
    ) -> None:
        """Delete a listing owned by the principal."""
        authorize_claim(principal, claimed_email)
        stored = self.get_food(food_id)
        authorize(
            principal,
            stored.owner_email,
            "Forbidden: You can only delete your own food items.",
        )
        if not self.repository.delete_food(food_id, stored.owner_email):
            raise NotFound("Food item not found.")
        _logger.info("Food item deleted: id=%s", food_id)


def _validate_fields(payload: dict[str, object]) -> None:
    """Reject out-of-range quantity and price values."""
    if "quantity" in payload:
        quantity = payload["quantity"]
        if (
            isinstance(quantity, bool)
            or not isinstance(quantity, int)
            or not 0 <= quantity <= MAX_QUANTITY
        ):
            raise ValidationFailure(
                f"Quantity must be an integer between 0 and {MAX_QUANTITY}."
            )
    if "price" in payload:
        price = payload["price"]
        if isinstance(price, bool) or not isinstance(price, int | float) or price < 0:
            raise ValidationFailure("Price must be a non-negative number.")
    if "name" in payload and not payload["name"]:
        raise ValidationFailure("Food item must have a name.")
