"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nexyn_foods.adapters.supabase_query import execute
from nexyn_foods.domain.catalog import FoodItem, StockChange, StockOutcome
from nexyn_foods.domain.errors import StoreFailure
from nexyn_foods.services.catalog import CatalogRepository

_TABLE = "foods"


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed repository for food listings.

    Stock changes go through Postgres functions so the guard and the write
    happen in one statement.
    """

    client: Client

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a listing and return it."""
        response = execute(
            self.client.table(_TABLE).insert({**payload, "purchase_count": 0}),
            "create food item",
        )
        if not response.data:
            raise StoreFailure("Failed to add food item")
        return _parse_food(response.data[0])

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a listing by id, if present."""
        response = execute(
            self.client.table(_TABLE).select("*").eq("id", str(food_id)).limit(1),
            "fetch single food item",
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def list_foods(self, sort_field: str, descending: bool) -> list[FoodItem]:
        """Return all listings in the requested order."""
        response = execute(
            self.client.table(_TABLE).select("*").order(sort_field, desc=descending),
            "fetch food items",
        )
        return [_parse_food(row) for row in response.data or []]

    def list_top_foods(self, limit: int) -> list[FoodItem]:
        """Return the most purchased listings."""
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .order("purchase_count", desc=True)
            .order("id", desc=False)
            .limit(limit),
            "fetch top food items",
        )
        return [_parse_food(row) for row in response.data or []]

    def list_foods_by_owner(self, owner_email: str) -> list[FoodItem]:
        """Return listings created by an owner."""
        response = execute(
            self.client.table(_TABLE).select("*").eq("owner_email", owner_email),
            "fetch user's food items",
        )
        return [_parse_food(row) for row in response.data or []]

    def update_food(
        self, food_id: UUID, owner_email: str, payload: dict[str, object]
    ) -> FoodItem | None:
        """Update a listing if it still belongs to owner_email."""
        response = execute(
            self.client.table(_TABLE)
            .update(payload)
            .eq("id", str(food_id))
            .eq("owner_email", owner_email),
            "update food item",
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def delete_food(self, food_id: UUID, owner_email: str) -> bool:
        """Delete a listing if it still belongs to owner_email."""
        response = execute(
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(food_id))
            .eq("owner_email", owner_email),
            "delete food item",
        )
        return bool(response.data)

    def reserve_stock(self, food_id: UUID, amount: int) -> StockChange:
        """Call reserve_food_stock: guarded decrement plus purchase count."""
        response = execute(
            self.client.rpc(
                "reserve_food_stock", {"p_food_id": str(food_id), "p_amount": amount}
            ),
            "reserve stock",
        )
        return _parse_stock_change(response.data)

    def release_stock(self, food_id: UUID, amount: int) -> StockChange:
        """Call release_food_stock: compensating increment."""
        response = execute(
            self.client.rpc(
                "release_food_stock", {"p_food_id": str(food_id), "p_amount": amount}
            ),
            "release stock",
        )
        return _parse_stock_change(response.data)


def _parse_stock_change(data: object) -> StockChange:
    """Parse the jsonb result of a stock function."""
    if isinstance(data, list):
        data = data[0] if data else None
    if not isinstance(data, dict) or "status" not in data:
        raise StoreFailure("Stock update returned an unexpected result")
    try:
        outcome = StockOutcome(data["status"])
    except ValueError as exc:
        raise StoreFailure("Stock update returned an unknown status") from exc
    row = data.get("food")
    return StockChange(
        outcome=outcome,
        food=_parse_food(row) if isinstance(row, dict) else None,
    )


def _parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a foods row into a domain model."""
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        category=row.get("category"),
        price=float(row.get("price") or 0.0),
        origin=row.get("origin"),
        description=row.get("description"),
        image_url=row.get("image_url"),
        quantity=int(row.get("quantity") or 0),
        purchase_count=int(row.get("purchase_count") or 0),
        owner_email=str(row.get("owner_email", "")),
        owner_name=row.get("owner_name"),
        created_at=created_at,
    )
