"""Supabase repository for orders."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nexyn_foods.adapters.supabase_query import execute
from nexyn_foods.domain.errors import StoreFailure
from nexyn_foods.domain.orders import Order, OrderDraft
from nexyn_foods.services.orders import OrderRepository

_TABLE = "orders"


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for the order ledger."""

    client: Client

    def create_order(self, draft: OrderDraft, purchased_at: datetime) -> Order:
        """Insert an order row and return it."""
        response = execute(
            self.client.table(_TABLE).insert(
                {
                    "food_id": str(draft.food_id),
                    "buyer_email": draft.buyer_email,
                    "buyer_name": draft.buyer_name,
                    "quantity_purchased": draft.quantity_purchased,
                    "food_name": draft.food_name,
                    "unit_price": draft.unit_price,
                    "purchased_at": purchased_at.isoformat(),
                }
            ),
            "record order",
        )
        if not response.data:
            raise StoreFailure("Failed to record order")
        return _parse_order(response.data[0])

    def list_orders_by_buyer(self, buyer_email: str) -> list[Order]:
        """Return orders placed by a buyer, newest first."""
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("buyer_email", buyer_email)
            .order("purchased_at", desc=True),
            "fetch orders",
        )
        return [_parse_order(row) for row in response.data or []]

    def get_order(self, order_id: UUID) -> Order | None:
        """Return an order by id."""
        response = execute(
            self.client.table(_TABLE).select("*").eq("id", str(order_id)).limit(1),
            "fetch order",
        )
        if not response.data:
            return None
        return _parse_order(response.data[0])

    def delete_order(self, order_id: UUID) -> bool:
        """Delete an order row."""
        response = execute(
            self.client.table(_TABLE).delete().eq("id", str(order_id)),
            "delete order",
        )
        return bool(response.data)


def _parse_order(row: dict[str, object]) -> Order:
    return Order(
        id=UUID(str(row["id"])),
        food_id=UUID(str(row["food_id"])),
        buyer_email=str(row["buyer_email"]),
        buyer_name=row.get("buyer_name"),
        quantity_purchased=int(row.get("quantity_purchased") or 0),
        food_name=str(row.get("food_name", "")),
        unit_price=float(row.get("unit_price") or 0.0),
        purchased_at=datetime.fromisoformat(str(row["purchased_at"])),
    )
