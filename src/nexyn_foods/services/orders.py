"""Order ledger service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nexyn_foods.domain.errors import NotFound
from nexyn_foods.domain.orders import Order, OrderDraft
from nexyn_foods.services.authorization import authorize, authorize_claim


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def create_order(self, draft: OrderDraft, purchased_at: datetime) -> Order:
        """Insert an order and return it."""

    def list_orders_by_buyer(self, buyer_email: str) -> list[Order]:
        """Return orders placed by a buyer."""

    def get_order(self, order_id: UUID) -> Order | None:
        """Return an order by id, if present."""

    def delete_order(self, order_id: UUID) -> bool:
        """Delete an order; False when no row matched."""


@dataclass
class OrderService:
    """Application service for the order ledger."""

    repository: OrderRepository

    def record(self, draft: OrderDraft) -> Order:
        """Insert an order stamped with the ledger's own clock."""
        return self.repository.create_order(draft, purchased_at=datetime.now(tz=UTC))

    def list_for_buyer(self, principal: str, buyer_email: str) -> list[Order]:
        """Return the principal's own orders."""
        authorize(principal, buyer_email)
        return self.repository.list_orders_by_buyer(buyer_email)

    def delete(
        self, principal: str, order_id: UUID, claimed_email: str | None = None
    ) -> None:
        """Delete an order placed by the principal."""
        authorize_claim(principal, claimed_email)
        order = self.repository.get_order(order_id)
        if order is None:
            raise NotFound("Order not found.")
        authorize(
            principal,
            order.buyer_email,
            "Forbidden: You are not authorized to delete this order.",
        )
        if not self.repository.delete_order(order_id):
            raise NotFound("Order not found.")
