"""Purchase and order history endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from nexyn_foods.api.auth import require_principal
from nexyn_foods.api.models import (
    OwnershipClaim,
    PurchaseCreate,
    serialize_order,
)
from nexyn_foods.services.purchases import PurchaseRequest

if TYPE_CHECKING:
    from nexyn_foods.containers import AppContainer

router = APIRouter(tags=["orders"])


@router.post("/purchase", status_code=status.HTTP_201_CREATED)
def purchase(
    body: PurchaseCreate, request: Request, principal: str = Depends(require_principal)
) -> dict[str, object]:
    """Buy a quantity of a listing for the caller."""
    container: AppContainer = request.app.state.container
    receipt = container.purchase_service.purchase(
        PurchaseRequest(
            food_id=body.food_id,
            quantity=body.quantity,
            buyer_email=body.buyer_email,
            buyer_name=body.buyer_name,
        ),
        principal,
    )
    return {
        "order": serialize_order(receipt.order),
        "food": {
            "id": str(receipt.food.id),
            "quantity": receipt.food.quantity,
            "purchase_count": receipt.food.purchase_count,
        },
    }


@router.get("/orders/{email}")
def list_orders(
    email: str, request: Request, principal: str = Depends(require_principal)
) -> list[dict[str, object]]:
    """List the caller's orders."""
    container: AppContainer = request.app.state.container
    orders = container.order_service.list_for_buyer(principal, email)
    return [serialize_order(order) for order in orders]


@router.delete("/orders/{order_id}")
def delete_order(
    order_id: UUID,
    request: Request,
    body: OwnershipClaim | None = None,
    principal: str = Depends(require_principal),
) -> dict[str, object]:
    """Delete one of the caller's orders."""
    container: AppContainer = request.app.state.container
    container.order_service.delete(
        principal, order_id, claimed_email=body.email if body else None
    )
    return {"deleted": True, "id": str(order_id)}
