"""Catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from nexyn_foods.api.auth import require_principal
from nexyn_foods.api.models import (
    FoodCreate,
    FoodUpdate,
    OwnershipClaim,
    serialize_food,
)

if TYPE_CHECKING:
    from nexyn_foods.containers import AppContainer

router = APIRouter(tags=["foods"])


@router.post("/foods", status_code=status.HTTP_201_CREATED)
def create_food(
    body: FoodCreate, request: Request, principal: str = Depends(require_principal)
) -> dict[str, object]:
    """Create a listing owned by the caller."""
    container: AppContainer = request.app.state.container
    food = container.catalog_service.create_food(principal, body.to_payload())
    return serialize_food(food)


@router.get("/foods")
def list_foods(
    request: Request,
    sort_field: str | None = Query(default=None, alias="sortField"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
) -> list[dict[str, object]]:
    """List every listing in the requested order."""
    container: AppContainer = request.app.state.container
    foods = container.catalog_service.list_foods(sort_field, sort_order)
    return [serialize_food(food) for food in foods]


@router.get("/top-foods")
def top_foods(request: Request, limit: int | None = None) -> list[dict[str, object]]:
    """List the most purchased listings."""
    container: AppContainer = request.app.state.container
    foods = container.catalog_service.list_top_foods(limit)
    return [serialize_food(food) for food in foods]


@router.get("/foods/{food_id}")
def get_food(food_id: UUID, request: Request) -> dict[str, object]:
    """Return a single listing."""
    container: AppContainer = request.app.state.container
    return serialize_food(container.catalog_service.get_food(food_id))


@router.get("/my-foods/{email}")
def my_foods(
    email: str, request: Request, principal: str = Depends(require_principal)
) -> list[dict[str, object]]:
    """List the caller's own listings."""
    container: AppContainer = request.app.state.container
    foods = container.catalog_service.list_foods_by_owner(principal, email)
    return [serialize_food(food) for food in foods]


@router.put("/foods/{food_id}")
def update_food(
    food_id: UUID,
    body: FoodUpdate,
    request: Request,
    principal: str = Depends(require_principal),
) -> dict[str, object]:
    """Edit a listing owned by the caller."""
    container: AppContainer = request.app.state.container
    food = container.catalog_service.update_food(
        principal, food_id, body.changes(), claimed_email=body.email
    )
    return serialize_food(food)


@router.delete("/foods/{food_id}")
def delete_food(
    food_id: UUID,
    request: Request,
    body: OwnershipClaim | None = None,
    principal: str = Depends(require_principal),
) -> dict[str, object]:
    """Delete a listing owned by the caller."""
    container: AppContainer = request.app.state.container
    container.catalog_service.delete_food(
        principal, food_id, claimed_email=body.email if body else None
    )
    return {"deleted": True, "id": str(food_id)}
