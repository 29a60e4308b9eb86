"""Request bodies and response serializers for the HTTP API."""

from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from nexyn_foods.domain.catalog import MAX_QUANTITY, FoodItem
from nexyn_foods.domain.orders import Order


class AddedBy(BaseModel):
    """Seller identity declared on a new listing."""

    name: str | None = None
    email: str


class FoodCreate(BaseModel):
    """Payload for creating a listing."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    category: str | None = None
    price: float = Field(ge=0)
    origin: str | None = None
    description: str | None = None
    image_url: str | None = None
    quantity: int = Field(ge=0, le=MAX_QUANTITY)
    added_by: AddedBy

    def to_payload(self) -> dict[str, object]:
        """Return store fields, with the owner flattened."""
        payload = self.model_dump(exclude={"added_by"})
        payload["owner_email"] = self.added_by.email
        payload["owner_name"] = self.added_by.name
        return payload


class FoodUpdate(BaseModel):
    """Payload for editing a listing; only supplied fields change.

    Unknown keys are kept and handed to the service, which rejects them only
    after checking the stored owner.
    """

    model_config = ConfigDict(extra="allow")

    email: str | None = None
    name: str | None = None
    category: str | None = None
    price: float | None = None
    origin: str | None = None
    description: str | None = None
    image_url: str | None = None
    quantity: int | None = None

    def changes(self) -> dict[str, object]:
        """Return the explicitly supplied fields, without the actor claim."""
        changes = self.model_dump(exclude_unset=True, exclude={"email"})
        changes.update(self.model_extra or {})
        return changes


class OwnershipClaim(BaseModel):
    """Optional actor email sent with delete requests."""

    email: str | None = None


class PurchaseCreate(BaseModel):
    """Payload for a purchase; accepts the legacy camelCase names too."""

    food_id: UUID = Field(validation_alias=AliasChoices("food_id", "foodId"))
    quantity: int = Field(
        validation_alias=AliasChoices("quantity", "purchase_quantity"),
        le=MAX_QUANTITY,
    )
    buyer_email: str
    buyer_name: str | None = None


def serialize_food(food: FoodItem) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "category": food.category,
        "price": food.price,
        "origin": food.origin,
        "description": food.description,
        "image_url": food.image_url,
        "quantity": food.quantity,
        "purchase_count": food.purchase_count,
        "added_by": {"name": food.owner_name, "email": food.owner_email},
        "created_at": food.created_at.isoformat() if food.created_at else None,
    }


def serialize_order(order: Order) -> dict[str, object]:
    return {
        "id": str(order.id),
        "food_id": str(order.food_id),
        "buyer_email": order.buyer_email,
        "buyer_name": order.buyer_name,
        "quantity_purchased": order.quantity_purchased,
        "food_name": order.food_name,
        "unit_price": order.unit_price,
        "purchased_at": order.purchased_at.isoformat(),
    }
