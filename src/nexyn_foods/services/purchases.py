"""Purchase workflow: validate, reserve stock, record the order.

Stock is reserved before the order is written so an order never exists
without stock backing it. If recording fails, the reservation is released
before the failure is reported.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from nexyn_foods.domain.catalog import MAX_QUANTITY, FoodItem, StockOutcome
from nexyn_foods.domain.errors import (
    CapacityExceeded,
    MarketplaceError,
    NotFound,
    StoreFailure,
    ValidationFailure,
)
from nexyn_foods.domain.orders import Order, OrderDraft
from nexyn_foods.services.authorization import authorize
from nexyn_foods.services.catalog import CatalogRepository
from nexyn_foods.services.orders import OrderService

_logger = logging.getLogger(__name__)


class PurchaseStage(str, Enum):
    """Workflow stages, in order."""

    VALIDATING = "validating"
    RESERVING = "reserving"
    RECORDING = "recording"
    COMMITTED = "committed"


@dataclass(frozen=True)
class PurchaseRequest:
    """Inbound purchase intent."""

    food_id: UUID
    quantity: int
    buyer_email: str
    buyer_name: str | None = None


@dataclass(frozen=True)
class PurchaseReceipt:
    """Committed purchase: the recorded order and the item after reservation."""

    order: Order
    food: FoodItem


@dataclass
class PurchaseService:
    """Coordinates the catalog and the order ledger for a purchase."""

    catalog_repository: CatalogRepository
    order_service: OrderService

    def purchase(self, request: PurchaseRequest, principal: str) -> PurchaseReceipt:
        """Run the purchase workflow for the acting principal."""
        self._validate(request, principal)
        reserved = self._reserve(request)
        order = self._record(request, reserved)
        _logger.info(
            "Purchase committed: food_id=%s order_id=%s quantity=%s remaining=%s",
            request.food_id,
            order.id,
            request.quantity,
            reserved.quantity,
            extra={"stage": PurchaseStage.COMMITTED.value},
        )
        return PurchaseReceipt(order=order, food=reserved)

    def _validate(self, request: PurchaseRequest, principal: str) -> FoodItem:
        authorize(
            principal,
            request.buyer_email,
            "Forbidden: You can only purchase items for yourself.",
        )
        if (
            isinstance(request.quantity, bool)
            or not isinstance(request.quantity, int)
            or not 0 < request.quantity <= MAX_QUANTITY
        ):
            raise self._reject(
                PurchaseStage.VALIDATING,
                ValidationFailure("Invalid purchase quantity."),
            )
        food = self.catalog_repository.get_food(request.food_id)
        if food is None:
            raise self._reject(
                PurchaseStage.VALIDATING, NotFound("Food item not found.")
            )
        if food.owner_email == request.buyer_email:
            raise self._reject(
                PurchaseStage.VALIDATING,
                ValidationFailure("You cannot purchase your own food item."),
            )
        return food

    def _reserve(self, request: PurchaseRequest) -> FoodItem:
        change = self.catalog_repository.reserve_stock(
            request.food_id, request.quantity
        )
        if change.outcome is StockOutcome.INSUFFICIENT_STOCK:
            raise self._reject(
                PurchaseStage.RESERVING,
                CapacityExceeded("Not enough quantity available."),
            )
        if change.outcome is StockOutcome.NOT_FOUND or change.food is None:
            raise self._reject(
                PurchaseStage.RESERVING, NotFound("Food item not found.")
            )
        return change.food

    def _record(self, request: PurchaseRequest, food: FoodItem) -> Order:
        # Snapshot the row returned by the reservation, not the validation read.
        draft = OrderDraft(
            food_id=food.id,
            buyer_email=request.buyer_email,
            buyer_name=request.buyer_name,
            quantity_purchased=request.quantity,
            food_name=food.name,
            unit_price=food.price,
        )
        try:
            return self.order_service.record(draft)
        except Exception as exc:
            _logger.warning(
                "Recording order failed, releasing reservation: food_id=%s",
                request.food_id,
                extra={"stage": PurchaseStage.RECORDING.value},
            )
            self._compensate(request)
            raise StoreFailure("Failed to process purchase") from exc

    def _compensate(self, request: PurchaseRequest) -> None:
        try:
            change = self.catalog_repository.release_stock(
                request.food_id, request.quantity
            )
        except Exception:
            _logger.exception(
                "Releasing reservation failed: food_id=%s quantity=%s",
                request.food_id,
                request.quantity,
            )
            return
        if change.outcome is not StockOutcome.APPLIED:
            _logger.error(
                "Reservation could not be released, item is gone: food_id=%s",
                request.food_id,
            )

    @staticmethod
    def _reject(stage: PurchaseStage, error: MarketplaceError) -> MarketplaceError:
        _logger.warning(
            "Purchase rejected: %s",
            error.message,
            extra={"stage": stage.value, "code": error.code},
        )
        return error
