"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import jwt
import pytest

from nexyn_foods.config import Settings
from nexyn_foods.containers import AppContainer
from nexyn_foods.domain.catalog import FoodItem, StockChange, StockOutcome
from nexyn_foods.domain.errors import StoreFailure
from nexyn_foods.domain.orders import Order, OrderDraft
from nexyn_foods.services.catalog import CatalogRepository, CatalogService
from nexyn_foods.services.identity import IdentityVerifier
from nexyn_foods.services.orders import OrderRepository, OrderService
from nexyn_foods.services.purchases import PurchaseService

TOKEN_SECRET = "test-secret-that-is-long-enough-for-hs256"


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog repository for tests.

    Stock changes take a lock so the guard and the write are one step, the
    way the Postgres functions behave.
    """

    foods: dict[UUID, FoodItem] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add(self, **overrides: object) -> FoodItem:
        values: dict[str, object] = {
            "id": uuid4(),
            "name": "Pad Thai",
            "category": "Noodles",
            "price": 9.5,
            "origin": "Thailand",
            "description": "Rice noodles",
            "image_url": None,
            "quantity": 5,
            "purchase_count": 0,
            "owner_email": "a@x.com",
            "owner_name": "Alice",
            "created_at": datetime.now(tz=UTC),
        }
        values.update(overrides)
        food = FoodItem(**values)
        self.foods[food.id] = food
        return food

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        return self.add(**payload, purchase_count=0)

    def get_food(self, food_id: UUID) -> FoodItem | None:
        return self.foods.get(food_id)

    def list_foods(self, sort_field: str, descending: bool) -> list[FoodItem]:
        present = [f for f in self.foods.values() if getattr(f, sort_field) is not None]
        missing = [f for f in self.foods.values() if getattr(f, sort_field) is None]
        ordered = sorted(
            present, key=lambda food: getattr(food, sort_field), reverse=descending
        )
        return ordered + missing

    def list_top_foods(self, limit: int) -> list[FoodItem]:
        ordered = sorted(
            self.foods.values(), key=lambda food: food.purchase_count, reverse=True
        )
        return ordered[:limit]

    def list_foods_by_owner(self, owner_email: str) -> list[FoodItem]:
        return [f for f in self.foods.values() if f.owner_email == owner_email]

    def update_food(
        self, food_id: UUID, owner_email: str, payload: dict[str, object]
    ) -> FoodItem | None:
        current = self.foods.get(food_id)
        if current is None or current.owner_email != owner_email:
            return None
        updated = replace(current, **payload)
        self.foods[food_id] = updated
        return updated

    def delete_food(self, food_id: UUID, owner_email: str) -> bool:
        current = self.foods.get(food_id)
        if current is None or current.owner_email != owner_email:
            return False
        del self.foods[food_id]
        return True

    def reserve_stock(self, food_id: UUID, amount: int) -> StockChange:
        with self._lock:
            current = self.foods.get(food_id)
            if current is None:
                return StockChange(outcome=StockOutcome.NOT_FOUND)
            if current.quantity < amount:
                return StockChange(outcome=StockOutcome.INSUFFICIENT_STOCK, food=current)
            updated = replace(
                current,
                quantity=current.quantity - amount,
                purchase_count=current.purchase_count + 1,
            )
            self.foods[food_id] = updated
            return StockChange(outcome=StockOutcome.APPLIED, food=updated)

    def release_stock(self, food_id: UUID, amount: int) -> StockChange:
        with self._lock:
            current = self.foods.get(food_id)
            if current is None:
                return StockChange(outcome=StockOutcome.NOT_FOUND)
            updated = replace(
                current,
                quantity=current.quantity + amount,
                purchase_count=max(current.purchase_count - 1, 0),
            )
            self.foods[food_id] = updated
            return StockChange(outcome=StockOutcome.APPLIED, food=updated)


@dataclass
class InMemoryOrderRepository(OrderRepository):
    """In-memory order ledger for tests; can be told to fail inserts."""

    orders: dict[UUID, Order] = field(default_factory=dict)
    fail_on_create: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def create_order(self, draft: OrderDraft, purchased_at: datetime) -> Order:
        if self.fail_on_create:
            raise StoreFailure("Failed to record order")
        order = Order(
            id=uuid4(),
            food_id=draft.food_id,
            buyer_email=draft.buyer_email,
            buyer_name=draft.buyer_name,
            quantity_purchased=draft.quantity_purchased,
            food_name=draft.food_name,
            unit_price=draft.unit_price,
            purchased_at=purchased_at,
        )
        with self._lock:
            self.orders[order.id] = order
        return order

    def list_orders_by_buyer(self, buyer_email: str) -> list[Order]:
        return [o for o in self.orders.values() if o.buyer_email == buyer_email]

    def get_order(self, order_id: UUID) -> Order | None:
        return self.orders.get(order_id)

    def delete_order(self, order_id: UUID) -> bool:
        return self.orders.pop(order_id, None) is not None


def issue_token(
    email: str,
    secret: str = TOKEN_SECRET,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    return jwt.encode(
        {"email": email, "iat": now, "exp": now + expires_in},
        secret,
        algorithm="HS256",
    )


def auth_headers(email: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(email)}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        access_token_secret=TOKEN_SECRET,
    )


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def purchase_service(
    catalog_repository: InMemoryCatalogRepository,
    order_repository: InMemoryOrderRepository,
) -> PurchaseService:
    return PurchaseService(
        catalog_repository=catalog_repository,
        order_service=OrderService(order_repository),
    )


@pytest.fixture
def container(
    settings: Settings,
    catalog_repository: InMemoryCatalogRepository,
    order_repository: InMemoryOrderRepository,
) -> AppContainer:
    order_service = OrderService(order_repository)

    return AppContainer(
        settings=settings,
        identity_verifier=IdentityVerifier(secret=settings.access_token_secret),
        catalog_service=CatalogService(
            repository=catalog_repository,
            top_foods_limit=settings.top_foods_limit,
        ),
        order_service=order_service,
        purchase_service=PurchaseService(
            catalog_repository=catalog_repository,
            order_service=order_service,
        ),
    )
