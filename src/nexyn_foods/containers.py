"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nexyn_foods.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from nexyn_foods.adapters.supabase_order_repository import SupabaseOrderRepository
from nexyn_foods.config import Settings
from nexyn_foods.services.catalog import CatalogService
from nexyn_foods.services.identity import IdentityVerifier
from nexyn_foods.services.orders import OrderService
from nexyn_foods.services.purchases import PurchaseService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_verifier: IdentityVerifier
    catalog_service: CatalogService
    order_service: OrderService
    purchase_service: PurchaseService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_repository = SupabaseCatalogRepository(supabase_client)
    order_repository = SupabaseOrderRepository(supabase_client)
    identity_verifier = IdentityVerifier(
        secret=resolved_settings.access_token_secret,
        algorithm=resolved_settings.access_token_algorithm,
    )
    catalog_service = CatalogService(
        repository=catalog_repository,
        top_foods_limit=resolved_settings.top_foods_limit,
    )
    order_service = OrderService(order_repository)
    purchase_service = PurchaseService(
        catalog_repository=catalog_repository,
        order_service=order_service,
    )

    return AppContainer(
        settings=resolved_settings,
        identity_verifier=identity_verifier,
        catalog_service=catalog_service,
        order_service=order_service,
        purchase_service=purchase_service,
    )
