"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from health_tracker.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from health_tracker.adapters.supabase_kv_store import SupabaseKeyValueStore
from health_tracker.config import Settings
from health_tracker.services.auth import AuthService
from health_tracker.services.dashboard import DashboardService
from health_tracker.services.hydration import HydrationService
from health_tracker.services.nutrition import NutritionLogService
from health_tracker.services.profile import ProfileService
from health_tracker.services.supplements import SupplementService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    nutrition_service: NutritionLogService
    supplement_service: SupplementService
    hydration_service: HydrationService
    profile_service: ProfileService
    dashboard_service: DashboardService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    store = SupabaseKeyValueStore(supabase_client, table=resolved_settings.kv_table)
    auth_service = AuthService(SupabaseIdentityProvider(supabase_client))
    nutrition_service = NutritionLogService(store)
    supplement_service = SupplementService(store)
    hydration_service = HydrationService(
        store, default_goal=resolved_settings.default_hydration_goal
    )
    profile_service = ProfileService(store, hydration_service)
    dashboard_service = DashboardService(
        nutrition_service=nutrition_service,
        supplement_service=supplement_service,
        hydration_service=hydration_service,
        profile_service=profile_service,
    )
    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        nutrition_service=nutrition_service,
        supplement_service=supplement_service,
        hydration_service=hydration_service,
        profile_service=profile_service,
        dashboard_service=dashboard_service,
    )
