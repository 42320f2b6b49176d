"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_mood.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from food_mood.adapters.supabase_insight_repository import SupabaseInsightRepository
from food_mood.config import Settings, parse_score_table
from food_mood.domain.moods import taxonomy_for
from food_mood.services.food_logs import FoodLogService
from food_mood.services.insights import InsightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_log_service: FoodLogService
    insight_service: InsightService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_log_repository = SupabaseFoodLogRepository(supabase_client)
    insight_repository = SupabaseInsightRepository(supabase_client)
    taxonomy = taxonomy_for(parse_score_table(resolved_settings.mood_score_table))
    food_log_service = FoodLogService(food_log_repository)
    insight_service = InsightService(
        log_source=food_log_repository,
        repository=insight_repository,
        taxonomy=taxonomy,
        weekly_min_logs=resolved_settings.weekly_min_logs,
        monthly_min_logs=resolved_settings.monthly_min_logs,
        pattern_min_logs=resolved_settings.pattern_min_logs,
    )

    return AppContainer(
        settings=resolved_settings,
        food_log_service=food_log_service,
        insight_service=insight_service,
    )
