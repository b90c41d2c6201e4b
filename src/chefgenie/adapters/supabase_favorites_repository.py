"""Supabase repository storing favorites under a single state key."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from chefgenie.adapters.json_favorites_repository import (
    dump_favorites,
    parse_favorites,
)
from chefgenie.domain.recipes import SavedRecipe
from chefgenie.services.favorites import FavoritesRepository


@dataclass
class SupabaseFavoritesRepository(FavoritesRepository):
    """Supabase implementation backed by the `app_state` key-value table."""

    client: Client
    key: str

    def load(self) -> list[SavedRecipe]:
        """Return favorites stored under the configured key."""
        response = (
            self.client.table("app_state")
            .select("value")
            .eq("key", self.key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return []
        return parse_favorites(response.data[0].get("value"))

    def save(self, favorites: list[SavedRecipe]) -> None:
        """Replace the stored favorites list."""
        self.client.table("app_state").upsert(
            {
                "key": self.key,
                "value": dump_favorites(favorites),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
