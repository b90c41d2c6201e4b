"""Favorites stored as a single keyed JSON document on disk."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from chefgenie.domain.recipes import SavedRecipe
from chefgenie.services.favorites import FavoritesRepository

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileFavoritesRepository(FavoritesRepository):
    """File-backed favorites store, rewritten in full on every save."""

    path: Path
    key: str

    def load(self) -> list[SavedRecipe]:
        """Read favorites from the JSON document, if it exists."""
        return parse_favorites(self._read_document().get(self.key, []))

    def save(self, favorites: list[SavedRecipe]) -> None:
        """Write favorites, preserving other keys in the document."""
        document = self._read_document()
        document[self.key] = dump_favorites(favorites)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        os.replace(tmp_path, self.path)

    def _read_document(self) -> dict[str, object]:
        """Return the stored document; unreadable files count as empty."""
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            _logger.warning(
                "Unreadable favorites file, starting empty: path=%s error=%s",
                self.path,
                exc,
            )
            return {}
        return document if isinstance(document, dict) else {}


def parse_favorites(rows: object) -> list[SavedRecipe]:
    """Validate stored rows, skipping entries that no longer parse."""
    if not isinstance(rows, list):
        return []
    favorites: list[SavedRecipe] = []
    for row in rows:
        try:
            favorites.append(SavedRecipe.model_validate(row))
        except ValidationError as exc:
            _logger.warning("Skipping unreadable favorite: %s", exc)
    return favorites


def dump_favorites(favorites: list[SavedRecipe]) -> list[dict[str, object]]:
    """Serialize favorites in the camelCase storage format."""
    return [fav.model_dump(mode="json", by_alias=True) for fav in favorites]
