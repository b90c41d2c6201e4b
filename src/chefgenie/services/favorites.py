"""Favorites (cookbook) management."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from chefgenie.domain.recipes import Recipe, SavedRecipe

_logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class FavoriteIdentity(str, Enum):
    """Policy deciding when two recipes count as the same favorite."""

    TITLE = "title"
    TITLE_AND_DESCRIPTION = "title_and_description"

    def key(self, recipe: Recipe) -> tuple[str, ...]:
        """Return the identity key of a recipe under this policy."""
        if self is FavoriteIdentity.TITLE_AND_DESCRIPTION:
            return (recipe.title, recipe.description)
        return (recipe.title,)


class FavoriteNotFoundError(LookupError):
    """Raised when a favorite id does not exist."""


class FavoritesRepository(Protocol):
    """Persistence interface for the favorites list."""

    def load(self) -> list[SavedRecipe]:
        """Return the stored favorites, newest first."""

    def save(self, favorites: list[SavedRecipe]) -> None:
        """Replace the stored favorites with the given list."""


@dataclass
class FavoritesService:
    """Owns the favorites list: loaded once, rewritten on every change."""

    repository: FavoritesRepository
    identity: FavoriteIdentity = FavoriteIdentity.TITLE
    _favorites: list[SavedRecipe] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self._favorites = list(self.repository.load())
        _logger.info("Loaded favorites: count=%s", len(self._favorites))

    def list_favorites(self) -> list[SavedRecipe]:
        """Return all favorites, newest first."""
        return list(self._favorites)

    def get(self, favorite_id: str) -> SavedRecipe | None:
        """Return a favorite by id, if present."""
        return next((fav for fav in self._favorites if fav.id == favorite_id), None)

    def find(self, recipe: Recipe) -> SavedRecipe | None:
        """Return the favorite matching a recipe under the identity policy."""
        key = self.identity.key(recipe)
        return next(
            (fav for fav in self._favorites if self.identity.key(fav) == key), None
        )

    def is_favorite(self, recipe: Recipe) -> bool:
        """Return True when the recipe is already saved."""
        return self.find(recipe) is not None

    def toggle(self, recipe: Recipe, image_url: str | None) -> SavedRecipe | None:
        """Save the recipe, or remove it if it is already saved.

        Returns the new favorite when added, None when removed.
        """
        existing = self.find(recipe)
        if existing is not None:
            self._replace([fav for fav in self._favorites if fav.id != existing.id])
            _logger.info("Removed favorite: id=%s", existing.id)
            return None
        saved = SavedRecipe.from_recipe(recipe, image_url)
        self._replace([saved, *self._favorites])
        _logger.info("Added favorite: id=%s title=%s", saved.id, saved.title)
        return saved

    def remove(self, favorite_id: str) -> None:
        """Delete a favorite by id."""
        if self.get(favorite_id) is None:
            raise FavoriteNotFoundError(favorite_id)
        self._replace([fav for fav in self._favorites if fav.id != favorite_id])
        _logger.info("Removed favorite: id=%s", favorite_id)

    def rate(self, favorite_id: str, rating: int) -> SavedRecipe:
        """Set the rating of a single favorite."""
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        target = self.get(favorite_id)
        if target is None:
            raise FavoriteNotFoundError(favorite_id)
        rated = target.model_copy(update={"rating": rating})
        self._replace(
            [rated if fav.id == favorite_id else fav for fav in self._favorites]
        )
        return rated

    def _replace(self, favorites: list[SavedRecipe]) -> None:
        self.repository.save(favorites)
        self._favorites = favorites
