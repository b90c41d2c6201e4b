"""Tests for favorites management."""

import pytest

from chefgenie.domain.recipes import SavedRecipe
from chefgenie.services.favorites import (
    FavoriteIdentity,
    FavoriteNotFoundError,
    FavoritesService,
)
from tests.conftest import InMemoryFavoritesRepository, make_recipe


def test_loads_once_at_startup() -> None:
    stored = SavedRecipe.from_recipe(make_recipe(), None)
    repository = InMemoryFavoritesRepository(stored=[stored])

    service = FavoritesService(repository)
    service.list_favorites()
    service.list_favorites()

    assert repository.load_calls == 1
    assert service.list_favorites() == [stored]


def test_toggle_adds_then_removes_same_title() -> None:
    repository = InMemoryFavoritesRepository()
    service = FavoritesService(repository)
    recipe = make_recipe()

    added = service.toggle(recipe, "data:image/jpeg;base64,abc")
    removed = service.toggle(recipe, None)

    assert added is not None
    assert added.image_url == "data:image/jpeg;base64,abc"
    assert removed is None
    assert service.list_favorites() == []
    assert repository.save_calls == 2


def test_toggle_puts_newest_first() -> None:
    service = FavoritesService(InMemoryFavoritesRepository())

    service.toggle(make_recipe(title="First"), None)
    service.toggle(make_recipe(title="Second"), None)

    assert [fav.title for fav in service.list_favorites()] == ["Second", "First"]


def test_title_identity_treats_same_title_as_same_favorite() -> None:
    service = FavoritesService(InMemoryFavoritesRepository())
    service.toggle(make_recipe(description="One"), None)

    assert service.is_favorite(make_recipe(description="Another"))


def test_title_and_description_identity_keeps_both() -> None:
    service = FavoritesService(
        InMemoryFavoritesRepository(),
        identity=FavoriteIdentity.TITLE_AND_DESCRIPTION,
    )

    service.toggle(make_recipe(description="One"), None)
    service.toggle(make_recipe(description="Another"), None)

    assert len(service.list_favorites()) == 2


def test_rate_updates_only_target_entry() -> None:
    repository = InMemoryFavoritesRepository()
    service = FavoritesService(repository)
    first = service.toggle(make_recipe(title="First"), None)
    second = service.toggle(make_recipe(title="Second"), "img")
    assert first is not None
    assert second is not None

    rated = service.rate(first.id, 5)

    assert rated.rating == 5
    assert rated.model_dump(exclude={"rating"}) == first.model_dump(
        exclude={"rating"}
    )
    assert service.get(second.id) == second
    assert repository.stored[1].rating == 5


def test_rate_rejects_out_of_range() -> None:
    service = FavoritesService(InMemoryFavoritesRepository())
    saved = service.toggle(make_recipe(), None)
    assert saved is not None

    with pytest.raises(ValueError):
        service.rate(saved.id, 6)


def test_rate_unknown_favorite_raises() -> None:
    service = FavoritesService(InMemoryFavoritesRepository())

    with pytest.raises(FavoriteNotFoundError):
        service.rate("missing", 3)


def test_remove_by_id() -> None:
    repository = InMemoryFavoritesRepository()
    service = FavoritesService(repository)
    saved = service.toggle(make_recipe(), None)
    assert saved is not None

    service.remove(saved.id)

    assert service.list_favorites() == []
    assert repository.stored == []
    with pytest.raises(FavoriteNotFoundError):
        service.remove(saved.id)
