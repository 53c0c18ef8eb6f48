"""Tests for the games service."""

import pytest
from unittest.mock import AsyncMock

from shared.exceptions import DuplicateRecordError
from modules.games.exceptions import DuplicateGameError, GameNotFoundError
from modules.games.models import GameCreate, GameQuery, GameUpdate, SortOption
from modules.games.service import GameService, count_popular_tags, genre_stats

from tests.fakes import FakeDatabase


def tag_row(title: str, description: str = "", genre=None, platform=None, rating: float = 0):
    return {
        "id": title.lower().replace(" ", "-"),
        "title": title,
        "short_description": description,
        "genre": genre or [],
        "platform": platform or [],
        "average_rating": rating,
    }


@pytest.fixture
def repository():
    return AsyncMock()


@pytest.fixture
def service(repository):
    return GameService(repository=repository)


class TestListGames:
    @pytest.mark.asyncio
    async def test_pagination_and_filters_echoed(self, service, repository):
        game = FakeDatabase().add_game(title="Battle Arena")
        repository.search.return_value = ([game], 21)
        query = GameQuery(search="battle", sort_by="alphabetical", page_size=10)

        result = await service.list_games(query)

        repository.search.assert_awaited_once_with(query)
        assert result.games == [game]
        assert result.pagination.total_items == 21
        assert result.pagination.total_pages == 3
        assert result.pagination.has_next_page is True
        assert result.filters.search == "battle"
        assert result.filters.sort_by == SortOption.ALPHABETICAL

    @pytest.mark.asyncio
    async def test_empty_catalog(self, service, repository):
        repository.search.return_value = ([], 0)

        result = await service.list_games(GameQuery())

        assert result.games == []
        assert result.pagination.total_pages == 0
        assert result.pagination.has_next_page is False
        assert result.pagination.has_previous_page is False

    @pytest.mark.asyncio
    async def test_get_missing_game(self, service, repository):
        repository.get_by_id.return_value = None
        with pytest.raises(GameNotFoundError):
            await service.get_game("missing")


class TestFilterMetadata:
    @pytest.mark.asyncio
    async def test_distinct_sorted_values(self, service, repository):
        repository.list_tag_sources.return_value = [
            tag_row("A", genre=["shooter"], platform=["Web Browser"]),
            tag_row("B", genre=["MMORPG", "shooter"], platform=["PC (Windows)"]),
        ]

        metadata = await service.get_filter_metadata()

        assert [g.name for g in metadata.genres] == ["MMORPG", "shooter"]
        assert [g.display_name for g in metadata.genres] == ["MMORPG", "Shooter"]
        assert [p.name for p in metadata.platforms] == ["PC (Windows)", "Web Browser"]
        assert [o.value for o in metadata.sort_options] == list(SortOption)

    def test_popular_tags_count_each_game_once(self):
        rows = [
            tag_row("Space Shooter", "A space shooter in space", genre=["Shooter"]),
            tag_row("Fantasy Battle", "PvP battles", genre=["MMORPG"]),
            tag_row("Zombie Survival", "Survive the zombie horde", genre=["Survival"]),
        ]

        tags = {t.tag: t.count for t in count_popular_tags(rows)}

        assert tags["shooter"] == 1
        assert tags["space"] == 1
        assert tags["battle"] == 1
        assert tags["pvp"] == 1
        assert tags["zombie"] == 1
        # "mmorpg" contains "rpg"
        assert tags["rpg"] == 1
        assert "anime" not in tags

    def test_popular_tags_ordered_by_count(self):
        rows = [
            tag_row("One", "fantasy rpg"),
            tag_row("Two", "fantasy"),
            tag_row("Three", "rpg and fantasy"),
        ]

        tags = count_popular_tags(rows)

        assert [(t.tag, t.count) for t in tags] == [("fantasy", 3), ("rpg", 2)]


class TestStats:
    def test_genre_stats(self):
        rows = [
            tag_row("A", genre=["Shooter"], rating=4.0),
            tag_row("B", genre=["Shooter"], rating=3.0),
            tag_row("C", genre=["MMORPG"], rating=5.0),
        ]

        stats = genre_stats(rows)

        assert [(s.genre, s.count, s.average_rating) for s in stats] == [
            ("Shooter", 2, 3.5),
            ("MMORPG", 1, 5.0),
        ]

    @pytest.mark.asyncio
    async def test_totals_from_each_repository(self, repository):
        repository.list_tag_sources.return_value = [tag_row("A"), tag_row("B")]
        repository.top_rated.return_value = []
        repository.most_recent.return_value = []
        users, reviews, favorites = AsyncMock(), AsyncMock(), AsyncMock()
        users.count.return_value = 7
        reviews.count.return_value = 12
        favorites.count.return_value = 3
        service = GameService(repository, users=users, reviews=reviews, favorites=favorites)

        stats = await service.get_stats()

        assert stats.total_games == 2
        assert stats.total_users == 7
        assert stats.total_reviews == 12
        assert stats.total_favorites == 3
        repository.top_rated.assert_awaited_once_with(5, 10)


class TestAdminOperations:
    @pytest.mark.asyncio
    async def test_create_duplicate_external_id(self, service, repository):
        repository.create.side_effect = DuplicateRecordError("games", "games_external_id_key")
        data = GameCreate(
            title="Battle Arena",
            thumbnail="https://img.example.com/1.jpg",
            short_description="Arena shooter",
            game_url="https://games.example.com/1",
            external_id=540,
        )

        with pytest.raises(DuplicateGameError) as exc_info:
            await service.create_game(data)
        assert exc_info.value.details == {"external_id": 540}

    def test_create_accepts_comma_separated_lists(self):
        data = GameCreate(
            title="Battle Arena",
            thumbnail="t",
            short_description="d",
            game_url="u",
            genre="Shooter, Action",
            platform="PC (Windows)",
        )
        assert data.genre == ["Shooter", "Action"]
        assert data.platform == ["PC (Windows)"]

    @pytest.mark.asyncio
    async def test_update_sends_only_set_fields(self, service, repository):
        repository.update.return_value = FakeDatabase().add_game(title="Renamed")

        await service.update_game("game-1", GameUpdate(title="Renamed"))

        repository.update.assert_awaited_once_with("game-1", {"title": "Renamed"})

    def test_update_ignores_aggregate_fields(self):
        update = GameUpdate(title="Renamed", average_rating=5, total_reviews=100)
        assert update.model_dump(exclude_unset=True) == {"title": "Renamed"}

    @pytest.mark.asyncio
    async def test_update_missing_game(self, service, repository):
        repository.update.return_value = None
        with pytest.raises(GameNotFoundError):
            await service.update_game("missing", GameUpdate(title="Renamed"))

    @pytest.mark.asyncio
    async def test_empty_update_returns_current_game(self, service, repository):
        game = FakeDatabase().add_game()
        repository.get_by_id.return_value = game

        assert await service.update_game(game.id, GameUpdate()) == game
        repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing_game(self, service, repository):
        repository.delete.return_value = False
        with pytest.raises(GameNotFoundError):
            await service.delete_game("missing")
