"""
Games service implementation.

Serves catalog reads through the Catalog Query Engine and the admin
catalog management operations.
"""

import logging
from collections import Counter, defaultdict
from typing import Optional, Any

from shared.exceptions import DuplicateRecordError
from shared.models import PaginationMeta
from .exceptions import DuplicateGameError, GameNotFoundError
from .interfaces import IGameService
from .models import (
    AppliedFilters,
    FilterMetadata,
    FilterOption,
    Game,
    GameCreate,
    GameListResponse,
    GameQuery,
    GameStats,
    GameUpdate,
    GenreStat,
    SortOption,
    SortOptionInfo,
    TagCount,
)
from .repository import GameRepository


logger = logging.getLogger(__name__)


# Terms counted over genre, title and description for popular tags
POPULAR_TAG_VOCABULARY = [
    "3d", "2d", "pvp", "pve", "mmorpg", "rpg", "fps", "strategy", "fantasy",
    "sci-fi", "medieval", "modern", "action", "adventure", "multiplayer",
    "singleplayer", "free-to-play", "browser", "client", "anime", "zombie",
    "survival", "battle", "war", "space", "shooter",
]
POPULAR_TAG_LIMIT = 20

TOP_RATED_MIN_REVIEWS = 5
STATS_LIST_LIMIT = 10
GENRE_STATS_LIMIT = 10


class GameService(IGameService):
    """
    Catalog service backed by GameRepository.

    Args:
        repository: Game data access
        users, reviews, favorites: Repositories exposing ``count()``,
            used only for catalog statistics
    """

    def __init__(
        self,
        repository: GameRepository,
        users: Any = None,
        reviews: Any = None,
        favorites: Any = None,
    ):
        self._repo = repository
        self._users = users
        self._reviews = reviews
        self._favorites = favorites

    # -------------------------------------------------------------------------
    # Catalog reads
    # -------------------------------------------------------------------------

    async def list_games(self, query: GameQuery) -> GameListResponse:
        games, total = await self._repo.search(query)
        return GameListResponse(
            games=games,
            pagination=PaginationMeta.build(query.page, query.page_size, total),
            filters=AppliedFilters.from_query(query),
        )

    async def get_game(self, game_id: str) -> Game:
        game = await self._repo.get_by_id(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    async def get_filter_metadata(self) -> FilterMetadata:
        rows = await self._repo.list_tag_sources()

        genres = sorted({g.strip() for row in rows for g in row.get("genre") or [] if g.strip()})
        platforms = sorted(
            {p.strip() for row in rows for p in row.get("platform") or [] if p.strip()}
        )

        return FilterMetadata(
            genres=[FilterOption(name=g, display_name=g[:1].upper() + g[1:]) for g in genres],
            platforms=[FilterOption(name=p, display_name=p) for p in platforms],
            popular_tags=count_popular_tags(rows),
            sort_options=[
                SortOptionInfo(value=option, label=option.label) for option in SortOption
            ],
        )

    async def get_stats(self) -> GameStats:
        rows = await self._repo.list_tag_sources()
        return GameStats(
            total_games=len(rows),
            total_users=await self._count(self._users),
            total_reviews=await self._count(self._reviews),
            total_favorites=await self._count(self._favorites),
            top_rated_games=await self._repo.top_rated(TOP_RATED_MIN_REVIEWS, STATS_LIST_LIMIT),
            recent_games=await self._repo.most_recent(STATS_LIST_LIMIT),
            genre_stats=genre_stats(rows),
        )

    # -------------------------------------------------------------------------
    # Admin catalog management
    # -------------------------------------------------------------------------

    async def create_game(self, data: GameCreate) -> Game:
        try:
            game = await self._repo.create(data.model_dump())
        except DuplicateRecordError as exc:
            raise DuplicateGameError(data.external_id) from exc
        logger.info(f"Game created: {game.id} ({game.title})")
        return game

    async def update_game(self, game_id: str, data: GameUpdate) -> Game:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return await self.get_game(game_id)

        game = await self._repo.update(game_id, changes)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    async def delete_game(self, game_id: str) -> None:
        if not await self._repo.delete(game_id):
            raise GameNotFoundError(game_id)
        logger.info(f"Game deleted: {game_id}")

    async def _count(self, repository: Optional[Any]) -> int:
        if repository is None:
            return 0
        return await repository.count()


def count_popular_tags(rows: list[dict[str, Any]]) -> list[TagCount]:
    """
    Count how many games mention each vocabulary term.

    A game counts once per term, matched as a substring of its lowercased
    genres, title and description. Ties keep vocabulary order.
    """
    counts: Counter = Counter()
    for row in rows:
        text = " ".join(
            [
                " ".join(row.get("genre") or []),
                row.get("title") or "",
                row.get("short_description") or "",
            ]
        ).lower()
        for term in POPULAR_TAG_VOCABULARY:
            if term in text:
                counts[term] += 1

    ranked = sorted(
        counts.items(),
        key=lambda item: (-item[1], POPULAR_TAG_VOCABULARY.index(item[0])),
    )
    return [TagCount(tag=tag, count=count) for tag, count in ranked[:POPULAR_TAG_LIMIT]]


def genre_stats(rows: list[dict[str, Any]]) -> list[GenreStat]:
    """Game count and mean stored rating per genre, largest genres first."""
    ratings: dict[str, list[float]] = defaultdict(list)
    for row in rows:
        for genre in row.get("genre") or []:
            if genre.strip():
                ratings[genre.strip()].append(float(row.get("average_rating") or 0))

    stats = [
        GenreStat(
            genre=genre,
            count=len(values),
            average_rating=round(sum(values) / len(values), 2),
        )
        for genre, values in ratings.items()
    ]
    stats.sort(key=lambda stat: (-stat.count, stat.genre))
    return stats[:GENRE_STATS_LIMIT]
