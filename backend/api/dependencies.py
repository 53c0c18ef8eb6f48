"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations around the one
Supabase client created at startup.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import AsyncClient
    from modules.auth.interfaces import IAuthService
    from modules.users.interfaces import IUserService
    from modules.users.repository import UserRepository
    from modules.games.interfaces import IGameService
    from modules.games.repository import GameRepository
    from modules.games.sync import CatalogSyncService
    from modules.reviews.interfaces import IReviewService
    from modules.reviews.repository import ReviewRepository
    from modules.reviews.aggregator import RatingAggregator
    from modules.favorites.interfaces import IFavoriteService
    from modules.favorites.repository import FavoriteRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._reset_cache()

    def _reset_cache(self) -> None:
        self._db: "AsyncClient | None" = None
        self._user_repository: "UserRepository | None" = None
        self._game_repository: "GameRepository | None" = None
        self._review_repository: "ReviewRepository | None" = None
        self._favorite_repository: "FavoriteRepository | None" = None
        self._rating_aggregator: "RatingAggregator | None" = None
        self._auth_service: "IAuthService | None" = None
        self._user_service: "IUserService | None" = None
        self._game_service: "IGameService | None" = None
        self._review_service: "IReviewService | None" = None
        self._favorite_service: "IFavoriteService | None" = None
        self._catalog_sync: "CatalogSyncService | None" = None

    # -------------------------------------------------------------------------
    # Infrastructure
    # -------------------------------------------------------------------------

    @property
    def db(self) -> "AsyncClient":
        """Get the Supabase client created during startup."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client()
        return self._db

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def user_repository(self) -> "UserRepository":
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            self._user_repository = UserRepository(self.db)
        return self._user_repository

    @property
    def game_repository(self) -> "GameRepository":
        if self._game_repository is None:
            from modules.games.repository import GameRepository
            self._game_repository = GameRepository(self.db)
        return self._game_repository

    @property
    def review_repository(self) -> "ReviewRepository":
        if self._review_repository is None:
            from modules.reviews.repository import ReviewRepository
            self._review_repository = ReviewRepository(self.db)
        return self._review_repository

    @property
    def favorite_repository(self) -> "FavoriteRepository":
        if self._favorite_repository is None:
            from modules.favorites.repository import FavoriteRepository
            self._favorite_repository = FavoriteRepository(self.db)
        return self._favorite_repository

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def rating_aggregator(self) -> "RatingAggregator":
        """Get the rating aggregator shared by every review-changing path."""
        if self._rating_aggregator is None:
            from modules.reviews.aggregator import RatingAggregator
            self._rating_aggregator = RatingAggregator(
                reviews=self.review_repository,
                games=self.game_repository,
            )
        return self._rating_aggregator

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            from shared.config import get_settings
            self._auth_service = AuthService(
                users=self.user_repository,
                settings=get_settings(),
            )
        return self._auth_service

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(
                repository=self.user_repository,
                reviews=self.review_repository,
                aggregator=self.rating_aggregator,
            )
        return self._user_service

    @property
    def games(self) -> "IGameService":
        """Get the game service instance."""
        if self._game_service is None:
            from modules.games.service import GameService
            self._game_service = GameService(
                repository=self.game_repository,
                users=self.user_repository,
                reviews=self.review_repository,
                favorites=self.favorite_repository,
            )
        return self._game_service

    @property
    def reviews(self) -> "IReviewService":
        """Get the review service instance."""
        if self._review_service is None:
            from modules.reviews.service import ReviewService
            self._review_service = ReviewService(
                repository=self.review_repository,
                games=self.game_repository,
                aggregator=self.rating_aggregator,
            )
        return self._review_service

    @property
    def favorites(self) -> "IFavoriteService":
        """Get the favorite service instance."""
        if self._favorite_service is None:
            from modules.favorites.service import FavoriteService
            self._favorite_service = FavoriteService(
                repository=self.favorite_repository,
                games=self.game_repository,
            )
        return self._favorite_service

    @property
    def catalog_sync(self) -> "CatalogSyncService":
        """Get the catalog ingestion service instance."""
        if self._catalog_sync is None:
            from modules.games.sync import CatalogSyncService
            from shared.config import get_settings
            settings = get_settings()
            self._catalog_sync = CatalogSyncService(
                repository=self.game_repository,
                source_url=settings.catalog_source_url,
                timeout=settings.catalog_sync_timeout,
            )
        return self._catalog_sync

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._reset_cache()


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_service() -> "IUserService":
    """FastAPI dependency for user service."""
    return get_container().users


def get_game_service() -> "IGameService":
    """FastAPI dependency for game service."""
    return get_container().games


def get_review_service() -> "IReviewService":
    """FastAPI dependency for review service."""
    return get_container().reviews


def get_favorite_service() -> "IFavoriteService":
    """FastAPI dependency for favorite service."""
    return get_container().favorites


def get_rating_aggregator() -> "RatingAggregator":
    """FastAPI dependency for the rating aggregator."""
    return get_container().rating_aggregator


def get_catalog_sync_service() -> "CatalogSyncService":
    """FastAPI dependency for catalog ingestion."""
    return get_container().catalog_sync


def get_game_repository() -> "GameRepository":
    """FastAPI dependency for the game repository (readiness checks)."""
    return get_container().game_repository
