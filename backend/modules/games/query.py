"""
Catalog Query Engine.

Translates a validated ``GameQuery`` into PostgREST filters and orderings.
The same filters are applied to the count query and the page query, so
``total_items`` always describes the rows being paged over.
"""

from typing import Optional

from shared.repository import contains_pattern, ilike_conditions
from .exceptions import InvalidGameQueryError
from .models import GameQuery, SortOption


SEARCH_COLUMNS = ["title", "short_description"]
ADVANCED_SEARCH_COLUMNS = SEARCH_COLUMNS + ["developer", "publisher"]
TAG_COLUMNS = ["genre_text", "title", "short_description", "developer", "publisher"]

# (column, descending) pairs; every ordering ends with the id tie-break
SORT_ORDERS: dict[SortOption, list[tuple[str, bool]]] = {
    SortOption.RELEVANCE: [("updated_at", True)],
    SortOption.RELEASE_DATE: [("release_date", True)],
    SortOption.ALPHABETICAL: [("title", False)],
    SortOption.RATING: [("average_rating", True), ("total_reviews", True)],
}
TIE_BREAK = ("id", False)


class CatalogQueryBuilder:
    """
    Applies one ``GameQuery`` to PostgREST select builders.

    Example:
        builder = CatalogQueryBuilder(query)
        request = builder.apply_filters(db.table("games").select("*"))
        request = builder.apply_order(request)
    """

    def __init__(self, query: GameQuery):
        if (
            query.min_rating is not None
            and query.max_rating is not None
            and query.min_rating > query.max_rating
        ):
            raise InvalidGameQueryError(
                "min_rating cannot be greater than max_rating",
                field="min_rating",
            )
        self.query = query

    def apply_filters(self, request):
        """Add every filter of the query to ``request``."""
        query = self.query

        if query.genre:
            request = request.ilike("genre_text", contains_pattern(query.genre))
        if query.platform:
            request = request.ilike("platform_text", contains_pattern(query.platform))
        if query.min_rating is not None:
            request = request.gte("average_rating", query.min_rating)
        if query.max_rating is not None:
            request = request.lte("average_rating", query.max_rating)

        logic_tree = self.logic_tree()
        if logic_tree:
            request = request.or_(logic_tree)
        return request

    def apply_order(self, request):
        """Add the sort columns and the id tie-break to ``request``."""
        for column, descending in self.order_columns():
            if descending:
                request = request.order(column, desc=True, nullsfirst=False)
            else:
                request = request.order(column)
        return request

    def order_columns(self) -> list[tuple[str, bool]]:
        return SORT_ORDERS[self.query.sort_by] + [TIE_BREAK]

    def logic_tree(self) -> Optional[str]:
        """
        Build the ``or=`` parameter combining search and tag groups.

        Each group matches if any of its columns matches. Several groups are
        AND-ed by nesting them as ``and(or(...),or(...))`` inside the one
        ``or=`` parameter a request can carry.
        """
        groups = []
        if self.query.search:
            columns = ADVANCED_SEARCH_COLUMNS if self.query.advanced else SEARCH_COLUMNS
            groups.append(ilike_conditions(columns, self.query.search))
        for tag in self.query.tags:
            groups.append(ilike_conditions(TAG_COLUMNS, tag))

        if not groups:
            return None
        if len(groups) == 1:
            return groups[0]
        nested = ",".join(f"or({group})" for group in groups)
        return f"and({nested})"
