"""Pipeline orchestration: decode → filter → map, failing soft to an empty list."""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from showtime.connectors.base import BaseFeedConnector
from showtime.connectors.itunes import ITunesTopMoviesConnector
from showtime.errors import FetchError, RuleEngineUnavailable, ShowtimeError
from showtime.filtering import filter_by_limit
from showtime.mapping import map_entries
from showtime.models.movie import Movie
from showtime.models.rules import CatalogRules, load_default_rules

logger = logging.getLogger(__name__)


class ParseResult(BaseModel):
    """Movies from one parse call plus the errors that were swallowed."""

    movies: list[Movie] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list, description="Call-level failures")
    skipped: int = Field(default=0, description="Entries dropped by the mapper")

    @property
    def ok(self) -> bool:
        return not self.errors


class MovieService:
    """
    Loads the catalog rules once, then turns feed payloads into movies.
    parse() never raises: any failure yields an empty list and a log record.
    """

    def __init__(
        self,
        rules: Optional[CatalogRules] = None,
        *,
        rules_path: Optional[str | Path] = None,
        connector: Optional[BaseFeedConnector] = None,
    ):
        self.connector = connector or ITunesTopMoviesConnector()
        self._rules: Optional[CatalogRules] = rules
        self._rules_error: Optional[RuleEngineUnavailable] = None
        if rules is None:
            try:
                self._rules = (
                    CatalogRules.from_yaml(rules_path) if rules_path else load_default_rules()
                )
            except RuleEngineUnavailable as e:
                logger.error("Catalog rules unavailable; parse will return no movies: %s", e)
                self._rules_error = e

    @property
    def rules(self) -> CatalogRules:
        """Loaded rules; raises RuleEngineUnavailable if loading failed."""
        if self._rules is None:
            raise self._rules_error or RuleEngineUnavailable("Catalog rules not loaded")
        return self._rules

    def parse_with_diagnostics(self, response: str, limit: Any) -> ParseResult:
        """
        Same as parse(), but returns the swallowed errors alongside the movies.
        """
        try:
            rules = self.rules
            entries = self.connector.decode(response, rules)
            filtered = filter_by_limit(entries, limit, rules)
        except ShowtimeError as e:
            logger.warning("Unable to parse catalog payload: %s", e)
            return ParseResult(errors=[f"{type(e).__name__}: {e}"])

        movies, skipped = map_entries(filtered, rules)
        if skipped:
            logger.info("Dropped %d of %d entries during mapping", len(skipped), len(filtered))
        return ParseResult(movies=movies, skipped=len(skipped))

    def parse(self, response: str, limit: Any) -> list[Movie]:
        """Movies priced at or below limit, in feed order; [] on any failure."""
        return self.parse_with_diagnostics(response, limit).movies

    def load_movies(
        self,
        limit: Any,
        on_complete: Callable[[list[Movie]], None],
        on_error: Optional[Callable[[FetchError], None]] = None,
    ) -> None:
        """
        Fetch the feed once and hand the parsed movies to on_complete.
        On fetch failure on_complete is not called; on_error is, if given.
        """
        try:
            response = self.connector.fetch_text()
        except FetchError as e:
            logger.error("Error while fetching catalog feed: %s", e)
            if on_error is not None:
                on_error(e)
            return
        on_complete(self.parse(response, limit))

    async def load_movies_async(self, limit: Any) -> list[Movie]:
        """Fetch the feed and parse it; FetchError propagates."""
        response = await self.connector.afetch_text()
        return self.parse(response, limit)


_default_service: Optional[MovieService] = None


def get_default_service() -> MovieService:
    """Shared service using the bundled rules, created on first use."""
    global _default_service
    if _default_service is None:
        _default_service = MovieService()
    return _default_service


def parse(response: str, limit: Any) -> list[Movie]:
    """Parse a feed payload with the default service; never raises."""
    return get_default_service().parse(response, limit)
