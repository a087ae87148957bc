"""Map filtered generic entries onto typed Movie records."""

import logging
from typing import Optional

from pydantic import ValidationError

from showtime.errors import MappingSkipped
from showtime.filtering.rules import extract_price
from showtime.models.entry import GenericEntry
from showtime.models.movie import Movie
from showtime.models.rules import CatalogRules

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def map_entry(entry: GenericEntry, rules: Optional[CatalogRules] = None) -> Movie:
    """
    Build a Movie from one generic entry.
    Raises MappingSkipped if a required field is missing or the record is invalid.
    """
    rules = rules or CatalogRules()
    missing = [name for name in rules.required_fields if _is_blank(entry.get(name))]
    if missing:
        raise MappingSkipped(f"Missing required field(s): {', '.join(missing)}", entry)

    image_url = entry.get(rules.image_field)
    purchase_url = entry.get("purchase_url")
    try:
        return Movie(
            title=str(entry.get("title", "")).strip(),
            price=extract_price(entry.get(rules.price_field), rules.free_labels),
            image_url=str(image_url).strip() if not _is_blank(image_url) else "",
            purchase_url=str(purchase_url).strip() if not _is_blank(purchase_url) else None,
        )
    except ValidationError as e:
        raise MappingSkipped(f"Invalid movie record: {e}", entry) from e


def map_entries(
    entries: list[GenericEntry],
    rules: Optional[CatalogRules] = None,
) -> tuple[list[Movie], list[MappingSkipped]]:
    """Map entries in order; returns (movies, skipped) instead of aborting the batch."""
    movies: list[Movie] = []
    skipped: list[MappingSkipped] = []
    for entry in entries:
        try:
            movies.append(map_entry(entry, rules))
        except MappingSkipped as e:
            logger.debug("Skipping entry %r: %s", entry.get("title"), e)
            skipped.append(e)
    return movies, skipped


def to_movies(entries: list[GenericEntry], rules: Optional[CatalogRules] = None) -> list[Movie]:
    """Typed movies for the given entries; malformed entries are dropped."""
    movies, _ = map_entries(entries, rules)
    return movies
