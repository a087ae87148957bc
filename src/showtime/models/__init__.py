"""Data models for catalog entries, movies and rules."""

from showtime.models.entry import GenericEntry
from showtime.models.movie import Movie
from showtime.models.rules import CatalogRules, load_default_rules

__all__ = ["CatalogRules", "GenericEntry", "Movie", "load_default_rules"]
