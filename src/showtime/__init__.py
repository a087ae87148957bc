"""Showtime: fetch the top-movies catalog feed and filter it by price."""

from showtime.models.movie import Movie
from showtime.pipeline import MovieService, ParseResult, parse

__version__ = "0.1.0"
__all__ = ["Movie", "MovieService", "ParseResult", "parse"]
