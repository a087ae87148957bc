"""Catalog feed connectors."""

from showtime.connectors.base import BaseFeedConnector
from showtime.connectors.itunes import ITunesTopMoviesConnector

__all__ = ["BaseFeedConnector", "ITunesTopMoviesConnector"]
