"""iTunes top-movies RSS feed connector."""

from .connector import ITunesTopMoviesConnector

__all__ = ["ITunesTopMoviesConnector"]
