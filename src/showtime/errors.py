"""Exception hierarchy for the catalog pipeline."""


class ShowtimeError(Exception):
    """Base class for all showtime errors."""


class DecodeError(ShowtimeError):
    """Payload is not valid JSON or lacks the expected entry list."""


class RuleEngineUnavailable(ShowtimeError):
    """Catalog rules could not be loaded."""


class MappingSkipped(ShowtimeError):
    """A single feed entry could not be turned into a Movie."""

    def __init__(self, message: str, entry: dict | None = None):
        super().__init__(message)
        self.entry = entry or {}


class InvalidLimit(ShowtimeError):
    """Price limit is not a usable number."""


class FetchError(ShowtimeError):
    """The catalog feed could not be downloaded."""
