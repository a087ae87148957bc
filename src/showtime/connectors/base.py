"""Abstract base class for catalog feed connectors."""

from abc import ABC, abstractmethod

from showtime.models.entry import GenericEntry
from showtime.models.rules import CatalogRules


class BaseFeedConnector(ABC):
    """
    Standard interface for catalog feed sources.
    Connectors fetch raw payload text and decode it into generic entries.
    """

    source_id: str = ""

    @abstractmethod
    def fetch_text(self) -> str:
        """
        Download the feed once and return the body as UTF-8 text.
        """
        pass

    @abstractmethod
    async def afetch_text(self) -> str:
        """
        Async variant of fetch_text.
        """
        pass

    @abstractmethod
    def decode(self, raw: str, rules: CatalogRules) -> list[GenericEntry]:
        """
        Convert payload text to generic entries, in feed order.
        """
        pass

    def fetch_entries(self, rules: CatalogRules) -> list[GenericEntry]:
        """
        Fetch and decode in one step.
        Errors from either step propagate to the caller.
        """
        return self.decode(self.fetch_text(), rules)
