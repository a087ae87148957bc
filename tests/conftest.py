"""Pytest fixtures for showtime tests."""

import json

import pytest

from showtime.models.rules import CatalogRules, load_default_rules
from showtime.pipeline import MovieService


def _itunes_entry(title: str, price_label: str, amount: str, movie_id: str) -> dict:
    """One entry shaped like the iTunes top-movies RSS JSON feed."""
    return {
        "im:name": {"label": title},
        "im:image": [
            {"label": f"https://is1.mzstatic.com/{movie_id}/60x60bb.png", "attributes": {"height": "60"}},
            {"label": f"https://is1.mzstatic.com/{movie_id}/113x113bb.png", "attributes": {"height": "113"}},
            {"label": f"https://is1.mzstatic.com/{movie_id}/170x170bb.png", "attributes": {"height": "170"}},
        ],
        "summary": {"label": f"Summary of {title}"},
        "im:price": {"label": price_label, "attributes": {"amount": amount, "currency": "USD"}},
        "link": {
            "attributes": {
                "rel": "alternate",
                "type": "text/html",
                "href": f"https://itunes.apple.com/us/movie/{movie_id}?uo=2",
            }
        },
        "id": {"label": f"https://itunes.apple.com/us/movie/{movie_id}", "attributes": {"im:id": movie_id}},
        "category": {"attributes": {"im:id": "4404", "term": "Action & Adventure", "label": "Action & Adventure"}},
    }


@pytest.fixture
def sample_feed() -> dict:
    """Feed with four entries in a known order."""
    return {
        "feed": {
            "author": {"name": {"label": "iTunes Store"}},
            "entry": [
                _itunes_entry("The Martian", "$19.99", "19.99000", "id1"),
                _itunes_entry("Spotlight", "$9.99", "9.99000", "id2"),
                _itunes_entry("Public Domain Classic", "Free", "0.00000", "id3"),
                _itunes_entry("Inside Out", "$4.99", "4.99000", "id4"),
            ],
            "title": {"label": "iTunes Store: Top Movies"},
        }
    }


@pytest.fixture
def sample_feed_text(sample_feed: dict) -> str:
    """Sample feed serialized as the raw payload text."""
    return json.dumps(sample_feed)


@pytest.fixture
def default_rules() -> CatalogRules:
    """Bundled catalog rules."""
    return load_default_rules()


@pytest.fixture
def service(default_rules: CatalogRules) -> MovieService:
    """Service using the bundled rules."""
    return MovieService(default_rules)
