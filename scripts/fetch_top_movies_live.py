#!/usr/bin/env python3
"""Quick live test of the top-movies fetch → parse flow.

Run:
  poetry run python scripts/fetch_top_movies_live.py          # limit 9.99
  poetry run python scripts/fetch_top_movies_live.py 0        # free titles only
  poetry run python scripts/fetch_top_movies_live.py 4.99 gb  # UK storefront
"""

import sys

from showtime.connectors.itunes import ITunesTopMoviesConnector
from showtime.connectors.itunes.constants import DEFAULT_FEED_LIMIT, FEED_URL_TEMPLATE
from showtime.pipeline import MovieService


def main() -> None:
    limit = sys.argv[1] if len(sys.argv) > 1 else "9.99"
    country = sys.argv[2] if len(sys.argv) > 2 else "us"
    url = FEED_URL_TEMPLATE.format(country=country, limit=DEFAULT_FEED_LIMIT)
    service = MovieService(connector=ITunesTopMoviesConnector(feed_url=url))
    print(f"Fetching {url} (limit {limit})...")

    def on_complete(movies) -> None:
        print(f"Got {len(movies)} movies")
        for i, m in enumerate(movies[:10], 1):
            print(f"  {i}. {m.title} ({m.price})")
        if movies:
            print("\n✅ Fetch + parse flow succeeded.")
        else:
            print("\n⚠️ No movies returned. Check logs or raise the limit.")

    def on_error(error) -> None:
        print(f"\n❌ Fetch failed: {error}")

    service.load_movies(limit, on_complete, on_error)


if __name__ == "__main__":
    main()
