"""iTunes RSS feed constants."""

FEED_URL_TEMPLATE = "https://itunes.apple.com/{country}/rss/topmovies/limit={limit}/json"
DEFAULT_COUNTRY = "us"
DEFAULT_FEED_LIMIT = 50
DEFAULT_FEED_URL = FEED_URL_TEMPLATE.format(country=DEFAULT_COUNTRY, limit=DEFAULT_FEED_LIMIT)

# Key holding the display text of most feed nodes ({"label": ..., "attributes": {...}})
LABEL_KEY = "label"
