"""
Default HTTP headers used by the networking layer.

The suggestion endpoints answer with JSON, while best-match images are
fetched separately, so both Accept presets live here.
"""

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/136.0.0.0 Safari/537.36"
)

ACCEPT_JSON = "application/json,text/javascript,*/*;q=0.8"

ACCEPT_IMAGE = "image/avif,image/webp,image/apng,image/svg+xml,image/*,*/*;q=0.8"

DEFAULT_USER_HEADERS = {
    "Accept": ACCEPT_JSON,
    "Accept-Encoding": "gzip, deflate",
    "Accept-Language": "en;q=0.9",
    "User-Agent": DEFAULT_USER_AGENT,
    "Connection": "keep-alive",
}
