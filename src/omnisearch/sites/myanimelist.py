from omnisearch.sites import register_site
from omnisearch.sites.base import BaseSite

SITE_URL = "https://myanimelist.net/"


@register_site()
class MyAnimeListSite(BaseSite):
    site_key = "myanimelist"
    site_name = "MyAnimeList"

    SITE_URL = SITE_URL
    API_URL = SITE_URL + "search/prefix.json?type=%t&v=1&keyword="
    SEARCH_URL = SITE_URL + "%c.php?q="
    SEARCH_ALL_URL = SITE_URL + "search/all?q="

    CATEGORIES = {
        "a": "anime",
        "m": "manga",
        "c": "character",
        "p": "person",
        "u": "user",
        "n": "news",
        "f": "forum",
        "k": "club",
        "": "all",
    }
    HEADERS = {"X-LControl": "x-no-cache"}
