from importlib.resources import files

from platformdirs import user_cache_path, user_config_path

PACKAGE_NAME = "omnisearch"

# -----------------------------------------------------------------------------
# User-writable directories & files
# -----------------------------------------------------------------------------

USER_CONFIG_DIR = user_config_path(PACKAGE_NAME, appauthor=False)
USER_CACHE_DIR = user_cache_path(PACKAGE_NAME, appauthor=False)

SETTING_PATH = USER_CONFIG_DIR / "settings.json"
CACHE_DB_PATH = USER_CACHE_DIR / "suggestions.sqlite"

# -----------------------------------------------------------------------------
# Embedded resources
# -----------------------------------------------------------------------------

RES = files("omnisearch.resources")

DEFAULT_CONFIG_FILE = RES.joinpath("config", "settings.sample.toml")

# Default config filename (used when copying embedded template)
DEFAULT_CONFIG_FILENAME = "settings.toml"
