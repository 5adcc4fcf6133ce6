from .version import __version__ as __version__

__title__ = "OmniSearch"
__description__ = "Incremental search suggestions with prefix-aware caching."
__url__ = "https://github.com/omnisearch/omnisearch"
__author__ = "OmniSearch Developers"
__license__ = "Apache-2.0"
