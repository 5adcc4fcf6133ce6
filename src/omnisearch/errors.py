class OmniSearchError(Exception):
    """Base class for errors raised by omnisearch."""


class FetchCancelled(OmniSearchError):
    """Raised when an in-flight request is aborted by its cancel token."""


class PayloadError(OmniSearchError):
    """Indicates that the upstream response is not a usable payload."""


class UnknownSiteError(OmniSearchError, KeyError):
    """Raised when a site key is not present in the registry."""
