"""TrailerBridge exception classes."""


class TrailerBridgeError(Exception):
    """Base class for all TrailerBridge exceptions."""

    # Default HTTP status for API responses
    status_code: int = 500


# Configuration errors
class ConfigError(TrailerBridgeError):
    """Base class for configuration-related errors."""

    status_code = 500


class MissingApiKeyError(ConfigError, ValueError):
    """No TMDB API key was configured."""

    status_code = 500


# Resolver errors
class ResolverError(TrailerBridgeError):
    """Base class for trailer resolution failures."""

    status_code = 500


class NoProviderMatchError(ResolverError, LookupError):
    """An IMDb ID did not cross-reference to any TMDB movie, show or episode."""

    status_code = 404


class UnsupportedMediaKindError(ResolverError, ValueError):
    """The requested media type is not one the addon serves."""

    status_code = 404


class UnsupportedResourceError(ResolverError, ValueError):
    """The requested addon resource is not one the addon serves."""

    status_code = 404


# TMDB client errors
class TMDBError(TrailerBridgeError):
    """Base class for TMDB-related failures."""

    status_code = 502


class TMDBRequestError(TMDBError):
    """A TMDB request failed at the network or HTTP level."""

    status_code = 502


class TMDBResponseError(TMDBError, ValueError):
    """TMDB returned a payload that could not be parsed."""

    status_code = 502
