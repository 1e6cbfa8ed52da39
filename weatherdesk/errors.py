"""Domain errors shared by the service, clients and HTTP layer."""


class WeatherDeskError(Exception):
    """Base class for all weatherdesk errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WeatherDeskError):
    """A required input is missing or malformed."""

    status_code = 400


class ConfigurationError(WeatherDeskError):
    """Startup configuration is incomplete (e.g. no weather API key)."""

    status_code = 500


class NotFound(WeatherDeskError):
    """Requested cache entry does not exist."""

    status_code = 404


class UpstreamUnavailable(WeatherDeskError):
    """A third-party API returned non-2xx or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.upstream_status = status_code
        self.status_code = status_code if status_code and status_code >= 400 else 500


class PartialEnrichmentFailure(WeatherDeskError):
    """A single row's weather lookup failed during batch enrichment.

    Never raised; carried as the error side of an EnrichmentOutcome.
    """
