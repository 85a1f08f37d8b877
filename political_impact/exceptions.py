"""Exception types raised by the analyzer."""


class PoliticalImpactError(Exception):
    """Base class for all analyzer errors."""


class InvalidArgument(PoliticalImpactError, ValueError):
    """A sector, alignment or other enum value is outside its closed set."""


class MarketDataError(PoliticalImpactError):
    """The quote service returned an error payload."""


class RateLimitExceeded(MarketDataError):
    """The daily call quota for a quote service is spent."""

    def __init__(self, service: str):
        super().__init__(f"{service} daily limit reached")
        self.service = service
