"""
API Clients

HTTP clients for the rate-limited quote services (Twelve Data and
Alpha Vantage), sharing an injected daily rate limiter.
"""

import os
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Any

import requests
from loguru import logger

from ..exceptions import InvalidArgument, MarketDataError, RateLimitExceeded


ALPHA_VANTAGE = 'alpha_vantage'
TWELVE_DATA = 'twelve_data'

# Free tier calls per day
DEFAULT_DAILY_LIMITS = {
    ALPHA_VANTAGE: 500,
    TWELVE_DATA: 800,
}


def _next_midnight(now: datetime) -> datetime:
    return (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)


class RateLimiter:
    """Per-service daily call counters.

    One limiter is created per session and handed to every client that
    talks to a limited service. Counters reset at local midnight.
    """

    def __init__(
        self,
        limits: Optional[Dict[str, int]] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        """Initialize the limiter.

        Args:
            limits: Daily call limit per service name
            clock: Returns the current time; injectable for tests
        """
        self.limits = dict(DEFAULT_DAILY_LIMITS if limits is None else limits)
        self._clock = clock
        reset_time = _next_midnight(clock())
        self._counts: Dict[str, int] = {service: 0 for service in self.limits}
        self._reset_times: Dict[str, datetime] = {service: reset_time for service in self.limits}

    def _check_service(self, service: str) -> None:
        if service not in self.limits:
            raise InvalidArgument(f"Unknown rate-limited service {service!r}")

    def try_acquire(self, service: str) -> bool:
        """Check whether another call to ``service`` is allowed today."""
        self._check_service(service)

        now = self._clock()
        if now > self._reset_times[service]:
            self._counts[service] = 0
            self._reset_times[service] = _next_midnight(now)

        return self._counts[service] < self.limits[service]

    def record_call(self, service: str) -> None:
        """Count one call against ``service``."""
        self._check_service(service)
        self._counts[service] += 1
        logger.debug(f"{service} calls used today: {self._counts[service]}")

    def status(self) -> Dict[str, Dict[str, int]]:
        """Get used/limit/remaining per service."""
        return {
            service: {
                'used': self._counts[service],
                'limit': limit,
                'remaining': limit - self._counts[service],
            }
            for service, limit in self.limits.items()
        }


class _RateLimitedClient:
    """Shared request plumbing for the quote services."""

    SERVICE = ''
    BASE_URL = ''
    API_KEY_ENV = ''

    def __init__(
        self,
        rate_limiter: RateLimiter,
        api_key: Optional[str] = None,
        timeout: float = 10,
        session: Optional[requests.Session] = None
    ):
        """Initialize the client.

        Args:
            rate_limiter: Shared limiter for this session
            api_key: API key. If not provided, looks for the service env var
            timeout: Request timeout in seconds
            session: Optional requests session
        """
        self.rate_limiter = rate_limiter
        self.api_key = api_key or os.getenv(self.API_KEY_ENV, '')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        if not self.rate_limiter.try_acquire(self.SERVICE):
            raise RateLimitExceeded(self.SERVICE)

        self.rate_limiter.record_call(self.SERVICE)

        response = self.session.get(
            url,
            params={**params, 'apikey': self.api_key},
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()


class TwelveDataClient(_RateLimitedClient):
    """Twelve Data REST client (primary quote source)."""

    SERVICE = TWELVE_DATA
    BASE_URL = 'https://api.twelvedata.com'
    API_KEY_ENV = 'TWELVE_DATA_API_KEY'

    def get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Call a Twelve Data endpoint.

        Args:
            endpoint: Endpoint path, e.g. '/quote'
            params: Query parameters (the API key is added)

        Returns:
            Decoded JSON payload

        Raises:
            RateLimitExceeded: if today's quota is spent
            MarketDataError: if the payload reports an error
            requests.RequestException: on transport or HTTP failure
        """
        data = self._request(f"{self.BASE_URL}{endpoint}", params or {})

        if isinstance(data, dict) and data.get('status') == 'error':
            raise MarketDataError(f"Twelve Data error: {data.get('message', 'unknown error')}")

        return data


class AlphaVantageClient(_RateLimitedClient):
    """Alpha Vantage REST client."""

    SERVICE = ALPHA_VANTAGE
    BASE_URL = 'https://www.alphavantage.co/query'
    API_KEY_ENV = 'ALPHA_VANTAGE_API_KEY'

    def query(self, params: Dict[str, str]) -> Dict[str, Any]:
        """Call the Alpha Vantage query endpoint.

        Raises:
            RateLimitExceeded: if today's quota is spent
            MarketDataError: if the payload reports an error or throttle note
            requests.RequestException: on transport or HTTP failure
        """
        data = self._request(self.BASE_URL, params)

        for key in ('Error Message', 'Note', 'Information'):
            if key in data:
                raise MarketDataError(f"Alpha Vantage error: {data[key]}")

        return data
