"""
HTTP transport for the Discogs API

Performs a single GET per call and turns failures into ``APIError``
subclasses. Nothing here retries: a 429 is raised to the caller as
``RateLimitError``.
"""
import logging
from decimal import Decimal
from typing import Any, Optional

import requests

from .config import Config, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Raised when a Discogs API call fails"""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UnauthorizedError(APIError):
    """401/403 - missing or rejected token"""
    pass


class NotFoundError(APIError):
    """404 - listing or release does not exist"""
    pass


class RateLimitError(APIError):
    """429 - too many requests"""
    pass


class DecodeError(APIError):
    """Response body does not match the expected shape"""
    pass


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('message'):
        return str(body['message'])
    text = (response.text or '').strip()
    return f"HTTP {response.status_code}: {text}" if text else f"HTTP {response.status_code}"


class Transport:
    def __init__(self, token: Optional[str] = None, user_agent: str = DEFAULT_USER_AGENT,
                 timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self.headers = {
            'User-Agent': user_agent,
            'Accept': 'application/json',
        }
        if token:
            self.headers['Authorization'] = f'Discogs token={token}'

    @classmethod
    def from_config(cls, config: Config) -> 'Transport':
        return cls(
            token=config.discogs_token or None,
            user_agent=config.discogs_user_agent,
            timeout=config.timeout,
        )

    def get(self, url: str, params: Optional[dict] = None) -> Any:
        """GET ``url`` and return the decoded JSON body (usually an object).

        Raises:
            UnauthorizedError: 401 or 403
            NotFoundError: 404
            RateLimitError: 429
            APIError: network failure or any other non-2xx status
            DecodeError: body is not valid JSON
        """
        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise APIError(f"Request failed: {e}", url=url) from e

        status = response.status_code
        if status in (401, 403):
            raise UnauthorizedError(_error_message(response), status_code=status, url=url)
        if status == 404:
            raise NotFoundError(_error_message(response), status_code=status, url=url)
        if status == 429:
            logger.warning(f"Rate limited by Discogs: {url}")
            raise RateLimitError(_error_message(response), status_code=status, url=url)
        if not 200 <= status < 300:
            logger.error(f"Discogs returned {status} for {url}")
            raise APIError(_error_message(response), status_code=status, url=url)

        try:
            return response.json(parse_float=Decimal)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON in response: {e}", status_code=status, url=url) from e
