"""
Configuration settings for the Discogs marketplace client
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from . import __version__

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.discogs.com/marketplace"
DEFAULT_CURRENCY = "USD"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"DiscogsMarketplaceClient/{__version__}"

SUPPORTED_CURRENCIES = (
    'USD', 'GBP', 'EUR', 'CAD', 'AUD', 'JPY',
    'CHF', 'MXN', 'BRL', 'NZD', 'SEK', 'ZAR',
)


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete"""
    pass


def _normalize_currency(currency: Optional[str]) -> str:
    code = (currency or '').strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ConfigurationError(f"Unsupported currency: {currency!r}")
    return code


class Config:
    """Discogs Configuration"""

    def __init__(self):
        # Pick up a .env file without overriding the real environment
        load_dotenv()

        # API endpoint and the currency prices are quoted in
        self.discogs_api_url = os.getenv('DISCOGS_API_URL', DEFAULT_API_URL)
        self.discogs_currency = os.getenv('DISCOGS_CURRENCY', DEFAULT_CURRENCY)

        # Personal access token (only price suggestions require it)
        self.discogs_token = os.getenv('DISCOGS_TOKEN', '')

        # Discogs rejects requests without an identifying User-Agent
        self.discogs_user_agent = os.getenv('DISCOGS_USER_AGENT', DEFAULT_USER_AGENT)
        self.discogs_timeout = os.getenv('DISCOGS_TIMEOUT', str(DEFAULT_TIMEOUT))

    @property
    def timeout(self) -> float:
        try:
            return float(self.discogs_timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(f"DISCOGS_TIMEOUT is not a number: {self.discogs_timeout!r}")

    def validate(self):
        """Validate required configuration"""
        if not self.discogs_api_url:
            raise ConfigurationError("DISCOGS_API_URL not set")
        _normalize_currency(self.discogs_currency)
        if self.timeout <= 0:
            raise ConfigurationError("DISCOGS_TIMEOUT must be positive")
        if not self.discogs_token:
            logger.debug("DISCOGS_TOKEN not set; price suggestions will be rejected")


@dataclass(frozen=True)
class MarketplaceConfig:
    """Base URL and currency a client is bound to for its whole lifetime"""
    base_url: str = DEFAULT_API_URL
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        # frozen dataclass, so normalise through object.__setattr__
        object.__setattr__(self, 'base_url', self.base_url.rstrip('/'))
        object.__setattr__(self, 'currency', _normalize_currency(self.currency))

    @classmethod
    def from_config(cls, config: Config) -> 'MarketplaceConfig':
        config.validate()
        return cls(base_url=config.discogs_api_url, currency=config.discogs_currency)


# Global configuration instance
_config: Optional[Config] = None

def get_config() -> Config:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = Config()
    return _config
