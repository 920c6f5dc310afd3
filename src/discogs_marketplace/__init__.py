"""
Discogs Marketplace Client Package
"""
__version__ = "0.1.0"

from .client import MarketplaceClient
from .config import Config, ConfigurationError, MarketplaceConfig, get_config
from .models import Grade, Listing, Price, PriceListing, Stats
from .transport import (
    Transport,
    APIError,
    DecodeError,
    NotFoundError,
    RateLimitError,
    UnauthorizedError,
)

__all__ = [
    'MarketplaceClient', 'Transport',
    'Config', 'ConfigurationError', 'MarketplaceConfig', 'get_config',
    'Grade', 'Listing', 'Price', 'PriceListing', 'Stats',
    'APIError', 'DecodeError', 'NotFoundError', 'RateLimitError', 'UnauthorizedError',
]
