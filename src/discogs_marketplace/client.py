"""
Discogs marketplace client: listings, price suggestions and release stats
"""
import logging
from typing import Optional

from .config import MarketplaceConfig, get_config
from .models import Listing, PriceListing, Stats
from .transport import (
    Transport,
    APIError,
    DecodeError,
    NotFoundError,
    RateLimitError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

LISTING_URI = "/listings/"
PRICE_SUGGESTIONS_URI = "/price_suggestions/"
RELEASE_STATS_URI = "/stats/"


class MarketplaceClient:
    """Stateless wrapper over the marketplace endpoints.

    Base URL and currency come from ``config`` and never change afterwards.
    Every method is a single transport call; whatever the transport raises
    reaches the caller untouched.
    """

    def __init__(self, config: Optional[MarketplaceConfig] = None, transport: Optional[Transport] = None):
        if config is None or transport is None:
            settings = get_config()
            settings.validate()
            if config is None:
                config = MarketplaceConfig.from_config(settings)
            if transport is None:
                transport = Transport.from_config(settings)
        self.config = config
        self.transport = transport

    def _currency_params(self) -> dict:
        return {'curr_abbr': self.config.currency}

    def _get(self, uri: str, resource_id: int, params: Optional[dict] = None):
        url = f"{self.config.base_url}{uri}{resource_id}"
        logger.debug(f"GET {url} params={params}")
        return self.transport.get(url, params=params)

    def get_listing(self, listing_id: int) -> Listing:
        """Listing by ID, priced in the client's currency"""
        data = self._get(LISTING_URI, listing_id, self._currency_params())
        return Listing.from_dict(data)

    def get_release_statistics(self, release_id: int) -> Stats:
        """Short summary of a release's marketplace listings.

        Authentication is optional.
        """
        data = self._get(RELEASE_STATS_URI, release_id, self._currency_params())
        return Stats.from_dict(data)

    def get_price_suggestions(self, release_id: int) -> PriceListing:
        """Suggested prices for a release, one per grading quality.

        Authentication is required: the transport must carry a token.
        """
        data = self._get(PRICE_SUGGESTIONS_URI, release_id)
        return PriceListing.from_dict(data)


__all__ = [
    'MarketplaceClient',
    'APIError',
    'DecodeError',
    'NotFoundError',
    'RateLimitError',
    'UnauthorizedError',
]
