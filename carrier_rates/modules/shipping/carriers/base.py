"""
Base Carrier Interface

Every carrier adapter takes a carrier-agnostic RateRequest and returns
normalized RateQuote objects. Failures are raised as one of the
CarrierIntegrationError kinds, never as untyped exceptions.
"""
from abc import ABC, abstractmethod
from typing import List

from carrier_rates.core.config import Settings
from carrier_rates.core.http_client import HttpClient
from carrier_rates.schemas.shipping import RateQuote, RateRequest


class BaseCarrier(ABC):
    """
    Abstract base class for all shipping carriers.

    Carriers hold no per-call state; anything cached (such as an OAuth
    token) belongs to a collaborator owned by the carrier instance.
    """

    @classmethod
    @abstractmethod
    def from_settings(cls, http_client: HttpClient, settings: Settings) -> "BaseCarrier":
        """Build a fully wired carrier from application settings."""
        pass

    @property
    @abstractmethod
    def carrier_id(self) -> str:
        """Return the unique carrier identifier (e.g. "ups")."""
        pass

    @property
    @abstractmethod
    def carrier_name(self) -> str:
        """Return the human-readable carrier name."""
        pass

    @abstractmethod
    async def get_rates(self, request: RateRequest) -> List[RateQuote]:
        """
        Get shipping rates from the carrier.

        Args:
            request: Origin, destination and packages to quote

        Returns:
            Quotes for every available service, possibly empty

        Raises:
            AuthenticationError, RateLimitError, NetworkError,
            InvalidResponseError
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(carrier_id={self.carrier_id!r})"
