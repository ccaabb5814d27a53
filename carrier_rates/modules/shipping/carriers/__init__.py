"""
Carrier Registry and Factory

- CarrierFactory creates carrier instances by carrier id
- Only returns carriers enabled in settings (ENABLED_CARRIERS)
- Carriers register themselves with @register_carrier
"""
from typing import Dict, List, Optional, Type
import logging

from carrier_rates.core.config import Settings, get_settings
from carrier_rates.core.http_client import HttpClient
from carrier_rates.modules.shipping.carriers.base import BaseCarrier

logger = logging.getLogger(__name__)

# Registry of carrier implementations
_CARRIER_REGISTRY: Dict[str, Type[BaseCarrier]] = {}


def register_carrier(carrier_id: str):
    """
    Decorator to register a carrier implementation.

    Usage:
        @register_carrier("ups")
        class UPSCarrier(BaseCarrier):
            ...
    """
    def decorator(cls: Type[BaseCarrier]):
        _CARRIER_REGISTRY[carrier_id.lower()] = cls
        logger.debug(f"Registered carrier: {carrier_id} -> {cls.__name__}")
        return cls
    return decorator


class CarrierFactory:
    """
    Factory for creating carrier instances.

    Returns None for disabled or unknown carriers.
    """

    @classmethod
    def get_carrier(
        cls,
        carrier_id: str,
        http_client: HttpClient,
        settings: Optional[Settings] = None,
    ) -> Optional[BaseCarrier]:
        """
        Get a configured carrier instance if enabled.

        Args:
            carrier_id: The carrier to build (e.g. "ups")
            http_client: Transport shared by the carrier and its token manager
            settings: Optional settings; defaults to environment settings

        Returns:
            BaseCarrier instance or None if disabled/not found
        """
        settings = settings or get_settings()
        carrier_id = carrier_id.lower()

        if not settings.is_carrier_enabled(carrier_id):
            logger.debug(f"Carrier {carrier_id} is disabled")
            return None

        carrier_cls = _CARRIER_REGISTRY.get(carrier_id)
        if not carrier_cls:
            logger.warning(f"No implementation registered for carrier: {carrier_id}")
            return None

        return carrier_cls.from_settings(http_client, settings)

    @classmethod
    def get_enabled_carriers(
        cls,
        http_client: HttpClient,
        settings: Optional[Settings] = None,
    ) -> List[BaseCarrier]:
        """Build every enabled carrier that has a registered implementation."""
        settings = settings or get_settings()
        carriers = []

        for carrier_id in settings.ENABLED_CARRIERS:
            carrier = cls.get_carrier(carrier_id, http_client, settings)
            if carrier:
                carriers.append(carrier)

        return carriers

    @classmethod
    def get_registered_carriers(cls) -> List[str]:
        """Get list of all registered carrier ids."""
        return list(_CARRIER_REGISTRY.keys())


def get_carrier(
    carrier_id: str,
    http_client: HttpClient,
    settings: Optional[Settings] = None,
) -> Optional[BaseCarrier]:
    """
    Convenience function to get a carrier.

    Equivalent to CarrierFactory.get_carrier().
    """
    return CarrierFactory.get_carrier(carrier_id, http_client, settings)


# Import carriers to trigger registration
# These imports must be at the bottom to avoid circular imports
from carrier_rates.modules.shipping.carriers.ups import UPSCarrier  # noqa: E402, F401
