"""UPS reference carrier: OAuth token manager, rate mapper, response parser."""
from carrier_rates.modules.shipping.carriers.ups.carrier import UPSCarrier
from carrier_rates.modules.shipping.carriers.ups.rate_mapper import map_rate_request
from carrier_rates.modules.shipping.carriers.ups.rate_parser import (
    normalize_rated_shipment,
    parse_rate_response,
)
from carrier_rates.modules.shipping.carriers.ups.token_manager import UPSTokenManager

__all__ = [
    "UPSCarrier",
    "UPSTokenManager",
    "map_rate_request",
    "normalize_rated_shipment",
    "parse_rate_response",
]
