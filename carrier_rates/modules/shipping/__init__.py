"""
Shipping Module

- BaseCarrier interface for all carrier implementations
- CarrierFactory builds configured carriers by id
- UPS is the reference carrier (OAuth token manager, rate mapper, parser)
"""
from carrier_rates.modules.shipping.carriers import CarrierFactory, get_carrier
from carrier_rates.modules.shipping.carriers.base import BaseCarrier

__all__ = [
    "CarrierFactory",
    "get_carrier",
    "BaseCarrier",
]
