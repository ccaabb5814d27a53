from carrier_rates.schemas.shipping import (
    Address,
    DimensionUnit,
    Money,
    Package,
    RateQuote,
    RateRequest,
    WeightUnit,
)

__all__ = [
    "Address",
    "DimensionUnit",
    "Money",
    "Package",
    "RateQuote",
    "RateRequest",
    "WeightUnit",
]
