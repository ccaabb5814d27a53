"""
Carrier-agnostic shipping schemas.

Pydantic models for rate requests and normalized rate quotes. All models are
immutable; construct them from dicts with either snake_case field names or
the camelCase names used by API callers (postalCode, weightUnit, ...).
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WeightUnit(str, Enum):
    KG = "kg"
    LB = "lb"


class DimensionUnit(str, Enum):
    CM = "cm"
    IN = "in"


class _ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ==================== Request Schemas ====================


class Address(_ValueObject):
    """Postal address. Country is an ISO-3166 alpha-2 code."""
    line1: str = Field(..., min_length=1)
    line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state_or_province: Optional[str] = Field(None, alias="stateOrProvince")
    postal_code: str = Field(..., min_length=1, alias="postalCode")
    country: str = Field(..., min_length=2, max_length=2)


class Package(_ValueObject):
    """Package weight and dimensions."""
    weight: float = Field(..., gt=0, allow_inf_nan=False)
    length: float = Field(..., gt=0, allow_inf_nan=False)
    width: float = Field(..., gt=0, allow_inf_nan=False)
    height: float = Field(..., gt=0, allow_inf_nan=False)
    weight_unit: WeightUnit = Field(WeightUnit.KG, alias="weightUnit")
    dimension_unit: DimensionUnit = Field(DimensionUnit.CM, alias="dimensionUnit")


class RateRequest(_ValueObject):
    """Request for rate quotes; packages keep caller order."""
    origin: Address
    destination: Address
    packages: List[Package] = Field(..., min_length=1)


# ==================== Quote Schemas ====================


class Money(_ValueObject):
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    currency: str = Field(..., min_length=3, max_length=3)


class RateQuote(_ValueObject):
    """A priced shipping service option."""
    service_name: str = Field(..., min_length=1, alias="serviceName")
    price: Money
    estimated_delivery_days: Optional[int] = Field(None, gt=0, alias="estimatedDeliveryDays")
