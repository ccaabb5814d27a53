"""
UPS Rating API response schemas.

Every nested field is optional and unknown keys are ignored. The wrapper
only checks the outer shape; each RatedShipment is validated on its own by
the parser.

Shape: {"RateResponse": {"Response": {...}, "RatedShipment": <object|list>}}
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr


class _UPSModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class UPSService(_UPSModel):
    Code: Optional[str] = None
    Description: Optional[str] = None


class UPSTotalCharges(_UPSModel):
    CurrencyCode: Optional[str] = None
    MonetaryValue: Optional[Union[StrictStr, StrictInt, StrictFloat]] = None


class UPSTimeInTransit(_UPSModel):
    BusinessDaysInTransit: Optional[str] = None


class UPSRatedShipment(_UPSModel):
    """One service option in a rate response."""
    Service: Optional[UPSService] = None
    TotalCharges: Optional[UPSTotalCharges] = None
    TimeInTransit: Optional[UPSTimeInTransit] = None


class UPSRateResponse(_UPSModel):
    Response: Optional[Dict[str, Any]] = None
    # Entries stay raw here; a malformed entry is dropped, not fatal
    RatedShipment: Optional[Union[Dict[str, Any], List[Any]]] = None


class UPSRateResponseWrapper(_UPSModel):
    RateResponse: Optional[UPSRateResponse] = None
