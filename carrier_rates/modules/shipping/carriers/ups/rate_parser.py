"""
UPS Rating API response -> normalized RateQuote list.

Only a broken outer structure raises InvalidResponseError. Individual rated
shipments that are malformed (unparseable or non-positive price, bad field
types, invalid quote) are dropped so valid entries still come through.
Output order follows the response order.
"""
import logging
import math
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from carrier_rates.core.exceptions import InvalidResponseError
from carrier_rates.modules.shipping.carriers.ups.rate_schemas import (
    UPSRatedShipment,
    UPSRateResponseWrapper,
)
from carrier_rates.schemas.shipping import Money, RateQuote

logger = logging.getLogger(__name__)

CARRIER_ID = "ups"
CARRIER_LABEL = "UPS"

# UPS omits CurrencyCode on some accounts; rates are assumed US-based
DEFAULT_CURRENCY = "USD"


def _parse_amount(value: Union[str, int, float, None]) -> Optional[float]:
    if value is None:
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def _parse_transit_days(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        days = int(value.strip())
    except ValueError:
        return None
    return days if days > 0 else None


def _service_name(shipment: UPSRatedShipment) -> str:
    service = shipment.Service
    if service and service.Description:
        return service.Description
    if service and service.Code:
        return f"{CARRIER_LABEL} {service.Code}"
    return CARRIER_LABEL


def normalize_rated_shipment(entry: Any) -> Optional[RateQuote]:
    """
    Convert one raw RatedShipment into a RateQuote.

    Returns None when the entry cannot produce a valid quote.
    """
    try:
        shipment = UPSRatedShipment.model_validate(entry)
    except ValidationError as e:
        logger.debug(f"Dropping malformed UPS rated shipment: {e.error_count()} validation error(s)")
        return None

    charges = shipment.TotalCharges
    amount = _parse_amount(charges.MonetaryValue if charges else None)
    if amount is None:
        logger.debug("Dropping UPS rated shipment without a positive MonetaryValue")
        return None

    currency = DEFAULT_CURRENCY
    if charges and charges.CurrencyCode and len(charges.CurrencyCode) == 3:
        currency = charges.CurrencyCode

    transit = shipment.TimeInTransit
    delivery_days = _parse_transit_days(transit.BusinessDaysInTransit if transit else None)

    try:
        return RateQuote(
            service_name=_service_name(shipment),
            price=Money(amount=amount, currency=currency),
            estimated_delivery_days=delivery_days,
        )
    except ValidationError as e:
        logger.debug(f"Dropping UPS rated shipment that fails quote validation: {e.error_count()} error(s)")
        return None


def parse_rate_response(data: Any) -> List[RateQuote]:
    """
    Parse a UPS rate response body into quotes.

    Args:
        data: Decoded JSON body of the Rating API response

    Returns:
        Quotes in response order; empty when RatedShipment is absent

    Raises:
        InvalidResponseError: If the top-level structure is wrong
    """
    try:
        wrapper = UPSRateResponseWrapper.model_validate(data)
    except ValidationError as e:
        raise InvalidResponseError(
            "UPS rate response has invalid top-level structure",
            CARRIER_ID,
            e,
        ) from e

    rated = wrapper.RateResponse.RatedShipment if wrapper.RateResponse else None
    if rated is None:
        return []

    entries = rated if isinstance(rated, list) else [rated]

    quotes = []
    for entry in entries:
        quote = normalize_rated_shipment(entry)
        if quote is not None:
            quotes.append(quote)

    if len(quotes) < len(entries):
        logger.info(f"UPS rate response: kept {len(quotes)} of {len(entries)} rated shipments")
    return quotes
