"""
RateRequest -> UPS Rating API payload.

Assumptions baked into the payload:
- Shipper and ShipFrom both use the origin address (seller ships from its
  own location).
- UPS requires a Name on every address; the domain model has none, so the
  city stands in.
- Payment is BillShipper with an empty account number (published rates, no
  negotiated rates).
- No Service is set, so the Shop endpoint returns every available service.

UPS takes weights and dimensions as strings. Dimensions are rounded to whole
units and weight to two decimals; that precision loss is accepted.
"""
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict, List

from carrier_rates.schemas.shipping import (
    Address,
    DimensionUnit,
    Package,
    RateRequest,
    WeightUnit,
)

WEIGHT_UNIT_CODES = {
    WeightUnit.LB: "LBS",
    WeightUnit.KG: "KGS",
}

DIMENSION_UNIT_CODES = {
    DimensionUnit.IN: "IN",
    DimensionUnit.CM: "CM",
}

PACKAGING_TYPE_CODE = "02"
PACKAGING_TYPE_DESCRIPTION = "Customer Supplied Package"
PAYMENT_TYPE_BILL_SHIPPER = "01"


def _round_half_up(value: float, places: str) -> Decimal:
    amount = Decimal(str(value))
    exponent = Decimal(places)
    with localcontext() as ctx:
        # quantize needs every integer digit plus the requested decimals
        ctx.prec = max(ctx.prec, amount.adjusted() - exponent.as_tuple().exponent + 2)
        return amount.quantize(exponent, rounding=ROUND_HALF_UP)


def format_dimension(value: float) -> str:
    return str(_round_half_up(value, "1"))


def format_weight(value: float) -> str:
    return str(_round_half_up(value, "0.01"))


def map_address(address: Address, name: str) -> Dict[str, Any]:
    """Convert an Address to a UPS address block with a Name."""
    address_lines = [address.line1]
    if address.line2:
        address_lines.append(address.line2)

    ups_address: Dict[str, Any] = {
        "Name": name,
        "AddressLine": address_lines,
        "City": address.city,
    }
    if address.state_or_province:
        ups_address["StateProvinceCode"] = address.state_or_province
    ups_address["PostalCode"] = address.postal_code
    ups_address["CountryCode"] = address.country
    return ups_address


def map_package(package: Package) -> Dict[str, Any]:
    """Convert a Package to a UPS package block."""
    weight_code = WEIGHT_UNIT_CODES[package.weight_unit]
    dimension_code = DIMENSION_UNIT_CODES[package.dimension_unit]

    return {
        "PackagingType": {
            "Code": PACKAGING_TYPE_CODE,
            "Description": PACKAGING_TYPE_DESCRIPTION,
        },
        "Dimensions": {
            "UnitOfMeasurement": {"Code": dimension_code, "Description": dimension_code},
            "Length": format_dimension(package.length),
            "Width": format_dimension(package.width),
            "Height": format_dimension(package.height),
        },
        "PackageWeight": {
            "UnitOfMeasurement": {"Code": weight_code, "Description": weight_code},
            "Weight": format_weight(package.weight),
        },
    }


def map_rate_request(request: RateRequest) -> Dict[str, Any]:
    """
    Build the UPS Rating API request body.

    A single package is sent as an object, several as a list; UPS accepts
    both and this mirrors what its own clients send.
    """
    packages: List[Dict[str, Any]] = [map_package(pkg) for pkg in request.packages]

    return {
        "RateRequest": {
            "Request": {},
            "Shipment": {
                "Shipper": map_address(request.origin, request.origin.city),
                "ShipTo": map_address(request.destination, request.destination.city),
                "ShipFrom": map_address(request.origin, request.origin.city),
                "PaymentDetails": {
                    "ShipmentCharge": [
                        {
                            "Type": PAYMENT_TYPE_BILL_SHIPPER,
                            "BillShipper": {"AccountNumber": ""},
                        }
                    ],
                },
                "NumOfPieces": str(len(packages)),
                "Package": packages[0] if len(packages) == 1 else packages,
            },
        }
    }
