"""
Quote Shipping Rates

Reads a rate request JSON file, asks every enabled carrier for quotes and
prints them sorted by price. Credentials come from the environment (.env):
UPS_CLIENT_ID, UPS_CLIENT_SECRET, optionally UPS_AUTH_URL / UPS_RATING_URL.

Run: python scripts/quote_rates.py request.json [--carrier ups]

request.json:
    {
      "origin": {"line1": "123 Origin St", "city": "Timonium",
                 "postalCode": "21093", "country": "US"},
      "destination": {"line1": "456 Dest Ave", "city": "Alpharetta",
                      "postalCode": "30005", "country": "US"},
      "packages": [{"weight": 2.5, "length": 10, "width": 8, "height": 6,
                    "weightUnit": "lb", "dimensionUnit": "in"}]
    }
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from carrier_rates.core.config import get_settings
from carrier_rates.core.exceptions import CarrierIntegrationError
from carrier_rates.core.http_client import HttpxClient
from carrier_rates.modules.shipping import CarrierFactory
from carrier_rates.schemas.shipping import RateRequest

logger = logging.getLogger(__name__)


async def quote(request: RateRequest, carrier_id: Optional[str] = None) -> int:
    settings = get_settings()

    async with HttpxClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as http_client:
        if carrier_id:
            carrier = CarrierFactory.get_carrier(carrier_id, http_client, settings)
            carriers = [carrier] if carrier else []
        else:
            carriers = CarrierFactory.get_enabled_carriers(http_client, settings)

        if not carriers:
            logger.error("No enabled carriers to quote")
            return 1

        exit_code = 0
        for carrier in carriers:
            try:
                quotes = await carrier.get_rates(request)
            except CarrierIntegrationError as e:
                logger.error(f"{carrier.carrier_name}: {e.message} ({e.code})")
                exit_code = 2
                continue

            for q in sorted(quotes, key=lambda q: q.price.amount):
                days = f"{q.estimated_delivery_days}d" if q.estimated_delivery_days else "-"
                print(f"{carrier.carrier_name:<6} {q.service_name:<32} {q.price.amount:>10.2f} {q.price.currency} {days:>4}")

        return exit_code


def main() -> int:
    parser = argparse.ArgumentParser(description="Quote shipping rates")
    parser.add_argument("request_file", type=Path, help="Path to a rate request JSON file")
    parser.add_argument("--carrier", help="Only quote this carrier (e.g. ups)")
    args = parser.parse_args()

    logging.basicConfig(
        level=get_settings().LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        request = RateRequest.model_validate(json.loads(args.request_file.read_text()))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Invalid rate request file {args.request_file}: {e}")
        return 1

    return asyncio.run(quote(request, args.carrier))


if __name__ == "__main__":
    sys.exit(main())
