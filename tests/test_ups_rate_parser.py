"""
Tests for UPS rate response parsing and normalization.
"""
import pytest

from carrier_rates.core.exceptions import InvalidResponseError
from carrier_rates.modules.shipping.carriers.ups.rate_parser import (
    normalize_rated_shipment,
    parse_rate_response,
)


def _shipment(code="03", description="Ground", value="24.50", currency="USD", days=None):
    entry = {
        "Service": {"Code": code, "Description": description},
        "TotalCharges": {"CurrencyCode": currency, "MonetaryValue": value},
    }
    if days is not None:
        entry["TimeInTransit"] = {"BusinessDaysInTransit": days}
    return entry


class TestTopLevelStructure:

    @pytest.mark.parametrize("data", [
        None,
        "not json",
        [],
        42,
        {"RateResponse": "oops"},
        {"RateResponse": []},
        {"RateResponse": {"RatedShipment": "oops"}},
        {"RateResponse": {"RatedShipment": 7}},
    ])
    def test_invalid_structure_raises(self, data):
        with pytest.raises(InvalidResponseError) as exc_info:
            parse_rate_response(data)

        assert exc_info.value.carrier_id == "ups"
        assert exc_info.value.cause is not None

    @pytest.mark.parametrize("data", [
        {},
        {"RateResponse": None},
        {"RateResponse": {}},
        {"RateResponse": {"Response": {"ResponseStatus": {"Code": "1"}}}},
        {"RateResponse": {"RatedShipment": None}},
        {"RateResponse": {"RatedShipment": []}},
    ])
    def test_missing_rated_shipments_yield_no_quotes(self, data):
        assert parse_rate_response(data) == []

    def test_single_object_is_normalized_to_list(self):
        quotes = parse_rate_response({"RateResponse": {"RatedShipment": _shipment()}})

        assert len(quotes) == 1
        assert quotes[0].service_name == "Ground"

    def test_order_is_preserved(self):
        entries = [
            _shipment(code="14", description="Next Day Air Early", value="99.10"),
            _shipment(code="03", description="Ground", value="12.00"),
            _shipment(code="02", description="2nd Day Air", value="40.25"),
        ]

        quotes = parse_rate_response({"RateResponse": {"RatedShipment": entries}})

        assert [q.service_name for q in quotes] == ["Next Day Air Early", "Ground", "2nd Day Air"]

    def test_unknown_fields_are_ignored(self):
        entry = _shipment()
        entry["BillingWeight"] = {"Weight": "3.0"}
        entry["ItemizedCharges"] = [{"Code": "375", "MonetaryValue": "1.20"}]

        quotes = parse_rate_response({"RateResponse": {"RatedShipment": [entry]}, "Extra": 1})

        assert len(quotes) == 1


class TestEntryTolerance:
    """Malformed entries are dropped without failing the response."""

    def test_non_numeric_amount_dropped(self):
        entries = [_shipment(value="abc"), _shipment(code="12", description="3 Day Select", value="38.00")]

        quotes = parse_rate_response({"RateResponse": {"RatedShipment": entries}})

        assert len(quotes) == 1
        assert quotes[0].service_name == "3 Day Select"

    @pytest.mark.parametrize("value", ["0", "0.00", "-5.00", 0, -1, "nan", "inf", "", None])
    def test_non_positive_or_unusable_amount_dropped(self, value):
        assert normalize_rated_shipment(_shipment(value=value)) is None

    @pytest.mark.parametrize("entry", [
        "garbage",
        42,
        None,
        {"Service": "Ground"},
        {"TotalCharges": {"MonetaryValue": {"nested": 1}}},
        {"TotalCharges": {"MonetaryValue": True}},
        {"TimeInTransit": {"BusinessDaysInTransit": 3}},
    ])
    def test_wrongly_typed_entry_dropped(self, entry):
        assert normalize_rated_shipment(entry) is None

    def test_mixed_entries_keep_only_valid(self):
        entries = [
            _shipment(value="10.00"),
            "garbage",
            _shipment(value="-1"),
            {"TotalCharges": {"MonetaryValue": "5.00"}},
        ]

        quotes = parse_rate_response({"RateResponse": {"RatedShipment": entries}})

        assert len(quotes) == 2

    def test_amount_too_large_for_float_dropped(self):
        entries = [
            {"TotalCharges": {"MonetaryValue": 10 ** 400}},
            {"Service": {"Code": "01"}, "TotalCharges": {"MonetaryValue": "5.00"}},
        ]

        quotes = parse_rate_response({"RateResponse": {"RatedShipment": entries}})

        assert [q.service_name for q in quotes] == ["UPS 01"]


class TestFieldNormalization:

    def test_full_quote(self):
        quote = normalize_rated_shipment(_shipment(days="3"))

        assert quote.service_name == "Ground"
        assert quote.price.amount == 24.5
        assert quote.price.currency == "USD"
        assert quote.estimated_delivery_days == 3

    def test_numeric_monetary_value(self):
        assert normalize_rated_shipment(_shipment(value=15)).price.amount == 15.0
        assert normalize_rated_shipment(_shipment(value=15.75)).price.amount == 15.75

    @pytest.mark.parametrize("currency", [None, "", "US", "DOLLARS"])
    def test_currency_defaults_to_usd(self, currency):
        assert normalize_rated_shipment(_shipment(currency=currency)).price.currency == "USD"

    def test_three_letter_currency_kept(self):
        assert normalize_rated_shipment(_shipment(currency="CAD")).price.currency == "CAD"

    def test_service_code_fallback(self):
        quote = normalize_rated_shipment({
            "Service": {"Code": "07"},
            "TotalCharges": {"CurrencyCode": "USD", "MonetaryValue": "15.00"},
        })

        assert quote.service_name == "UPS 07"
        assert quote.price.amount == 15.0

    def test_empty_description_uses_code(self):
        assert normalize_rated_shipment(_shipment(code="65", description="")).service_name == "UPS 65"

    def test_generic_label_without_service(self):
        quote = normalize_rated_shipment({"TotalCharges": {"MonetaryValue": "9.99"}})
        assert quote.service_name == "UPS"

    @pytest.mark.parametrize("days", ["0", "-2", "two", "", "2.5"])
    def test_unusable_transit_days_omitted(self, days):
        quote = normalize_rated_shipment(_shipment(days=days))

        assert quote is not None
        assert quote.estimated_delivery_days is None

    def test_transit_days_whitespace_tolerated(self):
        assert normalize_rated_shipment(_shipment(days=" 5 ")).estimated_delivery_days == 5
