import pytest

from dealgrade.adapters.property_data import (
    normalize_comparable,
    normalize_property_record,
    normalize_similar_homes,
    prefill_inputs,
)


def _lookup_payload() -> dict:
    return {
        "data": {
            "zpid": 44556677,
            "homeType": "SINGLE_FAMILY",
            "zestimate": 265000,
            "livingAreaValue": 1450,
            "lotAreaValue": 0.18,
            "lotAreaUnits": "Acres",
            "hoaFee": None,
            "imageLink": "https://example.com/p.jpg",
            "resoFacts": {
                "yearBuilt": 1954,
                "atAGlanceFacts": [
                    {"factLabel": "Type", "factValue": "SingleFamily"},
                    {"factLabel": "Heating", "factValue": "Forced air"},
                ],
            },
            "formattedChip": {
                "quickFacts": [
                    {"elementType": "beds", "value": {"fullValue": "3"}},
                    {"elementType": "baths", "value": {"fullValue": "1.5"}},
                ],
                "additionalFacts": [
                    {"elementType": "rentZestimate", "value": {"fullValue": "$2,150/mo"}},
                ],
            },
        }
    }


def test_normalize_property_record_extracts_fields():
    rec = normalize_property_record(_lookup_payload())

    assert rec["zpid"] == "44556677"
    assert rec["home_type"] == "SINGLE_FAMILY"
    assert rec["zestimate"] == 265_000.0
    assert rec["rent_zestimate"] == 2150.0
    assert rec["living_area"] == 1450.0
    assert rec["lot_units"] == "Acres"
    assert rec["hoa_fee"] == 0.0
    assert rec["year_built"] == 1954
    assert rec["heating"] == "Forced air"
    assert rec["beds"] == "3"
    assert rec["baths"] == "1.5"
    assert rec["image_link"] == "https://example.com/p.jpg"
    assert rec["street_view"] is None


def test_normalize_property_record_defaults_on_empty_payload():
    rec = normalize_property_record({})

    assert rec["zpid"] is None
    assert rec["home_type"] == "Unknown"
    assert rec["zestimate"] == 0.0
    assert rec["rent_zestimate"] == 0.0
    assert rec["heating"] == "Not available"
    assert rec["beds"] == "N/A"
    assert rec["baths"] == "N/A"
    assert rec["year_built"] == 0


def test_prefill_inputs_copies_positive_lookup_values():
    rec = normalize_property_record(_lookup_payload())
    form = {"purchasePrice": "240000", "monthlyRent": ""}

    filled = prefill_inputs(form, rec)

    assert filled["marketValueComparables"] == 265_000.0
    assert filled["propertyValue"] == 265_000.0
    assert filled["monthlyRent"] == 2150.0
    assert filled["purchasePrice"] == "240000"
    # caller's dict untouched
    assert form == {"purchasePrice": "240000", "monthlyRent": ""}


def test_prefill_inputs_skips_missing_values():
    form = {"monthlyRent": "1800", "propertyValue": "250000"}
    filled = prefill_inputs(form, normalize_property_record({}))
    assert filled == form

    assert prefill_inputs(None, None) == {}


def test_normalize_comparable_derives_investment_ratios(similar_homes_raw):
    home = normalize_comparable(similar_homes_raw[0])

    assert home.zpid == "1001"
    assert home.address == "1 Oak St"
    assert home.price == 100_000.0
    assert home.rent_zestimate == 1500.0
    assert home.living_area == 1000.0
    assert home.days_on_market == 10.0
    assert home.beds == 3.0
    assert home.home_type == "SINGLE_FAMILY"
    assert home.price_per_sqft == pytest.approx(100.0)
    assert home.model_extra["gross_rent_multiplier"] == pytest.approx(100_000 / 18_000)
    assert home.model_extra["cap_rate_estimate"] == pytest.approx(18_000 * 0.6 / 100_000 * 100)


def test_normalize_comparable_uses_zestimate_when_unlisted(similar_homes_raw):
    home = normalize_comparable(similar_homes_raw[1])
    assert home.price == 0.0
    assert home.price_for_calc == 150_000.0
    assert home.price_per_sqft == pytest.approx(120.0)


def test_normalize_comparable_without_rent_has_no_ratios():
    home = normalize_comparable({"zpid": 9, "price": 100_000, "livingArea": 0})
    assert home.price_per_sqft == 0.0
    assert "gross_rent_multiplier" not in (home.model_extra or {})
    assert home.home_status == "Unknown"


def test_normalize_similar_homes_shapes_and_limit(similar_homes_raw):
    assert len(normalize_similar_homes(similar_homes_raw)) == 4
    assert len(normalize_similar_homes({"data": {"similarHomes": similar_homes_raw}})) == 4
    assert len(normalize_similar_homes({"similar_homes": similar_homes_raw}, limit=2)) == 2
    assert normalize_similar_homes(None) == []


def test_normalize_similar_homes_skips_malformed_items(similar_homes_raw):
    homes = normalize_similar_homes(["garbage", *similar_homes_raw[:2], 42])
    assert [h.zpid for h in homes] == ["1001", "1002"]


def test_normalize_similar_homes_skips_items_with_broken_address(similar_homes_raw):
    broken = {"zpid": 2, "price": 250_000, "address": ["not", "a", "mapping"]}
    homes = normalize_similar_homes([broken, similar_homes_raw[0]])
    assert [h.zpid for h in homes] == ["1001"]
