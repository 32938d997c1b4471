"""Tests for fare aggregation and the price summary."""

from __future__ import annotations

import pytest

from fareline_normalizer.config import settings
from fareline_normalizer.errors import OfferDataError
from fareline_normalizer.parsers.pricing_parser import parse_pricing


def test_breakdown_weighted_by_passenger_count(make_raw_offer, make_fare_detail):
    offer = make_raw_offer(
        fare_details=[
            make_fare_detail("Adult", 2, base_fare=100, tax=20, other_fee=5, vat=3),
            make_fare_detail("Infant", 1, base_fare=0, tax=10, other_fee=0, vat=1),
        ]
    )

    pricing = parse_pricing(offer)

    assert pricing.breakdown.base_fare == 200
    assert pricing.breakdown.taxes == 50
    assert pricing.breakdown.fees == 10
    assert pricing.breakdown.vat == 7
    assert pricing.breakdown.discount == 0


def test_per_passenger_total_is_per_unit(make_raw_offer, make_fare_detail):
    offer = make_raw_offer(
        fare_details=[make_fare_detail("Adult", 2, sub_total=24000)]
    )

    (adult,) = parse_pricing(offer).per_passenger

    assert adult.type == "Adult"
    assert adult.count == 2
    assert adult.total == 12000
    assert adult.base_fare == 10000
    assert adult.taxes == 2000


def test_wrapped_fare_details_are_unwrapped(make_raw_offer, make_fare_detail):
    offer = make_raw_offer(
        fare_details=[
            {"fareDetail": make_fare_detail("Adult", 1, base_fare=100)},
            make_fare_detail("Child", 1, base_fare=50),
        ]
    )

    pricing = parse_pricing(offer)

    assert pricing.breakdown.base_fare == 150
    assert [p.type for p in pricing.per_passenger] == ["Adult", "Child"]


def test_supplier_pax_codes_are_normalized(make_raw_offer, make_fare_detail):
    offer = make_raw_offer(
        fare_details=[make_fare_detail("ADT"), make_fare_detail("C05")]
    )

    types = [p.type for p in parse_pricing(offer).per_passenger]

    assert types == ["Adult", "Child"]


def test_summary_totals_passed_through(make_raw_offer, make_price):
    offer = make_raw_offer(
        price=make_price(11500, gross=12500, currency="USD", total_vat=150)
    )

    pricing = parse_pricing(offer)

    assert pricing.total == 11500
    assert pricing.gross == 12500
    assert pricing.total_vat == 150
    assert pricing.currency == "USD"
    assert pricing.effective_total == 12500


def test_currency_defaults_to_bdt(make_raw_offer, make_price):
    pricing = parse_pricing(make_raw_offer(price=make_price(5000, currency=None)))

    assert pricing.currency == "BDT"
    assert pricing.gross is None
    assert pricing.effective_total == 5000


def test_default_currency_is_configurable(monkeypatch, make_raw_offer, make_price):
    monkeypatch.setattr(settings, "default_currency", "USD")

    pricing = parse_pricing(make_raw_offer(price=make_price(5000, currency=None)))

    assert pricing.currency == "USD"


def test_zero_pax_count_keeps_subtotal(make_raw_offer, make_fare_detail):
    offer = make_raw_offer(
        fare_details=[make_fare_detail("Adult", 0, sub_total=900)]
    )

    (fare,) = parse_pricing(offer).per_passenger

    assert fare.total == 900
    assert parse_pricing(offer).breakdown.base_fare == 0


def test_missing_price_summary_is_offer_error(make_raw_offer):
    offer = make_raw_offer()
    offer["price"] = {}

    with pytest.raises(OfferDataError):
        parse_pricing(offer)
