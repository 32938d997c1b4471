"""Shared factory fixtures building raw air-shopping payload fragments."""

from __future__ import annotations

from typing import Any

import pytest

from fareline_normalizer.config import settings


@pytest.fixture(autouse=True)
def default_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin settings so a developer's .env cannot leak into assertions."""
    monkeypatch.setattr(settings, "default_currency", "BDT")
    monkeypatch.setattr(settings, "not_available", "N/A")
    monkeypatch.setattr(settings, "fare_label_cabin", "Economy")
    monkeypatch.setattr(settings, "default_penalty_pax_type", "All")


@pytest.fixture
def make_pax_segment():
    """Factory for one ``paxSegmentList`` entry (wrapped form)."""

    def _make(
        departure: str = "DAC",
        arrival: str = "DXB",
        departure_time: str = "2026-03-01T08:00:00",
        arrival_time: str = "2026-03-01T11:30:00",
        *,
        group: int = 0,
        carrier: str = "EK",
        carrier_name: str = "Emirates",
        flight_number: int = 583,
        duration: int = 330,
        rbd: str = "T",
        return_journey: bool = False,
        terminal: str | None = None,
        technical_stops: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        segment: dict[str, Any] = {
            "departure": {
                "iatA_LocationCode": departure,
                "aircraftScheduledDateTime": departure_time,
            },
            "arrival": {
                "iatA_LocationCode": arrival,
                "aircraftScheduledDateTime": arrival_time,
            },
            "marketingCarrierInfo": {
                "carrierDesigCode": carrier,
                "marketingCarrierFlightNumber": flight_number,
                "carrierName": carrier_name,
            },
            "operatingCarrierInfo": {
                "carrierDesigCode": carrier,
                "carrierName": carrier_name,
            },
            "iatA_AircraftType": {"iatA_AircraftTypeCode": "77W"},
            "rbd": rbd,
            "flightNumber": flight_number,
            "segmentGroup": group,
            "returnJourney": return_journey,
            "airlinePNR": "",
            "duration": duration,
            "cabinType": "Economy",
        }
        if terminal:
            segment["departure"]["terminalName"] = terminal
        if technical_stops is not None:
            segment["technicalStopOver"] = technical_stops
        return {"paxSegment": segment}

    return _make


@pytest.fixture
def make_fare_detail():
    """Factory for one ``fareDetailList`` entry (direct form)."""

    def _make(
        pax_type: str = "Adult",
        pax_count: int = 1,
        base_fare: float = 10000,
        tax: float = 2000,
        other_fee: float = 0,
        discount: float = 0,
        vat: float = 0,
        sub_total: float | None = None,
    ) -> dict[str, Any]:
        if sub_total is None:
            sub_total = (base_fare + tax + other_fee + vat - discount) * pax_count
        return {
            "baseFare": base_fare,
            "tax": tax,
            "otherFee": other_fee,
            "discount": discount,
            "vat": vat,
            "currency": "BDT",
            "paxType": pax_type,
            "paxCount": pax_count,
            "subTotal": sub_total,
        }

    return _make


@pytest.fixture
def make_price():
    """Factory for an offer ``price`` summary block."""

    def _make(
        total: float = 12000,
        *,
        gross: float | None = None,
        currency: str | None = "BDT",
        total_vat: float | None = None,
    ) -> dict[str, Any]:
        price: dict[str, Any] = {"totalPayable": {"total": total}}
        if currency is not None:
            price["totalPayable"]["currency"] = currency
        if gross is not None:
            price["gross"] = {"total": gross, "currency": currency}
        if total_vat is not None:
            price["totalVAT"] = {"total": total_vat, "currency": currency}
        return price

    return _make


@pytest.fixture
def make_baggage():
    """Factory for one ``baggageAllowanceList`` entry (direct form)."""

    def _make(
        departure: str | None = "DAC",
        arrival: str | None = "DXB",
        check_in: str = "30KG",
        cabin: str = "7KG",
    ) -> dict[str, Any]:
        return {
            "departure": departure,
            "arrival": arrival,
            "checkIn": [{"paxType": "ADT", "allowance": check_in}],
            "cabin": [{"paxType": "ADT", "allowance": cabin}],
        }

    return _make


@pytest.fixture
def make_raw_offer(make_pax_segment, make_fare_detail, make_price, make_baggage):
    """Factory for a complete raw offer; defaults to a direct DAC-DXB flight."""

    def _make(
        offer_id: str = "OF-1",
        *,
        segments: list[dict[str, Any]] | None = None,
        fare_details: list[dict[str, Any]] | None = None,
        price: dict[str, Any] | None = None,
        baggage: list[dict[str, Any]] | None = None,
        brands: list[dict[str, Any]] | None = None,
        validating_carrier: str = "EK",
        refundable: bool = True,
        seats_remaining: int | str = 9,
        two_oneway_index: str | None = None,
    ) -> dict[str, Any]:
        offer: dict[str, Any] = {
            "offerId": offer_id,
            "validatingCarrier": validating_carrier,
            "refundable": refundable,
            "fareType": "OnHold",
            "paxSegmentList": (
                segments if segments is not None else [make_pax_segment()]
            ),
            "fareDetailList": (
                fare_details if fare_details is not None else [make_fare_detail()]
            ),
            "price": price if price is not None else make_price(),
            "penalty": {"refundPenaltyList": [], "exchangePenaltyList": []},
            "baggageAllowanceList": (
                baggage if baggage is not None else [make_baggage()]
            ),
            "seatsRemaining": seats_remaining,
        }
        if brands is not None:
            offer["upSellBrandList"] = brands
        if two_oneway_index is not None:
            offer["twoOnewayIndex"] = two_oneway_index
        return offer

    return _make


@pytest.fixture
def make_response():
    """Factory wrapping raw offers into an air-shopping response data object."""

    def _make(
        offers: list[dict[str, Any]] | None = None,
        *,
        trace_id: str = "trace-123",
        special_return: bool = False,
        outbound: list[dict[str, Any]] | None = None,
        inbound: list[dict[str, Any]] | None = None,
        casing: str = "upper",
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "traceId": trace_id,
            "offersGroup": [{"offer": offer} for offer in offers or []],
            "specialReturn": special_return,
            "moreOffersAvailableAirline": [],
        }
        ob_groups = [{"offer": offer} for offer in outbound or []]
        ib_groups = [{"offer": offer} for offer in inbound or []]
        if casing == "upper":
            data["specialReturnOfferGroup"] = {"OB": ob_groups, "IB": ib_groups}
        else:
            data["specialReturnOffersGroup"] = {"ob": ob_groups, "ib": ib_groups}
        return data

    return _make
