"""Merge two-oneway offers that are the same flight sold at different fares."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fareline_core.schemas import UpsellFeatures, UpsellOption

from ..config import settings

if TYPE_CHECKING:
    from fareline_core.schemas import FlightOffer

logger = logging.getLogger(__name__)


def get_two_oneway_flight_signature(offer: FlightOffer) -> str:
    """Validating carrier plus ``<airline><number>_<dep>_<arr>`` per segment.

    Price and booking class never take part, so the same flight sold in
    several fare classes shares one signature.
    """
    return offer.signature


def group_two_oneway_offers_by_flight(offers: list[FlightOffer]) -> list[FlightOffer]:
    """Collapse same-signature offers into one offer with a fare ladder.

    * Groups offers by :func:`get_two_oneway_flight_signature`.
    * A group of one is returned untouched.
    * Larger groups keep the cheapest offer's data and list every member,
      cheapest first, as synthetic ``up_sell_options``.

    The order of the returned groups is not a contract; callers that need
    one should use :func:`sort_offers_by_price`.
    """
    groups: dict[str, list[FlightOffer]] = {}
    for offer in offers:
        groups.setdefault(get_two_oneway_flight_signature(offer), []).append(offer)

    merged = [_merge_offer_group(group) for group in groups.values()]

    logger.info(
        "Grouped %d two-oneway offers into %d flights", len(offers), len(merged)
    )
    return merged


def sort_offers_by_price(offers: list[FlightOffer]) -> list[FlightOffer]:
    """Stable ascending sort by gross price, falling back to total."""
    return sorted(offers, key=lambda offer: offer.pricing.effective_total)


def _merge_offer_group(offers: list[FlightOffer]) -> FlightOffer:
    if not offers:
        msg = "Cannot merge an empty offer group"
        raise ValueError(msg)
    if len(offers) == 1:
        return offers[0]

    ranked = sort_offers_by_price(offers)
    base = ranked[0]
    return base.model_copy(
        update={"up_sell_options": [_to_upsell_option(offer) for offer in ranked]}
    )


def _to_upsell_option(offer: FlightOffer) -> UpsellOption:
    booking_class = _first_booking_class(offer)
    currency = offer.pricing.currency or settings.default_currency
    price_label = f"{currency} {format_amount(offer.pricing.effective_total)}"
    if booking_class:
        brand_name = f"{settings.fare_label_cabin} ({booking_class}) - {price_label}"
    else:
        brand_name = price_label

    return UpsellOption(
        id=offer.id,
        brand_name=brand_name,
        refundable=offer.refundable,
        pricing=offer.pricing,
        features=UpsellFeatures(refund_allowed=offer.refundable),
        baggage=offer.baggage,
        booking_class=booking_class or None,
    )


def _first_booking_class(offer: FlightOffer) -> str:
    if not offer.segments or not offer.segments[0].segments:
        return ""
    return offer.segments[0].segments[0].booking_class


def format_amount(value: float) -> str:
    """``12500`` -> ``12,500``; up to three decimals, trailing zeros dropped."""
    return f"{value:,.3f}".rstrip("0").rstrip(".")
