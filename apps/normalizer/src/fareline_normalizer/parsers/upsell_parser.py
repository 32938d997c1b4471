"""Parse alternate fare brands (``upSellBrandList``) into upsell options.

A brand carries its own price, fare details and baggage but shares the
parent offer's itinerary, so it is run through the pricing and baggage
parsers as an offer-shaped dict without leg records.  A broken brand is
dropped on its own; the parent offer keeps its other brands.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from fareline_core.schemas import UpsellFeatures, UpsellOption

from ..boundary import to_bool
from ..errors import OfferDataError
from .baggage_parser import parse_baggage
from .pricing_parser import parse_pricing

logger = logging.getLogger(__name__)


def parse_upsell_options(brands: list[dict[str, Any]]) -> list[UpsellOption]:
    """Return one :class:`UpsellOption` per valid (already unwrapped) brand."""
    options: list[UpsellOption] = []
    for brand in brands:
        try:
            options.append(_parse_upsell_brand(brand))
        except (OfferDataError, ValidationError) as exc:
            logger.warning(
                "Skipping malformed fare brand %s: %s", brand.get("offerId"), exc
            )
    return options


def _parse_upsell_brand(brand: dict[str, Any]) -> UpsellOption:
    brand_offer = {
        "offerId": brand.get("offerId"),
        "paxSegmentList": [],
        "fareDetailList": brand.get("fareDetailList"),
        "price": brand.get("price"),
        "baggageAllowanceList": brand.get("baggageAllowanceList"),
    }

    # rbd is "T;T;T" (one per leg) or a single "T".
    booking_class = str(brand.get("rbd") or "").split(";")[0].strip()

    return UpsellOption(
        id=str(brand.get("offerId") or ""),
        brand_name=str(brand.get("brandName") or ""),
        refundable=to_bool(brand.get("refundable")),
        pricing=parse_pricing(brand_offer),
        features=UpsellFeatures(
            meal=to_bool(brand.get("meal")),
            seat=str(brand.get("seat") or ""),
            miles=str(brand.get("miles") or ""),
            refund_allowed=to_bool(brand.get("refundAllowed")),
            exchange_allowed=to_bool(brand.get("exchangeAllowed")),
        ),
        baggage=parse_baggage(brand_offer),
        booking_class=booking_class or None,
    )
