"""Aggregate per-passenger fare details into an offer's pricing."""

from __future__ import annotations

from typing import Any

from fareline_core.schemas import FareBreakdown, PassengerFare, Pricing

from ..boundary import as_dict, normalize_pax_type, to_int, to_number, unwrap_records
from ..config import settings
from ..errors import OfferDataError


def parse_pricing(offer: dict[str, Any]) -> Pricing:
    """Build :class:`Pricing` from ``fareDetailList`` and the ``price`` block.

    Breakdown components are summed over all fare details, each weighted
    by its passenger count.
    """
    fare_details = unwrap_records(offer.get("fareDetailList"), "fareDetail")
    price = as_dict(offer.get("price"))

    total_payable = price.get("totalPayable")
    if not isinstance(total_payable, dict):
        msg = f"Offer {offer.get('offerId')} has no totalPayable price summary"
        raise OfferDataError(msg)

    return Pricing(
        total=to_number(total_payable.get("total")),
        currency=total_payable.get("currency") or settings.default_currency,
        gross=_optional_total(price.get("gross")),
        total_vat=_optional_total(price.get("totalVAT")),
        breakdown=FareBreakdown(
            base_fare=_weighted_sum(fare_details, "baseFare"),
            taxes=_weighted_sum(fare_details, "tax"),
            fees=_weighted_sum(fare_details, "otherFee"),
            discount=_weighted_sum(fare_details, "discount"),
            vat=_weighted_sum(fare_details, "vat"),
        ),
        per_passenger=[_parse_fare_detail(fare) for fare in fare_details],
    )


def _optional_total(block: Any) -> float | None:
    if not isinstance(block, dict) or block.get("total") is None:
        return None
    return to_number(block["total"])


def _weighted_sum(fare_details: list[dict[str, Any]], field: str) -> float:
    return sum(
        to_number(fare.get(field)) * to_int(fare.get("paxCount"))
        for fare in fare_details
    )


def _parse_fare_detail(fare: dict[str, Any]) -> PassengerFare:
    count = to_int(fare.get("paxCount"))
    sub_total = to_number(fare.get("subTotal"))
    raw_type = fare.get("paxType") or ""
    pax_type = normalize_pax_type(raw_type)

    return PassengerFare(
        type=pax_type.value if pax_type else str(raw_type),
        count=count,
        base_fare=to_number(fare.get("baseFare")),
        taxes=to_number(fare.get("tax")),
        vat=to_number(fare.get("vat")),
        other_fee=to_number(fare.get("otherFee")),
        total=sub_total / count if count else sub_total,
    )
