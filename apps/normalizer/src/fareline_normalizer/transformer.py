"""Turn an air-shopping search response into canonical FlightOffers.

Entry points:

* :func:`transform_offers_to_flight_offers` -- every offer in the response,
  including both special-return lists.
* :func:`transform_offers_to_two_oneway_lists` -- outbound and inbound
  special-return lists, each grouped by flight.
* :func:`transform_multicity_to_two_oneway` -- split two-leg multi-city
  offers into one-way OB/IB offers.

A malformed offer is logged and dropped; it never fails the batch.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from fareline_core.schemas import (
    Carrier,
    FlightOffer,
    TwoOnewayIndex,
    TwoOnewayOffers,
)

from .boundary import (
    as_dict,
    extract_response_data,
    offers_from_groups,
    special_return_lists,
    to_bool,
    to_int,
    unwrap_records,
)
from .errors import OfferDataError
from .parsers.baggage_parser import parse_baggage
from .parsers.penalty_parser import parse_penalties
from .parsers.pricing_parser import parse_pricing
from .parsers.segment_parser import parse_segments
from .parsers.upsell_parser import parse_upsell_options
from .pipeline.grouping import group_two_oneway_offers_by_flight

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def transform_offers_to_flight_offers(response: dict[str, Any]) -> list[FlightOffer]:
    """Transform the primary offer list plus any special-return lists."""
    data = extract_response_data(response)
    trace_id = str(data.get("traceId") or "")

    raw_offers = offers_from_groups(data.get("offersGroup"))
    if data.get("specialReturn"):
        outbound, inbound = special_return_lists(data)
        raw_offers.extend(offers_from_groups(outbound))
        raw_offers.extend(offers_from_groups(inbound))

    offers = _transform_batch(raw_offers, trace_id)
    logger.info(
        "Transformed %d of %d raw offers (trace %s)",
        len(offers),
        len(raw_offers),
        trace_id,
    )
    return offers


def transform_offers_to_two_oneway_lists(response: dict[str, Any]) -> TwoOnewayOffers:
    """Transform special-return lists and merge same-flight fares per direction.

    Responses without the ``specialReturn`` flag yield two empty lists.
    """
    data = extract_response_data(response)
    if not data.get("specialReturn"):
        return TwoOnewayOffers()

    trace_id = str(data.get("traceId") or "")
    outbound, inbound = special_return_lists(data)
    ob_offers = _transform_batch(offers_from_groups(outbound), trace_id)
    ib_offers = _transform_batch(offers_from_groups(inbound), trace_id)

    return TwoOnewayOffers(
        ob_offers=group_two_oneway_offers_by_flight(ob_offers),
        ib_offers=group_two_oneway_offers_by_flight(ib_offers),
    )


def transform_multicity_to_two_oneway(offers: Iterable[FlightOffer]) -> TwoOnewayOffers:
    """Split each two-leg offer into an ``-OB`` and an ``-IB`` one-way offer.

    Offers with any other number of segment groups are left out of both lists.
    """
    ob_offers: list[FlightOffer] = []
    ib_offers: list[FlightOffer] = []

    for offer in offers:
        if len(offer.segments) != 2:
            logger.debug(
                "Offer %s has %d segment groups, not splitting",
                offer.id,
                len(offer.segments),
            )
            continue

        first, second = offer.segments
        ob_offers.append(
            offer.model_copy(
                update={
                    "id": f"{offer.id}-OB",
                    "two_oneway_index": TwoOnewayIndex.OB,
                    "segments": [first],
                }
            )
        )
        ib_offers.append(
            offer.model_copy(
                update={
                    "id": f"{offer.id}-IB",
                    "two_oneway_index": TwoOnewayIndex.IB,
                    "segments": [second],
                }
            )
        )

    return TwoOnewayOffers(ob_offers=ob_offers, ib_offers=ib_offers)


def transform_offer(offer: dict[str, Any], trace_id: str) -> FlightOffer | None:
    """Transform one raw offer; ``None`` when it carries no leg records.

    Raises :class:`OfferDataError` or :class:`pydantic.ValidationError` for
    structurally broken offers.
    """
    pax_segments = unwrap_records(offer.get("paxSegmentList"), "paxSegment")
    if not pax_segments:
        logger.debug("Offer %s has no leg records, skipping", offer.get("offerId"))
        return None

    raw_brands = offer.get("upSellBrandList")
    up_sell_options = (
        parse_upsell_options(unwrap_records(raw_brands, "upSellBrand"))
        if isinstance(raw_brands, list)
        else None
    )

    validating_code = str(offer.get("validatingCarrier") or "")
    first_marketing = as_dict(pax_segments[0].get("marketingCarrierInfo"))

    two_oneway_index = offer.get("twoOnewayIndex")

    return FlightOffer(
        id=str(offer.get("offerId") or ""),
        trace_id=trace_id,
        two_oneway_index=(
            TwoOnewayIndex(two_oneway_index)
            if two_oneway_index in (TwoOnewayIndex.OB, TwoOnewayIndex.IB)
            else None
        ),
        validating_carrier=Carrier(
            code=validating_code,
            name=first_marketing.get("carrierName") or validating_code,
        ),
        refundable=to_bool(offer.get("refundable")),
        fare_type=str(offer.get("fareType") or ""),
        segments=parse_segments(offer),
        pricing=parse_pricing(offer),
        baggage=parse_baggage(offer),
        seats_remaining=to_int(offer.get("seatsRemaining")),
        up_sell_options=up_sell_options,
        penalties=parse_penalties(offer),
    )


def _transform_batch(
    raw_offers: list[dict[str, Any]], trace_id: str
) -> list[FlightOffer]:
    offers: list[FlightOffer] = []
    for raw in raw_offers:
        try:
            offer = transform_offer(raw, trace_id)
        except (OfferDataError, ValidationError) as exc:
            logger.warning("Skipping malformed offer %s: %s", raw.get("offerId"), exc)
            continue
        if offer is not None:
            offers.append(offer)
    return offers
