"""Parse per-leg baggage allowances.

``baggageAllowanceList`` entries carry their own route, but suppliers
sometimes send ``"undefined"``/``"null"`` or nothing at all.  In that case
the route is taken from the leg records: entry *i* gets the route of the
*i*-th segment group (first departure to last arrival, groups sorted by
id).  Past the end of that list the route is ``N/A``.
"""

from __future__ import annotations

from typing import Any

from fareline_core.schemas import (
    BaggageAllowance,
    BaggageInfo,
    PaxType,
    SegmentBaggage,
)

from ..boundary import (
    as_dict,
    as_list,
    clean_code,
    normalize_pax_type,
    to_int,
    unwrap_records,
)
from ..config import settings


def parse_baggage(offer: dict[str, Any]) -> BaggageInfo:
    """Build :class:`BaggageInfo` with one entry per baggage allowance."""
    allowances = unwrap_records(offer.get("baggageAllowanceList"), "baggageAllowance")
    fallback_routes = fallback_routes_from_segments(offer)

    return BaggageInfo(
        segments=[
            _parse_segment_baggage(
                allowance,
                fallback_routes[idx] if idx < len(fallback_routes) else None,
            )
            for idx, allowance in enumerate(allowances)
        ]
    )


def fallback_routes_from_segments(offer: dict[str, Any]) -> list[str]:
    """Return ``DEP-ARR`` per segment group, ordered by group id."""
    routes: dict[int, tuple[str, str]] = {}
    for record in unwrap_records(offer.get("paxSegmentList"), "paxSegment"):
        departure = _location_code(record, "departure")
        arrival = _location_code(record, "arrival")
        if not departure or not arrival:
            continue

        group_id = to_int(record.get("segmentGroup"))
        first_departure = routes[group_id][0] if group_id in routes else departure
        routes[group_id] = (first_departure, arrival)

    return [f"{dep}-{arr}" for _, (dep, arr) in sorted(routes.items())]


def _location_code(record: dict[str, Any], field: str) -> str:
    return clean_code(as_dict(record.get(field)).get("iatA_LocationCode"))


def _parse_segment_baggage(
    allowance: dict[str, Any], fallback_route: str | None
) -> SegmentBaggage:
    departure = clean_code(allowance.get("departure"))
    arrival = clean_code(allowance.get("arrival"))
    if departure and arrival:
        route = f"{departure}-{arrival}"
    else:
        route = fallback_route or settings.not_available

    return SegmentBaggage(
        route=route,
        check_in=_allowances(allowance.get("checkIn")),
        cabin=_allowances(allowance.get("cabin")),
    )


def _allowances(details: Any) -> BaggageAllowance:
    return BaggageAllowance(
        adults=_find_allowance(details, PaxType.ADULT),
        children=_find_allowance(details, PaxType.CHILD),
        infants=_find_allowance(details, PaxType.INFANT),
    )


def _find_allowance(details: Any, pax_type: PaxType) -> str:
    for detail in as_list(details):
        if not isinstance(detail, dict):
            continue
        if normalize_pax_type(detail.get("paxType")) == pax_type:
            return str(detail.get("allowance") or settings.not_available)
    return settings.not_available
