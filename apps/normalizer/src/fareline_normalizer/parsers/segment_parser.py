"""Group raw ``paxSegmentList`` legs into ordered segment groups.

Each raw leg record looks like::

    {
        "paxSegment": {
            "segmentGroup": 0,
            "returnJourney": false,
            "departure": {"iatA_LocationCode": "DAC",
                          "aircraftScheduledDateTime": "2026-03-01T08:00:00",
                          "terminalName": "2"},
            "arrival": {"iatA_LocationCode": "DXB", ...},
            "marketingCarrierInfo": {"carrierDesigCode": "EK",
                                     "marketingCarrierFlightNumber": 583,
                                     "carrierName": "Emirates"},
            "operatingCarrierInfo": {...},
            "iatA_AircraftType": {"iatA_AircraftTypeCode": "77W"},
            "flightNumber": 583,
            "duration": 330,
            "cabinType": "Economy",
            "rbd": "T",
            "technicalStopOver": [...]
        }
    }

Legs sharing a ``segmentGroup`` form one directional leg; groups come out in
ascending group id order, legs keep their source order within a group.
"""

from __future__ import annotations

import itertools
import logging
import math
from datetime import UTC, datetime
from typing import Any

from fareline_core.schemas import (
    Carrier,
    GroupEndpoint,
    Layover,
    Segment,
    SegmentEndpoint,
    SegmentGroup,
    TechnicalStop,
)

from ..boundary import as_dict, as_list, to_bool, to_int, unwrap_records
from ..errors import OfferDataError

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO datetime string; naive values are read as UTC."""
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def minutes_between(start: str, end: str) -> int | None:
    """Whole minutes from *start* to *end*, rounded half up."""
    start_dt = parse_timestamp(start)
    end_dt = parse_timestamp(end)
    if start_dt is None or end_dt is None:
        return None
    return math.floor((end_dt - start_dt).total_seconds() / 60 + 0.5)


def parse_segments(offer: dict[str, Any]) -> list[SegmentGroup]:
    """Build the offer's segment groups from its leg records."""
    groups: dict[int, list[dict[str, Any]]] = {}
    for record in unwrap_records(offer.get("paxSegmentList"), "paxSegment"):
        groups.setdefault(to_int(record.get("segmentGroup")), []).append(record)

    segment_groups = [
        _build_segment_group(group_id, records)
        for group_id, records in sorted(groups.items())
    ]
    logger.debug(
        "Offer %s: %d segment group(s)", offer.get("offerId"), len(segment_groups)
    )
    return segment_groups


def _build_segment_group(
    group_id: int, records: list[dict[str, Any]]
) -> SegmentGroup:
    if not records:
        msg = f"Segment group {group_id} has no segments"
        raise OfferDataError(msg)

    segments = _link_layovers([_parse_segment(record) for record in records])
    first = segments[0]
    last = segments[-1]

    total_duration = sum(
        seg.duration + (seg.layover.duration if seg.layover else 0)
        for seg in segments
    )

    return SegmentGroup(
        group_id=group_id,
        is_return=any(to_bool(record.get("returnJourney")) for record in records),
        segments=segments,
        total_duration=total_duration,
        stops=len(segments) - 1,
        departure=GroupEndpoint(
            airport=first.departure.airport,
            city=first.departure.airport,
            date_time=first.departure.date_time,
            terminal=first.departure.terminal,
        ),
        arrival=GroupEndpoint(
            airport=last.arrival.airport,
            city=last.arrival.airport,
            date_time=last.arrival.date_time,
            terminal=last.arrival.terminal,
        ),
    )


def _link_layovers(segments: list[Segment]) -> list[Segment]:
    """Attach a layover to every segment that has a following segment."""
    linked: list[Segment] = []
    for current, following in itertools.pairwise(segments):
        minutes = minutes_between(
            current.arrival.date_time, following.departure.date_time
        )
        if minutes is None:
            msg = (
                f"Cannot compute layover at {current.arrival.airport}: "
                f"bad timestamps {current.arrival.date_time!r} / "
                f"{following.departure.date_time!r}"
            )
            raise OfferDataError(msg)
        layover = Layover(duration=minutes, airport=current.arrival.airport)
        linked.append(current.model_copy(update={"layover": layover}))

    if segments:
        linked.append(segments[-1])
    return linked


def _parse_segment(record: dict[str, Any]) -> Segment:
    marketing = as_dict(record.get("marketingCarrierInfo"))
    operating = as_dict(record.get("operatingCarrierInfo"))

    # Numeric part only; the UI prefixes the airline code itself.
    flight_number = marketing.get("marketingCarrierFlightNumber")
    if flight_number is None:
        flight_number = record.get("flightNumber")

    return Segment(
        flight_number="" if flight_number is None else str(flight_number),
        airline=_carrier(marketing),
        operating_airline=_carrier(operating),
        aircraft=as_dict(record.get("iatA_AircraftType")).get(
            "iatA_AircraftTypeCode"
        )
        or "",
        departure=_endpoint(record.get("departure")),
        arrival=_endpoint(record.get("arrival")),
        duration=to_int(record.get("duration")),
        cabin_class=record.get("cabinType") or "",
        booking_class=record.get("rbd") or "",
        technical_stops=[
            _parse_technical_stop(stop)
            for stop in as_list(record.get("technicalStopOver"))
            if isinstance(stop, dict)
        ],
    )


def _carrier(info: dict[str, Any]) -> Carrier:
    return Carrier(
        code=info.get("carrierDesigCode") or "",
        name=info.get("carrierName") or "",
    )


def _endpoint(raw: Any) -> SegmentEndpoint:
    point = as_dict(raw)
    return SegmentEndpoint(
        airport=point.get("iatA_LocationCode") or "",
        date_time=point.get("aircraftScheduledDateTime") or "",
        terminal=point.get("terminalName") or None,
    )


def _parse_technical_stop(stop: dict[str, Any]) -> TechnicalStop:
    arrival = stop.get("aircraftScheduledArrivalDateTime") or ""
    departure = stop.get("aircraftScheduledDepartureDateTime") or ""
    return TechnicalStop(
        airport=stop.get("iatA_LocationCode") or "",
        arrival_time=arrival,
        departure_time=departure,
        duration=minutes_between(arrival, departure) or 0,
    )
