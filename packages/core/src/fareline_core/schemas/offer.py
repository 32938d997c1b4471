"""Canonical flight offer DTOs handed to the booking flow.

Every model is an immutable value object.  Attributes are snake_case in
Python and serialize with camelCase aliases (``model_dump(by_alias=True)``)
so the UI receives ``upSellOptions``, ``perPassenger``, ``checkIn`` and so on.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import FareType, TwoOnewayIndex  # noqa: TC001


class _OfferModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class Carrier(BaseModel):
    """Airline designator and display name."""

    code: str
    name: str = ""
    model_config = ConfigDict(frozen=True)


class Layover(BaseModel):
    """Connection gap after a segment, in whole minutes."""

    duration: int
    airport: str
    model_config = ConfigDict(frozen=True)


class TechnicalStop(_OfferModel):
    """Intermediate landing that does not change the flight number."""

    airport: str
    arrival_time: str
    departure_time: str
    duration: int = 0


class SegmentEndpoint(_OfferModel):
    """Departure or arrival point of a single segment."""

    airport: str
    date_time: str
    terminal: str | None = None


class GroupEndpoint(SegmentEndpoint):
    """Departure or arrival summary of a whole segment group."""

    city: str = ""


class Segment(_OfferModel):
    """One flown leg: a single takeoff and landing."""

    flight_number: str
    airline: Carrier
    operating_airline: Carrier
    aircraft: str = ""
    departure: SegmentEndpoint
    arrival: SegmentEndpoint
    duration: int = Field(default=0, description="Flying time in minutes")
    cabin_class: str = ""
    booking_class: str = ""
    layover: Layover | None = None
    technical_stops: list[TechnicalStop] = Field(default_factory=list)


class SegmentGroup(_OfferModel):
    """One directional leg (outbound, inbound or a multi-city leg)."""

    group_id: int
    is_return: bool = False
    segments: list[Segment] = Field(min_length=1)
    total_duration: int = Field(description="Flying time plus layovers, minutes")
    stops: int
    departure: GroupEndpoint
    arrival: GroupEndpoint


class PassengerFare(_OfferModel):
    """Fare of one passenger type; ``total`` is per passenger."""

    type: str
    count: int
    base_fare: float = 0.0
    taxes: float = 0.0
    vat: float = 0.0
    other_fee: float = 0.0
    total: float = 0.0


class FareBreakdown(_OfferModel):
    """Fare components summed over all passengers."""

    base_fare: float = 0.0
    taxes: float = 0.0
    fees: float = 0.0
    discount: float = 0.0
    vat: float = 0.0


class Pricing(_OfferModel):
    """Offer price summary and per-passenger breakdown."""

    total: float
    currency: str
    gross: float | None = None
    total_vat: float | None = Field(default=None, alias="totalVAT")
    breakdown: FareBreakdown = Field(default_factory=FareBreakdown)
    per_passenger: list[PassengerFare] = Field(default_factory=list)

    @property
    def effective_total(self) -> float:
        """Gross price when the supplier sends one, else the payable total."""
        return self.gross if self.gross is not None else self.total


class BaggageAllowance(_OfferModel):
    """Allowance strings per passenger type, ``N/A`` when not given."""

    adults: str
    children: str
    infants: str


class SegmentBaggage(_OfferModel):
    route: str
    check_in: BaggageAllowance
    cabin: BaggageAllowance


class BaggageInfo(_OfferModel):
    segments: list[SegmentBaggage] = Field(default_factory=list)


class PenaltyTerm(_OfferModel):
    """A refund or exchange rule applying before or after departure."""

    type: str = Field(description="Before or After departure")
    passenger_type: str
    details: list[str] = Field(default_factory=list)


class PenaltyRule(_OfferModel):
    route: str
    rules: list[PenaltyTerm] = Field(default_factory=list)


class PenaltyInfo(_OfferModel):
    refund: list[PenaltyRule] = Field(default_factory=list)
    exchange: list[PenaltyRule] = Field(default_factory=list)


class UpsellFeatures(_OfferModel):
    meal: bool = False
    seat: str = ""
    miles: str = ""
    refund_allowed: bool = False
    exchange_allowed: bool = False


class UpsellOption(_OfferModel):
    """Alternate fare brand for the same itinerary."""

    id: str
    brand_name: str
    refundable: bool = False
    pricing: Pricing
    features: UpsellFeatures = Field(default_factory=UpsellFeatures)
    baggage: BaggageInfo = Field(default_factory=BaggageInfo)
    booking_class: str | None = None


class FlightOffer(_OfferModel):
    """Unified, UI-ready representation of one priced itinerary."""

    id: str
    trace_id: str
    two_oneway_index: TwoOnewayIndex | None = None
    validating_carrier: Carrier
    refundable: bool = False
    fare_type: FareType | str = ""
    segments: list[SegmentGroup] = Field(min_length=1)
    pricing: Pricing
    baggage: BaggageInfo = Field(default_factory=BaggageInfo)
    seats_remaining: int = 0
    up_sell_options: list[UpsellOption] | None = None
    penalties: PenaltyInfo = Field(default_factory=PenaltyInfo)

    @field_validator("fare_type")
    @classmethod
    def _known_fare_type(cls, value: FareType | str) -> FareType | str:
        try:
            return FareType(value)
        except ValueError:
            return value

    @property
    def signature(self) -> str:
        """Key identifying the same physical flight regardless of fare.

        Not serialized; grouping reads it in-process only.
        """
        parts = [
            f"{seg.airline.code}{seg.flight_number}"
            f"_{seg.departure.date_time}_{seg.arrival.date_time}"
            for group in self.segments
            for seg in group.segments
        ]
        return f"{self.validating_carrier.code}_{'_'.join(parts)}"


class TwoOnewayOffers(_OfferModel):
    """Outbound and inbound lists of a two-oneway search."""

    ob_offers: list[FlightOffer] = Field(default_factory=list)
    ib_offers: list[FlightOffer] = Field(default_factory=list)
