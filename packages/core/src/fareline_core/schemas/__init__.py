"""Core schemas for Fareline."""

from .enums import FareType, PaxType, TwoOnewayIndex
from .offer import (
    BaggageAllowance,
    BaggageInfo,
    Carrier,
    FareBreakdown,
    FlightOffer,
    GroupEndpoint,
    Layover,
    PassengerFare,
    PenaltyInfo,
    PenaltyRule,
    PenaltyTerm,
    Pricing,
    Segment,
    SegmentBaggage,
    SegmentEndpoint,
    SegmentGroup,
    TechnicalStop,
    TwoOnewayOffers,
    UpsellFeatures,
    UpsellOption,
)

__all__ = [
    "BaggageAllowance",
    "BaggageInfo",
    "Carrier",
    "FareBreakdown",
    "FareType",
    "FlightOffer",
    "GroupEndpoint",
    "Layover",
    "PassengerFare",
    "PaxType",
    "PenaltyInfo",
    "PenaltyRule",
    "PenaltyTerm",
    "Pricing",
    "Segment",
    "SegmentBaggage",
    "SegmentEndpoint",
    "SegmentGroup",
    "TechnicalStop",
    "TwoOnewayIndex",
    "TwoOnewayOffers",
    "UpsellFeatures",
    "UpsellOption",
]
