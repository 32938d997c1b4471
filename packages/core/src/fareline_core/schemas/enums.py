"""Pydantic-compatible enums for the canonical offer schemas."""

from enum import StrEnum


class PaxType(StrEnum):
    """Passenger type as shown to travellers."""

    ADULT = "Adult"
    CHILD = "Child"
    INFANT = "Infant"


class TwoOnewayIndex(StrEnum):
    """Direction tag of a paired two-oneway offer."""

    OB = "OB"
    IB = "IB"


class FareType(StrEnum):
    """Ticketing mode of an offer; suppliers may send other values."""

    ON_HOLD = "OnHold"
    WEB = "Web"
