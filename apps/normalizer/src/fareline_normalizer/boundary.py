"""Boundary adapters for the air-shopping search response.

The supplier API is loose about its own schema.  Observed variants::

    # Records delivered directly or wrapped in a named envelope field
    "fareDetailList": [{"paxType": "Adult", ...}]
    "fareDetailList": [{"fareDetail": {"paxType": "Adult", ...}}]

    # Special-return lists under two casings of the same field
    "specialReturnOfferGroup":  {"OB": [...], "IB": [...]}
    "specialReturnOffersGroup": {"ob": [...], "ib": [...]}

    # Placeholder airport codes
    "departure": "undefined"

Everything that sniffs shapes lives here, so the parsers only ever see
plain dicts in one canonical form.
"""

from __future__ import annotations

import re
from typing import Any

from fareline_core.schemas import PaxType

from .errors import UpstreamResponseError

_PLACEHOLDER_CODES = frozenset({"undefined", "null"})

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def as_list(value: Any) -> list[Any]:
    """Return *value* if it is a list, else an empty list."""
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> dict[str, Any]:
    """Return *value* if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def unwrap_records(items: Any, envelope_key: str) -> list[dict[str, Any]]:
    """Unwrap ``{envelope_key: {...}}`` items and drop non-dict entries.

    Each item is checked on its own, so lists mixing both forms are fine.
    """
    records: list[dict[str, Any]] = []
    for item in as_list(items):
        if isinstance(item, dict) and isinstance(item.get(envelope_key), dict):
            item = item[envelope_key]
        if isinstance(item, dict):
            records.append(item)
    return records


def clean_code(value: Any) -> str:
    """Strip an airport code; ``undefined``/``null`` artifacts become ``""``."""
    if value is None:
        return ""
    code = str(value).strip()
    if code.lower() in _PLACEHOLDER_CODES:
        return ""
    return code


def to_number(value: Any) -> float:
    """Coerce a money or count field to float; missing or invalid is 0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def to_bool(value: Any) -> bool:
    """Coerce a flag that may arrive as ``true`` or as the string ``"true"``."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def to_int(value: Any) -> int:
    """Coerce an integer field, accepting numeric strings like ``"9"``."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if match:
            return int(match.group(1))
    return 0


def normalize_pax_type(value: Any) -> PaxType | None:
    """Map supplier passenger codes (``ADT``, ``C05``, ``Infant``...) to PaxType."""
    token = str(value or "").strip().upper()
    if token in ("ADT", "ADULT"):
        return PaxType.ADULT
    if token in ("CHD", "CHILD") or token.startswith("C"):
        return PaxType.CHILD
    if token in ("INF", "INFANT"):
        return PaxType.INFANT
    return None


def extract_response_data(payload: dict[str, Any]) -> dict[str, Any]:
    """Return the response data, unwrapping the API call envelope if present.

    Accepts both ``{"success": ..., "response": {...}}`` and the bare
    ``{"traceId": ..., "offersGroup": [...]}`` data object.
    """
    is_envelope = "response" in payload and (
        "success" in payload or "statusCode" in payload
    )
    if not is_envelope:
        return payload

    if payload.get("success") is False:
        error = as_dict(payload.get("error"))
        msg = (
            error.get("errorMessage")
            or payload.get("message")
            or "Air shopping request failed"
        )
        raise UpstreamResponseError(msg, error_code=error.get("errorCode"))

    return as_dict(payload.get("response"))


def offers_from_groups(groups: Any) -> list[dict[str, Any]]:
    """Pull raw offers out of ``[{"offer": {...}}, ...]`` group entries.

    A ``twoOnewayIndex`` carried on the group is copied onto the offer
    when the offer has none of its own.
    """
    offers: list[dict[str, Any]] = []
    for group in as_list(groups):
        if not isinstance(group, dict):
            continue
        offer = group.get("offer")
        if not isinstance(offer, dict):
            offer = group
        if "twoOnewayIndex" not in offer and group.get("twoOnewayIndex"):
            offer = {**offer, "twoOnewayIndex": group["twoOnewayIndex"]}
        offers.append(offer)
    return offers


def special_return_lists(
    data: dict[str, Any],
) -> tuple[list[Any], list[Any]]:
    """Return the (outbound, inbound) offer groups of a special-return response.

    Both casings are read; per direction the first non-empty list wins.
    """
    upper = as_dict(data.get("specialReturnOfferGroup"))
    lower = as_dict(data.get("specialReturnOffersGroup"))
    outbound = as_list(upper.get("OB")) or as_list(lower.get("ob"))
    inbound = as_list(upper.get("IB")) or as_list(lower.get("ib"))
    return outbound, inbound
