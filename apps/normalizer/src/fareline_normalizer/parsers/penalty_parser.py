"""Restructure refund and exchange penalty text by route."""

from __future__ import annotations

from typing import Any

from fareline_core.schemas import PenaltyInfo, PenaltyRule, PenaltyTerm

from ..boundary import as_dict, as_list
from ..config import settings


def parse_penalties(offer: dict[str, Any]) -> PenaltyInfo:
    penalty = as_dict(offer.get("penalty"))
    return PenaltyInfo(
        refund=_parse_rules(penalty.get("refundPenaltyList")),
        exchange=_parse_rules(penalty.get("exchangePenaltyList")),
    )


def _parse_rules(details: Any) -> list[PenaltyRule]:
    return [
        PenaltyRule(
            route=f"{detail.get('departure') or ''}-{detail.get('arrival') or ''}",
            rules=[
                _parse_term(info)
                for info in as_list(detail.get("penaltyInfoList"))
                if isinstance(info, dict)
            ],
        )
        for detail in as_list(details)
        if isinstance(detail, dict)
    ]


def _parse_term(info: dict[str, Any]) -> PenaltyTerm:
    # The first text block's passenger type scopes the whole rule.
    text_infos = [t for t in as_list(info.get("textInfoList")) if isinstance(t, dict)]
    passenger_type = (
        text_infos[0].get("paxType") if text_infos else None
    ) or settings.default_penalty_pax_type

    return PenaltyTerm(
        type=str(info.get("type") or ""),
        passenger_type=passenger_type,
        details=[
            str(line) for text in text_infos for line in as_list(text.get("info"))
        ],
    )
