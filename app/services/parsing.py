import re
from typing import Optional, Union

from app.models.coverage import LiabilityBreakdown
from app.models.rules import LiabilityLimits

_MONEY_RE = re.compile(r"\$?\s*(\d[\d,]*(?:\.\d+)?)\s*([km])?\b", re.IGNORECASE)


def parse_money(text: Optional[str]) -> Optional[float]:
    """解析金額字串，如 "$1,200"、"$1.2K"、"1200/yr"；無法解析時回傳 None"""
    if not text:
        return None
    match = _MONEY_RE.search(text)
    if not match:
        return None
    try:
        amount = float(match.group(1).replace(",", ""))
    except ValueError:
        return None
    suffix = (match.group(2) or "").lower()
    if suffix == "k":
        amount *= 1000
    elif suffix == "m":
        amount *= 1000000
    return amount


def parse_limit(text: Optional[str]) -> Optional[int]:
    """解析單一額度；小於 1000 的數字視為以千元為單位（25 → 25,000）"""
    amount = parse_money(text)
    if amount is None:
        return None
    if amount < 1000:
        amount *= 1000
    return int(round(amount))


def parse_liability(value: Union[str, LiabilityBreakdown, None]) -> Optional[LiabilityLimits]:
    """
    解析責任險額度

    支援簡寫 "25/50/25"、"$100,000/$300,000/$100,000"，
    以及結構化額度（每事故體傷未列出時以每人體傷的 2 倍推估）。

    Returns:
        LiabilityLimits，無法解析時回傳 None
    """
    if value is None:
        return None

    if isinstance(value, LiabilityBreakdown):
        if not value.bodily_injury or not value.property_damage:
            return None
        bi_parts = [p for p in value.bodily_injury.split("/") if p.strip()]
        per_person = parse_limit(bi_parts[0]) if bi_parts else None
        per_accident = parse_limit(bi_parts[1]) if len(bi_parts) > 1 else None
        property_damage = parse_limit(value.property_damage)
        if per_person is None or property_damage is None:
            return None
        return LiabilityLimits(
            bodily_injury_per_person=per_person,
            bodily_injury_per_accident=per_accident or per_person * 2,
            property_damage=property_damage,
        )

    parts = value.split("/")
    if len(parts) != 3:
        return None
    limits = [parse_limit(p) for p in parts]
    if any(limit is None for limit in limits):
        return None
    return LiabilityLimits(
        bodily_injury_per_person=limits[0],
        bodily_injury_per_accident=limits[1],
        property_damage=limits[2],
    )
