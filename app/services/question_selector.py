import logging
import re
from typing import Optional, Tuple

from app.constants.questions import QUESTION_TEMPLATES
from app.models.profile import Completeness

logger = logging.getLogger(__name__)

_ENTITY_FIELD_RE = re.compile(r"^(driver|vehicle)_(\d+)_([a-z_]+)$")

_COUNT_ORDER = {"number_of_drivers": 0, "number_of_vehicles": 1, "zip_code": 2}
_VEHICLE_REQUIRED_ORDER = {"year": 0, "make": 1, "model": 2}
_OPTIONAL_ORDER = {
    ("driver", "experience"): 0,
    ("driver", "marital"): 1,
    ("driver", "violations"): 2,
    ("vehicle", "mileage"): 3,
    "coverage_level": 4,
    "deductible_preference": 5,
}
_REMAINING = 6


def _priority_key(field_id: str) -> Tuple[int, int, int, str]:
    """
    欄位在提問順序中的位置

    (階段, 類別, 編號, 名稱)：
    0 計數與郵遞區號 → 1 駕駛年齡 → 2 車輛 年份/廠牌/車型（逐台）→ 3 選填欄位
    """
    if field_id in _COUNT_ORDER:
        return 0, _COUNT_ORDER[field_id], 0, ""

    match = _ENTITY_FIELD_RE.match(field_id)
    if match:
        kind, number, attr = match.group(1), int(match.group(2)), match.group(3)
        if kind == "driver" and attr == "age":
            return 1, number, 0, ""
        if kind == "vehicle" and attr in _VEHICLE_REQUIRED_ORDER:
            return 2, number, _VEHICLE_REQUIRED_ORDER[attr], ""
        if (kind, attr) in _OPTIONAL_ORDER:
            return 3, _OPTIONAL_ORDER[(kind, attr)], number, ""

    if field_id in _OPTIONAL_ORDER:
        return 3, _OPTIONAL_ORDER[field_id], 0, ""
    return 3, _REMAINING, 0, field_id


def select_next_question(completeness: Completeness) -> Optional[str]:
    """
    選出下一個要問的欄位（一次只問一題）

    Returns:
        field id，全部欄位都已填寫時回傳 None
    """
    candidates = list(completeness.missing_required) + list(completeness.missing_optional)
    if not candidates:
        return None
    field_id = min(candidates, key=_priority_key)
    logger.debug(f"Next question field: {field_id}")
    return field_id


def question_for(field_id: Optional[str]) -> Optional[str]:
    """欄位對應的預設提問文案；未知欄位回傳 None"""
    if not field_id:
        return None
    if field_id in QUESTION_TEMPLATES:
        return QUESTION_TEMPLATES[field_id]
    match = _ENTITY_FIELD_RE.match(field_id)
    if match:
        template = QUESTION_TEMPLATES.get(f"{match.group(1)}_{match.group(3)}")
        if template:
            return template.format(n=match.group(2))
    return None
