"""
資料完整度評估

必填欄位分成 5 組（車輛數、駕駛數、郵遞區號、各車 年份/廠牌/車型、各駕駛年齡），
選填欄位分成 4 組（各車 里程/用途、各駕駛 駕齡/婚姻/違規、保障等級、自負額）。
每組以「已填 / 應填」計算比例後平均，計數未知的組別比例為 0。

分組計算保證合併資料只會讓分數上升：計數一確定，逐欄計算的分母會突然變大，
直接用「已填欄位 / 總欄位」會讓分數下降。
"""
import logging
from typing import List, Tuple

from app.models.profile import Completeness, QuoteProfile

logger = logging.getLogger(__name__)

REQUIRED_WEIGHT = 70
OPTIONAL_WEIGHT = 30

# (屬性名稱, field id 後綴)
VEHICLE_REQUIRED = (("year", "year"), ("make", "make"), ("model", "model"))
VEHICLE_OPTIONAL = (("annual_mileage", "mileage"), ("primary_use", "use"))
DRIVER_REQUIRED = (("age", "age"),)
DRIVER_OPTIONAL = (
    ("years_licensed", "experience"),
    ("marital_status", "marital"),
    ("has_violations", "violations"),
)


def _entity_group(entries, count, prefix: str, fields) -> Tuple[float, List[str]]:
    """回傳 (已填比例, 缺少的 field id)；計數未知時比例為 0 且不列出個別欄位"""
    if count is None:
        return 0.0, []
    missing = []
    filled = 0
    for index, entry in enumerate(entries[:count], start=1):
        for attr, suffix in fields:
            if getattr(entry, attr) is None:
                missing.append(f"{prefix}_{index}_{suffix}")
            else:
                filled += 1
    total = count * len(fields)
    return (filled / total if total else 0.0), missing


def _flag_group(present: bool, field_id: str) -> Tuple[float, List[str]]:
    return (1.0, []) if present else (0.0, [field_id])


def evaluate_completeness(profile: QuoteProfile) -> Completeness:
    """
    計算完整度

    Args:
        profile: 報價資料（profile.completeness 不參與計算）

    Returns:
        Completeness: score 0~100，ready_for_quote 只取決於必填欄位是否齊全
    """
    basics = profile.basics

    required_groups = [
        _flag_group(basics.vehicle_count is not None, "number_of_vehicles"),
        _flag_group(basics.driver_count is not None, "number_of_drivers"),
        _flag_group(bool(basics.zip_code), "zip_code"),
        _entity_group(profile.vehicles, basics.vehicle_count, "vehicle", VEHICLE_REQUIRED),
        _entity_group(profile.drivers, basics.driver_count, "driver", DRIVER_REQUIRED),
    ]
    optional_groups = [
        _entity_group(profile.vehicles, basics.vehicle_count, "vehicle", VEHICLE_OPTIONAL),
        _entity_group(profile.drivers, basics.driver_count, "driver", DRIVER_OPTIONAL),
        _flag_group(profile.coverage.desired_coverage is not None, "coverage_level"),
        _flag_group(profile.coverage.deductible is not None, "deductible_preference"),
    ]

    required_ratio = sum(ratio for ratio, _ in required_groups) / len(required_groups)
    optional_ratio = sum(ratio for ratio, _ in optional_groups) / len(optional_groups)
    score = round(REQUIRED_WEIGHT * required_ratio + OPTIONAL_WEIGHT * optional_ratio)
    score = max(0, min(100, score))

    missing_required = [field for _, fields in required_groups for field in fields]
    missing_optional = [field for _, fields in optional_groups for field in fields]

    logger.debug(
        f"Completeness score={score}, missing_required={len(missing_required)}, "
        f"missing_optional={len(missing_optional)}"
    )
    return Completeness(
        score=score,
        missing_required=missing_required,
        missing_optional=missing_optional,
        ready_for_quote=not missing_required,
    )
