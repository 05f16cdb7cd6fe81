import logging
from typing import Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel

from app.models.facts import DriverFacts, PartialFacts, VehicleFacts
from app.models.profile import (
    AssetProfile,
    CoverageProfile,
    DriverProfile,
    ProfileBasics,
    QuoteProfile,
    VehicleProfile,
)
from app.services.completeness import evaluate_completeness

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_VEHICLE_FIELDS = [f for f in VehicleProfile.model_fields if f != "enriched"]
_DRIVER_FIELDS = ["age", "years_licensed", "marital_status"]


def _is_empty(value) -> bool:
    # 0 與 False 都是有效值
    return value is None or value == "" or value == []


def _fill(current: M, incoming: BaseModel, fields: Iterable[str], override: bool = False) -> M:
    """current 的空欄位由 incoming 補上；override=True 時 incoming 的非空值直接覆蓋"""
    updates = {}
    for field in fields:
        value = getattr(incoming, field)
        if _is_empty(value):
            continue
        if override or _is_empty(getattr(current, field)):
            updates[field] = value
    return current.model_copy(update=updates) if updates else current


def _merge_vehicle(current: VehicleProfile, facts: VehicleFacts) -> VehicleProfile:
    # 外部補強資料優先於對話推論
    merged = _fill(current, facts, _VEHICLE_FIELDS, override=facts.enriched)
    if facts.enriched and not merged.enriched:
        merged = merged.model_copy(update={"enriched": True})
    return merged


def _merge_driver(current: DriverProfile, facts: DriverFacts) -> DriverProfile:
    merged = _fill(current, facts, _DRIVER_FIELDS)
    if facts.has_violations is None:
        return merged
    stated_over_default = current.violations_defaulted and not facts.violations_defaulted
    if current.has_violations is None or stated_over_default:
        merged = merged.model_copy(update={
            "has_violations": facts.has_violations,
            "violation_details": list(facts.violation_details),
            "violations_defaulted": facts.violations_defaulted,
        })
    return merged


def _merge_entities(
    current: List[M],
    facts: list,
    count: Optional[int],
    model: Type[M],
    merge,
) -> List[M]:
    """
    逐 index 合併

    計數已知時陣列長度固定為計數（不足補空白項目，多出的抽取結果捨棄）；
    計數未知時最多保留 index 0。
    """
    length = count if count is not None else min(1, max(len(current), len(facts)))
    merged = []
    for index in range(length):
        entry = current[index] if index < len(current) else model()
        if index < len(facts):
            entry = merge(entry, facts[index])
        merged.append(entry)
    return merged


def merge_profile(current: Optional[QuoteProfile], facts: PartialFacts) -> QuoteProfile:
    """
    將抽取結果合併進報價資料

    純函式：current 不會被修改。每個欄位 new = current ?? extracted，
    已有值永不被覆蓋（例外：enriched 車輛資料、以明確陳述取代整批預設的違規紀錄）。
    重複合併同一份 facts 結果不變。

    Raises:
        ProfileContractException: current 的計數 < 1 或陣列長度與計數不符
    """
    current = current if current is not None else QuoteProfile()
    current.check_invariants()

    basics = _fill(
        current.basics, ProfileBasics(
            vehicle_count=facts.vehicle_count,
            driver_count=facts.driver_count,
            zip_code=facts.zip_code,
            state=facts.state,
        ),
        ProfileBasics.model_fields,
    )

    vehicles = _merge_entities(
        current.vehicles, facts.vehicles, basics.vehicle_count, VehicleProfile, _merge_vehicle
    )
    drivers = _merge_entities(
        current.drivers, facts.drivers, basics.driver_count, DriverProfile, _merge_driver
    )

    # 外部年齡只在合併後、driver 1 仍沒有年齡時才套用
    if (
        facts.default_driver_age is not None
        and basics.driver_count is not None
        and drivers
        and drivers[0].age is None
    ):
        drivers[0] = drivers[0].model_copy(update={"age": facts.default_driver_age})

    coverage = _fill(current.coverage, facts.coverage, CoverageProfile.model_fields)
    assets = _fill(current.assets, AssetProfile(home_value=facts.home_value), ["home_value"])

    merged = QuoteProfile(
        basics=basics,
        vehicles=vehicles,
        drivers=drivers,
        coverage=coverage,
        assets=assets,
        risk_assessment=current.risk_assessment,
    )
    completeness = evaluate_completeness(merged)
    logger.info(
        f"Merged profile: completeness={completeness.score}, "
        f"ready_for_quote={completeness.ready_for_quote}"
    )
    return merged.model_copy(update={"completeness": completeness})
