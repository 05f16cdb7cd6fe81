import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

from app.constants.state_requirements import STATE_MINIMUMS
from app.constants.vocabulary import VEHICLE_MAKES
from app.models.facts import (
    ConversationTurn,
    CoverageFacts,
    DriverFacts,
    PartialFacts,
    ProfileHint,
    VehicleFacts,
)
from app.services.extraction_rules import MAX_ENTITY_COUNT, ExtractionRule, default_rules

logger = logging.getLogger(__name__)

_ZIP_RE = re.compile(r"^\d{5}$")
_LOCATION_STATE_RE = re.compile(r"\b([A-Z]{2})\b")


class _FactBuffer:
    """
    單次抽取過程的暫存區

    計數未知時車輛 / 駕駛只保留 index 0 一個位置；計數一確定就擴充到計數長度，
    之後的車款、年齡依文字出現順序填入第一個缺少該欄位的位置。
    """

    def __init__(self):
        self.profile: Dict[str, Any] = {}
        self.coverage: Dict[str, Any] = {}
        self.vehicles: List[Dict[str, Any]] = [{}]
        self.drivers: List[Dict[str, Any]] = [{}]

    # ---- slots ----

    def _resize(self, entries: List[Dict[str, Any]], count: int) -> None:
        while len(entries) < count:
            entries.append({})

    def set_count(self, field: str, value: int) -> None:
        self.profile[field] = value
        if field == "vehicle_count":
            self._resize(self.vehicles, value)
        else:
            self._resize(self.drivers, value)

    @staticmethod
    def _first_missing(entries: List[Dict[str, Any]], field: str) -> Optional[int]:
        for index, entry in enumerate(entries):
            if entry.get(field) is None:
                return index
        return None

    # ---- commit ----

    def commit(self, rule: ExtractionRule, value: Any) -> None:
        if rule.scope == "profile":
            if self.profile.get(rule.target) is not None:
                return
            if rule.target in ("vehicle_count", "driver_count"):
                self.set_count(rule.target, value)
            else:
                self.profile[rule.target] = value
        elif rule.scope == "coverage":
            self.coverage.setdefault(rule.target, value)
        elif rule.scope == "vehicle":
            self._commit_entity(self.vehicles, rule.target, value)
        elif rule.scope == "driver":
            self._commit_entity(self.drivers, rule.target, value)
        elif rule.scope == "all_drivers":
            for driver in self.drivers:
                if driver.get("has_violations") is None:
                    driver["has_violations"] = False
                    driver["violations_defaulted"] = True
        elif rule.scope == "driver_violation":
            self._commit_violation(value)
        else:
            raise ValueError(f"unknown extraction scope: {rule.scope}")
        logger.debug(f"rule {rule.name} -> {value!r}")

    def _commit_entity(self, entries: List[Dict[str, Any]], target: str, value: Any) -> None:
        # 複合值（廠牌 + 車型）以 target 欄位決定位置，其餘欄位只補空缺
        values = value if isinstance(value, dict) else {target: value}
        index = self._first_missing(entries, target)
        if index is None:
            return
        entry = entries[index]
        for field, field_value in values.items():
            if entry.get(field) is None:
                entry[field] = field_value

    def _commit_violation(self, value: Dict[str, Any]) -> None:
        # 明確指名 "driver 2" 時只寫入該駕駛，否則寫入第一個未決定的駕駛，
        # 都已決定時才覆蓋整批預設的「無肇事」
        index = None
        number = value.get("driver_number")
        if number is not None and 1 <= number <= len(self.drivers):
            candidate = self.drivers[number - 1]
            if candidate.get("has_violations") is None or candidate.get("violations_defaulted"):
                index = number - 1
        else:
            index = self._first_missing(self.drivers, "has_violations")
            if index is None:
                index = next(
                    (i for i, d in enumerate(self.drivers) if d.get("violations_defaulted")),
                    None,
                )
        if index is None:
            return
        driver = self.drivers[index]
        driver["has_violations"] = True
        driver["violation_details"] = value["details"]
        driver["violations_defaulted"] = False

    # ---- hint ----

    def apply_hint(self, hint: ProfileHint) -> None:
        """外部資料只補對話留下的空缺；已補強（enriched）的車輛資料例外，直接覆蓋"""
        for field in ("vehicle_count", "driver_count"):
            count = getattr(hint, field)
            if self.profile.get(field) is None and count and 1 <= count <= MAX_ENTITY_COUNT:
                self.set_count(field, count)

        if self.profile.get("zip_code") is None and hint.zip_code and _ZIP_RE.match(hint.zip_code):
            self.profile["zip_code"] = hint.zip_code

        if self.profile.get("state") is None:
            state = _hint_state(hint)
            if state:
                self.profile["state"] = state

        if hint.home_value:
            self.profile["home_value"] = hint.home_value
        if hint.age is not None and 16 <= hint.age <= 99:
            self.profile["default_driver_age"] = hint.age

        for index, hint_vehicle in enumerate(hint.vehicles[: len(self.vehicles)]):
            entry = self.vehicles[index]
            known = hint_vehicle.model_dump(exclude={"enriched"}, exclude_none=True)
            if "make" in known:
                make = known["make"].strip().lower()
                known["make"] = VEHICLE_MAKES.get(make, make)
            for field, field_value in known.items():
                if hint_vehicle.enriched or entry.get(field) is None:
                    entry[field] = field_value
            if hint_vehicle.enriched:
                entry["enriched"] = True

    # ---- output ----

    def to_facts(self) -> PartialFacts:
        vehicles = self.vehicles
        drivers = self.drivers
        if self.profile.get("vehicle_count") is None and not vehicles[0]:
            vehicles = []
        if self.profile.get("driver_count") is None and not drivers[0]:
            drivers = []
        return PartialFacts(
            vehicle_count=self.profile.get("vehicle_count"),
            driver_count=self.profile.get("driver_count"),
            zip_code=self.profile.get("zip_code"),
            state=self.profile.get("state"),
            home_value=self.profile.get("home_value"),
            default_driver_age=self.profile.get("default_driver_age"),
            vehicles=[VehicleFacts(**v) for v in vehicles],
            drivers=[DriverFacts(**d) for d in drivers],
            coverage=CoverageFacts(**self.coverage),
        )


def _hint_state(hint: ProfileHint) -> Optional[str]:
    if hint.state and hint.state.strip().upper() in STATE_MINIMUMS:
        return hint.state.strip().upper()
    if hint.location:
        for match in _LOCATION_STATE_RE.finditer(hint.location):
            if match.group(1) in STATE_MINIMUMS:
                return match.group(1)
    return None


def extract_facts(
    turns: List[ConversationTurn],
    hint: Optional[ProfileHint] = None,
    today: Optional[date] = None,
    rules: Optional[List[ExtractionRule]] = None,
) -> PartialFacts:
    """
    從完整對話抽取投保事實

    每次都重新掃描整段對話（只看 user 回合），結果不依賴先前的資料快照，
    因此同一段對話永遠得到相同的結果。

    Args:
        turns: 對話回合
        hint: 外部客戶資料（年齡、地點、車輛等）
        today: 用於判斷車輛年份上限，預設為今天
        rules: 自訂規則表，預設使用 default_rules()

    Returns:
        PartialFacts: 只包含找到證據的欄位
    """
    rules = rules if rules is not None else default_rules(today)
    buffer = _FactBuffer()

    for turn in turns:
        if turn.role != "user" or not turn.text:
            continue
        for rule in rules:
            for value in rule.matches(turn.text):
                buffer.commit(rule, value)

    if hint is not None:
        buffer.apply_hint(hint)

    facts = buffer.to_facts()
    logger.info(
        f"Extracted facts from {len(turns)} turns: "
        f"vehicles={facts.vehicle_count}, drivers={facts.driver_count}, zip={facts.zip_code}"
    )
    return facts
