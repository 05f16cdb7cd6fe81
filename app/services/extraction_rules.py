"""
對話抽取規則表

每條規則 = 觸發樣式 + 目標欄位 + 驗證器，依表中順序套用於每個 user 回合。
規則本身只負責「從一段文字找出候選值」，寫入哪個欄位、哪一台車或哪位駕駛
由 FactExtractor 依 scope 決定，因此每條規則都能單獨測試。

scope:
- profile: 計數、郵遞區號、州（整份資料唯一）
- coverage: 保障偏好
- vehicle / driver: 寫入第一個缺少該欄位的車輛 / 駕駛
- all_drivers: 一次套用到所有尚未決定的駕駛（無肇事紀錄的整批預設）
- driver_violation: 單一駕駛的違規陳述
"""
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, List, Optional

from app.constants.state_requirements import STATE_MINIMUMS
from app.constants.vocabulary import (
    CARRIERS,
    CLEAN_RECORD_PATTERN,
    COVERAGE_TIER_KEYWORDS,
    MARITAL_KEYWORDS,
    MODEL_STOPWORDS,
    NEGATION_PATTERN,
    NUMBER_WORDS,
    PARKING_KEYWORDS,
    RIDER_KEYWORDS,
    USE_KEYWORDS,
    VEHICLE_MAKES,
    VIOLATION_PATTERN,
)

MAX_ENTITY_COUNT = 10

Matcher = Callable[[str, str], List[Any]]


@dataclass(frozen=True)
class ExtractionRule:
    """單一抽取規則"""
    name: str
    target: str
    scope: str
    matcher: Matcher
    validator: Callable[[Any], bool] = lambda value: True

    def matches(self, text: str) -> List[Any]:
        """回傳通過驗證的候選值（依出現順序）"""
        return [v for v in self.matcher(text.lower(), text) if self.validator(v)]


def _between(low: float, high: float) -> Callable[[Any], bool]:
    return lambda value: low <= value <= high


def _to_int(token: str) -> Optional[int]:
    token = token.lower().replace(",", "")
    if token in NUMBER_WORDS:
        return NUMBER_WORDS[token]
    try:
        return int(token)
    except ValueError:
        return None


def _regex_ints(pattern: str) -> Matcher:
    """樣式內第一個有值的 group 轉成整數"""
    compiled = re.compile(pattern)

    def match(lowered: str, original: str) -> List[Any]:
        values = []
        for m in compiled.finditer(lowered):
            token = next((g for g in m.groups() if g), None)
            value = _to_int(token) if token else None
            if value is not None:
                values.append(value)
        return values
    return match


def _first_keyword(keywords) -> Matcher:
    """依關鍵字表順序，回傳第一個命中的值（每回合最多一個）"""
    compiled = [(value, re.compile(pattern)) for value, pattern in keywords]

    def match(lowered: str, original: str) -> List[Any]:
        for value, pattern in compiled:
            if pattern.search(lowered):
                return [value]
        return []
    return match


_NUMBER = r"(\d+|" + "|".join(NUMBER_WORDS) + r")"


# ---- 計數 ----

def _driver_count_matcher() -> Matcher:
    """明確數字，或 "just me"（1 人）、"me and my wife"（2 人）這類口語"""
    explicit = re.compile(r"\b" + _NUMBER + r"\s*(?:drivers?|people|persons?)\b")
    solo = re.compile(
        r"\b(?:just|only) (?:me|myself)\b(?!\s+and\b)|\bi'?m the only driver\b|\bonly one driver\b"
    )
    couple = re.compile(r"\bme and my (?:wife|husband|spouse|partner)\b")

    def match(lowered: str, original: str) -> List[Any]:
        hits = [(m.start(), _to_int(m.group(1))) for m in explicit.finditer(lowered)]
        hits += [(m.start(), 1) for m in solo.finditer(lowered)]
        hits += [(m.start(), 2) for m in couple.finditer(lowered)]
        return [v for _, v in sorted(hits, key=lambda h: h[0]) if v is not None]
    return match


# ---- 地點 ----

_STATE_NAMES = sorted(
    ((row["state_name"].lower(), code) for code, row in STATE_MINIMUMS.items()),
    key=lambda item: -len(item[0]),
)
_STATE_NAME_RE = re.compile(r"\b(" + "|".join(re.escape(n) for n, _ in _STATE_NAMES) + r")\b")
_STATE_CODE_ZIP_RE = re.compile(r"\b([A-Z]{2})\s+\d{5}\b")
_STATE_BY_NAME = dict(_STATE_NAMES)


def _state_matcher(lowered: str, original: str) -> List[Any]:
    hits = [(m.start(), _STATE_BY_NAME[m.group(1)]) for m in _STATE_NAME_RE.finditer(lowered)]
    hits += [
        (m.start(), m.group(1))
        for m in _STATE_CODE_ZIP_RE.finditer(original)
        if m.group(1) in STATE_MINIMUMS
    ]
    return [code for _, code in sorted(hits, key=lambda h: h[0])]


_ZIP_RE = re.compile(
    r"(?<![\$\d,.])\b(\d{5})(?:-\d{4})?\b"
    r"(?!\s*(?:miles?|mi\b|k\b|dollars?|deductible|/|annually|yearly|monthly"
    r"|(?:a|an|per|each|every)\s+(?:year|yr|month)\b))"
)


def _zip_matcher(lowered: str, original: str) -> List[Any]:
    return [m.group(1) for m in _ZIP_RE.finditer(lowered)]


# ---- 車輛 ----

_YEAR_RE = re.compile(
    r"(?<![\$\d,.])\b((?:19|20)\d{2})\b(?!\s*(?:miles?|mi\b|dollars?|deductible|/))"
)

# 出生年、領照年等不是車輛年份
_NON_VEHICLE_YEAR_RE = re.compile(r"\b(?:born|since|licensed|married)(?:\s+(?:in|back\s+in))?\s*$")


def _year_matcher(lowered: str, original: str) -> List[Any]:
    return [
        int(m.group(1))
        for m in _YEAR_RE.finditer(lowered)
        if not _NON_VEHICLE_YEAR_RE.search(lowered[max(0, m.start() - 30):m.start()])
    ]


_MAKE_RE = re.compile(
    r"\b("
    + "|".join(re.escape(k) for k in sorted(VEHICLE_MAKES, key=len, reverse=True))
    + r")\b(?:\s+([A-Za-z0-9][\w-]*))?(?:\s+([A-Za-z0-9][\w-]*))?",
    re.IGNORECASE,
)


def _make_model_matcher(lowered: str, original: str) -> List[Any]:
    """廠牌取自詞彙表，車型取廠牌後的第一個字（保留原始大小寫）"""
    values = []
    for m in _MAKE_RE.finditer(original):
        value = {"make": VEHICLE_MAKES[m.group(1).lower()]}
        token, following = m.group(2), m.group(3)
        if token and token.lower() not in MODEL_STOPWORDS and not re.fullmatch(r"\d{4}", token):
            if token.lower() == "model" and following:
                token = f"{token} {following}"
            value["model"] = token
        values.append(value)
    return values


_MILEAGE_RE = re.compile(
    r"(?<![\$\d,.])\b(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)\s*(k)?\s*(?:miles?|mi)\b"
)


def _mileage_matcher(lowered: str, original: str) -> List[Any]:
    values = []
    for m in _MILEAGE_RE.finditer(lowered):
        amount = float(m.group(1).replace(",", ""))
        if m.group(2):
            amount *= 1000
        values.append(int(round(amount)))
    return values[:1]


# ---- 駕駛人 ----

_AGE_RE = re.compile(
    r"\b(\d{2})\s*(?:years?[\s-]*old|yrs?[\s-]*old|yo)\b"
    r"|\bage[d:]?\s*(\d{2})\b"
    r"|\bi(?:'|’)?m\s+(\d{2})\b"
    r"|\bi am\s+(\d{2})\b"
)

_YEARS_LICENSED_RE = (
    r"\blicen[sc]ed?\s+(?:for\s+)?(\d{1,2})\s*(?:years?|yrs?)\b"
    r"|\b(\d{1,2})\s*(?:years?|yrs?)\s+(?:of\s+)?(?:driving|experience|licensed)\b"
    r"|\bdriving\s+(?:for\s+)?(\d{1,2})\s*(?:years?|yrs?)\b"
)


def _age_matcher(lowered: str, original: str) -> List[Any]:
    values = []
    for m in _AGE_RE.finditer(lowered):
        token = next(g for g in m.groups() if g)
        values.append(int(token))
    return values


_CLEAN_RE = re.compile(CLEAN_RECORD_PATTERN)
_VIOLATION_RE = re.compile(VIOLATION_PATTERN)
_DRIVER_REF_RE = re.compile(r"\bdriver\s*#?\s*(\d+)\b")


def _clean_record_matcher(lowered: str, original: str) -> List[Any]:
    return [True] if _CLEAN_RE.search(lowered) else []


def _violation_matcher(lowered: str, original: str) -> List[Any]:
    """先移除「無肇事」語句，避免 "no accidents" 被當成違規"""
    remaining = _CLEAN_RE.sub(" ", lowered)
    details = [m.group(1) for m in _VIOLATION_RE.finditer(remaining)]
    if not details:
        return []
    ref = _DRIVER_REF_RE.search(remaining)
    return [{
        "details": list(dict.fromkeys(details)),
        "driver_number": int(ref.group(1)) if ref else None,
    }]


# ---- 保障偏好 ----

_CARRIER_RE = re.compile(r"\b(" + "|".join(re.escape(c) for c in CARRIERS) + r")\b")

_PREMIUM_RE = re.compile(
    r"\$\s*(\d[\d,]*(?:\.\d{1,2})?)\s*(?:/\s*|per\s+|a\s+|an\s+|each\s+|every\s+)?(?:month|mo)\b"
    r"|\b(\d[\d,]*)\s*(?:dollars?\s*)?(?:/\s*|per\s+|a\s+)(?:month|mo)\b"
)

_DEDUCTIBLE_RE = (
    r"\$?\s*(\d[\d,]*)\s*(?:dollars?\s*)?deductible\b"
    r"|\bdeductible\s*(?:of|is|at|around|:)?\s*\$?\s*(\d[\d,]*)"
)


def _carrier_matcher(lowered: str, original: str) -> List[Any]:
    return [m.group(1) for m in _CARRIER_RE.finditer(lowered)][:1]


def _premium_matcher(lowered: str, original: str) -> List[Any]:
    values = []
    for m in _PREMIUM_RE.finditer(lowered):
        token = m.group(1) or m.group(2)
        values.append(int(round(float(token.replace(",", "")))))
    return values


def _rider_matcher(pattern: str) -> Matcher:
    compiled = re.compile(pattern)
    negation = re.compile(NEGATION_PATTERN)

    def match(lowered: str, original: str) -> List[Any]:
        m = compiled.search(lowered)
        if not m:
            return []
        window = lowered[max(0, m.start() - 25):m.start()]
        return [not negation.search(window)]
    return match


def default_rules(today: Optional[date] = None) -> List[ExtractionRule]:
    """
    建立預設規則表（順序即套用順序）

    計數必須排在最前面，同一句話先說「2 台車」再描述車款時才能分配到正確的位置。
    """
    current_year = (today or date.today()).year
    count_ok = _between(1, MAX_ENTITY_COUNT)

    return [
        ExtractionRule(
            "vehicle_count", "vehicle_count", "profile",
            _regex_ints(r"\b" + _NUMBER + r"\s*(?:cars?|vehicles?|autos?)\b"), count_ok,
        ),
        ExtractionRule("driver_count", "driver_count", "profile", _driver_count_matcher(), count_ok),
        ExtractionRule("zip_code", "zip_code", "profile", _zip_matcher),
        ExtractionRule("state", "state", "profile", _state_matcher),
        ExtractionRule(
            "vehicle_year", "year", "vehicle", _year_matcher, _between(1990, current_year + 1),
        ),
        ExtractionRule("vehicle_make_model", "make", "vehicle", _make_model_matcher),
        ExtractionRule(
            "vehicle_mileage", "annual_mileage", "vehicle", _mileage_matcher,
            _between(1000, 100000),
        ),
        ExtractionRule(
            "vehicle_parking", "parking_location", "vehicle", _first_keyword(PARKING_KEYWORDS),
        ),
        ExtractionRule("vehicle_use", "primary_use", "vehicle", _first_keyword(USE_KEYWORDS)),
        ExtractionRule("driver_age", "age", "driver", _age_matcher, _between(16, 99)),
        ExtractionRule(
            "driver_years_licensed", "years_licensed", "driver",
            _regex_ints(_YEARS_LICENSED_RE), _between(0, 83),
        ),
        ExtractionRule(
            "driver_marital_status", "marital_status", "driver", _first_keyword(MARITAL_KEYWORDS),
        ),
        ExtractionRule("clean_record", "has_violations", "all_drivers", _clean_record_matcher),
        ExtractionRule("driver_violation", "has_violations", "driver_violation", _violation_matcher),
        ExtractionRule("current_carrier", "current_carrier", "coverage", _carrier_matcher),
        ExtractionRule(
            "current_premium", "current_premium", "coverage", _premium_matcher,
            _between(10, 5000),
        ),
        ExtractionRule(
            "deductible", "deductible", "coverage", _regex_ints(_DEDUCTIBLE_RE),
            _between(100, 10000),
        ),
        ExtractionRule(
            "coverage_tier", "desired_coverage", "coverage", _first_keyword(COVERAGE_TIER_KEYWORDS),
        ),
    ] + [
        ExtractionRule(f"rider_{field}", field, "coverage", _rider_matcher(pattern))
        for field, pattern in RIDER_KEYWORDS.items()
    ]
