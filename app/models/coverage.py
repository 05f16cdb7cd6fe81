from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from app.exceptions import CoverageDocumentException

_ABSENT_VALUES = {"", "none", "no", "n/a", "na", "not included", "declined", "rejected", "0", "$0"}

COVERAGE_TYPES = ("auto", "home", "renters", "life")


def is_present(value: Any) -> bool:
    """判斷保單欄位是否代表「有投保」（None、空字串、declined 等都視為未投保）"""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in _ABSENT_VALUES
    return True


def as_text(value: Any) -> Any:
    """
    掃描結果的純量欄位轉成字串

    數字轉成字串（1200 → "1200"），True 視為 "Included"，False 視為未投保；
    其他型別原樣交給 pydantic 驗證。
    """
    if isinstance(value, bool):
        return "Included" if value else None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


class CoverageLine(BaseModel):
    """保單上的單一保障項目（掃描結果的通用格式）"""
    type: str
    limit: Optional[str] = None
    deductible: Optional[str] = None
    premium: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return as_text(value)


class LiabilityBreakdown(BaseModel):
    """結構化責任險額度，如 bodily_injury="$25K", property_damage="$10K" """
    bodily_injury: Optional[str] = None
    property_damage: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return as_text(value)


class PhysicalDamageCoverage(BaseModel):
    """車體損失險（碰撞 / 綜合）"""
    limit: Optional[str] = None
    deductible: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return as_text(value)


class CoverageBase(BaseModel):
    """各險種共用欄位"""
    carrier: Optional[str] = None
    policy_number: Optional[str] = None
    state: Optional[str] = None
    total_premium: Optional[str] = Field(None, description="總保費，如 $1,200")
    umbrella: Optional[str] = Field(None, description="傘式責任險額度")
    coverages: List[CoverageLine] = Field(default_factory=list)

    @field_validator("carrier", "policy_number", "state", "total_premium", "umbrella", "coverages", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return as_text(value)

    @field_validator("coverages", mode="before")
    @classmethod
    def coerce_lines(cls, value: Any) -> Any:
        # 掃描結果有時只給保障名稱清單，如 ["Collision", "Roadside"]
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        return [{"type": item} if isinstance(item, str) else item for item in value]

    def has_line(self, *keywords: str) -> bool:
        """通用保障清單中是否有任一關鍵字的有效項目"""
        for line in self.coverages:
            line_type = line.type.lower()
            if any(k in line_type for k in keywords) and is_present(line.limit or line.type):
                return True
        return False

    def has_umbrella(self) -> bool:
        return is_present(self.umbrella) or self.has_line("umbrella")


class AutoCoverage(CoverageBase):
    """汽車險"""
    insurance_type: Literal["auto"] = "auto"
    liability: Optional[Union[str, LiabilityBreakdown]] = Field(
        None, description="責任險，簡寫 25/50/25 或結構化額度"
    )
    uninsured_motorist: Optional[str] = None
    underinsured_motorist: Optional[str] = None
    personal_injury_protection: Optional[str] = None
    collision: Optional[PhysicalDamageCoverage] = None
    comprehensive: Optional[PhysicalDamageCoverage] = None

    @field_validator(
        "liability", "uninsured_motorist", "underinsured_motorist",
        "personal_injury_protection", "collision", "comprehensive", mode="before",
    )
    @classmethod
    def coerce_auto_text(cls, value: Any) -> Any:
        return as_text(value)

    @field_validator("collision", "comprehensive", mode="before")
    @classmethod
    def coerce_physical_damage(cls, value: Any) -> Any:
        """單一值（如 "Included"、True、"$500 deductible"）視為有投保的額度；未投保的值視為 None"""
        if isinstance(value, (dict, PhysicalDamageCoverage)):
            return value
        value = as_text(value)
        if not is_present(value):
            return None
        if isinstance(value, str):
            return PhysicalDamageCoverage(limit=value)
        return value

    def has_um_uim(self) -> bool:
        return (
            is_present(self.uninsured_motorist)
            or is_present(self.underinsured_motorist)
            or self.has_line("uninsured", "underinsured", "um/uim")
        )

    def has_pip(self) -> bool:
        return is_present(self.personal_injury_protection) or self.has_line(
            "personal injury", "pip"
        )

    def has_collision(self) -> bool:
        return self.collision is not None or self.has_line("collision")

    def has_comprehensive(self) -> bool:
        return self.comprehensive is not None or self.has_line("comprehensive")


class HomeCoverage(CoverageBase):
    """住宅險"""
    insurance_type: Literal["home"] = "home"
    dwelling_coverage: Optional[str] = None
    personal_property: Optional[str] = None
    liability: Optional[str] = None
    earthquake: Optional[str] = None
    flood: Optional[str] = None

    @field_validator(
        "dwelling_coverage", "personal_property", "liability", "earthquake", "flood", mode="before",
    )
    @classmethod
    def coerce_home_text(cls, value: Any) -> Any:
        return as_text(value)


class RentersCoverage(CoverageBase):
    """租屋險"""
    insurance_type: Literal["renters"] = "renters"
    personal_property: Optional[str] = None
    liability: Optional[str] = None
    earthquake: Optional[str] = None
    flood: Optional[str] = None

    @field_validator("personal_property", "liability", "earthquake", "flood", mode="before")
    @classmethod
    def coerce_renters_text(cls, value: Any) -> Any:
        return as_text(value)


class LifeCoverage(CoverageBase):
    """壽險"""
    insurance_type: Literal["life"] = "life"
    coverage_amount: Optional[str] = None
    life_insurance_type: Optional[str] = None

    @field_validator("coverage_amount", "life_insurance_type", mode="before")
    @classmethod
    def coerce_life_text(cls, value: Any) -> Any:
        return as_text(value)


CoverageDocument = Annotated[
    Union[AutoCoverage, HomeCoverage, RentersCoverage, LifeCoverage],
    Field(discriminator="insurance_type"),
]

_coverage_adapter = TypeAdapter(CoverageDocument)


def parse_coverage_document(data: dict) -> Union[AutoCoverage, HomeCoverage, RentersCoverage, LifeCoverage]:
    """
    將掃描得到的 JSON 轉成對應險種的型別

    未標示 insurance_type 時視為汽車險，險種名稱不分大小寫。
    數字、布林等常見的掃描格式會先轉換；仍無法辨識時拋出 CoverageDocumentException。
    """
    payload = dict(data)
    insurance_type = payload.get("insurance_type") or "auto"
    if isinstance(insurance_type, str):
        insurance_type = insurance_type.strip().lower()
    if insurance_type not in COVERAGE_TYPES:
        raise CoverageDocumentException(
            f"Unsupported insurance_type {insurance_type!r}, "
            f"expected one of {', '.join(COVERAGE_TYPES)}",
            details={"field": "insurance_type", "value": insurance_type},
        )
    payload["insurance_type"] = insurance_type

    try:
        return _coverage_adapter.validate_python(payload)
    except ValidationError as e:
        raise CoverageDocumentException(
            f"Coverage document could not be read as {insurance_type} coverage",
            details=[
                {
                    "field": " -> ".join(str(loc) for loc in err["loc"]),
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ],
        ) from e
