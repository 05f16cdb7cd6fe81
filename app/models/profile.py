from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.exceptions import ProfileContractException

PrimaryUse = Literal["commute", "pleasure", "business"]
ParkingLocation = Literal["garage", "driveway", "street", "parking-lot"]
MaritalStatus = Literal["single", "married", "divorced", "widowed"]
CoverageTier = Literal["minimum", "standard", "full"]


class ProfileBasics(BaseModel):
    """投保基本資料"""
    vehicle_count: Optional[int] = Field(None, description="車輛數")
    driver_count: Optional[int] = Field(None, description="駕駛人數")
    zip_code: Optional[str] = Field(None, description="停放地郵遞區號（5 碼）")
    state: Optional[str] = Field(None, description="州代碼，如 CA")


class VehicleProfile(BaseModel):
    """單一車輛資料（index i 代表第 i+1 台車）"""
    year: Optional[int] = Field(None, description="年份 1990..今年+1")
    make: Optional[str] = Field(None, description="廠牌（正規化小寫）")
    model: Optional[str] = Field(None, description="車型（保留原始大小寫）")
    annual_mileage: Optional[int] = Field(None, description="年行駛里程")
    primary_use: Optional[PrimaryUse] = Field(None, description="用途: commute|pleasure|business")
    parking_location: Optional[ParkingLocation] = Field(
        None, description="停放位置: garage|driveway|street|parking-lot"
    )
    enriched: bool = Field(False, description="是否已併入外部結構化資料（如保單掃描）")


class DriverProfile(BaseModel):
    """單一駕駛人資料"""
    age: Optional[int] = Field(None, description="年齡 16..99")
    years_licensed: Optional[int] = Field(None, description="駕照年資")
    marital_status: Optional[MaritalStatus] = Field(None, description="婚姻狀態")
    has_violations: Optional[bool] = Field(None, description="是否有違規/事故紀錄")
    violation_details: List[str] = Field(default_factory=list, description="違規描述")
    violations_defaulted: bool = Field(
        False, description="has_violations 是否來自「無肇事紀錄」的整批預設"
    )


class CoverageProfile(BaseModel):
    """保障偏好與現有保單"""
    current_carrier: Optional[str] = Field(None, description="目前保險公司")
    current_premium: Optional[int] = Field(None, description="目前月保費")
    desired_coverage: Optional[CoverageTier] = Field(None, description="期望保障等級")
    deductible: Optional[int] = Field(None, description="自負額偏好")
    roadside_assistance: Optional[bool] = None
    rental_reimbursement: Optional[bool] = None
    gap_insurance: Optional[bool] = None


class AssetProfile(BaseModel):
    """資產資料（供人生階段規則使用）"""
    home_value: Optional[int] = Field(None, description="房屋價值")


class RiskAssessment(BaseModel):
    """外部預先算好的環境風險分數（0~1）"""
    crime_risk: Optional[float] = Field(None, ge=0, le=1)
    earthquake_risk: Optional[float] = Field(None, ge=0, le=1)
    wildfire_risk: Optional[float] = Field(None, ge=0, le=1)
    flood_risk: Optional[float] = Field(None, ge=0, le=1)


class Completeness(BaseModel):
    """資料完整度（每次合併後重新計算）"""
    score: int = Field(..., ge=0, le=100)
    missing_required: List[str] = Field(default_factory=list)
    missing_optional: List[str] = Field(default_factory=list)
    ready_for_quote: bool = False


class QuoteProfile(BaseModel):
    """報價資料快照（由呼叫端保存，每一輪重新傳入）"""
    basics: ProfileBasics = Field(default_factory=ProfileBasics)
    vehicles: List[VehicleProfile] = Field(default_factory=list)
    drivers: List[DriverProfile] = Field(default_factory=list)
    coverage: CoverageProfile = Field(default_factory=CoverageProfile)
    assets: AssetProfile = Field(default_factory=AssetProfile)
    risk_assessment: Optional[RiskAssessment] = None
    completeness: Optional[Completeness] = Field(
        None, description="衍生欄位，輸入時忽略"
    )

    def check_invariants(self) -> None:
        """
        檢查計數與陣列長度的不變式，違反時立即失敗

        計數已知時陣列長度必須等於計數；計數未知時最多只能有 index 0 的暫存項目。
        """
        for label, count, entries in (
            ("vehicle", self.basics.vehicle_count, self.vehicles),
            ("driver", self.basics.driver_count, self.drivers),
        ):
            if count is not None and count < 1:
                raise ProfileContractException(
                    f"{label}_count must be at least 1, got {count}",
                    details={"field": f"{label}_count", "value": count},
                )
            if count is not None and len(entries) != count:
                raise ProfileContractException(
                    f"{label}s has {len(entries)} entries but {label}_count is {count}",
                    details={"field": f"{label}s", "length": len(entries), "count": count},
                )
            if count is None and len(entries) > 1:
                raise ProfileContractException(
                    f"{label}s has {len(entries)} entries before {label}_count is known",
                    details={"field": f"{label}s", "length": len(entries), "count": None},
                )
