from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.profile import (
    CoverageProfile,
    MaritalStatus,
    ParkingLocation,
    PrimaryUse,
)


class ConversationTurn(BaseModel):
    """單一對話回合"""
    role: str = Field(..., description="user|assistant|system")
    text: str = Field("", description="訊息內容")


class HintVehicle(BaseModel):
    """外部提供的車輛資料"""
    year: Optional[int] = None
    make: Optional[str] = None
    model: Optional[str] = None
    annual_mileage: Optional[int] = None
    primary_use: Optional[PrimaryUse] = None
    enriched: bool = Field(False, description="已由外部結構化來源（如 VIN 解碼、保單掃描）補強")


class ProfileHint(BaseModel):
    """外部提供的客戶資料（對話以外的來源）"""
    age: Optional[int] = Field(None, description="客戶年齡，僅作為 driver 1 的預設值")
    state: Optional[str] = None
    zip_code: Optional[str] = None
    location: Optional[str] = Field(None, description="自由文字地點，如 San Francisco, CA")
    vehicle_count: Optional[int] = None
    driver_count: Optional[int] = None
    home_value: Optional[int] = None
    vehicles: List[HintVehicle] = Field(default_factory=list)


class VehicleFacts(BaseModel):
    """單一車輛抽取結果（只含找到證據的欄位）"""
    year: Optional[int] = None
    make: Optional[str] = None
    model: Optional[str] = None
    annual_mileage: Optional[int] = None
    primary_use: Optional[PrimaryUse] = None
    parking_location: Optional[ParkingLocation] = None
    enriched: bool = False


class DriverFacts(BaseModel):
    """單一駕駛人抽取結果"""
    age: Optional[int] = None
    years_licensed: Optional[int] = None
    marital_status: Optional[MaritalStatus] = None
    has_violations: Optional[bool] = None
    violation_details: List[str] = Field(default_factory=list)
    violations_defaulted: bool = False


class CoverageFacts(CoverageProfile):
    """保障偏好抽取結果"""


class PartialFacts(BaseModel):
    """一次抽取的部分事實集合"""
    vehicle_count: Optional[int] = None
    driver_count: Optional[int] = None
    zip_code: Optional[str] = None
    state: Optional[str] = None
    vehicles: List[VehicleFacts] = Field(default_factory=list)
    drivers: List[DriverFacts] = Field(default_factory=list)
    coverage: CoverageFacts = Field(default_factory=CoverageFacts)
    home_value: Optional[int] = None
    default_driver_age: Optional[int] = Field(
        None, description="外部客戶資料的年齡，合併後才套用於 driver 1"
    )

    def is_empty(self) -> bool:
        return self == PartialFacts()
