from typing import Dict, Optional

from pydantic import BaseModel, Field


class LiabilityLimits(BaseModel):
    """責任險額度（美元）"""
    bodily_injury_per_person: int
    bodily_injury_per_accident: int
    property_damage: int

    def shorthand(self) -> str:
        """格式化成 25/50/25 簡寫"""
        return (
            f"{self.bodily_injury_per_person // 1000}/"
            f"{self.bodily_injury_per_accident // 1000}/"
            f"{self.property_damage // 1000}"
        )


class StateRequirement(BaseModel):
    """單一州的法定最低投保要求"""
    state: str
    state_name: str
    liability: LiabilityLimits
    pip_required: bool = False
    um_required: bool = False
    notes: Optional[str] = None
    source: str


class LiabilityRecommendation(LiabilityLimits):
    reasoning: str
    source: str
    cost_increase: str
    annual_cost_estimate: int


class CostedRecommendation(BaseModel):
    reasoning: str
    source: str
    cost_increase: str
    annual_cost_estimate: int


class UmbrellaRecommendation(CostedRecommendation):
    recommended_coverage: int


class DeductibleRecommendation(BaseModel):
    collision: int
    comprehensive: int
    reasoning: str
    source: str


class VehicleValueRecommendation(BaseModel):
    drop_collision_comprehensive: int
    new_vehicle_price: int
    estimated_drop_savings: int
    reasoning: str
    source: str


class SavingsRecommendation(BaseModel):
    rate: float = Field(..., gt=0, lt=1)
    source: str


class IndustryRecommendations(BaseModel):
    """業界建議常數"""
    liability: LiabilityRecommendation
    uninsured_motorist: CostedRecommendation
    deductibles: DeductibleRecommendation
    umbrella: UmbrellaRecommendation
    vehicle_value: VehicleValueRecommendation
    savings: SavingsRecommendation


class RiskThresholds(BaseModel):
    """環境風險門檻（分數大於門檻才觸發）"""
    earthquake: float = 0.8
    wildfire: float = 0.7
    flood: float = 0.6
    crime: float = 0.7


class LifeStageThresholds(BaseModel):
    young_driver_age: int = 25
    high_value_home: int = 500000
    liability_floor: int = 250000


class RuleTables(BaseModel):
    """缺口分析使用的靜態規則表（啟動時載入一次，唯讀）"""
    state_minimums: Dict[str, StateRequirement]
    recommendations: IndustryRecommendations
    risk_thresholds: RiskThresholds = Field(default_factory=RiskThresholds)
    life_stage: LifeStageThresholds = Field(default_factory=LifeStageThresholds)

    def get_state_requirement(self, state_code: Optional[str]) -> Optional[StateRequirement]:
        if not state_code:
            return None
        return self.state_minimums.get(state_code.strip().upper())
