from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["critical", "warning", "optimization"]
GapCategory = Literal["compliance", "protection", "cost"]

SEVERITY_RANK = {"critical": 0, "warning": 1, "optimization": 2}


class PolicyGap(BaseModel):
    """單一保障缺口（每次分析重新產生，不可修改）"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="規則代碼，如 state_minimum_pd")
    severity: Severity
    category: GapCategory
    title: str
    message: str
    reasoning: str
    recommendation: str
    source: str = Field(..., description="引用來源")
    potential_savings: Optional[float] = Field(
        None, description="正數代表可省下的金額，負數代表補強需增加的年保費"
    )
    potential_risk: Optional[str] = None
    priority: int = Field(..., ge=1, le=5, description="1 最優先，5 最低")


class PolicyAnalysis(BaseModel):
    """保單健檢結果"""
    model_config = ConfigDict(frozen=True)

    health_score: int = Field(..., ge=0, le=100)
    gaps: List[PolicyGap] = Field(default_factory=list)
    summary: str
    citations: List[str] = Field(default_factory=list)
    analyzed_at: datetime
