from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.analysis import PolicyAnalysis
from app.models.profile import Completeness, QuoteProfile


class ConversationTurnResponse(BaseModel):
    """報價資料更新結果"""
    status: str = "success"
    profile: QuoteProfile
    completeness: Completeness
    next_field: Optional[str] = Field(None, description="下一個要問的欄位，全部完成時為 null")
    next_question: Optional[str] = Field(None, description="預設提問文案")
    summary: str = Field("", description="報價資料的可讀摘要（Markdown）")


class PolicyAnalysisResponse(BaseModel):
    """保單健檢結果"""
    status: str = "success"
    analysis: PolicyAnalysis


class StateSummary(BaseModel):
    state: str
    state_name: str
    liability: str = Field(..., description="最低責任險額度簡寫，如 15/30/5")
    pip_required: bool
    um_required: bool
    notes: Optional[str] = Field(None, description="州法補充說明，如 no-fault 制度")


class StateListResponse(BaseModel):
    """規則表涵蓋的州"""
    status: str = "success"
    states: List[StateSummary]
