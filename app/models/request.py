from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.facts import ConversationTurn, ProfileHint
from app.models.profile import QuoteProfile


class ConversationTurnRequest(BaseModel):
    """一輪對話的報價資料更新請求"""
    turns: List[ConversationTurn] = Field(..., description="完整對話（依時間排序）")
    profile: Optional[QuoteProfile] = Field(None, description="上一輪回傳的報價資料快照")
    hint: Optional[ProfileHint] = Field(None, description="外部提供的客戶資料")

    class Config:
        json_schema_extra = {
            "example": {
                "turns": [
                    {"role": "user", "text": "I'm 35"},
                    {"role": "assistant", "text": "What do you drive?"},
                    {"role": "user", "text": "2019 Honda Civic"},
                ],
                "profile": None,
                "hint": {"location": "San Francisco, CA"},
            }
        }


class PolicyAnalysisRequest(BaseModel):
    """保單健檢請求"""
    coverage: Dict[str, Any] = Field(
        ..., description="保單資料，insurance_type: auto|home|renters|life（預設 auto）"
    )
    profile: Optional[QuoteProfile] = Field(None, description="報價資料（州別、駕駛、風險分數）")

    class Config:
        json_schema_extra = {
            "example": {
                "coverage": {
                    "insurance_type": "auto",
                    "carrier": "State Farm",
                    "liability": "15/30/5",
                    "total_premium": "$1,200",
                },
                "profile": {"basics": {"state": "CA"}},
            }
        }
