import logging

from fastapi import APIRouter, Depends, Request

from app.models import (
    ConversationTurnRequest,
    ConversationTurnResponse,
    PolicyAnalysisRequest,
    PolicyAnalysisResponse,
    StateListResponse,
    ErrorResponse,
    RuleTables,
)
from app.services.quote_profile_service import QuoteProfileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/quote-profile", tags=["Quote Profile"])


def get_rule_tables(request: Request) -> RuleTables:
    """啟動時載入的規則表（唯讀，所有請求共用）"""
    return request.app.state.rule_tables


@router.post(
    "/turns",
    response_model=ConversationTurnResponse,
    responses={
        422: {
            "model": ErrorResponse,
            "description": "請求資料驗證失敗，或報價資料快照違反不變式"
        },
        500: {
            "model": ErrorResponse,
            "description": "系統內部錯誤"
        }
    }
)
def process_turn(request: ConversationTurnRequest):
    """
    報價資料更新 API

    傳入完整對話與上一輪的報價資料快照，回傳：
    - 合併後的報價資料（含完整度）
    - 下一個要問的欄位與預設提問文案（一次只問一題）

    伺服器不保存任何狀態，呼叫端須自行保存快照並在下一輪傳回。
    """
    logger.info(f"Processing turn with {len(request.turns)} messages")
    return QuoteProfileService.process_turn(request)


@router.post(
    "/analysis",
    response_model=PolicyAnalysisResponse,
    responses={
        422: {
            "model": ErrorResponse,
            "description": "保單資料格式錯誤"
        },
        500: {
            "model": ErrorResponse,
            "description": "系統內部錯誤"
        }
    }
)
def analyze_policy(
    request: PolicyAnalysisRequest,
    tables: RuleTables = Depends(get_rule_tables),
):
    """
    保單健檢 API

    缺口規則：
    - 州法合規（critical）：責任險低於州法最低額、缺少強制 PIP / UM
    - 環境風險（warning）：地震、野火、淹水、治安分數超過門檻且未投保對應保障
    - 人生階段：年輕駕駛未保 UM/UIM、有房未保傘式責任險、高價房產但責任險偏低
    - 財務（optimization）：比價可省約 20% 保費

    健康分數 = 100 - 30×critical - 15×warning - 5×optimization
    """
    return QuoteProfileService.analyze(request, tables)


@router.get("/states", response_model=StateListResponse)
def list_states(tables: RuleTables = Depends(get_rule_tables)):
    """規則表涵蓋的州與最低投保額"""
    return QuoteProfileService.list_states(tables)
