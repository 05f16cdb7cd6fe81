import logging
from datetime import date, datetime
from typing import List, Optional

from app.models.coverage import parse_coverage_document
from app.models.request import ConversationTurnRequest, PolicyAnalysisRequest
from app.models.response import (
    ConversationTurnResponse,
    PolicyAnalysisResponse,
    StateListResponse,
    StateSummary,
)
from app.models.rules import RuleTables
from app.services.fact_extractor import extract_facts
from app.services.gap_analyzer import analyze_policy
from app.services.profile_accumulator import merge_profile
from app.services.profile_summary import format_profile_summary
from app.services.question_selector import question_for, select_next_question

logger = logging.getLogger(__name__)


class QuoteProfileService:
    """報價資料服務（orchestration 層）"""

    @staticmethod
    def process_turn(
        request: ConversationTurnRequest,
        today: Optional[date] = None,
    ) -> ConversationTurnResponse:
        """
        主流程：抽取事實 → 合併快照 → 計算完整度 → 選出下一題

        Args:
            request: 完整對話、上一輪快照與外部客戶資料

        Returns:
            ConversationTurnResponse
        """
        # 1. 抽取（整段對話重新掃描）
        facts = extract_facts(request.turns, hint=request.hint, today=today)

        # 2. 合併（快照中的 completeness 只是衍生值，不作為輸入）
        profile = merge_profile(request.profile, facts)
        completeness = profile.completeness

        # 3. 下一題
        next_field = select_next_question(completeness)
        logger.info(
            f"Turn processed: score={completeness.score}, "
            f"ready={completeness.ready_for_quote}, next={next_field}"
        )

        return ConversationTurnResponse(
            status="success",
            profile=profile,
            completeness=completeness,
            next_field=next_field,
            next_question=question_for(next_field),
            summary=format_profile_summary(profile),
        )

    @staticmethod
    def analyze(
        request: PolicyAnalysisRequest,
        tables: RuleTables,
        now: Optional[datetime] = None,
    ) -> PolicyAnalysisResponse:
        """保單健檢：缺口分析 + 健康分數"""
        coverage = parse_coverage_document(request.coverage)
        analysis = analyze_policy(coverage, request.profile, tables=tables, now=now)
        return PolicyAnalysisResponse(status="success", analysis=analysis)

    @staticmethod
    def list_states(tables: RuleTables) -> StateListResponse:
        states: List[StateSummary] = [
            StateSummary(
                state=code,
                state_name=requirement.state_name,
                liability=requirement.liability.shorthand(),
                pip_required=requirement.pip_required,
                um_required=requirement.um_required,
                notes=requirement.notes,
            )
            for code, requirement in sorted(tables.state_minimums.items())
        ]
        return StateListResponse(status="success", states=states)
