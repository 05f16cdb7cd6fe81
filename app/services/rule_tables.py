import json
import logging
from typing import Optional

from pydantic import ValidationError

from app.constants.state_requirements import (
    INDUSTRY_RECOMMENDATIONS,
    LIFE_STAGE_THRESHOLDS,
    RISK_THRESHOLDS,
    STATE_MINIMUMS,
)
from app.exceptions import RuleTableException
from app.models.rules import RuleTables

logger = logging.getLogger(__name__)


def default_rule_tables() -> RuleTables:
    """內建規則表（州法最低投保額 + 業界建議常數）"""
    return RuleTables(
        state_minimums=STATE_MINIMUMS,
        recommendations=INDUSTRY_RECOMMENDATIONS,
        risk_thresholds=RISK_THRESHOLDS,
        life_stage=LIFE_STAGE_THRESHOLDS,
    )


def load_rule_tables(path: Optional[str] = None) -> RuleTables:
    """
    載入規則表

    Args:
        path: JSON 檔路徑，格式同 RuleTables；留空使用內建規則表

    Raises:
        RuleTableException: 檔案不存在、不是合法 JSON 或欄位不符
    """
    if not path:
        tables = default_rule_tables()
        logger.info(f"Loaded built-in rule tables ({len(tables.state_minimums)} states)")
        return tables

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        tables = RuleTables.model_validate(data)
    except OSError as e:
        raise RuleTableException(f"Cannot read rule tables file: {path}", details=str(e))
    except json.JSONDecodeError as e:
        raise RuleTableException(f"Rule tables file is not valid JSON: {path}", details=str(e))
    except ValidationError as e:
        raise RuleTableException(
            f"Rule tables file has invalid content: {path}",
            details=e.errors(include_url=False),
        )

    logger.info(f"Loaded rule tables from {path} ({len(tables.state_minimums)} states)")
    return tables
