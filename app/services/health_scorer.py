from typing import List

from app.models.analysis import PolicyGap

SEVERITY_PENALTY = {
    "critical": 30,
    "warning": 15,
    "optimization": 5,
}

GOOD_SCORE = 80
ATTENTION_SCORE = 50


def score_health(gaps: List[PolicyGap]) -> int:
    """保單健康分數：100 起算，依缺口嚴重度扣分，限制在 0~100"""
    score = 100 - sum(SEVERITY_PENALTY[gap.severity] for gap in gaps)
    return max(0, min(100, score))


def summarize_health(gaps: List[PolicyGap], score: int) -> str:
    """依分數區間產生摘要（≥80 良好 / 50~79 需留意 / <50 嚴重）"""
    count = len(gaps)
    issues = f"{count} issue{'' if count == 1 else 's'}"
    if score >= GOOD_SCORE:
        return f"Your policy is in good shape. {issues} found."
    if score >= ATTENTION_SCORE:
        return f"Your policy needs attention. {issues} found."
    critical = sum(1 for gap in gaps if gap.severity == "critical")
    return (
        f"Critical problems detected. {issues} found, "
        f"{critical} of them critical. Your policy may not meet legal requirements."
    )
