from app.services.fact_extractor import extract_facts
from app.services.profile_accumulator import merge_profile
from app.services.completeness import evaluate_completeness
from app.services.question_selector import select_next_question, question_for
from app.services.profile_summary import format_profile_summary
from app.services.gap_analyzer import RuleBasedGapAnalyzer, analyze_policy
from app.services.health_scorer import score_health
from app.services.rule_tables import load_rule_tables
from app.services.quote_profile_service import QuoteProfileService

__all__ = [
    "extract_facts",
    "merge_profile",
    "evaluate_completeness",
    "select_next_question",
    "question_for",
    "format_profile_summary",
    "RuleBasedGapAnalyzer",
    "analyze_policy",
    "score_health",
    "load_rule_tables",
    "QuoteProfileService",
]
