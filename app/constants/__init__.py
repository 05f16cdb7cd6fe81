from app.constants.state_requirements import (
    STATE_MINIMUMS,
    INDUSTRY_RECOMMENDATIONS,
    RISK_THRESHOLDS,
    LIFE_STAGE_THRESHOLDS,
)
from app.constants.vocabulary import (
    VEHICLE_MAKES,
    CARRIERS,
    NUMBER_WORDS,
)
from app.constants.questions import QUESTION_TEMPLATES

__all__ = [
    "STATE_MINIMUMS",
    "INDUSTRY_RECOMMENDATIONS",
    "RISK_THRESHOLDS",
    "LIFE_STAGE_THRESHOLDS",
    "VEHICLE_MAKES",
    "CARRIERS",
    "NUMBER_WORDS",
    "QUESTION_TEMPLATES",
]
