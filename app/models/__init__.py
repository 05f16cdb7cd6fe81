from app.models.profile import (
    ProfileBasics,
    VehicleProfile,
    DriverProfile,
    CoverageProfile,
    AssetProfile,
    RiskAssessment,
    Completeness,
    QuoteProfile,
)
from app.models.facts import (
    ConversationTurn,
    HintVehicle,
    ProfileHint,
    VehicleFacts,
    DriverFacts,
    CoverageFacts,
    PartialFacts,
)
from app.models.coverage import (
    CoverageLine,
    LiabilityBreakdown,
    PhysicalDamageCoverage,
    AutoCoverage,
    HomeCoverage,
    RentersCoverage,
    LifeCoverage,
    CoverageDocument,
    parse_coverage_document,
)
from app.models.analysis import (
    PolicyGap,
    PolicyAnalysis,
)
from app.models.rules import (
    LiabilityLimits,
    StateRequirement,
    RuleTables,
)
from app.models.request import (
    ConversationTurnRequest,
    PolicyAnalysisRequest,
)
from app.models.response import (
    ConversationTurnResponse,
    PolicyAnalysisResponse,
    StateSummary,
    StateListResponse,
)
from app.models.error import (
    ErrorDetail,
    ErrorInfo,
    ErrorResponse,
)

__all__ = [
    # Profile
    "ProfileBasics",
    "VehicleProfile",
    "DriverProfile",
    "CoverageProfile",
    "AssetProfile",
    "RiskAssessment",
    "Completeness",
    "QuoteProfile",
    # Facts
    "ConversationTurn",
    "HintVehicle",
    "ProfileHint",
    "VehicleFacts",
    "DriverFacts",
    "CoverageFacts",
    "PartialFacts",
    # Coverage
    "CoverageLine",
    "LiabilityBreakdown",
    "PhysicalDamageCoverage",
    "AutoCoverage",
    "HomeCoverage",
    "RentersCoverage",
    "LifeCoverage",
    "CoverageDocument",
    "parse_coverage_document",
    # Analysis
    "PolicyGap",
    "PolicyAnalysis",
    # Rules
    "LiabilityLimits",
    "StateRequirement",
    "RuleTables",
    # Request
    "ConversationTurnRequest",
    "PolicyAnalysisRequest",
    # Response
    "ConversationTurnResponse",
    "PolicyAnalysisResponse",
    "StateSummary",
    "StateListResponse",
    # Error
    "ErrorDetail",
    "ErrorInfo",
    "ErrorResponse",
]
