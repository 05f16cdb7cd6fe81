import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Union

from app.models.analysis import SEVERITY_RANK, PolicyAnalysis, PolicyGap
from app.models.coverage import (
    AutoCoverage,
    CoverageBase,
    HomeCoverage,
    RentersCoverage,
    is_present,
    parse_coverage_document,
)
from app.models.profile import QuoteProfile
from app.models.rules import RuleTables, StateRequirement
from app.services.health_scorer import score_health, summarize_health
from app.services.parsing import parse_liability, parse_limit, parse_money
from app.services.rule_tables import default_rule_tables

logger = logging.getLogger(__name__)

VEHICLE_DATA_SOURCE = "NHTSA vehicle data + industry standards"
DEDUCTIBLE_SOURCE = "Industry standard"

# 折舊：前 5 年每年 15%，之後每年 10%
_EARLY_DEPRECIATION = 0.15
_LATE_DEPRECIATION = 0.10
_EARLY_YEARS = 5


def estimate_vehicle_value(year: int, today: date, new_price: int) -> int:
    """以車齡粗估車價"""
    value = float(new_price)
    for age in range(max(0, today.year - year)):
        value *= 1 - (_EARLY_DEPRECIATION if age < _EARLY_YEARS else _LATE_DEPRECIATION)
    return int(round(value))


def _money(amount: float) -> str:
    if amount >= 1000 and amount % 1000 == 0:
        return f"${int(amount) // 1000}K"
    return f"${amount:,.0f}"


class RuleBasedGapAnalyzer:
    """
    保單缺口分析（規則式）

    四類規則各自獨立產生缺口：
    1. 州法合規 (check_state_compliance)：critical / priority 1
    2. 環境風險 (check_risk_exposure)：warning / priority 2~3
    3. 人生階段 (check_life_stage)：warning 或 optimization / priority 3~4
    4. 財務 (check_financial)：optimization / priority 3
    另有業界建議額度、車價與自負額的補充規則。
    """

    def __init__(self, tables: RuleTables, today: Optional[date] = None):
        self.tables = tables
        self.today = today or date.today()

    def analyze(self, coverage: CoverageBase, profile: QuoteProfile) -> List[PolicyGap]:
        gaps: List[PolicyGap] = []
        gaps += self.check_state_compliance(coverage, profile)
        gaps += self.check_recommended_liability(coverage)
        gaps += self.check_risk_exposure(coverage, profile)
        gaps += self.check_life_stage(coverage, profile)
        gaps += self.check_financial(coverage)
        gaps += self.check_vehicle_value(coverage, profile)
        gaps += self.check_deductibles(coverage)
        logger.info(f"Gap analysis found {len(gaps)} gaps for {coverage.insurance_type} policy")
        return gaps

    def citations(self, coverage: CoverageBase, profile: QuoteProfile,
                  gaps: List[PolicyGap]) -> List[str]:
        """引用來源：所有缺口的 source，加上有做合規檢查時的州主管機關"""
        sources = {gap.source for gap in gaps}
        requirement = self._state_requirement(coverage, profile)
        if requirement and isinstance(coverage, AutoCoverage):
            sources.add(requirement.source)
        return sorted(sources)

    # ------------------------------------------------------------
    # 州法合規
    # ------------------------------------------------------------

    def _state_requirement(self, coverage: CoverageBase,
                           profile: QuoteProfile) -> Optional[StateRequirement]:
        return self.tables.get_state_requirement(profile.basics.state or coverage.state)

    def check_state_compliance(self, coverage: CoverageBase,
                               profile: QuoteProfile) -> List[PolicyGap]:
        """
        比對州法最低投保額（僅汽車險）

        體傷每人與每事故視為同一個面向：每人額度不足時只產生 state_minimum_bi_person，
        每人足額但每事故不足時才產生 state_minimum_bi_accident。
        州不在規則表中時整組略過；責任險額度無法解析時只略過額度檢查。
        """
        if not isinstance(coverage, AutoCoverage):
            return []

        requirement = self._state_requirement(coverage, profile)
        if requirement is None:
            logger.info(
                f"State {profile.basics.state or coverage.state!r} not in rule tables, "
                f"skipping compliance checks"
            )
            return []

        gaps: List[PolicyGap] = []
        state_name = requirement.state_name
        minimum = requirement.liability
        limits = parse_liability(coverage.liability)

        if limits is None:
            logger.info("Liability limits could not be parsed, skipping limit checks")
        else:
            if limits.bodily_injury_per_person < minimum.bodily_injury_per_person:
                gaps.append(self._compliance_gap(
                    requirement,
                    id="state_minimum_bi_person",
                    title="Bodily Injury Below State Minimum",
                    message=(
                        f"Your bodily injury coverage ({_money(limits.bodily_injury_per_person)} "
                        f"per person) is below {state_name}'s minimum of "
                        f"{_money(minimum.bodily_injury_per_person)}"
                    ),
                    reasoning=(
                        "Driving without minimum coverage is illegal and can result in fines, "
                        "license suspension or vehicle impoundment. You are also personally "
                        "liable for damages."
                    ),
                    recommendation=(
                        f"Immediately increase liability to at least {minimum.shorthand()}"
                    ),
                    potential_risk=(
                        "Fines, license suspension and personal liability for all damages"
                    ),
                ))
            elif limits.bodily_injury_per_accident < minimum.bodily_injury_per_accident:
                gaps.append(self._compliance_gap(
                    requirement,
                    id="state_minimum_bi_accident",
                    title="Bodily Injury Per Accident Below State Minimum",
                    message=(
                        f"Your bodily injury coverage ({_money(limits.bodily_injury_per_accident)} "
                        f"per accident) is below {state_name}'s minimum of "
                        f"{_money(minimum.bodily_injury_per_accident)}"
                    ),
                    reasoning="Insufficient per-accident bodily injury coverage violates state law.",
                    recommendation=(
                        f"Increase liability to at least {minimum.shorthand()}"
                    ),
                ))

            if limits.property_damage < minimum.property_damage:
                gaps.append(self._compliance_gap(
                    requirement,
                    id="state_minimum_pd",
                    title="Property Damage Below State Minimum",
                    message=(
                        f"Your property damage coverage ({_money(limits.property_damage)}) is "
                        f"below {state_name}'s minimum of {_money(minimum.property_damage)}"
                    ),
                    reasoning="Insufficient property damage coverage violates state law.",
                    recommendation=(
                        f"Increase property damage coverage to at least "
                        f"{_money(minimum.property_damage)}"
                    ),
                ))

        if requirement.pip_required and not coverage.has_pip():
            gaps.append(self._compliance_gap(
                requirement,
                id="missing_required_pip",
                title="Missing Required PIP Coverage",
                message=f"{state_name} requires Personal Injury Protection (PIP) coverage",
                reasoning=(
                    f"{state_name} is a no-fault state. PIP is mandatory and covers medical "
                    f"expenses regardless of who caused the accident."
                ),
                recommendation="Add PIP coverage to comply with state law",
            ))

        if requirement.um_required and not coverage.has_um_uim():
            gaps.append(self._compliance_gap(
                requirement,
                id="missing_required_um",
                title="Missing Required UM/UIM Coverage",
                message=f"{state_name} requires Uninsured/Underinsured Motorist coverage",
                reasoning="State law mandates UM/UIM protection.",
                recommendation="Add UM/UIM coverage to comply with state requirements",
            ))

        return gaps

    @staticmethod
    def _compliance_gap(requirement: StateRequirement, **fields: Any) -> PolicyGap:
        return PolicyGap(
            severity="critical",
            category="compliance",
            source=requirement.source,
            priority=1,
            **fields,
        )

    # ------------------------------------------------------------
    # 業界建議額度
    # ------------------------------------------------------------

    def check_recommended_liability(self, coverage: CoverageBase) -> List[PolicyGap]:
        if not isinstance(coverage, AutoCoverage):
            return []
        limits = parse_liability(coverage.liability)
        recommended = self.tables.recommendations.liability
        if limits is None or limits.bodily_injury_per_person >= recommended.bodily_injury_per_person:
            return []
        return [PolicyGap(
            id="recommended_liability",
            severity="warning",
            category="protection",
            title="Below Recommended Coverage Levels",
            message=(
                f"Your liability ({limits.shorthand()}) is below the industry-recommended "
                f"{recommended.shorthand()}"
            ),
            reasoning=recommended.reasoning,
            recommendation=(
                f"Increase to {recommended.shorthand()} for better asset protection "
                f"({recommended.cost_increase})"
            ),
            source=recommended.source,
            potential_savings=-recommended.annual_cost_estimate,
            potential_risk="Could be personally liable for $100K+ in a serious accident",
            priority=2,
        )]

    # ------------------------------------------------------------
    # 環境風險
    # ------------------------------------------------------------

    @staticmethod
    def _covers_peril(coverage: CoverageBase, peril: str) -> Optional[bool]:
        """
        保單是否涵蓋該風險；險種與風險無關時回傳 None（不檢查）

        汽車險以綜合損失險涵蓋地震、野火、淹水、竊盜；
        住宅 / 租屋險需有對應的地震、洪水附加保障，野火看建物（租屋為動產），竊盜看動產。
        """
        if isinstance(coverage, AutoCoverage):
            return coverage.has_comprehensive()
        if isinstance(coverage, (HomeCoverage, RentersCoverage)):
            if peril == "earthquake":
                return is_present(coverage.earthquake) or coverage.has_line("earthquake")
            if peril == "flood":
                return is_present(coverage.flood) or coverage.has_line("flood")
            if peril == "wildfire" and isinstance(coverage, HomeCoverage):
                return is_present(coverage.dwelling_coverage) or coverage.has_line("dwelling")
            return is_present(coverage.personal_property) or coverage.has_line("personal property")
        return None

    def check_risk_exposure(self, coverage: CoverageBase,
                            profile: QuoteProfile) -> List[PolicyGap]:
        risk = profile.risk_assessment
        if risk is None:
            return []

        thresholds = self.tables.risk_thresholds
        checks = [
            ("earthquake", risk.earthquake_risk, thresholds.earthquake, 2,
             "Earthquake coverage", "Earthquake damage is excluded from standard policies."),
            ("wildfire", risk.wildfire_risk, thresholds.wildfire, 2,
             "Fire damage coverage", "Wildfire losses can destroy a vehicle or home outright."),
            ("flood", risk.flood_risk, thresholds.flood, 2,
             "Flood coverage", "Flood damage is excluded from standard policies."),
            ("crime", risk.crime_risk, thresholds.crime, 3,
             "Theft coverage", "Theft and vandalism rates in your area are above average."),
        ]

        gaps: List[PolicyGap] = []
        for peril, score, threshold, priority, coverage_name, reasoning in checks:
            if score is None or score <= threshold:
                continue
            # crime 對應的保障是竊盜
            covered = self._covers_peril(coverage, "theft" if peril == "crime" else peril)
            if covered is None or covered:
                continue
            needed = (
                "comprehensive coverage" if isinstance(coverage, AutoCoverage)
                else coverage_name.lower()
            )
            gaps.append(PolicyGap(
                id=f"{peril}_risk_uncovered",
                severity="warning",
                category="protection",
                title=f"High {peril.capitalize()} Risk Without Coverage",
                message=(
                    f"Your area has a high {peril} risk score ({score:.2f}) but your "
                    f"{coverage.insurance_type} policy has no {needed}"
                ),
                reasoning=reasoning,
                recommendation=f"Add {needed} to your policy",
                source="Location risk assessment",
                potential_risk=f"Uncovered {peril} losses are paid out of pocket",
                priority=priority,
            ))
        return gaps

    # ------------------------------------------------------------
    # 人生階段
    # ------------------------------------------------------------

    def _liability_amount(self, coverage: CoverageBase) -> Optional[int]:
        if isinstance(coverage, AutoCoverage):
            limits = parse_liability(coverage.liability)
            return limits.bodily_injury_per_person if limits else None
        if isinstance(coverage, (HomeCoverage, RentersCoverage)):
            return parse_limit(coverage.liability)
        return None

    def check_life_stage(self, coverage: CoverageBase,
                         profile: QuoteProfile) -> List[PolicyGap]:
        gaps: List[PolicyGap] = []
        thresholds = self.tables.life_stage
        recommendations = self.tables.recommendations

        young_ages = [
            d.age for d in profile.drivers
            if d.age is not None and d.age < thresholds.young_driver_age
        ]
        if isinstance(coverage, AutoCoverage) and young_ages and not coverage.has_um_uim():
            um = recommendations.uninsured_motorist
            gaps.append(PolicyGap(
                id="young_driver_um",
                severity="warning",
                category="protection",
                title="Young Driver Without Uninsured Motorist Protection",
                message=(
                    f"A driver under {thresholds.young_driver_age} (age {min(young_ages)}) "
                    f"is on a policy with no UM/UIM coverage"
                ),
                reasoning=um.reasoning,
                recommendation=(
                    f"Add UM/UIM coverage matching your liability limits ({um.cost_increase})"
                ),
                source=um.source,
                potential_savings=-um.annual_cost_estimate,
                potential_risk="Could pay $50K+ out of pocket for injuries from an uninsured driver",
                priority=3,
            ))

        home_value = profile.assets.home_value
        if home_value and not coverage.has_umbrella():
            umbrella = recommendations.umbrella
            gaps.append(PolicyGap(
                id="homeowner_umbrella",
                severity="optimization",
                category="protection",
                title="Consider an Umbrella Policy",
                message=(
                    f"You own a home worth about {_money(home_value)} and have no umbrella "
                    f"liability coverage"
                ),
                reasoning=umbrella.reasoning,
                recommendation=(
                    f"Add {_money(umbrella.recommended_coverage)} umbrella coverage "
                    f"({umbrella.cost_increase})"
                ),
                source=umbrella.source,
                potential_savings=-umbrella.annual_cost_estimate,
                priority=4,
            ))

        liability = self._liability_amount(coverage)
        if (
            home_value
            and home_value > thresholds.high_value_home
            and liability is not None
            and liability < thresholds.liability_floor
        ):
            gaps.append(PolicyGap(
                id="high_value_home_liability",
                severity="warning",
                category="protection",
                title="Liability Low for Your Assets",
                message=(
                    f"Your liability limit ({_money(liability)}) is low for a home worth "
                    f"{_money(home_value)}"
                ),
                reasoning=(
                    "Lawsuits after a serious accident target your assets. Liability limits "
                    "should keep pace with what you own."
                ),
                recommendation=(
                    f"Raise liability to at least {_money(thresholds.liability_floor)}"
                ),
                source=recommendations.umbrella.source,
                potential_risk="Assets above your liability limit are exposed in a lawsuit",
                priority=3,
            ))
        return gaps

    # ------------------------------------------------------------
    # 財務
    # ------------------------------------------------------------

    def check_financial(self, coverage: CoverageBase) -> List[PolicyGap]:
        premium = parse_money(coverage.total_premium)
        if not premium or premium <= 0:
            return []
        savings = self.tables.recommendations.savings
        amount = round(premium * savings.rate, 2)
        return [PolicyGap(
            id="premium_savings_opportunity",
            severity="optimization",
            category="cost",
            title="Potential Savings From Comparison Shopping",
            message=(
                f"Drivers who compare quotes save about {savings.rate:.0%} on average. "
                f"On your {_money(premium)} premium that is roughly {_money(amount)}"
            ),
            reasoning="Rates for the same coverage vary widely between carriers.",
            recommendation="Compare quotes from several carriers before renewing",
            source=savings.source,
            potential_savings=amount,
            priority=3,
        )]

    # ------------------------------------------------------------
    # 車價與自負額
    # ------------------------------------------------------------

    def check_vehicle_value(self, coverage: CoverageBase,
                            profile: QuoteProfile) -> List[PolicyGap]:
        """只針對第一台且已由外部資料補強的車輛"""
        if not isinstance(coverage, AutoCoverage) or not profile.vehicles:
            return []
        vehicle = profile.vehicles[0]
        if not vehicle.enriched or vehicle.year is None:
            return []

        rule = self.tables.recommendations.vehicle_value
        value = estimate_vehicle_value(vehicle.year, self.today, rule.new_vehicle_price)
        name = " ".join(str(p) for p in (vehicle.year, vehicle.make, vehicle.model) if p)
        logger.debug(f"Vehicle {name} estimated value {value}")

        if value < rule.drop_collision_comprehensive:
            if not (coverage.has_collision() or coverage.has_comprehensive()):
                return []
            return [PolicyGap(
                id="drop_collision_comprehensive",
                severity="optimization",
                category="cost",
                title="Consider Dropping Collision/Comprehensive",
                message=f"Your {name} is worth approximately {_money(value)}",
                reasoning=rule.reasoning,
                recommendation="Consider dropping collision/comprehensive coverage to save $300-600/year",
                source=rule.source,
                potential_savings=rule.estimated_drop_savings,
                priority=4,
            )]

        gaps: List[PolicyGap] = []
        if not coverage.has_collision():
            gaps.append(PolicyGap(
                id="missing_collision",
                severity="warning",
                category="protection",
                title="Missing Collision Coverage",
                message=(
                    f"Your {name} is worth approximately {_money(value)} but has no "
                    f"collision coverage"
                ),
                reasoning=(
                    "Collision coverage protects your investment if you cause an accident "
                    "or hit an object."
                ),
                recommendation="Add collision coverage with a $500 deductible",
                source=VEHICLE_DATA_SOURCE,
                potential_risk=f"Could lose {_money(value)} if the vehicle is totaled",
                priority=3,
            ))
        if not coverage.has_comprehensive():
            gaps.append(PolicyGap(
                id="missing_comprehensive",
                severity="warning",
                category="protection",
                title="Missing Comprehensive Coverage",
                message=(
                    f"Your {name} is worth approximately {_money(value)} but has no "
                    f"comprehensive coverage"
                ),
                reasoning=(
                    "Comprehensive covers theft, vandalism, weather damage and other "
                    "non-collision incidents."
                ),
                recommendation="Add comprehensive coverage with a $500 deductible",
                source=VEHICLE_DATA_SOURCE,
                potential_risk=f"Could lose {_money(value)} to theft or weather damage",
                priority=3,
            ))
        return gaps

    def check_deductibles(self, coverage: CoverageBase) -> List[PolicyGap]:
        if not isinstance(coverage, AutoCoverage):
            return []
        recommended = self.tables.recommendations.deductibles
        gaps: List[PolicyGap] = []
        for kind, line, target in (
            ("collision", coverage.collision, recommended.collision),
            ("comprehensive", coverage.comprehensive, recommended.comprehensive),
        ):
            deductible = parse_money(line.deductible) if line else None
            if deductible is None or deductible <= target * 2:
                continue
            gaps.append(PolicyGap(
                id=f"high_{kind}_deductible",
                severity="optimization",
                category="cost",
                title=f"High {kind.capitalize()} Deductible",
                message=(
                    f"Your {_money(deductible)} {kind} deductible is higher than the "
                    f"recommended {_money(target)}"
                ),
                reasoning=recommended.reasoning,
                recommendation=(
                    f"Consider lowering to {_money(target)} if you can't afford "
                    f"{_money(deductible)} out of pocket"
                ),
                source=DEDUCTIBLE_SOURCE,
                priority=5,
            ))
        return gaps


def _gap_sort_key(gap: PolicyGap):
    return gap.priority, SEVERITY_RANK[gap.severity], gap.id


def analyze_policy(
    coverage: Union[CoverageBase, Dict[str, Any]],
    profile: Optional[QuoteProfile] = None,
    tables: Optional[RuleTables] = None,
    now: Optional[datetime] = None,
) -> PolicyAnalysis:
    """
    保單健檢

    Args:
        coverage: 保單資料（險種模型或掃描得到的 dict）
        profile: 報價資料，提供州別、駕駛年齡、房屋價值與環境風險
        tables: 規則表，預設使用內建規則表
        now: 分析時間（UTC），預設為現在

    Returns:
        PolicyAnalysis: 缺口依 (priority, 嚴重度, id) 排序
    """
    if isinstance(coverage, dict):
        coverage = parse_coverage_document(coverage)
    profile = profile if profile is not None else QuoteProfile()
    now = now or datetime.now(timezone.utc)

    analyzer = RuleBasedGapAnalyzer(tables or default_rule_tables(), today=now.date())
    gaps = sorted(analyzer.analyze(coverage, profile), key=_gap_sort_key)
    health_score = score_health(gaps)

    logger.info(f"Policy analysis complete: {len(gaps)} gaps, health score {health_score}/100")
    return PolicyAnalysis(
        health_score=health_score,
        gaps=gaps,
        summary=summarize_health(gaps, health_score),
        citations=analyzer.citations(coverage, profile, gaps),
        analyzed_at=now,
    )
