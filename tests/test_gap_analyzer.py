"""Tests for rule-based policy gap analysis."""

import pytest

from app.exceptions import CoverageDocumentException

from app.models.coverage import (
    AutoCoverage,
    HomeCoverage,
    LiabilityBreakdown,
    PhysicalDamageCoverage,
    RentersCoverage,
)
from app.models.profile import (
    AssetProfile,
    DriverProfile,
    ProfileBasics,
    QuoteProfile,
    RiskAssessment,
    VehicleProfile,
)
from app.services.gap_analyzer import (
    RuleBasedGapAnalyzer,
    analyze_policy,
    estimate_vehicle_value,
)

from conftest import NOW, TODAY


def _profile(state=None, **kwargs) -> QuoteProfile:
    return QuoteProfile(basics=ProfileBasics(state=state), **kwargs)


def _ids(analysis):
    return [gap.id for gap in analysis.gaps]


class TestStateCompliance:
    """Liability limits and mandatory coverages against state minimums."""

    def test_california_10_20_3_has_exactly_two_critical_gaps(self, rule_tables):
        coverage = AutoCoverage(liability="10/20/3", uninsured_motorist="15/30")

        analysis = analyze_policy(coverage, _profile("CA"), tables=rule_tables, now=NOW)
        critical = [gap for gap in analysis.gaps if gap.severity == "critical"]

        assert [gap.id for gap in critical] == ["state_minimum_bi_person", "state_minimum_pd"]
        assert analysis.gaps[:2] == critical
        assert all(gap.priority == 1 and gap.category == "compliance" for gap in critical)

    def test_per_accident_shortfall_only(self, rule_tables):
        analyzer = RuleBasedGapAnalyzer(rule_tables, today=TODAY)

        gaps = analyzer.check_state_compliance(AutoCoverage(liability="15/25/5"), _profile("CA"))

        assert [gap.id for gap in gaps] == ["state_minimum_bi_accident"]

    def test_structured_liability(self, rule_tables):
        coverage = AutoCoverage(
            liability=LiabilityBreakdown(bodily_injury="$10K", property_damage="$3K"),
        )
        analyzer = RuleBasedGapAnalyzer(rule_tables, today=TODAY)

        gaps = analyzer.check_state_compliance(coverage, _profile("CA"))

        assert [gap.id for gap in gaps] == ["state_minimum_bi_person", "state_minimum_pd"]

    def test_state_falls_back_to_coverage_document(self, rule_tables):
        analyzer = RuleBasedGapAnalyzer(rule_tables, today=TODAY)

        gaps = analyzer.check_state_compliance(
            AutoCoverage(liability="10/20/3", state="CA"), _profile()
        )

        assert len(gaps) == 2

    def test_unknown_state_skips_compliance(self, rule_tables):
        analysis = analyze_policy(
            AutoCoverage(liability="10/20/3"), _profile("ZZ"), tables=rule_tables, now=NOW
        )

        assert not any(gap.category == "compliance" for gap in analysis.gaps)

    def test_unparseable_liability_skips_only_limit_checks(self, rule_tables):
        analyzer = RuleBasedGapAnalyzer(rule_tables, today=TODAY)

        gaps = analyzer.check_state_compliance(
            AutoCoverage(liability="see declarations page"), _profile("FL")
        )

        assert [gap.id for gap in gaps] == ["missing_required_pip"]

    def test_required_um(self, rule_tables):
        analyzer = RuleBasedGapAnalyzer(rule_tables, today=TODAY)

        gaps = analyzer.check_state_compliance(AutoCoverage(liability="100/300/100"), _profile("IL"))

        assert [gap.id for gap in gaps] == ["missing_required_um"]

    def test_home_policy_is_not_checked_for_compliance(self, rule_tables):
        analyzer = RuleBasedGapAnalyzer(rule_tables, today=TODAY)

        assert analyzer.check_state_compliance(HomeCoverage(liability="$10,000"), _profile("CA")) == []


class TestRiskRules:
    def test_earthquake_above_threshold_without_coverage(self, rule_tables):
        profile = _profile(risk_assessment=RiskAssessment(earthquake_risk=0.85))

        analysis = analyze_policy(
            HomeCoverage(dwelling_coverage="$500,000"), profile, tables=rule_tables, now=NOW
        )

        gap = next(g for g in analysis.gaps if g.id == "earthquake_risk_uncovered")
        assert gap.severity == "warning"
        assert gap.priority == 2

    def test_threshold_is_exclusive(self, rule_tables):
        profile = _profile(risk_assessment=RiskAssessment(earthquake_risk=0.8))

        analysis = analyze_policy(HomeCoverage(), profile, tables=rule_tables, now=NOW)

        assert "earthquake_risk_uncovered" not in _ids(analysis)

    def test_earthquake_coverage_closes_the_gap(self, rule_tables):
        profile = _profile(risk_assessment=RiskAssessment(earthquake_risk=0.95))

        analysis = analyze_policy(
            RentersCoverage(earthquake="$20,000"), profile, tables=rule_tables, now=NOW
        )

        assert "earthquake_risk_uncovered" not in _ids(analysis)

    def test_crime_risk_on_auto_without_comprehensive(self, rule_tables):
        profile = _profile(risk_assessment=RiskAssessment(crime_risk=0.9))

        analysis = analyze_policy(AutoCoverage(), profile, tables=rule_tables, now=NOW)

        gap = next(g for g in analysis.gaps if g.id == "crime_risk_uncovered")
        assert gap.priority == 3

    def test_comprehensive_covers_auto_perils(self, rule_tables):
        profile = _profile(risk_assessment=RiskAssessment(
            crime_risk=0.9, flood_risk=0.9, wildfire_risk=0.9, earthquake_risk=0.9,
        ))
        coverage = AutoCoverage(comprehensive=PhysicalDamageCoverage(deductible="$500"))

        analysis = analyze_policy(coverage, profile, tables=rule_tables, now=NOW)

        assert not any(gap_id.endswith("_risk_uncovered") for gap_id in _ids(analysis))


class TestLifeStageRules:
    def test_young_driver_without_um(self, rule_tables):
        profile = QuoteProfile(
            basics=ProfileBasics(driver_count=1),
            drivers=[DriverProfile(age=22)],
        )

        analysis = analyze_policy(
            AutoCoverage(liability="100/300/100"), profile, tables=rule_tables, now=NOW
        )

        gap = next(g for g in analysis.gaps if g.id == "young_driver_um")
        assert gap.priority == 3
        assert gap.severity == "warning"

    def test_young_driver_with_um(self, rule_tables):
        profile = QuoteProfile(
            basics=ProfileBasics(driver_count=1),
            drivers=[DriverProfile(age=22)],
        )
        coverage = AutoCoverage(liability="100/300/100", uninsured_motorist="100/300")

        analysis = analyze_policy(coverage, profile, tables=rule_tables, now=NOW)

        assert "young_driver_um" not in _ids(analysis)

    def test_homeowner_without_umbrella(self, rule_tables):
        profile = _profile(assets=AssetProfile(home_value=400000))

        analysis = analyze_policy(
            AutoCoverage(liability="100/300/100"), profile, tables=rule_tables, now=NOW
        )

        gap = next(g for g in analysis.gaps if g.id == "homeowner_umbrella")
        assert gap.priority == 4
        assert gap.severity == "optimization"
        assert gap.potential_savings == -225

    def test_umbrella_present(self, rule_tables):
        profile = _profile(assets=AssetProfile(home_value=400000))
        coverage = AutoCoverage(liability="100/300/100", umbrella="$1,000,000")

        analysis = analyze_policy(coverage, profile, tables=rule_tables, now=NOW)

        assert "homeowner_umbrella" not in _ids(analysis)

    def test_high_value_home_with_low_liability(self, rule_tables):
        profile = _profile(assets=AssetProfile(home_value=800000))

        analysis = analyze_policy(
            HomeCoverage(liability="$100,000"), profile, tables=rule_tables, now=NOW
        )

        assert "high_value_home_liability" in _ids(analysis)


class TestFinancialRules:
    def test_twenty_percent_savings_estimate(self, rule_tables):
        analysis = analyze_policy(
            AutoCoverage(total_premium="$1200"), _profile(), tables=rule_tables, now=NOW
        )

        gap = next(g for g in analysis.gaps if g.id == "premium_savings_opportunity")
        assert gap.potential_savings == pytest.approx(240)
        assert gap.severity == "optimization"
        assert gap.priority == 3

    def test_no_premium_no_gap(self, rule_tables):
        analysis = analyze_policy(AutoCoverage(), _profile(), tables=rule_tables, now=NOW)

        assert "premium_savings_opportunity" not in _ids(analysis)


class TestVehicleAndDeductibleRules:
    def test_old_vehicle_with_physical_damage_coverage(self, rule_tables):
        profile = QuoteProfile(
            basics=ProfileBasics(vehicle_count=1),
            vehicles=[VehicleProfile(year=2008, make="honda", model="Civic", enriched=True)],
        )
        coverage = AutoCoverage(collision=PhysicalDamageCoverage(deductible="$500"))

        analysis = analyze_policy(coverage, profile, tables=rule_tables, now=NOW)

        gap = next(g for g in analysis.gaps if g.id == "drop_collision_comprehensive")
        assert gap.potential_savings == 450

    def test_newer_vehicle_without_physical_damage_coverage(self, rule_tables):
        profile = QuoteProfile(
            basics=ProfileBasics(vehicle_count=1),
            vehicles=[VehicleProfile(year=2024, make="tesla", model="Model 3", enriched=True)],
        )

        analysis = analyze_policy(AutoCoverage(), profile, tables=rule_tables, now=NOW)

        assert {"missing_collision", "missing_comprehensive"} <= set(_ids(analysis))

    def test_vehicle_rules_need_enriched_data(self, rule_tables):
        profile = QuoteProfile(
            basics=ProfileBasics(vehicle_count=1),
            vehicles=[VehicleProfile(year=2024, make="tesla", model="Model 3")],
        )

        analysis = analyze_policy(AutoCoverage(), profile, tables=rule_tables, now=NOW)

        assert "missing_collision" not in _ids(analysis)

    def test_high_collision_deductible(self, rule_tables):
        coverage = AutoCoverage(collision=PhysicalDamageCoverage(deductible="$2,500"))

        analysis = analyze_policy(coverage, _profile(), tables=rule_tables, now=NOW)

        gap = next(g for g in analysis.gaps if g.id == "high_collision_deductible")
        assert gap.priority == 5

    def test_estimated_vehicle_value(self):
        assert estimate_vehicle_value(2026, TODAY, 40000) == 40000
        assert estimate_vehicle_value(2024, TODAY, 40000) == 28900


class TestAnalysisResult:
    def test_gaps_sorted_by_priority(self, rule_tables):
        profile = QuoteProfile(
            basics=ProfileBasics(state="CA", driver_count=1),
            drivers=[DriverProfile(age=22)],
            assets=AssetProfile(home_value=900000),
            risk_assessment=RiskAssessment(crime_risk=0.9, flood_risk=0.7),
        )
        coverage = AutoCoverage(liability="10/20/3", total_premium="$1,800")

        analysis = analyze_policy(coverage, profile, tables=rule_tables, now=NOW)
        priorities = [gap.priority for gap in analysis.gaps]

        assert priorities == sorted(priorities)
        assert 0 <= analysis.health_score <= 100

    def test_citations_sorted_and_unique(self, rule_tables):
        analysis = analyze_policy(
            AutoCoverage(liability="10/20/3", total_premium="$1200"),
            _profile("CA"),
            tables=rule_tables,
            now=NOW,
        )

        assert analysis.citations == sorted(set(analysis.citations))
        assert "California Department of Insurance" in analysis.citations

    def test_dict_coverage_defaults_to_auto(self, rule_tables):
        analysis = analyze_policy({"liability": "10/20/3"}, _profile("CA"), tables=rule_tables, now=NOW)

        assert "state_minimum_pd" in _ids(analysis)
        assert analysis.analyzed_at == NOW

    def test_clean_policy_scores_full_marks(self, rule_tables):
        coverage = AutoCoverage(
            liability="100/300/100",
            uninsured_motorist="100/300",
            collision=PhysicalDamageCoverage(deductible="$500"),
            comprehensive=PhysicalDamageCoverage(deductible="$500"),
        )

        analysis = analyze_policy(coverage, _profile("CA"), tables=rule_tables, now=NOW)

        assert analysis.gaps == []
        assert analysis.health_score == 100


class TestScannedCoverageShapes:
    """Scanner output with numbers, booleans and bare strings in typed fields."""

    def test_numeric_premium(self, rule_tables):
        analysis = analyze_policy(
            {"liability": "15/30/5", "total_premium": 1200}, None, tables=rule_tables, now=NOW
        )

        gap = next(g for g in analysis.gaps if g.id == "premium_savings_opportunity")
        assert gap.potential_savings == pytest.approx(240)

    def test_float_premium(self, rule_tables):
        analysis = analyze_policy({"total_premium": 1499.5}, None, tables=rule_tables, now=NOW)

        gap = next(g for g in analysis.gaps if g.id == "premium_savings_opportunity")
        assert gap.potential_savings == pytest.approx(299.9)

    def test_numeric_liability_skips_only_limit_checks(self, rule_tables):
        analysis = analyze_policy(
            {"liability": 25, "state": "NY"}, None, tables=rule_tables, now=NOW
        )

        ids = _ids(analysis)
        assert "state_minimum_bi_person" not in ids
        assert "state_minimum_pd" not in ids
        assert {"missing_required_pip", "missing_required_um"} <= set(ids)

    def test_numeric_structured_liability(self, rule_tables):
        analysis = analyze_policy(
            {"liability": {"bodily_injury": 10000, "property_damage": 3000}},
            _profile("CA"),
            tables=rule_tables,
            now=NOW,
        )

        assert {"state_minimum_bi_person", "state_minimum_pd"} <= set(_ids(analysis))

    @pytest.mark.parametrize("value", ["Included", True, "$500 deductible", 500])
    def test_physical_damage_as_single_value(self, rule_tables, value):
        profile = QuoteProfile(
            basics=ProfileBasics(vehicle_count=1),
            vehicles=[VehicleProfile(year=2024, make="tesla", model="Model 3", enriched=True)],
        )

        analysis = analyze_policy(
            {"collision": value, "comprehensive": value}, profile, tables=rule_tables, now=NOW
        )

        ids = _ids(analysis)
        assert "missing_collision" not in ids
        assert "missing_comprehensive" not in ids

    @pytest.mark.parametrize("value", [False, "Declined", "", None, 0])
    def test_physical_damage_declined(self, rule_tables, value):
        profile = QuoteProfile(
            basics=ProfileBasics(vehicle_count=1),
            vehicles=[VehicleProfile(year=2024, make="tesla", model="Model 3", enriched=True)],
        )

        analysis = analyze_policy({"collision": value}, profile, tables=rule_tables, now=NOW)

        assert "missing_collision" in _ids(analysis)

    def test_boolean_um_counts_as_present(self, rule_tables):
        profile = QuoteProfile(
            basics=ProfileBasics(driver_count=1), drivers=[DriverProfile(age=21)]
        )

        analysis = analyze_policy(
            {"uninsured_motorist": True}, profile, tables=rule_tables, now=NOW
        )

        assert "young_driver_um" not in _ids(analysis)

    def test_coverage_names_as_plain_list(self, rule_tables):
        analysis = analyze_policy(
            {"coverages": ["Personal Injury Protection", "Uninsured Motorist"], "state": "NY"},
            None,
            tables=rule_tables,
            now=NOW,
        )

        ids = _ids(analysis)
        assert "missing_required_pip" not in ids
        assert "missing_required_um" not in ids

    def test_insurance_type_is_case_insensitive(self, rule_tables):
        analysis = analyze_policy(
            {"insurance_type": "Home", "total_premium": 900}, None, tables=rule_tables, now=NOW
        )

        assert "premium_savings_opportunity" in _ids(analysis)

    def test_unknown_insurance_type(self, rule_tables):
        with pytest.raises(CoverageDocumentException) as exc_info:
            analyze_policy({"insurance_type": "boat"}, None, tables=rule_tables, now=NOW)

        assert exc_info.value.code == "INVALID_COVERAGE_DOCUMENT"
        assert exc_info.value.status_code == 422
        assert "boat" in exc_info.value.message

    def test_unreadable_field_raises_descriptive_error(self, rule_tables):
        with pytest.raises(CoverageDocumentException) as exc_info:
            analyze_policy({"coverages": "collision"}, None, tables=rule_tables, now=NOW)

        assert exc_info.value.details[0]["field"].startswith("auto -> coverages")
