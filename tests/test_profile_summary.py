"""Tests for the human-readable profile summary."""

from app.models.profile import (
    CoverageProfile,
    DriverProfile,
    ProfileBasics,
    QuoteProfile,
    VehicleProfile,
)
from app.services.completeness import evaluate_completeness
from app.services.fact_extractor import extract_facts
from app.services.profile_accumulator import merge_profile
from app.services.profile_summary import format_profile_summary

from conftest import TODAY, user_turns


class TestProfileSummary:
    def test_empty_profile(self):
        summary = format_profile_summary(QuoteProfile())

        assert summary.startswith("## Your Quote Profile\n")
        assert "### Basic Information 🔄" in summary
        assert "- **Vehicles:** Not specified" in summary
        assert "- **Location:** Not specified" in summary
        assert "### Vehicles" not in summary
        assert "### Drivers" not in summary
        assert "### Coverage Preferences" not in summary
        assert "- **Score:** 0%" in summary
        assert "- **Ready for quotes:** ❌ No" in summary
        assert "- **Missing required:** 3 items" in summary

    def test_conversation_scenario(self):
        turns = user_turns("I'm 35", "2019 Honda Civic", "just me", "1 vehicle", "zip 94105")
        profile = merge_profile(None, extract_facts(turns, today=TODAY))

        summary = format_profile_summary(profile)

        assert "### Basic Information ✅" in summary
        assert "- **Location:** 94105" in summary
        assert "**Vehicle 1** ✅:\n- 2019 honda Civic" in summary
        assert "**Driver 1** ✅:\n- Age 35" in summary
        assert "- **Ready for quotes:** ✅ Yes" in summary
        assert "Missing required" not in summary

    def test_pending_entities(self):
        profile = QuoteProfile(
            basics=ProfileBasics(vehicle_count=2, driver_count=1, state="TX"),
            vehicles=[VehicleProfile(year=2020), VehicleProfile()],
            drivers=[DriverProfile()],
        )

        summary = format_profile_summary(profile)

        assert "- **Location:** TX" in summary
        assert "### Vehicles 🔄" in summary
        assert "**Vehicle 1** ⏳:\n- 2020 ____ ____" in summary
        assert "**Vehicle 2** ⏳:\n\n" in summary
        assert "**Driver 1** ⏳:" in summary

    def test_driver_and_vehicle_details(self):
        profile = QuoteProfile(
            basics=ProfileBasics(vehicle_count=1, driver_count=2, zip_code="78701"),
            vehicles=[VehicleProfile(
                year=2021, make="toyota", model="Camry", annual_mileage=12000,
                primary_use="commute",
            )],
            drivers=[
                DriverProfile(age=42, years_licensed=25, marital_status="married",
                              has_violations=False),
                DriverProfile(age=19, has_violations=True, violation_details=["speeding"]),
            ],
        )

        summary = format_profile_summary(profile)

        assert "- 12,000 miles/year" in summary
        assert "- Used for commute" in summary
        assert "- Age 42, 25 years licensed\n- Married\n- Clean record" in summary
        assert "- Age 19\n- Has violations" in summary

    def test_coverage_preferences(self):
        profile = QuoteProfile(
            coverage=CoverageProfile(
                current_carrier="GEICO", current_premium=150, desired_coverage="full",
                deductible=1000,
            ),
        )

        summary = format_profile_summary(profile)

        assert "### Coverage Preferences" in summary
        assert "- Current carrier: GEICO" in summary
        assert "- Current premium: $150/month" in summary
        assert "- Coverage level: full" in summary
        assert "- Deductible: $1,000" in summary

    def test_uses_stored_completeness(self):
        profile = QuoteProfile(basics=ProfileBasics(vehicle_count=1))
        profile = profile.model_copy(update={"completeness": evaluate_completeness(profile)})

        summary = format_profile_summary(profile)

        missing = len(profile.completeness.missing_required)
        assert f"- **Missing required:** {missing} items" in summary
