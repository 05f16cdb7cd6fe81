"""Tests for next-question selection."""

from itertools import combinations

import pytest

from app.models.profile import Completeness
from app.services.question_selector import question_for, select_next_question

# Reference total order: the selector must always return the earliest missing field.
REQUIRED_ORDER = [
    "number_of_drivers",
    "number_of_vehicles",
    "zip_code",
    "driver_1_age",
    "driver_2_age",
    "vehicle_1_year",
    "vehicle_1_make",
    "vehicle_1_model",
    "vehicle_2_year",
]
OPTIONAL_ORDER = [
    "driver_1_experience",
    "driver_2_experience",
    "driver_1_marital",
    "driver_1_violations",
    "vehicle_1_mileage",
    "coverage_level",
    "deductible_preference",
    "vehicle_1_use",
]
TOTAL_ORDER = REQUIRED_ORDER + OPTIONAL_ORDER


def _completeness(*fields: str) -> Completeness:
    return Completeness(
        score=0,
        missing_required=[f for f in fields if f in REQUIRED_ORDER],
        missing_optional=[f for f in fields if f in OPTIONAL_ORDER],
    )


class TestSelectNextQuestion:
    def test_counts_precede_entity_detail(self):
        completeness = _completeness("driver_2_age", "vehicle_1_year", "number_of_drivers")

        assert select_next_question(completeness) == "number_of_drivers"

    def test_drivers_before_vehicles(self):
        completeness = _completeness("vehicle_1_year", "driver_2_age")

        assert select_next_question(completeness) == "driver_2_age"

    def test_vehicle_fields_in_year_make_model_order(self):
        completeness = _completeness("vehicle_2_year", "vehicle_1_model", "vehicle_1_make")

        assert select_next_question(completeness) == "vehicle_1_make"

    def test_required_before_optional(self):
        completeness = Completeness(
            score=50,
            missing_required=["vehicle_3_model"],
            missing_optional=["driver_1_experience", "coverage_level"],
        )

        assert select_next_question(completeness) == "vehicle_3_model"

    def test_optional_field_order(self):
        remaining = list(reversed(OPTIONAL_ORDER))
        asked = []
        while remaining:
            field = select_next_question(_completeness(*remaining))
            asked.append(field)
            remaining.remove(field)

        assert asked == OPTIONAL_ORDER

    def test_entity_numbers_compare_numerically(self):
        completeness = Completeness(score=0, missing_required=["driver_10_age", "driver_2_age"])

        assert select_next_question(completeness) == "driver_2_age"

    def test_nothing_missing(self):
        assert select_next_question(Completeness(score=100, ready_for_quote=True)) is None

    def test_same_answer_twice(self):
        completeness = _completeness("zip_code", "driver_1_age", "coverage_level")

        assert select_next_question(completeness) == select_next_question(completeness)

    @pytest.mark.parametrize("size", [1, 2, 3])
    def test_always_earliest_in_total_order(self, size):
        for fields in combinations(TOTAL_ORDER, size):
            expected = min(fields, key=TOTAL_ORDER.index)

            assert select_next_question(_completeness(*reversed(fields))) == expected


class TestQuestionFor:
    def test_per_entity_template(self):
        assert question_for("driver_2_age") == "How old is driver 2?"
        assert question_for("vehicle_1_make") == "What make is vehicle 1? (Toyota, Honda, Ford, etc.)"

    def test_profile_level_template(self):
        assert question_for("zip_code") == "What ZIP code will the vehicles be garaged in?"

    def test_unknown_field(self):
        assert question_for("favorite_color") is None
        assert question_for(None) is None
