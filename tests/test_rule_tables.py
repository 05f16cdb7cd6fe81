"""Tests for rule table loading."""

import pytest

from app.exceptions import RuleTableException
from app.services.rule_tables import default_rule_tables, load_rule_tables


class TestLoadRuleTables:
    def test_built_in_tables(self):
        tables = load_rule_tables()

        assert len(tables.state_minimums) == 51
        california = tables.get_state_requirement("ca")
        assert california.liability.shorthand() == "15/30/5"
        assert tables.recommendations.savings.rate == pytest.approx(0.2)

    def test_json_file(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(default_rule_tables().model_dump_json(), encoding="utf-8")

        assert load_rule_tables(str(path)) == default_rule_tables()

    def test_missing_file(self, tmp_path):
        with pytest.raises(RuleTableException) as exc_info:
            load_rule_tables(str(tmp_path / "missing.json"))

        assert exc_info.value.code == "RULE_TABLE_ERROR"
        assert exc_info.value.status_code == 500

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(RuleTableException):
            load_rule_tables(str(path))

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text('{"state_minimums": {}}', encoding="utf-8")

        with pytest.raises(RuleTableException):
            load_rule_tables(str(path))


class TestStateNotes:
    def test_notes_carried_for_noted_states(self):
        tables = load_rule_tables()

        noted = {code for code, req in tables.state_minimums.items() if req.notes}
        assert noted == {
            "AK", "CA", "DE", "FL", "HI", "KS", "KY", "MA", "ME",
            "MI", "MN", "ND", "NH", "NJ", "NY", "PA", "UT", "VA",
        }
        assert tables.get_state_requirement("CA").notes.startswith(
            "California has relatively low minimums"
        )

    def test_states_without_notes(self):
        assert load_rule_tables().get_state_requirement("TX").notes is None
