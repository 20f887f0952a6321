"""
Unit Tests for Import Column Mapping

Tests roll column resolution and label auto-suggestion.
"""

import pytest

from fg_grades.importing.mapping import (
    ColumnMapping,
    MappingError,
    find_roll_column,
    match_column,
    resolve_roll_column,
    suggest_mapping,
)
from fg_grades.importing.table import ExternalTable, cell_text


class TestExternalTable:
    """Tests for ExternalTable and cell_text()."""

    def test_from_rows_when_rows_then_columns_from_first_row(self):
        table = ExternalTable.from_rows([{"Roll": "A1", "Quiz": 7}, {"Roll": "A2", "Extra": 1}])
        assert table.columns == ("Roll", "Quiz")
        assert len(table) == 2

    def test_from_rows_when_empty_then_no_columns(self):
        assert ExternalTable.from_rows([]).columns == ()

    def test_cell_when_column_undeclared_then_empty(self):
        table = ExternalTable.from_rows([{"Roll": "A1"}, {"Roll": "A2", "Extra": "x"}])
        assert table.cell(table.rows[1], "Extra") == ""

    @pytest.mark.parametrize(
        "value,text",
        [(None, ""), (8.0, "8"), (8.5, "8.5"), (12, "12"), ("A1", "A1"), (True, "TRUE")],
    )
    def test_cell_text_when_value_then_display_form(self, value, text):
        assert cell_text(value) == text


class TestResolveRollColumn:
    """Tests for roll column resolution."""

    def test_resolve_when_explicit_then_used(self):
        mapping = ColumnMapping(roll_column="Code")
        assert resolve_roll_column(mapping, ["Roll No", "Code"]) == "Code"

    def test_resolve_when_synonym_then_first_hit_in_column_order(self):
        assert resolve_roll_column(ColumnMapping(), ["Name", "MSSV", "Roll"]) == "MSSV"

    def test_resolve_when_synonym_case_differs_then_matches(self):
        assert find_roll_column(["Full name", "STUDENT ID"]) == "STUDENT ID"

    def test_resolve_when_midterm_column_then_not_taken_as_roll(self):
        assert find_roll_column(["Midterm", "Final"]) is None

    def test_resolve_when_nothing_matches_then_raises_mapping_error(self):
        with pytest.raises(MappingError, match="roll number column"):
            resolve_roll_column(ColumnMapping(), ["Name", "Quiz"])

    def test_resolve_when_custom_synonyms_then_used(self):
        assert find_roll_column(["Matrikel", "Note"], synonyms=("matrikel",)) == "Matrikel"


class TestSuggestMapping:
    """Tests for suggest_mapping()."""

    def test_suggest_when_display_text_in_column_then_mapped(self):
        mapping = suggest_mapping(
            ["[Đánh giá quá trình] Quiz", "Final"],
            ["Roll", "Quiz score", "FINAL"],
        )
        assert mapping.roll_column == "Roll"
        assert mapping.labels == {"[Đánh giá quá trình] Quiz": "Quiz score", "Final": "FINAL"}

    def test_suggest_when_ambiguous_then_first_declared_column_wins(self):
        mapping = suggest_mapping(["Quiz"], ["Roll", "Quiz 1", "Quiz 2"])
        assert mapping.column_for("Quiz") == "Quiz 1"

    def test_suggest_when_no_match_then_label_unmapped(self):
        mapping = suggest_mapping(["Lab"], ["Roll", "Quiz"])
        assert mapping.column_for("Lab") is None

    def test_suggest_when_base_given_then_user_choice_kept(self):
        base = ColumnMapping(roll_column="Code", labels={"Quiz": "Q-manual"})
        mapping = suggest_mapping(["Quiz", "Final"], ["Code", "Quiz", "Final"], base=base)

        assert mapping.roll_column == "Code"
        assert mapping.labels == {"Quiz": "Q-manual", "Final": "Final"}
        assert base.labels == {"Quiz": "Q-manual"}

    def test_suggest_when_label_matches_roll_column_then_skipped(self):
        mapping = suggest_mapping(["Roll call"], ["Roll", "Roll call bonus"])
        assert mapping.column_for("Roll call") == "Roll call bonus"

    def test_match_column_when_column_inside_label_then_matches(self):
        assert match_column("Midterm exam", ["Roll", "Midterm"]) == "Midterm"


class TestColumnMapping:
    """Tests for ColumnMapping edits."""

    def test_set_label_when_none_then_removed(self):
        mapping = ColumnMapping(labels={"Quiz": "Quiz"})
        mapping.set_label("Quiz", None)
        assert mapping.labels == {}

    def test_set_label_when_override_then_replaced(self):
        mapping = ColumnMapping(labels={"Quiz": "Quiz"})
        mapping.set_label("Quiz", "Quiz 2")
        assert mapping.column_for("Quiz") == "Quiz 2"
