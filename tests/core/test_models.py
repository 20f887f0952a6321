"""
Unit Tests for the Document Models

Tests GradeState invariants, GradeComponent state handling and the
per-student label index.
"""

import pytest

from fg_grades.core.models import (
    ClassSection,
    Document,
    GradeComponent,
    GradeState,
    Student,
    normalize_roll,
)


class TestGradeState:
    """Tests for GradeState."""

    def test_empty_when_called_then_nil_without_value(self):
        state = GradeState.empty()
        assert state.nil is True
        assert state.value is None

    def test_of_when_called_then_value_kept_verbatim(self):
        state = GradeState.of("08.50")
        assert state.nil is False
        assert state.value == "08.50"

    def test_init_when_nil_with_value_then_raises_error(self):
        with pytest.raises(ValueError, match="cannot carry a value"):
            GradeState(value="5", nil=True)

    def test_init_when_frozen_then_immutable(self):
        state = GradeState.of("5")
        with pytest.raises(AttributeError):
            state.value = "6"  # type: ignore

    def test_repr_when_nil_and_value_then_concise(self):
        assert repr(GradeState.empty()) == "GradeState(nil)"
        assert repr(GradeState.of("7")) == "GradeState('7')"


class TestGradeComponent:
    """Tests for GradeComponent."""

    def test_init_when_nil_with_text_then_value_dropped(self):
        """nil means the value is absent, whatever text was stored."""
        comp = GradeComponent("Quiz", value="7", nil=True)
        assert comp.value is None
        assert comp.state == GradeState.empty()

    def test_apply_when_value_state_then_clears_nil(self):
        comp = GradeComponent("Quiz")
        comp.apply(GradeState.of("9"))
        assert comp.nil is False
        assert comp.value == "9"

    def test_eq_when_elements_differ_then_still_equal(self):
        """Bound elements are not part of content equality."""
        assert GradeComponent("Quiz", "7", nil=False, element=object()) == GradeComponent("Quiz", "7", nil=False)


class TestStudent:
    """Tests for Student label index."""

    def test_component_when_label_present_then_found(self):
        s = Student("A1", "Ann", [GradeComponent("Quiz", "7", nil=False)])
        assert s.component("Quiz").value == "7"
        assert s.component("Lab") is None

    def test_add_component_when_called_then_indexed(self):
        s = Student("A1", "Ann")
        s.add_component(GradeComponent("Lab"))
        assert s.has_label("Lab")
        assert s.labels() == ["Lab"]

    def test_component_when_duplicate_labels_then_first_wins(self):
        first = GradeComponent("Quiz", "1", nil=False)
        s = Student("A1", "Ann", [first, GradeComponent("Quiz", "2", nil=False)])
        assert s.component("Quiz") is first
        assert s.labels() == ["Quiz"]

    def test_ordered_components_when_label_missing_then_none_slot(self):
        s = Student("A1", "Ann", [GradeComponent("Final"), GradeComponent("Quiz")])
        ordered = s.ordered_components(["Quiz", "Lab", "Final"])
        assert [c.label if c else None for c in ordered] == ["Quiz", None, "Final"]

    def test_roll_key_when_padded_lowercase_then_normalized(self):
        assert Student("  a1 ", "Ann").roll_key == "A1"
        assert normalize_roll(" b2\t") == "B2"


class TestDocument:
    """Tests for Document helpers."""

    def test_iter_students_when_multiple_sections_then_document_order(self):
        doc = Document(
            semester="S1",
            sections=[
                ClassSection("Math", "1", [Student("A", "a"), Student("B", "b")]),
                ClassSection("Math", "2", [Student("C", "c")]),
            ],
        )
        assert [s.roll for s in doc.iter_students()] == ["A", "B", "C"]
        assert doc.student_count == 3

    def test_title_when_called_then_subject_dash_class(self):
        assert ClassSection("Physics", "10A").title == "Physics - 10A"
