"""
Module: grades

Purpose:
    Grade value models. `GradeState` is the immutable value/nil pair that
    the edit rule consumes and returns; `GradeComponent` is one labelled
    grade cell inside a student record.

Key Classes:
    - GradeState: Immutable {Nil, Value(text)} state
    - GradeComponent: Label + stored state, bound to its markup element

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.document.Student
    - editing.editor
    - importing.importer
    - output.exporter
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class GradeState:
    """
    Editable state of one grade cell.

    Attributes:
        value: Stored literal, verbatim. Always None when nil.
        nil: True when no grade is entered

    Invariants:
        - nil implies value is None

    Example:
        >>> GradeState.of("8.5")
        GradeState('8.5')
        >>> GradeState.empty().nil
        True
    """

    value: Optional[str]
    nil: bool

    def __post_init__(self) -> None:
        """Validate state on construction."""
        if self.nil and self.value is not None:
            raise ValueError(f"Nil grade state cannot carry a value: {self.value!r}")
        if not self.nil and self.value is None:
            raise ValueError("Non-nil grade state requires a value")

    @classmethod
    def empty(cls) -> GradeState:
        """The Nil state."""
        return cls(value=None, nil=True)

    @classmethod
    def of(cls, value: str) -> GradeState:
        """A Value state holding `value` exactly as given."""
        return cls(value=value, nil=False)

    def __repr__(self) -> str:
        return "GradeState(nil)" if self.nil else f"GradeState({self.value!r})"


@dataclass(eq=True)
class GradeComponent:
    """
    One grading criterion for one student.

    Attributes:
        label: Raw criterion name, unique within a normalized student
        value: Stored grade text (never parsed); None when nil
        nil: Explicit "no grade entered" marker
        element: Markup element this was parsed from (not compared)
    """

    label: str
    value: Optional[str] = None
    nil: bool = True
    element: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.nil:
            self.value = None
        elif self.value is None:
            self.value = ""

    @property
    def state(self) -> GradeState:
        """Current state as an immutable GradeState."""
        if self.nil:
            return GradeState.empty()
        return GradeState.of(self.value)

    def apply(self, state: GradeState) -> None:
        """Store `state` on this component."""
        self.nil = state.nil
        self.value = state.value
