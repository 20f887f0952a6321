import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import fg_grades
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from fg_grades.core.codec import encode  # noqa: E402


# Section A grades Quiz/Final, section B grades Quiz/Lab.
# B2 has no Lab entry; A1's Final is nil.
REPORT_XML = """<?xml version="1.0" encoding="utf-8"?>
<GradeReport xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" version="3">
  <Semester>Fall 2025</Semester>
  <SubjectClassGrade>
    <Subject>Physics</Subject>
    <Class>10A</Class>
    <Students>
      <Student>
        <Roll>A1</Roll>
        <Name>Ann Le</Name>
        <Grades>
          <GradeComponent>
            <Component>Quiz</Component>
            <Grade>7.5</Grade>
            <Weight>30</Weight>
          </GradeComponent>
          <GradeComponent>
            <Component>Final</Component>
            <Grade xsi:nil="true" />
          </GradeComponent>
        </Grades>
      </Student>
      <Student>
        <Roll>a2</Roll>
        <Name>Bao Tran</Name>
        <Grades>
          <GradeComponent>
            <Component>Quiz</Component>
            <Grade>4</Grade>
          </GradeComponent>
          <GradeComponent>
            <Component>Final</Component>
            <Grade>9.25</Grade>
          </GradeComponent>
        </Grades>
      </Student>
    </Students>
  </SubjectClassGrade>
  <SubjectClassGrade>
    <Subject>Physics</Subject>
    <Class>10B</Class>
    <Students>
      <Student>
        <Roll>B1</Roll>
        <Name>Chi Pham</Name>
        <Grades>
          <GradeComponent>
            <Component>Quiz</Component>
            <Grade>10</Grade>
          </GradeComponent>
          <GradeComponent>
            <Component>Lab</Component>
            <Grade>6</Grade>
          </GradeComponent>
        </Grades>
      </Student>
      <Student>
        <Roll>B2</Roll>
        <Name>Dung Vo</Name>
        <Grades>
          <GradeComponent>
            <Component>Quiz</Component>
            <Grade>8</Grade>
          </GradeComponent>
        </Grades>
      </Student>
    </Students>
  </SubjectClassGrade>
</GradeReport>
"""


@pytest.fixture
def report_xml() -> str:
    """Two-section grade report with differing component schemas."""
    return REPORT_XML


@pytest.fixture
def report_container(report_xml: str) -> str:
    """The sample report wrapped as .fg container text."""
    return encode(report_xml)
