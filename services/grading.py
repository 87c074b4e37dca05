"""
services/grading.py

Grade conversion & GPA aggregation.

- Letter grade -> grade point on the 10-point and 4.0 scales
- SGPA: credit-weighted average of one semester
- YGPA: pooled credit-weighted average of the semesters of one academic year
- DGPA: weighted average of YGPAs (years 3+ weigh 1.5 when 4 or more years exist)

Everything here is pure: no DB, no I/O. Callers pass in already-loaded records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple


# =========================================================
# 1) Grades / scales
# =========================================================

class Grade(str, Enum):
    O = "O"
    E = "E"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class Scale(str, Enum):
    TEN = "10"
    FOUR = "4.0"


# Fixed policy table. Changing a value here is a policy change.
GRADE_POINTS = {
    Scale.TEN: {
        Grade.O: 10.0, Grade.E: 9.0, Grade.A: 8.0, Grade.B: 7.0,
        Grade.C: 6.0, Grade.D: 5.0, Grade.F: 2.0,
    },
    Scale.FOUR: {
        Grade.O: 4.0, Grade.E: 4.0, Grade.A: 3.5, Grade.B: 3.0,
        Grade.C: 2.5, Grade.D: 2.0, Grade.F: 0.0,
    },
}

GRADE_DESCRIPTIONS = {
    Grade.O: "Outstanding",
    Grade.E: "Excellent",
    Grade.A: "Very Good",
    Grade.B: "Good",
    Grade.C: "Average",
    Grade.D: "Below Average",
    Grade.F: "Fail",
}

# marks band each letter is awarded for
GRADE_MARK_RANGES = {
    Grade.O: ">=90",
    Grade.E: "80-89",
    Grade.A: "70-79",
    Grade.B: "60-69",
    Grade.C: "50-59",
    Grade.D: "40-49",
    Grade.F: "<40",
}

CGPA_DECIMALS = 2
SENIOR_YEAR_WEIGHT = 1.5
FULL_PROGRAMME_YEARS = 4
UNKNOWN_YEAR = "Other"


# =========================================================
# 2) Errors
# =========================================================

class GradingError(ValueError):
    """Base class for invalid engine input"""
    code = "GRADING_ERROR"

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class InvalidGrade(GradingError):
    code = "INVALID_GRADE"

    def __init__(self, value):
        super().__init__(f"Invalid grade: {value!r} (expected one of O, E, A, B, C, D, F)", value)


class InvalidCredits(GradingError):
    code = "INVALID_CREDITS"

    def __init__(self, value):
        super().__init__(f"Invalid credits: {value!r} (expected a positive integer)", value)


class InvalidScale(GradingError):
    code = "INVALID_SCALE"

    def __init__(self, value):
        super().__init__(f"Invalid scale: {value!r} (expected '10' or '4.0')", value)


def to_grade(value) -> Grade:
    if isinstance(value, Grade):
        return value
    try:
        return Grade(value)
    except ValueError:
        raise InvalidGrade(value) from None


def to_scale(value) -> Scale:
    if isinstance(value, Scale):
        return value
    if value in ("4", 4, 4.0):
        return Scale.FOUR
    if value == 10:
        return Scale.TEN
    try:
        return Scale(value)
    except ValueError:
        raise InvalidScale(value) from None


def check_credits(value) -> int:
    # bool is an int subclass; True is not a credit count
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidCredits(value)
    return value


# =========================================================
# 3) Grade point / SGPA
# =========================================================

@dataclass(frozen=True)
class SubjectResult:
    """Minimal subject input: anything with `credits` and `grade` works too"""
    credits: int
    grade: Grade


@dataclass(frozen=True)
class SemesterTotals:
    credit_index: float
    credits: int


def grade_point(scale, grade) -> float:
    return GRADE_POINTS[to_scale(scale)][to_grade(grade)]


def credit_index(scale, subjects: Iterable) -> float:
    """CI = sum(grade point x credits)"""
    scale = to_scale(scale)
    return sum(grade_point(scale, s.grade) * check_credits(s.credits) for s in subjects)


def total_credits(subjects: Iterable) -> int:
    return sum(check_credits(s.credits) for s in subjects)


def semester_totals(scale, subjects: Iterable) -> SemesterTotals:
    subjects = list(subjects)
    return SemesterTotals(
        credit_index=credit_index(scale, subjects),
        credits=total_credits(subjects),
    )


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def semester_gpa(scale, subjects: Iterable) -> float:
    totals = semester_totals(scale, subjects)
    return _ratio(totals.credit_index, totals.credits)


def cached_cgpa(subjects: Iterable) -> Tuple[float, float]:
    """(10-scale, 4.0-scale) SGPA rounded the way it is stored on a semester"""
    subjects = list(subjects)
    return (
        round(semester_gpa(Scale.TEN, subjects), CGPA_DECIMALS),
        round(semester_gpa(Scale.FOUR, subjects), CGPA_DECIMALS),
    )


@dataclass(frozen=True)
class SubjectPoints:
    grade: Grade
    credits: int
    gp_10: float
    gp_4: float
    ci_10: float
    ci_4: float


def subject_points(subject) -> SubjectPoints:
    """Grade point and credit index of one subject on both scales"""
    grade = to_grade(subject.grade)
    credits = check_credits(subject.credits)
    gp_10 = GRADE_POINTS[Scale.TEN][grade]
    gp_4 = GRADE_POINTS[Scale.FOUR][grade]
    return SubjectPoints(grade, credits, gp_10, gp_4, gp_10 * credits, gp_4 * credits)


# =========================================================
# 4) YGPA / DGPA
# =========================================================

def year_gpa(scale, semesters: Iterable[SemesterTotals]) -> float:
    """Pooled over every subject of the year, not the mean of the SGPAs"""
    to_scale(scale)
    ci, credits = 0.0, 0
    for totals in semesters:
        ci += totals.credit_index
        credits += totals.credits
    return _ratio(ci, credits)


def year_weights(year_count: int) -> List[float]:
    """
    Weight per year group, by position.
    - fewer than 4 groups: every year 1.0
    - 4 or more: years 1, 2 -> 1.0, years 3+ -> 1.5
    """
    if year_count < FULL_PROGRAMME_YEARS:
        return [1.0] * year_count
    return [1.0 if idx < 2 else SENIOR_YEAR_WEIGHT for idx in range(year_count)]


def weight_rationale(weight: float) -> str:
    if weight == SENIOR_YEAR_WEIGHT:
        return "Years 3 and 4 of a full programme: higher weight for increased academic rigour"
    return "Foundation year, or a programme with fewer than 4 years saved: standard weight"


def degree_gpa(scale, year_gpas: Sequence[float]) -> float:
    to_scale(scale)
    weights = year_weights(len(year_gpas))
    weighted = sum(ygpa * w for ygpa, w in zip(year_gpas, weights))
    return _ratio(weighted, sum(weights))


# =========================================================
# 5) Grouping helpers
# =========================================================

def _as_int(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def academic_year_for_semester(semester) -> Optional[str]:
    """Semester 1, 2 -> year 1; 3, 4 -> year 2; ..."""
    num = _as_int(semester)
    if num is None or num <= 0:
        return None
    return str(math.ceil(num / 2))


def year_tag(record) -> str:
    year = getattr(record, "year", None)
    if year is not None and str(year).strip():
        return str(year).strip()
    return academic_year_for_semester(getattr(record, "semester", None)) or UNKNOWN_YEAR


def _numeric_sort_key(value):
    num = _as_int(value)
    # numeric tags first, the rest alphabetically after them
    return (0, num, "") if num is not None else (1, 0, str(value or ""))


def group_by_year(semesters: Iterable) -> List[Tuple[str, list]]:
    groups = {}
    for record in semesters:
        groups.setdefault(year_tag(record), []).append(record)
    ordered = []
    for tag in sorted(groups, key=_numeric_sort_key):
        members = sorted(groups[tag], key=lambda r: _numeric_sort_key(getattr(r, "semester", None)))
        ordered.append((tag, members))
    return ordered


def format_ordinal(value) -> str:
    if value is None or str(value) == "":
        return ""
    text = str(value)
    num = _as_int(text)
    # only whole numbers get a suffix: "1a" and "Other" are returned as typed
    if num is None:
        return text
    if 10 <= num % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")
    return f"{text}{suffix}"


# =========================================================
# 6) Degree summary
# =========================================================

@dataclass(frozen=True)
class SemesterSummary:
    semester: Optional[str]
    year: str
    credits: int
    subject_count: int
    credit_index_10: float
    credit_index_4: float
    sgpa_10: float
    sgpa_4: float


@dataclass(frozen=True)
class YearSummary:
    year: str
    weight: float
    credits: int
    subject_count: int
    ygpa_10: float
    ygpa_4: float
    semesters: Tuple[SemesterSummary, ...]


@dataclass(frozen=True)
class DegreeSummary:
    dgpa_10: float
    dgpa_4: float
    credits: int
    subject_count: int
    semester_count: int
    years: Tuple[YearSummary, ...]


def summarize_semester(record, tag: Optional[str] = None) -> SemesterSummary:
    subjects = list(record.subjects)
    ten = semester_totals(Scale.TEN, subjects)
    four = semester_totals(Scale.FOUR, subjects)
    return SemesterSummary(
        semester=getattr(record, "semester", None),
        year=tag or year_tag(record),
        credits=ten.credits,
        subject_count=len(subjects),
        credit_index_10=ten.credit_index,
        credit_index_4=four.credit_index,
        sgpa_10=_ratio(ten.credit_index, ten.credits),
        sgpa_4=_ratio(four.credit_index, four.credits),
    )


def summarize_degree(semesters: Iterable) -> DegreeSummary:
    """
    Build the full SGPA -> YGPA -> DGPA breakdown for one student.
    `semesters` are records with `semester`, `year` and `subjects`.
    """
    grouped = group_by_year(semesters)
    weights = year_weights(len(grouped))

    years = []
    for (tag, records), weight in zip(grouped, weights):
        sems = tuple(summarize_semester(r, tag) for r in records)
        years.append(YearSummary(
            year=tag,
            weight=weight,
            credits=sum(s.credits for s in sems),
            subject_count=sum(s.subject_count for s in sems),
            ygpa_10=year_gpa(Scale.TEN, [SemesterTotals(s.credit_index_10, s.credits) for s in sems]),
            ygpa_4=year_gpa(Scale.FOUR, [SemesterTotals(s.credit_index_4, s.credits) for s in sems]),
            semesters=sems,
        ))

    return DegreeSummary(
        dgpa_10=degree_gpa(Scale.TEN, [y.ygpa_10 for y in years]),
        dgpa_4=degree_gpa(Scale.FOUR, [y.ygpa_4 for y in years]),
        credits=sum(y.credits for y in years),
        subject_count=sum(y.subject_count for y in years),
        semester_count=sum(len(y.semesters) for y in years),
        years=tuple(years),
    )
