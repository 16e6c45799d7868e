from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GradeResult:
    grade_point: float
    letter_grade: str
    grade_bn: str


# (minimum percentage, grade point, letter, Bengali label), highest band first
GRADE_BANDS: Tuple[Tuple[float, float, str, str], ...] = (
    (80, 5.0, "A+", "এ প্লাস"),
    (70, 4.0, "A", "এ"),
    (60, 3.5, "A-", "এ মাইনাস"),
    (50, 3.0, "B", "বি"),
    (40, 2.0, "C", "সি"),
    (33, 1.0, "D", "ডি"),
)

FAIL_GRADE = GradeResult(0.0, "F", "অকৃতকার্য")

FOURTH_SUBJECT_MIN_POINT = 2.0
MAX_GRADE_POINT = 5.0


def grade_for_percentage(percentage: float) -> GradeResult:
    """
    Map a percentage onto the NCTB grade table.

    The first band whose threshold the percentage reaches wins, so an exact
    boundary (e.g. 80) resolves to the higher band. Anything below 33,
    negative values and NaN all land on F.
    """
    for threshold, point, letter, label_bn in GRADE_BANDS:
        if percentage >= threshold:
            return GradeResult(point, letter, label_bn)
    return FAIL_GRADE


def subject_percentage(obtained_marks: float, full_marks: float) -> float:
    if full_marks <= 0:
        raise ValueError("full_marks must be greater than 0")
    return (obtained_marks / full_marks) * 100


def subject_grade(obtained_marks: float, full_marks: float) -> GradeResult:
    return grade_for_percentage(subject_percentage(obtained_marks, full_marks))

