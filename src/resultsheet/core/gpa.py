from dataclasses import dataclass
from typing import Iterable, Tuple

from resultsheet.core.grades import (
    FAIL_GRADE,
    FOURTH_SUBJECT_MIN_POINT,
    MAX_GRADE_POINT,
    GradeResult,
    grade_for_percentage,
    subject_percentage,
)
from resultsheet.models.entities import FOURTH_SUBJECT, Subject


@dataclass(frozen=True)
class SubjectGrade:
    subject: Subject
    percentage: float
    grade: GradeResult
    included: bool
    failed: bool


@dataclass(frozen=True)
class AggregateResult:
    average_point: float
    average_grade: GradeResult
    grade_point: float
    letter_grade: str
    failing_subjects: Tuple[Subject, ...]
    subject_grades: Tuple[SubjectGrade, ...]
    included_count: int

    @property
    def is_passed(self) -> bool:
        return not self.failing_subjects


def _counts_toward_average(subject: Subject, grade: GradeResult) -> bool:
    # A weak fourth subject is left out rather than pulling the average down.
    return subject.category != FOURTH_SUBJECT or grade.grade_point >= FOURTH_SUBJECT_MIN_POINT


def grade_subjects(subjects: Iterable[Subject]) -> Tuple[SubjectGrade, ...]:
    graded = []
    for subject in subjects:
        if not subject.is_assessed:
            continue
        percentage = subject_percentage(subject.obtained_marks, subject.full_marks)
        grade = grade_for_percentage(percentage)
        graded.append(
            SubjectGrade(
                subject=subject,
                percentage=percentage,
                grade=grade,
                included=_counts_toward_average(subject, grade),
                failed=subject.is_failing,
            )
        )
    return tuple(graded)


def overall_grade(subjects: Iterable[Subject]) -> AggregateResult:
    """
    Aggregate one student's subjects into an overall GPA.

    Unassessed subjects (no obtained marks) are skipped entirely. The average
    of the counted grade points is rescaled to a pseudo-percentage
    (average / 5.0 * 100) and looked up again in the band table. Any failing
    subject forces the final result to 0.0 / F; the pre-override grade stays
    available as ``average_grade``.

    Records are expected to be validated upstream; a subject with
    non-positive full marks raises ValueError from subject_percentage
    instead of turning the average into NaN.
    """
    subject_grades = grade_subjects(subjects)

    total_points = 0.0
    included_count = 0
    for item in subject_grades:
        if item.included:
            total_points += item.grade.grade_point
            included_count += 1

    average = total_points / included_count if included_count else 0.0
    average_grade = grade_for_percentage((average / MAX_GRADE_POINT) * 100)

    failing = tuple(item.subject for item in subject_grades if item.failed)
    final_grade = FAIL_GRADE if failing else average_grade

    return AggregateResult(
        average_point=round(average, 2),
        average_grade=average_grade,
        grade_point=final_grade.grade_point,
        letter_grade=final_grade.letter_grade,
        failing_subjects=failing,
        subject_grades=subject_grades,
        included_count=included_count,
    )
