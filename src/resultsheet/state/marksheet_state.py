from dataclasses import dataclass, replace
from typing import Optional

from resultsheet.core.gpa import AggregateResult, overall_grade
from resultsheet.core.localization import EXAM_TYPES
from resultsheet.models.entities import Student

MARKSHEET_TABS = ("generate", "batch", "templates", "history")


@dataclass(frozen=True)
class MarksheetViewState:
    active_tab: str = "generate"
    exam_type: str = "annual"
    student: Optional[Student] = None
    compare_with_previous: bool = False
    show_institution_rules: bool = True
    is_loading: bool = False


def select_tab(state: MarksheetViewState, tab: str) -> MarksheetViewState:
    if tab not in MARKSHEET_TABS:
        raise ValueError(f"Unknown marksheet tab: {tab}")
    return replace(state, active_tab=tab)


def set_exam_type(state: MarksheetViewState, exam_type: str) -> MarksheetViewState:
    if exam_type not in EXAM_TYPES:
        raise ValueError(f"Unknown exam type: {exam_type}")
    return replace(state, exam_type=exam_type)


def toggle_compare(state: MarksheetViewState) -> MarksheetViewState:
    return replace(state, compare_with_previous=not state.compare_with_previous)


def toggle_institution_rules(state: MarksheetViewState) -> MarksheetViewState:
    return replace(state, show_institution_rules=not state.show_institution_rules)


def load_student(state: MarksheetViewState, student: Student) -> MarksheetViewState:
    return replace(state, student=student)


def update_obtained_marks(
    state: MarksheetViewState,
    subject_id: str,
    obtained_marks: Optional[float],
) -> MarksheetViewState:
    if state.student is None:
        raise ValueError("No student loaded")

    subjects = list(state.student.subjects)
    for idx, subject in enumerate(subjects):
        if subject.id == subject_id:
            if obtained_marks is not None and not 0 <= obtained_marks <= subject.full_marks:
                raise ValueError(
                    f"obtained_marks must be between 0 and {subject.full_marks} for {subject.name}"
                )
            subjects[idx] = replace(subject, obtained_marks=obtained_marks)
            return replace(state, student=replace(state.student, subjects=tuple(subjects)))

    raise ValueError(f"Unknown subject: {subject_id}")


def start_loading(state: MarksheetViewState) -> MarksheetViewState:
    return replace(state, is_loading=True)


def finish_loading(state: MarksheetViewState) -> MarksheetViewState:
    return replace(state, is_loading=False)


def result_for(state: MarksheetViewState) -> AggregateResult:
    subjects = state.student.subjects if state.student is not None else ()
    return overall_grade(subjects)
