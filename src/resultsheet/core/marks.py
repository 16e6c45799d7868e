import math
from dataclasses import dataclass
from typing import Iterable, Optional

from resultsheet.models.entities import Subject

PASS_RATIO = 0.33


@dataclass(frozen=True)
class MarksSummary:
    total_full: float
    total_obtained: float
    percentage: float


def combined_obtained(
    mcq_marks: Optional[float] = None,
    written_marks: Optional[float] = None,
    practical_marks: Optional[float] = None,
) -> Optional[float]:
    parts = [m for m in (mcq_marks, written_marks, practical_marks) if m is not None]
    if not parts:
        return None
    return float(sum(parts))


def resolve_obtained(subject: Subject) -> Optional[float]:
    if subject.obtained_marks is not None:
        return subject.obtained_marks
    return combined_obtained(subject.mcq_marks, subject.written_marks, subject.practical_marks)


def default_pass_marks(full_marks: int) -> int:
    if full_marks <= 0:
        raise ValueError("full_marks must be greater than 0")
    # round() first so 100 * 0.33 lands on 33, not 34
    return int(math.ceil(round(full_marks * PASS_RATIO, 6)))


def summarize_marks(subjects: Iterable[Subject], *, round_to: int = 2) -> MarksSummary:
    total_full = 0.0
    total_obtained = 0.0
    for subject in subjects:
        if subject.obtained_marks is None:
            continue
        total_full += subject.full_marks
        total_obtained += subject.obtained_marks

    if total_full <= 0:
        return MarksSummary(0.0, 0.0, 0.0)
    return MarksSummary(
        total_full=total_full,
        total_obtained=total_obtained,
        percentage=round((total_obtained / total_full) * 100, round_to),
    )
