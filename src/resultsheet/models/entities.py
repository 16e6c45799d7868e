from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

COMPULSORY = "compulsory"
OPTIONAL = "optional"
FOURTH_SUBJECT = "fourth_subject"

SUBJECT_CATEGORIES: Tuple[str, ...] = (COMPULSORY, OPTIONAL, FOURTH_SUBJECT)


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    full_marks: int
    pass_marks: int
    obtained_marks: float | None = None
    category: str = COMPULSORY
    name_bn: str = ""
    mcq_marks: float | None = None
    written_marks: float | None = None
    practical_marks: float | None = None

    @property
    def is_assessed(self) -> bool:
        return self.obtained_marks is not None

    @property
    def is_failing(self) -> bool:
        return self.obtained_marks is not None and self.obtained_marks < self.pass_marks


@dataclass(frozen=True)
class Student:
    id: str
    name: str
    roll: str
    class_name: str
    section: str = ""
    session: str = ""
    exam_type: str = "annual"
    subjects: Tuple[Subject, ...] = field(default_factory=tuple)
    name_bn: str = ""
    guardian_name: str = ""
    institution: str = ""


@dataclass(frozen=True)
class FeeItem:
    id: str
    item_name: str
    amount: float
    description: str = ""


@dataclass(frozen=True)
class FeeReceipt:
    id: str
    receipt_number: str
    items: Tuple[FeeItem, ...] = field(default_factory=tuple)
    paid_amount: float = 0.0
    month: str = ""
    academic_year: str = ""
    payment_method: str = ""
