import logging
from dataclasses import asdict, replace
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator, model_validator

from resultsheet.config.logging_config import configure_logging
from resultsheet.config.settings import settings
from resultsheet.core.fees import receipt_due, receipt_status, receipt_total, summarize_receipts
from resultsheet.core.gpa import AggregateResult, overall_grade
from resultsheet.core.grades import GradeResult, grade_for_percentage
from resultsheet.core.localization import EXAM_TYPES, exam_label, to_bengali_digits
from resultsheet.core.marks import resolve_obtained, summarize_marks
from resultsheet.models.entities import FeeItem, Student, Subject
from resultsheet.services.results_client import ResultsClient, ResultsClientError

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Resultsheet API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_origin_regex=settings.cors_allow_origin_regex or None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PercentagePayload(BaseModel):
    percentage: float


class SubjectPayload(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    name_bn: str = ""
    full_marks: int = Field(gt=0)
    pass_marks: int = Field(gt=0)
    obtained_marks: Optional[float] = Field(default=None, ge=0)
    mcq_marks: Optional[float] = Field(default=None, ge=0)
    written_marks: Optional[float] = Field(default=None, ge=0)
    practical_marks: Optional[float] = Field(default=None, ge=0)
    category: Literal["compulsory", "optional", "fourth_subject"] = "compulsory"

    @model_validator(mode="after")
    def check_marks(self) -> "SubjectPayload":
        if self.pass_marks > self.full_marks:
            raise ValueError("pass_marks cannot exceed full_marks")
        obtained = self.to_subject().obtained_marks
        if obtained is not None and obtained > self.full_marks:
            raise ValueError("obtained_marks cannot exceed full_marks")
        return self

    def to_subject(self) -> Subject:
        subject = Subject(
            id=self.id,
            name=self.name,
            name_bn=self.name_bn,
            full_marks=self.full_marks,
            pass_marks=self.pass_marks,
            obtained_marks=self.obtained_marks,
            category=self.category,
            mcq_marks=self.mcq_marks,
            written_marks=self.written_marks,
            practical_marks=self.practical_marks,
        )
        return replace(subject, obtained_marks=resolve_obtained(subject))


class StudentPayload(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    name_bn: str = ""
    roll: str = Field(min_length=1)
    class_name: str = Field(min_length=1)
    section: str = ""
    session: str = ""
    exam_type: str = "annual"
    guardian_name: str = ""
    institution: str = ""
    subjects: List[SubjectPayload] = Field(min_length=1)

    @field_validator("exam_type")
    @classmethod
    def check_exam_type(cls, value: str) -> str:
        if value not in EXAM_TYPES:
            raise ValueError(f"exam_type must be one of: {', '.join(EXAM_TYPES)}")
        return value

    @field_validator("subjects")
    @classmethod
    def check_unique_subjects(cls, value: List[SubjectPayload]) -> List[SubjectPayload]:
        ids = [subject.id for subject in value]
        if len(ids) != len(set(ids)):
            raise ValueError("subject ids must be unique per student")
        return value

    def to_student(self) -> Student:
        return Student(
            id=self.id,
            name=self.name,
            name_bn=self.name_bn,
            roll=self.roll,
            class_name=self.class_name,
            section=self.section,
            session=self.session,
            exam_type=self.exam_type,
            guardian_name=self.guardian_name,
            institution=self.institution,
            subjects=tuple(subject.to_subject() for subject in self.subjects),
        )


class BatchPayload(BaseModel):
    students: List[StudentPayload] = Field(min_length=1)


class FeeItemPayload(BaseModel):
    id: str = Field(min_length=1)
    item_name: str = Field(min_length=1)
    amount: float = Field(ge=0)
    description: str = ""


class ReceiptPayload(BaseModel):
    receipt_number: str = ""
    items: List[FeeItemPayload] = Field(min_length=1)
    paid_amount: float = Field(default=0, ge=0)


def _grade_dict(grade: GradeResult) -> Dict:
    return {
        "grade_point": grade.grade_point,
        "letter_grade": grade.letter_grade,
        "grade_bn": grade.grade_bn,
    }


def _result_dict(result: AggregateResult) -> Dict:
    return {
        "grade_point": result.grade_point,
        "letter_grade": result.letter_grade,
        "average_point": result.average_point,
        "average_grade": _grade_dict(result.average_grade),
        "included_count": result.included_count,
        "is_passed": result.is_passed,
        "failing_subjects": [subject.id for subject in result.failing_subjects],
        "subjects": [
            {
                "id": item.subject.id,
                "name": item.subject.name,
                "category": item.subject.category,
                "full_marks": item.subject.full_marks,
                "pass_marks": item.subject.pass_marks,
                "obtained_marks": item.subject.obtained_marks,
                "percentage": round(item.percentage, 2),
                "included": item.included,
                "failed": item.failed,
                **_grade_dict(item.grade),
            }
            for item in result.subject_grades
        ],
    }


def _marksheet(student: Student) -> Dict:
    result = overall_grade(student.subjects)
    summary = summarize_marks(student.subjects)
    logger.debug(
        "Evaluated marksheet student=%s gpa=%.2f letter=%s failing=%d",
        student.id,
        result.grade_point,
        result.letter_grade,
        len(result.failing_subjects),
    )
    return {
        "student": {
            "id": student.id,
            "name": student.name,
            "name_bn": student.name_bn,
            "roll": student.roll,
            "roll_bn": to_bengali_digits(student.roll),
            "class_name": student.class_name,
            "section": student.section,
            "session": student.session,
        },
        "exam": {
            "type": student.exam_type,
            "label": exam_label(student.exam_type, bengali=False),
            "label_bn": exam_label(student.exam_type),
        },
        "totals": {
            "total_full": summary.total_full,
            "total_obtained": summary.total_obtained,
            "percentage": summary.percentage,
        },
        "result": _result_dict(result),
    }


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/grades/lookup")
def lookup_grade(payload: PercentagePayload) -> Dict:
    return _grade_dict(grade_for_percentage(payload.percentage))


@app.post("/marksheets/evaluate")
def evaluate_marksheet(payload: StudentPayload) -> Dict:
    return _marksheet(payload.to_student())


@app.post("/marksheets/batch")
def evaluate_batch(payload: BatchPayload) -> List[Dict]:
    return [_marksheet(student.to_student()) for student in payload.students]


@app.post("/receipts/total")
def total_receipt(payload: ReceiptPayload) -> Dict:
    items = [
        FeeItem(id=item.id, item_name=item.item_name, amount=item.amount, description=item.description)
        for item in payload.items
    ]
    total = receipt_total(items)
    return {
        "receipt_number": payload.receipt_number,
        "total": total,
        "paid": payload.paid_amount,
        "due": receipt_due(total, payload.paid_amount),
        "status": receipt_status(total, payload.paid_amount),
    }


@app.get("/students/{student_id}/marksheet")
def student_marksheet(student_id: str) -> Dict:
    try:
        client = ResultsClient.from_settings()
        subjects = client.fetch_student_results(student_id)
    except ResultsClientError as exc:
        logger.warning("Could not load results for student %s: %s", student_id, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    result = overall_grade(subjects)
    return {
        "student_id": student_id,
        "totals": asdict(summarize_marks(subjects)),
        "result": _result_dict(result),
    }


@app.get("/fees/summary")
def fee_summary() -> Dict:
    try:
        receipts = ResultsClient.from_settings().fetch_fee_receipts()
    except ResultsClientError as exc:
        logger.warning("Could not load fee receipts: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    rows = []
    for receipt in receipts:
        total = receipt_total(receipt.items)
        rows.append(
            {
                "id": receipt.id,
                "receipt_number": receipt.receipt_number,
                "month": receipt.month,
                "total": total,
                "paid": receipt.paid_amount,
                "due": receipt_due(total, receipt.paid_amount),
                "status": receipt_status(total, receipt.paid_amount),
            }
        )
    return {**asdict(summarize_receipts(receipts)), "receipts": rows}
