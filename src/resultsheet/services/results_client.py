import logging
from typing import Any, Dict, List, Optional

import requests
from requests import RequestException

from resultsheet.config.settings import settings
from resultsheet.core.marks import default_pass_marks
from resultsheet.models.entities import COMPULSORY, SUBJECT_CATEGORIES, FeeItem, FeeReceipt, Subject

logger = logging.getLogger(__name__)


class ResultsClientError(Exception):
    pass


class ResultsClient:
    RESULTS_PATH = "/api/students/results"
    FEE_RECEIPTS_PATH = "/api/fee-receipts"
    FEE_ITEMS_PATH = "/api/fee-items"

    def __init__(self, base_url: str, api_token: str = "", timeout: float = 15) -> None:
        if not base_url:
            raise ResultsClientError("Missing RESULTSHEET_API_URL in environment")
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "ResultsClient":
        return cls(settings.results_api_url, settings.results_api_token, settings.results_api_timeout)

    def fetch_student_results(self, student_id: Optional[str] = None) -> List[Subject]:
        params = {"studentId": student_id} if student_id else None
        rows = self._get(self.RESULTS_PATH, params=params)
        if not isinstance(rows, list):
            raise ResultsClientError("Expected a list of result rows")
        return [self._to_subject(row) for row in rows]

    def fetch_fee_receipts(self) -> List[FeeReceipt]:
        receipts = self._get(self.FEE_RECEIPTS_PATH)
        items = self._get(self.FEE_ITEMS_PATH)
        if not isinstance(receipts, list) or not isinstance(items, list):
            raise ResultsClientError("Expected lists of fee receipts and fee items")

        items_by_receipt: Dict[str, List[FeeItem]] = {}
        for row in items:
            try:
                receipt_id = str(row["receiptId"])
                item = FeeItem(
                    id=str(row["id"]),
                    item_name=str(row.get("itemName") or ""),
                    amount=float(row["amount"]),
                    description=str(row.get("description") or ""),
                )
                if item.amount < 0:
                    raise ValueError("amount cannot be negative")
            except (KeyError, TypeError, ValueError) as exc:
                raise ResultsClientError(f"Malformed fee item row: {row!r}") from exc
            items_by_receipt.setdefault(receipt_id, []).append(item)

        result = []
        for row in receipts:
            try:
                receipt_id = str(row["id"])
                paid_amount = float(row.get("paidAmount") or 0)
                if paid_amount < 0:
                    raise ValueError("paidAmount cannot be negative")
                result.append(
                    FeeReceipt(
                        id=receipt_id,
                        receipt_number=str(row.get("receiptNumber") or ""),
                        items=tuple(items_by_receipt.get(receipt_id, [])),
                        paid_amount=paid_amount,
                        month=str(row.get("month") or ""),
                        academic_year=str(row.get("academicYear") or ""),
                        payment_method=str(row.get("paymentMethod") or ""),
                    )
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise ResultsClientError(f"Malformed fee receipt row: {row!r}") from exc
        return result

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        try:
            res = requests.get(url, headers=headers, params=params, timeout=self.timeout)
        except RequestException as exc:
            logger.warning("GET %s failed: %s", url, exc)
            raise ResultsClientError("RESULTS_SERVICE_UNAVAILABLE") from exc
        try:
            data = res.json()
        except ValueError as exc:
            raise ResultsClientError("RESULTS_SERVICE_UNAVAILABLE") from exc

        if res.status_code >= 400:
            message = data.get("error") or data.get("message") if isinstance(data, dict) else None
            logger.warning("GET %s returned %s", url, res.status_code)
            raise ResultsClientError(str(message or f"HTTP_{res.status_code}"))

        return data

    @staticmethod
    def _to_subject(row: Dict[str, Any]) -> Subject:
        try:
            subject_info = row.get("subject") or {}
            subject_id = str(subject_info.get("id") or row["subjectId"])
            full_marks = int(row["totalMarks"])
            if full_marks <= 0:
                raise ValueError("totalMarks must be greater than 0")

            raw_pass = row.get("passMarks")
            pass_marks = int(raw_pass) if raw_pass is not None else default_pass_marks(full_marks)
            if not 0 < pass_marks <= full_marks:
                raise ValueError("passMarks must be between 1 and totalMarks")

            raw_obtained = row.get("marksObtained")
            obtained = float(raw_obtained) if raw_obtained is not None else None
            if obtained is not None and not 0 <= obtained <= full_marks:
                raise ValueError("marksObtained must be between 0 and totalMarks")

            category = str(row.get("category") or COMPULSORY)
            if category not in SUBJECT_CATEGORIES:
                raise ValueError(f"Unknown category: {category}")
            return Subject(
                id=subject_id,
                name=str(subject_info.get("name") or ""),
                full_marks=full_marks,
                pass_marks=pass_marks,
                obtained_marks=obtained,
                category=category,
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ResultsClientError(f"Malformed result row: {row!r}") from exc
