from dataclasses import dataclass
from typing import Iterable

from resultsheet.models.entities import FeeItem, FeeReceipt

PAID = "paid"
PENDING = "pending"


@dataclass(frozen=True)
class FeeSummary:
    total_paid: float
    total_due: float
    monthly_average: float
    receipt_count: int


def receipt_total(items: Iterable[FeeItem]) -> float:
    total = 0.0
    for item in items:
        if item.amount < 0:
            raise ValueError(f"Fee amount cannot be negative: {item.item_name}")
        total += item.amount
    return round(total, 2)


def receipt_due(total: float, paid: float) -> float:
    if paid < 0:
        raise ValueError("Paid amount cannot be negative")
    return round(max(total - paid, 0.0), 2)


def receipt_status(total: float, paid: float) -> str:
    return PAID if receipt_due(total, paid) == 0 else PENDING


def summarize_receipts(receipts: Iterable[FeeReceipt]) -> FeeSummary:
    """
    Totals across a student's receipts.

    monthly_average assumes one receipt per month, as issued by the fee desk.
    """
    total_paid = 0.0
    total_due = 0.0
    count = 0
    for receipt in receipts:
        total = receipt_total(receipt.items)
        total_paid += min(receipt.paid_amount, total)
        total_due += receipt_due(total, receipt.paid_amount)
        count += 1

    return FeeSummary(
        total_paid=round(total_paid, 2),
        total_due=round(total_due, 2),
        monthly_average=round(total_paid / count, 2) if count else 0.0,
        receipt_count=count,
    )
