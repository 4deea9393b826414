"""
Service layer models - DTOs for service operations.

These models represent the results of service operations, not domain entities.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Tuple
from expense_ai.domain.models import ExpenseRecord

@dataclass(frozen=True)
class PeriodTotal:
    """
    Spending for one time-series bucket.

    `period` is the bucket label ('2025-01' for a month, '2025' for a year,
    '2025-01-15' for a day); `start_date` is its first day.
    """
    period: str
    start_date: date
    total: Decimal
    count: int


@dataclass
class ScanResult:
    """
    Result of interpreting one receipt.

    Carries everything a UI needs to refresh after a scan:
    - The record just built
    - The whole session collection (snapshot)
    - Both aggregation views and the running total
    """
    record: ExpenseRecord
    records: Tuple[ExpenseRecord, ...]
    running_total: Decimal
    category_totals: Dict[str, Decimal] = field(default_factory=dict)
    period_totals: List[PeriodTotal] = field(default_factory=list)
    source: str = ""

    @property
    def record_count(self) -> int:
        return len(self.records)

    def __str__(self) -> str:
        "Human-readable summary"
        lines = [
            f"Scan summary for {self.source or 'raw text'}:",
            f" 🧾 {self.record.description}",
            f" 💵 Amount: ${self.record.amount:,.2f}",
            f" 🏷️ Category: {self.record.category} ({self.record.confidence:.0%})",
            f" 📊 Running total: ${self.running_total:,.2f} ({self.record_count} receipts)",
        ]

        return "\n".join(lines)

    def __post_init__(self):
        """Validate the new record is part of the snapshot"""
        if not self.records or self.records[-1] is not self.record:
            raise ValueError("ScanResult record must be the last record of the snapshot")
