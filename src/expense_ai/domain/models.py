from dataclasses import dataclass
from decimal import Decimal
from datetime import date
from typing import Optional

@dataclass(frozen=True)
class Classification:
    """Result of scoring a text against the category taxonomy"""
    category: str
    confidence: float
    score: int = 0


@dataclass(frozen=True)
class ExpenseRecord:
    """Core domain model representing one interpreted receipt"""
    id: str
    amount: Decimal
    category: str
    description: str
    date: date
    confidence: float
    source: Optional[str] = None

    def __repr__(self):
        return (
            f"ExpenseRecord({self.date}, {self.description[:30]}, "
            f"{self.category}, ${self.amount})"
        )
