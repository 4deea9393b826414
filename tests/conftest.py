import pytest
from datetime import date
from decimal import Decimal
from itertools import count
from pathlib import Path
from typing import List

from expense_ai.categorization import CategorizationEngine
from expense_ai.domain.models import ExpenseRecord
from expense_ai.ocr.factory import OcrEngineFactory
from expense_ai.services.record_builder import ExpenseRecordBuilder
from expense_ai.services.session import ExpenseSession

PIZZA_RECEIPT = """Mario's Pizza Place
Lunch special
Subtotal 38.50
Tax $3.10
Total $42.50
"""

TAXI_RECEIPT = """City Taxi Co.
Fare 18.00
Parking 4.00
TOTAL 22.00
"""

@pytest.fixture
def pizza_text() -> str:
    return PIZZA_RECEIPT

@pytest.fixture
def taxi_text() -> str:
    return TAXI_RECEIPT

@pytest.fixture
def engine() -> CategorizationEngine:
    """Engine with the bundled default taxonomy"""
    return CategorizationEngine()

@pytest.fixture
def today() -> date:
    return date(2025, 3, 14)

@pytest.fixture
def builder(engine: CategorizationEngine, today: date) -> ExpenseRecordBuilder:
    """Builder with a fixed clock"""
    return ExpenseRecordBuilder(categorization_engine=engine, clock=lambda: today)

@pytest.fixture
def session() -> ExpenseSession:
    """Empty session with explicit reporting defaults"""
    return ExpenseSession(reporting_config={"period": "month", "zero_fill": False})

@pytest.fixture
def make_record():
    """Factory for records with sequential ids"""
    ids = count(1)

    def _make(category: str, amount: str, on: date = date(2025, 1, 15)) -> ExpenseRecord:
        return ExpenseRecord(
            id=f"rec-{next(ids)}",
            amount=Decimal(amount),
            category=category,
            description=f"{category} receipt",
            date=on,
            confidence=0.7,
        )

    return _make

@pytest.fixture
def sample_records(make_record) -> List[ExpenseRecord]:
    return [
        make_record("food", "10"),
        make_record("food", "5"),
        make_record("transport", "3"),
    ]

@pytest.fixture
def pizza_receipt_file(tmp_path: Path) -> Path:
    """Receipt text as an OCR engine would have produced it"""
    path = tmp_path / "pizza.txt"
    path.write_text(PIZZA_RECEIPT, encoding="utf-8")
    return path

@pytest.fixture
def taxi_receipt_file(tmp_path: Path) -> Path:
    path = tmp_path / "taxi.txt"
    path.write_text(TAXI_RECEIPT, encoding="utf-8")
    return path

@pytest.fixture
def clean_engine_registry():
    """Empty, unlocked OCR engine registry; cleaned again afterwards"""
    OcrEngineFactory.reset()
    yield OcrEngineFactory
    OcrEngineFactory.reset()
