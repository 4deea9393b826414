import uuid
from datetime import date
from typing import Callable, Optional

from expense_ai.categorization import CategorizationEngine
from expense_ai.domain.models import ExpenseRecord
from expense_ai.extraction.amount import extract_amount, extract_description


def new_record_id() -> str:
    return uuid.uuid4().hex


class ExpenseRecordBuilder:
    """
    Turns raw receipt text into an ExpenseRecord.

    Amount extraction and categorization run on the same text and
    do not share state. The builder adds the description, today's
    date and a fresh id, and does no validation of its own.
    """

    def __init__(
        self,
        categorization_engine: Optional[CategorizationEngine] = None,
        clock: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._categorization_engine = categorization_engine
        self._clock = clock
        self._id_factory = id_factory

    @property
    def categorization_engine(self) -> CategorizationEngine:
        """Lazy-load categorization engine"""
        if self._categorization_engine is None:
            self._categorization_engine = CategorizationEngine()
        return self._categorization_engine

    def build(self, text: str, source: Optional[str] = None) -> ExpenseRecord:
        """
        Build one record from receipt text.

        Args:
            text: Raw OCR text (may be empty)
            source: Optional name of the file the text came from

        Returns:
            A new, immutable ExpenseRecord
        """
        text = text or ""
        amount = extract_amount(text)
        classification = self.categorization_engine.categorize(text)

        return ExpenseRecord(
            id=self._id_factory(),
            amount=amount,
            category=classification.category,
            description=extract_description(text),
            date=self._clock(),
            confidence=classification.confidence,
            source=source,
        )
