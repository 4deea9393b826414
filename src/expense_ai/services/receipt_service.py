import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Type, Union

from expense_ai.domain.models import ExpenseRecord
from expense_ai.ocr.factory import OcrEngineFactory
from expense_ai.services.models import ScanResult
from expense_ai.services.record_builder import ExpenseRecordBuilder
from expense_ai.services.session import ExpenseSession

logger = logging.getLogger(__name__)


class InterpretationFailedError(Exception):
    """Raised when a receipt could not be turned into text."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not interpret {source}: {reason}")


class SubmissionInProgressError(Exception):
    """Raised when a receipt is submitted while another is being processed."""
    pass


class ReceiptService:
    """
    Runs receipts through OCR, interpretation and the session.

    One submission is processed at a time. A record is appended only
    once OCR has returned the full text; any OCR failure leaves the
    session untouched.
    """

    def __init__(
        self,
        session: ExpenseSession,
        builder: Optional[ExpenseRecordBuilder] = None,
        engine_factory: Type[OcrEngineFactory] = OcrEngineFactory,
    ):
        self.session = session
        self.builder = builder or ExpenseRecordBuilder()
        self.engine_factory = engine_factory
        self._submission_lock = threading.Lock()

    @property
    def is_busy(self) -> bool:
        """True while a submission is in flight"""
        return self._submission_lock.locked()

    @contextmanager
    def _submission(self):
        """Hold the single in-flight slot for one submission"""
        if not self._submission_lock.acquire(blocking=False):
            raise SubmissionInProgressError(
                "A receipt is already being processed, try again when it finishes"
            )
        try:
            yield
        finally:
            self._submission_lock.release()

    def record_text(self, text: str, source: Optional[str] = None) -> ScanResult:
        """
        Interpret already-recognized text and append the record.

        Args:
            text: Receipt text (may be empty)
            source: Optional name of the file the text came from

        Returns:
            ScanResult with the new record and the refreshed views

        Raises:
            SubmissionInProgressError: If another submission is still running
        """
        with self._submission():
            return self._record_text(text, source)

    def scan_receipt(
        self,
        filepath: Union[str, Path],
        engine_name: Optional[str] = None,
    ) -> ScanResult:
        """
        Scan a receipt file and record it.

        Args:
            filepath: Path to the receipt image, PDF or text file
            engine_name: Force a specific OCR engine instead of picking
                one by file extension

        Returns:
            ScanResult with the new record and the refreshed views

        Raises:
            SubmissionInProgressError: If another submission is still running
            InterpretationFailedError: If OCR failed; the session is unchanged
        """
        with self._submission():
            path = Path(filepath)
            text = self._recognize(path, engine_name)
            return self._record_text(text, source=path.name)

    def _record_text(self, text: str, source: Optional[str]) -> ScanResult:
        record = self.builder.build(text, source=source)
        self.session.append(record)

        logger.info(
            "Recorded %s: $%s as %s (confidence %.2f)",
            source or "text", record.amount, record.category, record.confidence
        )
        return self._result_for(record, source)

    def _recognize(self, path: Path, engine_name: Optional[str]) -> str:
        try:
            if engine_name:
                engine = self.engine_factory.create_engine(engine_name)
            else:
                engine = self.engine_factory.engine_for_file(path)

            logger.debug("Recognizing %s with %r", path, engine)
            return engine.extract_text(path)
        except Exception as e:
            logger.warning("OCR failed for %s: %s", path, e)
            raise InterpretationFailedError(path.name, str(e)) from e

    def _result_for(self, record: ExpenseRecord, source: Optional[str]) -> ScanResult:
        return ScanResult(
            record=record,
            records=self.session.records,
            running_total=self.session.running_total,
            category_totals=self.session.category_totals(),
            period_totals=self.session.period_totals(),
            source=source or "",
        )
