from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from expense_ai.config.settings import ConfigLoader
from expense_ai.domain.enums import Period
from expense_ai.domain.models import ExpenseRecord
from expense_ai.services import aggregation
from expense_ai.services.models import PeriodTotal


class ExpenseSession:
    """
    Append-only collection of the records built during one session.

    `append` is the only mutator. Readers get tuple snapshots, and every
    derived view (running total, category totals, period totals) is
    recomputed from the records on each call.

    Usage:
        session = ExpenseSession()
        session.append(record)
        session.running_total
        session.category_totals()
        session.period_totals(Period.MONTH, zero_fill=True)
    """

    def __init__(self, reporting_config: Optional[Dict[str, Any]] = None):
        """
        Args:
            reporting_config: Optional reporting config dict with default
                `period` and `zero_fill`. If None, loads from ConfigLoader.
        """
        self._records: List[ExpenseRecord] = []

        if reporting_config is None:
            reporting_config = ConfigLoader.load_reporting_config()

        self.default_period = Period(reporting_config.get("period", Period.MONTH.value))
        self.default_zero_fill = bool(reporting_config.get("zero_fill", False))

    def append(self, record: ExpenseRecord) -> None:
        """Add one record to the end of the collection."""
        if not isinstance(record, ExpenseRecord):
            raise TypeError(f"Expected ExpenseRecord, got {type(record).__name__}")
        self._records.append(record)

    @property
    def records(self) -> Tuple[ExpenseRecord, ...]:
        """Snapshot of the collection in insertion order"""
        return tuple(self._records)

    @property
    def running_total(self) -> Decimal:
        return aggregation.running_total(self._records)

    def category_totals(self) -> Dict[str, Decimal]:
        return aggregation.category_totals(self._records)

    def top_categories(self, limit: Optional[int] = None):
        return aggregation.top_categories(self._records, limit=limit)

    def period_totals(
        self,
        period: Optional[Period] = None,
        zero_fill: Optional[bool] = None,
    ) -> List[PeriodTotal]:
        """Time-series view; unspecified options use the reporting config."""
        return aggregation.period_totals(
            self._records,
            period=period or self.default_period,
            zero_fill=self.default_zero_fill if zero_fill is None else zero_fill,
        )

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ExpenseSession({len(self._records)} records, total=${self.running_total})"
