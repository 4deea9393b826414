import pytest
from decimal import Decimal
from typing import List

from expense_ai.domain.enums import Period
from expense_ai.domain.models import ExpenseRecord
from expense_ai.services.session import ExpenseSession

@pytest.mark.unit
class TestExpenseSession:
    """Test the append-only record collection"""

    def test_new_session_is_empty(self, session: ExpenseSession):
        assert len(session) == 0
        assert session.records == ()
        assert session.running_total == Decimal("0")
        assert session.category_totals() == {}
        assert session.period_totals() == []

    def test_append_keeps_order(self, session: ExpenseSession, sample_records: List[ExpenseRecord]):
        # Act
        for record in sample_records:
            session.append(record)

        # Assert
        assert session.records == tuple(sample_records)
        assert session.running_total == Decimal("18")
        assert session.category_totals() == {"food": Decimal("15"), "transport": Decimal("3")}

    def test_snapshot_does_not_change_after_append(self, session: ExpenseSession, make_record):
        session.append(make_record("food", "1"))
        snapshot = session.records

        session.append(make_record("food", "2"))

        assert len(snapshot) == 1
        assert len(session.records) == 2

    def test_append_rejects_non_records(self, session: ExpenseSession):
        with pytest.raises(TypeError):
            session.append({"amount": 3})

    def test_running_total_is_non_decreasing(self, session: ExpenseSession, make_record):
        totals = []
        for amount in ["4.00", "0", "12.30"]:
            session.append(make_record("food", amount))
            totals.append(session.running_total)

        assert totals == sorted(totals)

    def test_views_are_idempotent(self, session: ExpenseSession, sample_records: List[ExpenseRecord]):
        for record in sample_records:
            session.append(record)

        assert session.category_totals() == session.category_totals()
        assert session.period_totals() == session.period_totals()

    def test_reporting_defaults_from_config(self, make_record):
        session = ExpenseSession(reporting_config={"period": "year", "zero_fill": True})
        session.append(make_record("food", "5"))

        assert session.default_period is Period.YEAR
        assert session.default_zero_fill is True
        assert [b.period for b in session.period_totals()] == ["2025"]

    def test_explicit_period_overrides_default(self, session: ExpenseSession, make_record):
        session.append(make_record("food", "5"))

        assert [b.period for b in session.period_totals(period=Period.DAY)] == ["2025-01-15"]

    def test_bundled_reporting_config(self):
        session = ExpenseSession()

        assert session.default_period is Period.MONTH
        assert session.default_zero_fill is False

    def test_invalid_period_in_config(self):
        with pytest.raises(ValueError):
            ExpenseSession(reporting_config={"period": "fortnight"})
