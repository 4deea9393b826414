import pytest
from datetime import date
from decimal import Decimal
from typing import List

from expense_ai.domain.enums import Period
from expense_ai.domain.models import ExpenseRecord
from expense_ai.services import aggregation
from expense_ai.services.models import PeriodTotal

@pytest.mark.unit
class TestCategoryTotals:
    """Test the per-category view"""

    def test_sums_per_category(self, sample_records: List[ExpenseRecord]):
        # Act
        totals = aggregation.category_totals(sample_records)

        # Assert
        assert totals == {"food": Decimal("15"), "transport": Decimal("3")}

    def test_empty_categories_are_omitted(self, sample_records: List[ExpenseRecord]):
        totals = aggregation.category_totals(sample_records)

        assert "office" not in totals

    def test_ordered_by_first_appearance(self, make_record):
        records = [make_record("transport", "1"), make_record("food", "9"), make_record("transport", "2")]

        assert list(aggregation.category_totals(records)) == ["transport", "food"]

    def test_no_records(self):
        assert aggregation.category_totals([]) == {}

    def test_is_idempotent(self, sample_records: List[ExpenseRecord]):
        assert aggregation.category_totals(sample_records) == aggregation.category_totals(sample_records)

    def test_top_categories(self, make_record):
        records = [make_record("food", "5"), make_record("office", "50"), make_record("transport", "20")]

        assert aggregation.top_categories(records) == [
            ("office", Decimal("50")),
            ("transport", Decimal("20")),
            ("food", Decimal("5")),
        ]
        assert aggregation.top_categories(records, limit=1) == [("office", Decimal("50"))]


@pytest.mark.unit
class TestRunningTotal:

    def test_sum_of_amounts(self, sample_records: List[ExpenseRecord]):
        assert aggregation.running_total(sample_records) == Decimal("18")

    def test_empty_is_zero(self):
        assert aggregation.running_total([]) == Decimal("0")

    def test_large_amounts_are_summed_exactly(self, make_record):
        records = [make_record("office", "1" * 35), make_record("office", "1")]

        expected = Decimal("1" * 34 + "2")
        assert aggregation.running_total(records) == expected
        assert aggregation.category_totals(records) == {"office": expected}
        assert aggregation.period_totals(records)[0].total == expected


@pytest.mark.unit
class TestPeriodTotals:
    """Test the time-series view"""

    @pytest.fixture
    def spread_records(self, make_record) -> List[ExpenseRecord]:
        return [
            make_record("food", "10.00", on=date(2025, 1, 5)),
            make_record("food", "2.50", on=date(2025, 1, 20)),
            make_record("transport", "7.25", on=date(2025, 3, 2)),
        ]

    def test_monthly_buckets(self, spread_records: List[ExpenseRecord]):
        # Act
        buckets = aggregation.period_totals(spread_records, period=Period.MONTH)

        # Assert - February has no records and is omitted
        assert buckets == [
            PeriodTotal(period="2025-01", start_date=date(2025, 1, 1), total=Decimal("12.50"), count=2),
            PeriodTotal(period="2025-03", start_date=date(2025, 3, 1), total=Decimal("7.25"), count=1),
        ]

    def test_monthly_buckets_zero_filled(self, spread_records: List[ExpenseRecord]):
        buckets = aggregation.period_totals(spread_records, period=Period.MONTH, zero_fill=True)

        assert [b.period for b in buckets] == ["2025-01", "2025-02", "2025-03"]
        assert buckets[1].total == Decimal("0")
        assert buckets[1].count == 0
        assert buckets[1].start_date == date(2025, 2, 1)

    def test_daily_buckets(self, spread_records: List[ExpenseRecord]):
        buckets = aggregation.period_totals(spread_records, period=Period.DAY)

        assert [b.period for b in buckets] == ["2025-01-05", "2025-01-20", "2025-03-02"]
        assert sum(b.count for b in buckets) == 3

    def test_yearly_buckets(self, spread_records: List[ExpenseRecord], make_record):
        records = spread_records + [make_record("office", "100", on=date(2024, 12, 31))]

        buckets = aggregation.period_totals(records, period=Period.YEAR)

        assert [(b.period, b.total) for b in buckets] == [
            ("2024", Decimal("100")),
            ("2025", Decimal("19.75")),
        ]
        assert buckets[0].start_date == date(2024, 1, 1)

    def test_buckets_are_chronological_regardless_of_insertion(self, make_record):
        records = [
            make_record("food", "1", on=date(2025, 5, 1)),
            make_record("food", "2", on=date(2025, 2, 1)),
        ]

        buckets = aggregation.period_totals(records)

        assert [b.period for b in buckets] == ["2025-02", "2025-05"]

    def test_totals_stay_decimal(self, spread_records: List[ExpenseRecord]):
        buckets = aggregation.period_totals(spread_records, zero_fill=True)

        assert all(isinstance(b.total, Decimal) for b in buckets)

    def test_no_records(self):
        assert aggregation.period_totals([], zero_fill=True) == []

    def test_is_idempotent(self, spread_records: List[ExpenseRecord]):
        first = aggregation.period_totals(spread_records)
        second = aggregation.period_totals(spread_records)

        assert first == second
