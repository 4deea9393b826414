"""
Aggregation views over a record collection.

Every function here is a pure function of the records it is given:
nothing is cached, so calling twice without an append in between
returns equal results.
"""
from collections import defaultdict
from decimal import Decimal, MAX_PREC, localcontext
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from expense_ai.domain.enums import Period
from expense_ai.domain.models import ExpenseRecord
from expense_ai.services.models import PeriodTotal


def decimal_sum(amounts: Iterable[Decimal]) -> Decimal:
    """Exact sum; the default 28-digit context would round large totals"""
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        return sum(amounts, Decimal("0"))


def running_total(records: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of all recorded amounts"""
    return decimal_sum(r.amount for r in records)


def category_totals(records: Iterable[ExpenseRecord]) -> Dict[str, Decimal]:
    """
    Total spending per category.

    Only categories with at least one record appear; the mapping is
    ordered by each category's first appearance in the collection.

    Example:
        records (food, 10), (food, 5), (transport, 3)
        -> {"food": Decimal("15"), "transport": Decimal("3")}
    """
    totals: Dict[str, Decimal] = defaultdict(Decimal)
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        for record in records:
            totals[record.category] += record.amount
    return dict(totals)


def top_categories(
    records: Iterable[ExpenseRecord],
    limit: Optional[int] = None
) -> List[Tuple[str, Decimal]]:
    """Category totals sorted by amount (descending)"""
    ranked = sorted(
        category_totals(records).items(),
        key=lambda x: x[1],
        reverse=True
    )
    return ranked[:limit] if limit is not None else ranked


def period_totals(
    records: Sequence[ExpenseRecord],
    period: Period = Period.MONTH,
    zero_fill: bool = False,
) -> List[PeriodTotal]:
    """
    Total spending per time bucket, in chronological order.

    Args:
        records: Records to aggregate
        period: Bucket size (day, month or year) applied to each record's date
        zero_fill: If True, include every bucket between the first and the
            last one, with a zero total for buckets without records.
            If False, such buckets are omitted.

    Returns:
        One PeriodTotal per bucket; empty when there are no records
    """
    if not records:
        return []

    freq = period.pandas_freq
    frame = pd.DataFrame({
        "date": pd.to_datetime(pd.Series([r.date for r in records])),
        "amount": pd.Series([r.amount for r in records], dtype=object),
    })
    buckets = frame["date"].dt.to_period(freq)

    grouped = frame.groupby(buckets)["amount"]
    totals = grouped.agg(decimal_sum)
    counts = grouped.size()

    if zero_fill:
        full_range = pd.period_range(
            start=totals.index.min(),
            end=totals.index.max(),
            freq=freq
        )
        totals = totals.reindex(full_range, fill_value=Decimal("0"))
        counts = counts.reindex(full_range, fill_value=0)

    return [
        PeriodTotal(
            period=str(bucket),
            start_date=bucket.start_time.date(),
            total=Decimal(total),
            count=int(counts[bucket]),
        )
        for bucket, total in totals.items()
    ]
