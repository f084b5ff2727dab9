# clinic_reporting_root/analytics/growth.py
# PERIOD-OVER-PERIOD GROWTH

import logging
from typing import Optional

from data_processing.helpers import RecordsInput
from data_processing.logic import calculate_kpis
from data_processing.models import KPIComparison
from data_processing.periods import DateRange, previous_range

logger = logging.getLogger(__name__)

GROWTH_FROM_ZERO_PCT = 100.0


def calculate_growth(current: float, previous: float) -> float:
    """
    Percentage change of `current` relative to `previous`.

    Growth from a zero baseline is reported as 100 when `current` is
    non-zero, and as 0 when both values are zero.
    """
    if previous == 0:
        return GROWTH_FROM_ZERO_PCT if current != 0 else 0.0
    return ((current - previous) / previous) * 100


def compare_kpis(
    records: RecordsInput,
    date_range: DateRange,
    previous: Optional[DateRange] = None
) -> KPIComparison:
    """
    Calculates KPIs for a range and its comparison range, with growth per metric.

    Args:
        records (RecordsInput): Revenue records spanning both ranges.
        date_range (DateRange): The current range.
        previous (DateRange, optional): The comparison range. Defaults to the
            same-length window immediately before `date_range`.

    Returns:
        A KPIComparison. Source growth covers every source seen in either
        period; a source missing from one side counts as 0 there.
    """
    date_range = DateRange.coerce(date_range)
    previous = previous_range(date_range) if previous is None else DateRange.coerce(previous)

    kpi_current = calculate_kpis(records, date_range)
    kpi_previous = calculate_kpis(records, previous)

    sources = list(kpi_current.revenue_by_source)
    sources += [s for s in kpi_previous.revenue_by_source if s not in kpi_current.revenue_by_source]
    source_growth = {
        source: calculate_growth(
            kpi_current.revenue_by_source.get(source, 0.0),
            kpi_previous.revenue_by_source.get(source, 0.0)
        )
        for source in sources
    }

    logger.debug(f"Compared KPIs {date_range.start_date}..{date_range.end_date} against {previous.start_date}..{previous.end_date}.")
    return KPIComparison(
        current=kpi_current,
        previous=kpi_previous,
        revenue_growth_pct=calculate_growth(kpi_current.total_revenue, kpi_previous.total_revenue),
        avg_daily_revenue_growth_pct=calculate_growth(kpi_current.avg_daily_revenue, kpi_previous.avg_daily_revenue),
        source_growth_pct=source_growth,
    )
