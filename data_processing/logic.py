# clinic_reporting_root/data_processing/logic.py
# PURE REPORTING AGGREGATION LOGIC

"""
Houses the pure aggregation logic of the reporting core: revenue buckets,
headline KPIs, patient trends and dense revenue trend series.

Every function is a pure transformation of `(records, date_range)`. Records
are range-filtered first (calendar-date membership, time of day ignored),
so out-of-range rows never reach any output field, breakdown maps included.
Breakdown maps are sparse: only keys observed in the filtered data appear.
"""

import logging
from typing import Dict, List

import numpy as np
import pandas as pd

from .helpers import RecordsInput, prepare_patient_frame, prepare_revenue_frame
from .models import KPIReport, RevenueBucket, TrendReport
from .periods import DateRange, filter_by_range

logger = logging.getLogger(__name__)


def _sum_by(df: pd.DataFrame, key_col: str, value_col: str = 'amount') -> Dict[str, float]:
    """Sums `value_col` per distinct `key_col`, keys in order of first appearance."""
    if df.empty:
        return {}
    grouped = df.groupby(key_col, sort=False)[value_col].sum()
    return {str(key): float(value) for key, value in grouped.items()}


def aggregate_revenue_data(records: RecordsInput, date_range: DateRange) -> List[RevenueBucket]:
    """
    Buckets revenue records by calendar date within a range.

    Args:
        records (RecordsInput): Revenue records (models, mappings or a DataFrame).
        date_range (DateRange): Inclusive range; a (start, end) pair is accepted.

    Returns:
        One RevenueBucket per date that has in-range records, ascending by date.
        Dates without records produce no bucket.
    """
    date_range = DateRange.coerce(date_range)
    revenue_df = filter_by_range(prepare_revenue_frame(records), date_range)
    if revenue_df.empty:
        return []

    buckets = []
    # groupby keeps input row order within each date, so sums are reproducible.
    for day, day_df in revenue_df.groupby('date', sort=True):
        buckets.append(RevenueBucket(
            date=day.date(),
            total=float(day_df['amount'].sum()),
            by_source=_sum_by(day_df, 'source'),
            by_category=_sum_by(day_df, 'category'),
        ))
    logger.debug(f"Aggregated {len(revenue_df)} revenue records into {len(buckets)} daily buckets.")
    return buckets


def calculate_kpis(records: RecordsInput, date_range: DateRange) -> KPIReport:
    """
    Calculates range-level revenue KPIs.

    The daily average divides by every calendar day of the range, so days
    without revenue pull the average down.
    """
    date_range = DateRange.coerce(date_range)
    revenue_df = filter_by_range(prepare_revenue_frame(records), date_range)

    total_revenue = float(revenue_df['amount'].sum()) if not revenue_df.empty else 0.0
    avg_daily_revenue = total_revenue / date_range.days if date_range.days > 0 else 0.0

    return KPIReport(
        total_revenue=total_revenue,
        avg_daily_revenue=avg_daily_revenue,
        revenue_by_source=_sum_by(revenue_df, 'source'),
    )


def analyze_patient_trends(snapshots: RecordsInput, date_range: DateRange) -> TrendReport:
    """
    Summarizes new-patient intake and current retention over a range.

    Retention is a point-in-time ratio taken from the latest in-range snapshot
    only. When several snapshots share that latest date, the last one in
    input order wins.
    """
    date_range = DateRange.coerce(date_range)
    patient_df = filter_by_range(prepare_patient_frame(snapshots), date_range)
    if patient_df.empty:
        return TrendReport()

    total_new_patients = int(patient_df['new_patients'].sum())
    avg_new_patients_per_day = total_new_patients / date_range.days if date_range.days > 0 else 0.0

    latest = patient_df.loc[patient_df['date'] == patient_df['date'].max()].iloc[-1]
    active, inactive = int(latest['active_patients']), int(latest['inactive_patients'])
    total_patients = active + inactive
    retention_rate = (active / total_patients) * 100 if total_patients > 0 else 0.0

    return TrendReport(
        total_new_patients=total_new_patients,
        avg_new_patients_per_day=avg_new_patients_per_day,
        retention_rate=retention_rate,
    )


def calculate_revenue_trend(records: RecordsInput, date_range: DateRange, freq: str = 'D') -> pd.Series:
    """
    Calculates a dense revenue time series covering the whole range.

    Unlike `aggregate_revenue_data`, every period of the range is present;
    periods without revenue hold 0.

    Args:
        records (RecordsInput): Revenue records.
        date_range (DateRange): Inclusive range to cover.
        freq (str): The pandas resampling frequency (e.g., 'D', 'W-MON', 'MS').

    Returns:
        A float Series of summed revenue indexed by period start.
    """
    date_range = DateRange.coerce(date_range)
    revenue_df = filter_by_range(prepare_revenue_frame(records), date_range)

    full_index = pd.date_range(date_range.start_date, date_range.end_date, freq='D', name='date').as_unit('ns')

    if revenue_df.empty:
        daily = pd.Series(0.0, index=full_index, dtype=np.float64)
    else:
        daily = revenue_df.groupby('date')['amount'].sum()
        daily.index = pd.DatetimeIndex(daily.index).as_unit('ns')
        daily = daily.reindex(full_index, fill_value=0.0).astype(float)

    trend_series = daily.resample(freq).sum() if freq != 'D' else daily
    trend_series.name = 'revenue'
    return trend_series
