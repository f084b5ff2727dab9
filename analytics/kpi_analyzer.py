# clinic_reporting_root/analytics/kpi_analyzer.py
# KPI ANALYSIS TABLE - PERIOD-OVER-PERIOD

import logging
from typing import Optional

import pandas as pd

from data_processing.helpers import RecordsInput
from data_processing.logic import analyze_patient_trends, calculate_kpis
from data_processing.periods import DateRange, previous_range
from .formatting import format_currency, format_percentage_change
from .growth import calculate_growth

logger = logging.getLogger(__name__)

ANALYSIS_COLUMNS = ["Metric", "Current", "Previous", "Change", "Current (MAD)", "Previous (MAD)"]


def generate_kpi_analysis_table(
    revenue_records: RecordsInput,
    date_range: DateRange,
    patient_snapshots: Optional[RecordsInput] = None,
    previous: Optional[DateRange] = None
) -> pd.DataFrame:
    """
    Performs a period-over-period KPI analysis and returns one row per metric.

    Patient rows are included only when `patient_snapshots` is given. The
    comparison range defaults to the same-length window before `date_range`.
    """
    date_range = DateRange.coerce(date_range)
    previous = previous_range(date_range) if previous is None else DateRange.coerce(previous)

    kpi_current = calculate_kpis(revenue_records, date_range)
    kpi_previous = calculate_kpis(revenue_records, previous)

    # (metric name, current value, previous value, is money)
    kpi_definitions = [
        ("Total Revenue", kpi_current.total_revenue, kpi_previous.total_revenue, True),
        ("Avg. Daily Revenue", kpi_current.avg_daily_revenue, kpi_previous.avg_daily_revenue, True),
    ]

    if patient_snapshots is not None:
        trend_current = analyze_patient_trends(patient_snapshots, date_range)
        trend_previous = analyze_patient_trends(patient_snapshots, previous)
        kpi_definitions += [
            ("New Patients", trend_current.total_new_patients, trend_previous.total_new_patients, False),
            ("Avg. New Patients / Day", trend_current.avg_new_patients_per_day, trend_previous.avg_new_patients_per_day, False),
            ("Retention Rate (%)", trend_current.retention_rate, trend_previous.retention_rate, False),
        ]

    analysis_data = []
    for name, current_val, prev_val, is_money in kpi_definitions:
        analysis_data.append({
            "Metric": name, "Current": current_val, "Previous": prev_val,
            "Change": format_percentage_change(calculate_growth(current_val, prev_val)),
            "Current (MAD)": format_currency(current_val) if is_money else None,
            "Previous (MAD)": format_currency(prev_val) if is_money else None,
        })

    logger.debug(f"Built KPI analysis table with {len(analysis_data)} metrics for {date_range.start_date}..{date_range.end_date}.")
    return pd.DataFrame(analysis_data, columns=ANALYSIS_COLUMNS)
