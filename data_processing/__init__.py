# clinic_reporting_root/data_processing/__init__.py
# EXPLICIT PACKAGE API

"""
Initializes the data_processing package, defining its public API.

This file explicitly exports all public-facing names from its submodules,
providing a single, consistent import point for the rest of the application.
"""

# --- Error Taxonomy from errors.py ---
from .errors import AnalyticsError, InvalidArgumentError

# --- Record & Report Models from models.py ---
from .models import (
    RevenueRecord,
    PatientSnapshot,
    RevenueBucket,
    KPIReport,
    TrendReport,
    KPIComparison
)

# --- Period Resolution from periods.py ---
from .periods import (
    DateRange,
    SUPPORTED_PERIODS,
    calculate_date_range,
    filter_by_range,
    previous_range,
    previous_period_range
)

# --- Record Normalization from helpers.py ---
from .helpers import (
    DataPipeline,
    convert_to_numeric,
    records_to_frame,
    prepare_revenue_frame,
    prepare_patient_frame
)

# --- Pure Aggregation Logic from logic.py ---
from .logic import (
    aggregate_revenue_data,
    calculate_kpis,
    analyze_patient_trends,
    calculate_revenue_trend
)


# --- Define the canonical public API for the package ---
__all__ = [
    # errors.py
    "AnalyticsError",
    "InvalidArgumentError",

    # models.py
    "RevenueRecord",
    "PatientSnapshot",
    "RevenueBucket",
    "KPIReport",
    "TrendReport",
    "KPIComparison",

    # periods.py
    "DateRange",
    "SUPPORTED_PERIODS",
    "calculate_date_range",
    "filter_by_range",
    "previous_range",
    "previous_period_range",

    # helpers.py
    "DataPipeline",
    "convert_to_numeric",
    "records_to_frame",
    "prepare_revenue_frame",
    "prepare_patient_frame",

    # logic.py
    "aggregate_revenue_data",
    "calculate_kpis",
    "analyze_patient_trends",
    "calculate_revenue_trend",
]
