# clinic_reporting_root/analytics/__init__.py
# PUBLIC API - GROWTH, FORMATTING & KPI ANALYSIS

"""
Initializes the analytics package, making growth comparison, display
formatting and KPI analysis available at the top level.

This __init__.py defines the public API for the package.
"""

# From growth.py
from .growth import calculate_growth, compare_kpis

# From formatting.py
from .formatting import format_currency, format_percentage_change

# From kpi_analyzer.py
from .kpi_analyzer import generate_kpi_analysis_table

# --- Define the public API for the analytics package ---
__all__ = [
    # Growth
    "calculate_growth",
    "compare_kpis",

    # Formatting
    "format_currency",
    "format_percentage_change",

    # Period-over-period analysis
    "generate_kpi_analysis_table",
]
