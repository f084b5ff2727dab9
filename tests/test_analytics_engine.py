# clinic_reporting_root/tests/test_analytics_engine.py
# ANALYTICS ENGINE TESTS

import re
from datetime import date

import numpy as np
import pandas as pd
import pytest

from analytics import (calculate_growth, compare_kpis, format_currency,
                       format_percentage_change, generate_kpi_analysis_table)
from config.settings import Settings
from data_processing import DateRange, InvalidArgumentError, calculate_date_range

# Fixtures are sourced from conftest.py

# --- Growth Calculator Tests ---
@pytest.mark.parametrize("current, previous, expected", [
    (110, 100, 10),
    (90, 100, -10),
    (100, 0, 100),
    (0, 100, -100),
    (0, 0, 0),
    (-50, 0, 100),
    (150, -100, -250),
])
def test_calculate_growth(current, previous, expected):
    assert calculate_growth(current, previous) == pytest.approx(expected)


# --- Currency Formatter Tests ---
def test_format_currency_groups_thousands_and_shows_code():
    formatted = format_currency(1000)
    assert re.search(r"1[,.]000", formatted)
    assert "MAD" in formatted
    assert formatted == "1.000 MAD"


def test_format_currency_large_numbers():
    assert re.search(r"1[,.]000[,.]000", format_currency(1000000))
    assert format_currency(1234567.89) == "1.234.568 MAD"


def test_format_currency_zero_and_negative():
    assert "0" in format_currency(0)
    assert format_currency(-1000).startswith("-")
    assert format_currency(-1000) == "-1.000 MAD"
    assert format_currency(-0.2) == "0 MAD"


def test_format_currency_locales_and_decimals():
    assert format_currency(1234.6, locale="en-US") == "MAD 1,235"
    assert format_currency(1234.6, locale="en-US", decimals=2) == "MAD 1,234.60"
    assert format_currency(-1234.5, decimals=2) == "-1.234,50 MAD"
    with pytest.raises(InvalidArgumentError):
        format_currency(10, locale="xx-XX")


def test_format_currency_missing_values():
    assert format_currency(None) == "N/A"
    assert format_currency(np.nan) == "N/A"


def test_format_percentage_change():
    assert format_percentage_change(10) == "+10.0%"
    assert format_percentage_change(-12.346, decimals=2) == "-12.35%"
    assert format_percentage_change(None) == "N/A"


# --- KPI Comparison Tests ---
def test_compare_kpis_against_previous_window(revenue_records):
    current = DateRange(date(2024, 3, 2), date(2024, 3, 2))
    comparison = compare_kpis(revenue_records, current)
    assert comparison.previous.total_revenue == 1500
    assert comparison.current.total_revenue == 750
    assert comparison.revenue_growth_pct == pytest.approx(-50)
    assert comparison.source_growth_pct == {'direct': pytest.approx(-25), 'insurance': pytest.approx(-100)}


def test_compare_kpis_with_explicit_previous_range(revenue_records):
    march = calculate_date_range('month', date(2024, 3, 15))
    february = calculate_date_range('month', date(2024, 2, 15))
    comparison = compare_kpis(revenue_records, march, previous=february)
    assert comparison.previous.total_revenue == 0
    assert comparison.revenue_growth_pct == 100
    assert comparison.avg_daily_revenue_growth_pct == 100
    assert set(comparison.model_dump(by_alias=True)) == {
        'current', 'previous', 'revenueGrowthPct', 'avgDailyRevenueGrowthPct', 'sourceGrowthPct'
    }


# --- KPI Analysis Table Tests ---
def test_generate_kpi_analysis_table_structure(revenue_records, patient_snapshots):
    current = DateRange(date(2024, 3, 2), date(2024, 3, 2))
    table = generate_kpi_analysis_table(revenue_records, current, patient_snapshots=patient_snapshots)
    assert isinstance(table, pd.DataFrame)
    assert list(table.columns) == ["Metric", "Current", "Previous", "Change", "Current (MAD)", "Previous (MAD)"]
    assert table['Metric'].tolist() == [
        "Total Revenue", "Avg. Daily Revenue", "New Patients", "Avg. New Patients / Day", "Retention Rate (%)"
    ]
    revenue_row = table.set_index('Metric').loc["Total Revenue"]
    assert revenue_row['Change'] == "-50.0%"
    assert revenue_row['Current (MAD)'] == "750 MAD"
    assert revenue_row['Previous (MAD)'] == "1.500 MAD"
    patients_row = table.set_index('Metric').loc["New Patients"]
    assert (patients_row['Current'], patients_row['Previous']) == (3, 5)


def test_generate_kpi_analysis_table_revenue_only(revenue_records_df):
    q1 = calculate_date_range('quarter', date(2024, 2, 1))
    table = generate_kpi_analysis_table(revenue_records_df, q1)
    assert len(table) == 2
    assert table['Previous'].tolist() == [0.0, 0.0]
    assert table['Change'].tolist() == ["+100.0%", "+100.0%"]


def test_growth_from_zero_ignores_environment(monkeypatch):
    monkeypatch.setenv("CLINIC_ANALYTICS_ANALYTICS", '{"growth_from_zero_pct": 50}')
    assert not hasattr(Settings().ANALYTICS, "growth_from_zero_pct")
    assert calculate_growth(100, 0) == 100
