# clinic_reporting_root/tests/conftest.py
# PYTEST FIXTURES

import sys
from pathlib import Path

# --- Path Setup for Module Imports ---
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import numpy as np
import pandas as pd
import pytest
from datetime import date, timedelta

from config import configure_logging
from data_processing import DateRange, PatientSnapshot, RevenueRecord


@pytest.fixture(scope="session", autouse=True)
def _logging():
    configure_logging("DEBUG")


# --- Core Data Fixtures ---

@pytest.fixture(scope="session")
def revenue_records() -> list:
    """The canonical two-day revenue sample, as plain mappings."""
    return [
        {'date': '2024-03-01', 'amount': 1000, 'source': 'direct', 'category': 'treatment'},
        {'date': '2024-03-01', 'amount': 500, 'source': 'insurance', 'category': 'checkup'},
        {'date': '2024-03-02', 'amount': 750, 'source': 'direct', 'category': 'treatment'},
    ]


@pytest.fixture(scope="session")
def patient_snapshots() -> list:
    """Two daily patient snapshots, with camelCase keys as the record source sends them."""
    return [
        {'date': '2024-03-01', 'newPatients': 5, 'activePatients': 100, 'inactivePatients': 20},
        {'date': '2024-03-02', 'newPatients': 3, 'activePatients': 102, 'inactivePatients': 21},
    ]


@pytest.fixture(scope="session")
def revenue_models(revenue_records) -> list:
    return [RevenueRecord(**r) for r in revenue_records]


@pytest.fixture(scope="session")
def snapshot_models(patient_snapshots) -> list:
    return [PatientSnapshot(**s) for s in patient_snapshots]


@pytest.fixture(scope="session")
def march_range() -> DateRange:
    return DateRange(date(2024, 3, 1), date(2024, 3, 2))


@pytest.fixture(scope="session")
def revenue_records_df() -> pd.DataFrame:
    """Provides a seeded, randomized DataFrame of revenue records over Q1 2024."""
    rng = np.random.default_rng(42)
    num_records = 300
    base_date = date(2024, 1, 1)
    raw_data = {
        'date': [base_date + timedelta(days=int(d)) for d in rng.integers(0, 91, num_records)],
        'amount': rng.uniform(-200, 5000, num_records).round(2),
        'source': rng.choice(['direct', 'insurance', 'mutuelle'], num_records),
        'category': rng.choice(['treatment', 'checkup', 'orthodontics', 'surgery'], num_records),
    }
    return pd.DataFrame(raw_data)
