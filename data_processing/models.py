# clinic_reporting_root/data_processing/models.py
# REPORTING CORE - TYPE-SAFE RECORD & REPORT MODELS

"""
Pydantic models for the records fed into the reporting core and the reports
it produces.

Attributes are snake_case in Python. Serializing with
``model_dump(by_alias=True)`` yields the camelCase field names the
presentation layer consumes (``totalRevenue``, ``bySource`` ...).
"""

from datetime import date
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    """Frozen base model with camelCase aliases."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# --- Input Records ---

class RevenueRecord(ReportModel):
    date: date
    amount: float
    source: str
    category: str


class PatientSnapshot(ReportModel):
    date: date
    new_patients: int = 0
    active_patients: int = 0
    inactive_patients: int = 0


# --- Output Reports ---

class RevenueBucket(ReportModel):
    """One calendar date's aggregated revenue totals and breakdowns."""
    date: date
    total: float
    by_source: Dict[str, float] = Field(default_factory=dict)
    by_category: Dict[str, float] = Field(default_factory=dict)


class KPIReport(ReportModel):
    total_revenue: float = 0.0
    avg_daily_revenue: float = 0.0
    revenue_by_source: Dict[str, float] = Field(default_factory=dict)


class TrendReport(ReportModel):
    total_new_patients: int = 0
    avg_new_patients_per_day: float = 0.0
    retention_rate: float = 0.0


class KPIComparison(ReportModel):
    """Current vs. previous period KPIs with percentage growth per metric."""
    current: KPIReport
    previous: KPIReport
    revenue_growth_pct: float
    avg_daily_revenue_growth_pct: float
    source_growth_pct: Dict[str, float] = Field(default_factory=dict)
