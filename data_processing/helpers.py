# clinic_reporting_root/data_processing/helpers.py
# RECORD NORMALIZATION - FLUENT DATAPIPELINE

"""
Utility functions and a fluent DataPipeline class that turn caller-supplied
record collections into clean, analytics-ready DataFrames.

Records may arrive as pydantic models, plain mappings (snake_case or
camelCase keys) or an existing DataFrame. Whatever the shape, the input is
never mutated: every pipeline works on a copy.
"""
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel

from config import settings
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

RecordsInput = Union[pd.DataFrame, Iterable[Union[BaseModel, Mapping[str, Any]]]]

NA_REGEX_PATTERN = re.compile(
    r'(?i)^\s*(nan|none|n/a|#n/a|nat|<na>|null|nil|na|undefined|-|)\s*$'
)

REVENUE_COLUMNS = ['date', 'amount', 'source', 'category']
PATIENT_COLUMNS = ['date', 'new_patients', 'active_patients', 'inactive_patients']

# Record sources speak camelCase; the pipeline works in snake_case.
CAMEL_CASE_RENAMES = {
    'newPatients': 'new_patients',
    'activePatients': 'active_patients',
    'inactivePatients': 'inactive_patients',
}


def convert_to_numeric(data_input: Any, default_value: Any = np.nan, target_type: Optional[Type] = None) -> Any:
    """
    Coerces a Series or a single value to numbers. Placeholders such as
    "N/A", "null" or "-" count as missing and take `default_value`.
    """
    as_series = isinstance(data_input, pd.Series)
    values = data_input if as_series else pd.Series([data_input], dtype=object)

    if pd.api.types.is_object_dtype(values.dtype):
        values = values.replace(NA_REGEX_PATTERN, np.nan, regex=True)

    numbers = pd.to_numeric(values, errors='coerce')
    if not pd.isna(default_value):
        numbers = numbers.fillna(default_value)

    if target_type is int and pd.api.types.is_numeric_dtype(numbers.dtype):
        # Counts stay nullable only if the default left gaps.
        numbers = numbers.astype('Int64' if numbers.isna().any() else 'int64')
    elif target_type is float:
        numbers = numbers.astype(float)

    if as_series:
        return numbers
    return numbers.iloc[0] if len(numbers) else default_value


def _to_wall_clock(value: Any, errors: str = 'coerce') -> pd.Timestamp:
    """Parses one date-like value to a naive Timestamp in its own local time."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return pd.NaT
    try:
        stamp = pd.Timestamp(value)
    except (ValueError, TypeError):
        if errors == 'raise':
            raise
        return pd.NaT
    if stamp is not pd.NaT and stamp.tzinfo is not None:
        stamp = stamp.tz_localize(None)
    return stamp


class DataPipeline:
    """
    A fluent interface for applying a sequence of record-cleaning operations.

    Usage:
        revenue_df = (DataPipeline(raw_df)
                      .rename_columns({'newPatients': 'new_patients'})
                      .ensure_columns(['date', 'amount'])
                      .convert_date_columns(['date'])
                      .drop_missing(['date'])
                      .standardize_missing_values({'amount': 0.0})
                      .get_dataframe())
    """
    def __init__(self, df: pd.DataFrame):
        if not isinstance(df, pd.DataFrame):
            raise TypeError("DataPipeline must be initialized with a pandas DataFrame.")
        self.df = df.copy()

    def get_dataframe(self) -> pd.DataFrame:
        """Returns the processed DataFrame."""
        return self.df

    def rename_columns(self, rename_map: Dict[str, str]) -> 'DataPipeline':
        if rename_map:
            self.df = self.df.rename(columns=rename_map)
        return self

    def ensure_columns(self, columns: List[str]) -> 'DataPipeline':
        """Adds any missing column as all-missing so later steps can fill it."""
        missing = [col for col in columns if col not in self.df.columns]
        if missing and not self.df.empty:
            logger.warning(f"Records are missing columns {missing}; defaults will be applied.")
        for col in missing:
            self.df[col] = pd.Series(np.nan, index=self.df.index, dtype=object)
        return self

    def select_columns(self, columns: List[str]) -> 'DataPipeline':
        self.df = self.df[columns]
        return self

    def standardize_missing_values(self, default_values: Dict[str, Any]) -> 'DataPipeline':
        """
        Fills missing values with the provided defaults, inferring the column
        type from the default value. Numeric columns also treat "Not Available"
        markers as missing; text columns fill only true nulls.
        """
        for col, default in default_values.items():
            if col not in self.df.columns:
                continue
            if isinstance(default, (int, float, np.number)):
                target_type = int if isinstance(default, int) else float
                self.df[col] = convert_to_numeric(self.df[col], default_value=default, target_type=target_type)
            else:
                # Labels are kept verbatim; only true nulls take the default.
                series = self.df[col].astype(object)
                self.df[col] = series.where(series.notna(), str(default)).astype(str)
        return self

    def convert_date_columns(self, date_columns: List[str], errors: str = 'coerce', normalize: bool = True) -> 'DataPipeline':
        """
        Converts the given columns to naive datetimes, coercing bad values to NaT.
        Offsets are dropped per value so each record keeps its own wall-clock
        date, even when offsets differ across rows.
        With `normalize`, the time of day is dropped so rows group by calendar date.
        """
        for col in date_columns:
            if col not in self.df.columns:
                continue
            column = self.df[col]
            if isinstance(column.dtype, pd.DatetimeTZDtype):
                converted = column.dt.tz_localize(None)
            elif pd.api.types.is_datetime64_any_dtype(column):
                converted = column
            else:
                converted = pd.to_datetime(column.map(lambda value: _to_wall_clock(value, errors)), errors=errors)
            if normalize and pd.api.types.is_datetime64_any_dtype(converted):
                converted = converted.dt.normalize()
            self.df[col] = converted
        return self

    def drop_missing(self, columns: List[str]) -> 'DataPipeline':
        before = len(self.df)
        self.df = self.df.dropna(subset=columns)
        dropped = before - len(self.df)
        if dropped:
            logger.warning(f"Dropped {dropped} record(s) with missing or unparseable {columns}.")
        return self


def records_to_frame(records: RecordsInput) -> pd.DataFrame:
    """Builds a raw DataFrame from models, mappings or an existing DataFrame."""
    if isinstance(records, pd.DataFrame):
        return records.copy()
    if records is None or isinstance(records, (str, bytes, Mapping)):
        raise InvalidArgumentError(f"Expected a collection of records, got {type(records).__name__}.")

    rows = []
    for record in records:
        if isinstance(record, BaseModel):
            rows.append(record.model_dump())
        elif isinstance(record, Mapping):
            rows.append(dict(record))
        else:
            raise InvalidArgumentError(f"Unsupported record type: {type(record).__name__}")
    return pd.DataFrame(rows)


def prepare_revenue_frame(records: RecordsInput) -> pd.DataFrame:
    """Normalizes revenue records to the columns date, amount, source, category."""
    unknown = settings.ANALYTICS.unknown_label
    return (DataPipeline(records_to_frame(records))
            .ensure_columns(REVENUE_COLUMNS)
            .convert_date_columns(['date'])
            .drop_missing(['date'])
            .standardize_missing_values({'amount': 0.0, 'source': unknown, 'category': unknown})
            .select_columns(REVENUE_COLUMNS)
            .get_dataframe())


def prepare_patient_frame(snapshots: RecordsInput) -> pd.DataFrame:
    """Normalizes patient snapshots to date plus the three integer counts."""
    return (DataPipeline(records_to_frame(snapshots))
            .rename_columns(CAMEL_CASE_RENAMES)
            .ensure_columns(PATIENT_COLUMNS)
            .convert_date_columns(['date'])
            .drop_missing(['date'])
            .standardize_missing_values({'new_patients': 0, 'active_patients': 0, 'inactive_patients': 0})
            .select_columns(PATIENT_COLUMNS)
            .get_dataframe())
