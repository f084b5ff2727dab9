# clinic_reporting_root/data_processing/errors.py
# REPORTING CORE - ERROR TAXONOMY

"""
Exceptions raised by the reporting core.

Every report function is total once its preconditions hold, so the only
failure surfaced to callers is a bad argument: an unknown period or locale
literal, or a malformed date range.
"""


class AnalyticsError(Exception):
    """Base class for all reporting-core errors."""


class InvalidArgumentError(AnalyticsError, ValueError):
    """Raised for an unrecognized literal or a malformed date range."""
