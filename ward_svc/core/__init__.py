"""
Core module for application configuration, logging, errors and shared helpers.

This module provides:
- Settings: Application configuration via pydantic-settings
- Exceptions: Domain-specific exception classes with HTTP status codes
- Datetime utilities: UTC-first datetime handling

Dependency injection functions live in core.dependencies and are imported
from there directly.
"""
from core.config import settings, Settings

from core.exceptions import (
    WardServiceError,
    PatientNotFoundError,
    InvalidPatientDataError,
    InvalidStatusTransitionError,
    DischargeNotEligibleError,
    WardFullError,
    BedOccupiedError,
    InvalidObservationError,
    TemperatureNotFoundError,
    RecordStoreError,
    setup_exception_handlers,
)

from core.datetime_utils import (
    utc_now,
    to_utc,
    parse_datetime,
    format_iso,
)

__all__ = [
    "settings",
    "Settings",
    "WardServiceError",
    "PatientNotFoundError",
    "InvalidPatientDataError",
    "InvalidStatusTransitionError",
    "DischargeNotEligibleError",
    "WardFullError",
    "BedOccupiedError",
    "InvalidObservationError",
    "TemperatureNotFoundError",
    "RecordStoreError",
    "setup_exception_handlers",
    "utc_now",
    "to_utc",
    "parse_datetime",
    "format_iso",
]
