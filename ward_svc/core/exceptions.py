"""
Shared exception classes and error handling utilities for the Ward Service.

Services raise these domain exceptions so every caller learns whether an
operation took effect; the FastAPI handlers registered by
setup_exception_handlers() turn them into JSON error responses.

Usage:
    from core.exceptions import PatientNotFoundError

    raise PatientNotFoundError(patient_id="42")
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class WardServiceError(Exception):
    """
    Base exception for all Ward Service domain errors.

    Carries an HTTP status code, a human-readable detail message and
    optional context that is echoed in the error response.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        self.detail = detail or self.__class__.detail
        self.status_code = status_code or self.__class__.status_code
        self.context = {key: value for key, value in kwargs.items() if value is not None}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result: Dict[str, Any] = {"detail": self.detail}
        if self.context:
            result["context"] = self.context
        return result


# =============================================================================
# PATIENT EXCEPTIONS
# =============================================================================

class PatientNotFoundError(WardServiceError):
    """Raised when no patient has the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Patient not found"

    def __init__(self, patient_id: Optional[str] = None, **kwargs: Any):
        detail = f"Patient '{patient_id}' not found" if patient_id else self.detail
        super().__init__(detail=detail, patient_id=patient_id, **kwargs)


class InvalidPatientDataError(WardServiceError):
    """Raised when admission data fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid patient data"


class InvalidStatusTransitionError(WardServiceError):
    """Raised when a status change is not an allowed edge of the state machine."""

    status_code = status.HTTP_409_CONFLICT
    detail = "Status transition not allowed"

    def __init__(
        self,
        current_status: Optional[str] = None,
        requested_status: Optional[str] = None,
        **kwargs: Any
    ):
        if current_status and requested_status:
            detail = f"Cannot change status from {current_status} to {requested_status}"
        else:
            detail = self.detail
        super().__init__(
            detail=detail,
            current_status=current_status,
            requested_status=requested_status,
            **kwargs
        )


class DischargeNotEligibleError(WardServiceError):
    """Raised when discharge approval is requested for a patient who is not fever-free."""

    status_code = status.HTTP_409_CONFLICT
    detail = "Patient does not meet the fever-free criteria"


# =============================================================================
# WARD CAPACITY EXCEPTIONS
# =============================================================================

class WardFullError(WardServiceError):
    """Raised when admitting a patient while no beds are available."""

    status_code = status.HTTP_409_CONFLICT
    detail = "No beds available"


class BedOccupiedError(WardServiceError):
    """Raised when admitting a patient into a bed held by an occupying patient."""

    status_code = status.HTTP_409_CONFLICT
    detail = "Bed is already occupied"

    def __init__(self, bed_number: Optional[str] = None, **kwargs: Any):
        detail = f"Bed '{bed_number}' is already occupied" if bed_number else self.detail
        super().__init__(detail=detail, bed_number=bed_number, **kwargs)


# =============================================================================
# OBSERVATION EXCEPTIONS
# =============================================================================

class InvalidObservationError(WardServiceError):
    """Raised when a temperature reading or clinical note fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid observation"


class TemperatureNotFoundError(WardServiceError):
    """Raised when a patient has no temperature readings to return."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "No temperature readings recorded"

    def __init__(self, patient_id: Optional[str] = None, **kwargs: Any):
        detail = f"No temperature readings recorded for patient '{patient_id}'" if patient_id else self.detail
        super().__init__(detail=detail, patient_id=patient_id, **kwargs)


# =============================================================================
# RECORD STORE EXCEPTIONS
# =============================================================================

class RecordStoreError(WardServiceError):
    """Raised when the record store cannot be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Record store operation failed"

    def __init__(self, operation: Optional[str] = None, **kwargs: Any):
        detail = f"Record store error during {operation}" if operation else self.detail
        super().__init__(detail=detail, operation=operation, **kwargs)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def ward_service_exception_handler(
    request: Request,
    exc: WardServiceError
) -> JSONResponse:
    """Log a domain error and return it as a JSON response."""
    logger.warning(
        f"WardServiceError: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "context": exc.context
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(WardServiceError, ward_service_exception_handler)
