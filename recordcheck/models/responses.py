"""API response models."""

from pydantic import BaseModel
from typing import Optional, Literal

from recordcheck.models.record import Record
from recordcheck.validators.models import Violation


class RecordValidationResponse(BaseModel):
    """Outcome of decoding and validating one record."""

    passed: bool
    format: Literal["json", "xml"]
    record: Record
    violations: list[Violation] = []
    summary: dict[str, int] = {}


class TreeValidationResponse(BaseModel):
    """Outcome of validating a document against a schema document."""

    passed: bool
    policy: Literal["by_tag", "positional"]
    schema_root: str
    violations: list[Violation] = []
    summary: dict[str, int] = {}


class ErrorResponse(BaseModel):
    """Error contract for rejected requests."""

    error: str
    message: str


class HealthDependency(BaseModel):
    """Health status of a single component."""

    status: Literal["healthy", "unhealthy", "degraded"]
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]
