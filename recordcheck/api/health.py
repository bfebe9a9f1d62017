"""Health check endpoint."""

import time
from fastapi import APIRouter, Request

from recordcheck import __version__
from recordcheck.models.responses import HealthResponse, HealthDependency

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """System health check with loaded-configuration status."""
    dependencies = {}

    record_validator = getattr(request.app.state, "record_validator", None)
    if record_validator is None:
        dependencies["record_rules"] = HealthDependency(status="unhealthy", message="not loaded")
    else:
        dependencies["record_rules"] = HealthDependency(
            status="healthy",
            message=f"{len(record_validator.rules)} rules loaded",
        )

    tree_validator = getattr(request.app.state, "tree_validator", None)
    if tree_validator is None:
        dependencies["tree_validator"] = HealthDependency(status="unhealthy", message="not loaded")
    else:
        dependencies["tree_validator"] = HealthDependency(
            status="healthy",
            message=f"policy={tree_validator.policy.value}",
        )

    # Overall status
    all_healthy = all(d.status == "healthy" for d in dependencies.values())
    all_unhealthy = all(d.status == "unhealthy" for d in dependencies.values())

    if all_healthy:
        status = "healthy"
    elif all_unhealthy:
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
