"""Liveness endpoint for load balancers."""

from datetime import datetime, timezone
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter

from filegate.config import env
from filegate.models.api.common import HealthStatus

SERVICE_NAME = "filegate-api"

router = APIRouter(tags=["Status"])


@lru_cache(maxsize=1)
def installed_version() -> str:
  try:
    return version("filegate-service")
  except PackageNotFoundError:
    return "unknown"


@router.get(
  "/status",
  response_model=HealthStatus,
  operation_id="getServiceStatus",
  summary="Liveness check",
)
async def service_status() -> HealthStatus:
  # B2, the mail transport and Firebase are not probed here
  return HealthStatus(
    timestamp=datetime.now(timezone.utc),
    details={
      "service": SERVICE_NAME,
      "version": installed_version(),
      "environment": env.ENVIRONMENT,
    },
  )
