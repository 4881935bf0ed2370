"""Envelope models shared by every router."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
  """Body of every non-2xx response, written by the exception handlers."""

  success: Literal[False] = False
  error: str = Field(
    ...,
    description="What went wrong",
    examples=["Not authorized to delete this file"],
  )


class HealthStatus(BaseModel):
  success: bool = True
  status: Literal["healthy", "degraded", "unhealthy"] = Field(
    "healthy", description="Liveness of the gateway process"
  )
  timestamp: datetime = Field(..., description="When the check ran (UTC)")
  details: dict[str, Any] = Field(
    default_factory=dict, description="Service name, version and environment"
  )
