from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field

from college_id.schemas.camel_base_model import CamelCaseBaseModel as BaseModel


class ErrorResponse(BaseModel):
    """Body returned for every failed request"""

    success: bool = Field(default=False, description="Always false for errors")
    error: str = Field(..., description="Human-readable message")
    error_code: Optional[str] = Field(default=None, description="Machine-readable code")
    errors: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Per-field error details"
    )
    retryable: Optional[bool] = Field(
        default=None, description="Whether repeating the request may succeed"
    )
    meta: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional metadata"
    )
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="Response timestamp",
    )
    request_id: Optional[str] = Field(default=None, description="Request identifier")
    path: Optional[str] = Field(default=None, description="Request path")


class HealthResponse(BaseModel):
    """Body returned by the health check"""

    success: bool = True
    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    database: str = Field(..., description="Document store reachability")
