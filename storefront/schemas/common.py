"""
Service-level schemas: landing, health, errors and the admin dashboard.
"""
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RootResponse(BaseModel):
    """Landing route: where to find the docs, health check and listing."""
    message: str = Field(..., description="Welcome message")
    version: str = Field(..., description="Service version")
    status: str = Field("running", description="Process state")
    docs: str = Field("/docs", description="OpenAPI docs path")
    health: str = Field("/health", description="Health check path")
    products: str = Field("/api/products", description="Product listing path")


class HealthCheckResponse(BaseModel):
    status: str = Field("healthy", description="Process health")
    database: Literal["connected", "disconnected", "error"] = Field(..., description="MongoDB reachability")
    version: str = Field(..., description="Service version")
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorResponse(BaseModel):
    """Body of every ``StorefrontError`` returned as JSON."""
    error: str = Field(..., description="Machine-readable code, e.g. not_found")
    message: str = Field(..., description="What went wrong")
    detail: Optional[str] = Field(None, description="Extra context, when there is any")
    timestamp: datetime = Field(default_factory=_utcnow)


class DashboardResponse(BaseModel):
    """Collection counts shown on the admin landing route."""
    products: int = Field(..., description="Number of products")
    carts: int = Field(..., description="Number of carts")
    users: int = Field(..., description="Number of users")
    messages: int = Field(..., description="Number of chat messages")
