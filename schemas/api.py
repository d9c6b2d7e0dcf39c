"""
Pydantic schemas for API responses shared across routers
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, Dict
from datetime import datetime


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    # stores is declared first so the status validator can see it
    stores: Dict[str, bool] = Field(default_factory=dict, description="Connectivity per store")
    status: str = Field(..., description="Overall status: healthy, degraded, unhealthy")
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    @validator("status", pre=True, always=True)
    def determine_status(cls, v, values):
        """Healthy only when every store answers"""
        stores = values.get("stores") or {}
        if not stores:
            return v
        connected = sum(1 for ok in stores.values() if ok)
        if connected == len(stores):
            return "healthy"
        if connected:
            return "degraded"
        return "unhealthy"

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "timestamp": "2024-01-15T10:30:00Z",
                "stores": {"core": True, "mediamine": True}
            }
        }


# ============================================================================
# Auth Schemas
# ============================================================================

class LoginResponse(BaseModel):
    token: str
    username: str
    editor: Optional[bool] = None


# ============================================================================
# Error Response Schema
# ============================================================================

class ErrorResponse(BaseModel):
    """Error shape used when logging; clients receive the message as plain text"""
    error: str
    detail: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
