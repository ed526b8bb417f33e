"""
Standardized API response models and utilities.
Provides consistent response formatting across all endpoints.
"""

from typing import Optional, Union
from pydantic import BaseModel, Field
from datetime import datetime


class ErrorDetail(BaseModel):
    """Detailed error information"""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: Optional[Union[dict, list]] = Field(
        None, description="Additional error details"
    )


class ErrorResponse(BaseModel):
    """Standardized error response"""

    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Error timestamp"
    )


class MessageResponse(BaseModel):
    """Acknowledgement returned by delete endpoints"""

    status: str = Field("ok", description="Operation status")
    message: str = Field(..., description="Human-readable message")
    deleted: Optional[str] = Field(None, description="Identifier of the removed resource")


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Check timestamp"
    )


def error_responses(*status_codes: int) -> dict:
    """OpenAPI `responses=` entries documenting the error envelope"""
    return {code: {"model": ErrorResponse} for code in status_codes}


def deleted_response(resource: str, identifier) -> MessageResponse:
    """Create a standardized delete acknowledgement"""
    return MessageResponse(
        message=f"{resource} deleted successfully", deleted=str(identifier)
    )
