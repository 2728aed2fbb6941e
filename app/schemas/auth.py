"""
Authentication schemas.

This module contains Pydantic models for authentication-related requests and responses.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.config import settings
from app.core.password_validation import ensure_password_policy


class AuthRequest(BaseModel):
    """Schema for auth request."""

    email: EmailStr = Field(
        ...,
        description="User email address",
        examples=["jane.doe@example.com"],
    )
    password: str = Field(
        ...,
        description="User password",
        examples=["SecurePass123!"],
    )

    @field_validator("password")
    @classmethod
    def validate_password_policy(cls, v):
        """Validate password against the configured policy."""
        return ensure_password_policy(v, settings.password_policy)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane.doe@example.com",
                "password": "SecurePass123!",
            }
        }
    )


class AuthResponse(BaseModel):
    """Standardized schema for auth responses (success and error)."""

    success: bool = Field(
        ...,
        description="Indicates if the request was accepted",
        examples=[True],
    )
    status_code: int = Field(..., description="HTTP status code", examples=[200])
    message: str = Field(
        ...,
        description="Human-readable message explaining the result",
        examples=["success"],
    )
    data: dict[str, Any] | None = Field(
        None, description="Per-field validation errors for 400 responses"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "status_code": 400,
                "message": "One or more validation errors occurred",
                "data": {
                    "errors": {
                        "password": ["Password must be at least 8 characters long"],
                    }
                },
            }
        }
    )
