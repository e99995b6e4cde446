"""
Authentication and session schemas.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    """Request schema for local-credential registration."""
    username: str = Field(..., min_length=3, max_length=100, pattern=r"^[A-Za-z0-9_.-]+$", description="Login name")
    password: str = Field(..., min_length=8, max_length=72, description="Password (bcrypt limit: 72 bytes)")

    @field_validator('password')
    @classmethod
    def validate_password_bytes(cls, v):
        if len(v.encode("utf-8")) > 72:
            raise ValueError('Password must be at most 72 bytes')
        return v


class UserResponse(BaseModel):
    """Public view of a user; never includes the password hash."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="User ID")
    username: str = Field(..., description="Login name")
    role: str = Field(..., description="Access role")
    cart_id: Optional[str] = Field(None, description="The user's cart")
    github_id: Optional[str] = Field(None, description="Linked GitHub account ID")


class LoginPageResponse(BaseModel):
    message: Optional[str] = Field(None, description="Pending flash message from the last login attempt")
