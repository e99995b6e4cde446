"""
User data models for database documents.
Local-credential and GitHub-derived users share one collection.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class UserDocument(BaseModel):
    """User document model representing the MongoDB document structure."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="User ID")
    username: str = Field(..., min_length=1, max_length=100, description="Login name")
    password_hash: Optional[str] = Field(None, description="bcrypt hash, absent for OAuth-only users")
    role: str = Field(default=ROLE_USER, description="Access role")
    github_id: Optional[str] = Field(None, description="GitHub account ID for OAuth users")
    cart_id: Optional[str] = Field(None, description="The user's cart")

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        if v.lower() not in (ROLE_USER, ROLE_ADMIN):
            raise ValueError(f'Invalid role. Must be one of: {[ROLE_USER, ROLE_ADMIN]}')
        return v.lower()

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def to_mongo(self) -> dict:
        return self.model_dump(exclude={"id"}, exclude_none=True)
