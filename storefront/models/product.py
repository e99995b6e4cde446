"""
Product data models for database documents.
These represent the actual structure of documents stored in MongoDB.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ProductDocument(BaseModel):
    """
    Product document model representing the MongoDB document structure.
    ``code`` is the business identifier and carries a unique index.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="Product ID")
    code: str = Field(..., min_length=1, max_length=50, description="Unique product code")
    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: float = Field(..., ge=0, description="Product price")
    category: str = Field(..., min_length=1, max_length=100, description="Product category")
    availability: str = Field(default="available", min_length=1, max_length=50, description="Availability status")
    stock: int = Field(default=0, ge=0, description="Units in stock")

    # Timestamps
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    def to_mongo(self) -> dict:
        return self.model_dump(exclude={"id"}, exclude_none=True)
