"""
Product API schemas for request/response validation.
These models define the structure of data sent to and from the API.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


# Request Schemas

class CreateProductRequest(BaseModel):
    """Request schema for creating a new product."""
    code: str = Field(..., min_length=1, max_length=50, description="Unique product code")
    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: Optional[str] = Field(None, max_length=2000, description="Product description")
    price: float = Field(..., ge=0, description="Product price")
    category: str = Field(..., min_length=1, max_length=100, description="Product category")
    availability: str = Field("available", min_length=1, max_length=50, description="Availability status")
    stock: int = Field(0, ge=0, description="Units in stock")


class UpdateProductRequest(BaseModel):
    """Request schema for updating a product. Only the fields sent are replaced."""
    code: Optional[str] = Field(None, min_length=1, max_length=50, description="Unique product code")
    name: Optional[str] = Field(None, min_length=1, max_length=200, description="Product name")
    description: Optional[str] = Field(None, max_length=2000, description="Product description")
    price: Optional[float] = Field(None, ge=0, description="Product price")
    category: Optional[str] = Field(None, min_length=1, max_length=100, description="Product category")
    availability: Optional[str] = Field(None, min_length=1, max_length=50, description="Availability status")
    stock: Optional[int] = Field(None, ge=0, description="Units in stock")


# Response Schemas

class ProductResponse(BaseModel):
    """Response schema for a single product."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Product ID")
    code: str = Field(..., description="Unique product code")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: float = Field(..., description="Product price")
    category: str = Field(..., description="Product category")
    availability: str = Field(..., description="Availability status")
    stock: int = Field(0, description="Units in stock")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")


class ProductsPageResponse(BaseModel):
    """Paginated product listing envelope."""
    model_config = ConfigDict(populate_by_name=True)

    status: str = Field("success", description="Outcome of the request")
    payload: List[ProductResponse] = Field(..., description="Products on this page")
    total_pages: int = Field(..., alias="totalPages", description="Number of pages for the current filter")
    prev_page: Optional[int] = Field(None, alias="prevPage", description="Previous page number")
    next_page: Optional[int] = Field(None, alias="nextPage", description="Next page number")
    page: int = Field(..., description="Current page number")
    has_prev_page: bool = Field(..., alias="hasPrevPage", description="Whether a previous page exists")
    has_next_page: bool = Field(..., alias="hasNextPage", description="Whether a next page exists")
    prev_link: Optional[str] = Field(None, alias="prevLink", description="Link to the previous page")
    next_link: Optional[str] = Field(None, alias="nextLink", description="Link to the next page")
