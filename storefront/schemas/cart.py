"""
Cart API schemas for request/response validation.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from bson import ObjectId


# Request Schemas

class CartItemRequest(BaseModel):
    """One entry of a full cart replacement."""
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(1, gt=0, le=100, description="Quantity (max 100)")

    @field_validator('product_id')
    @classmethod
    def validate_product_id(cls, v):
        if not ObjectId.is_valid(v):
            raise ValueError('Invalid product ID format')
        return v


class ReplaceCartRequest(BaseModel):
    """Request schema for replacing a cart's entire product list."""
    products: List[CartItemRequest] = Field(..., max_length=50, description="New cart contents")

    @field_validator('products')
    @classmethod
    def validate_unique_products(cls, v):
        product_ids = [item.product_id for item in v]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError('Each product may appear only once')
        return v


class UpdateQuantityRequest(BaseModel):
    """Request schema for setting one product's quantity."""
    quantity: int = Field(..., gt=0, le=100, description="New quantity (max 100)")


class AddProductRequest(BaseModel):
    """Request schema for adding a product to a cart."""
    quantity: int = Field(1, gt=0, le=100, description="Units to add (max 100)")


# Response Schemas

class CartItemResponse(BaseModel):
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(..., description="Quantity in cart")


class CartResponse(BaseModel):
    """Response schema for a cart."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Cart ID")
    user_id: Optional[str] = Field(None, description="Owner user ID")
    products: List[CartItemResponse] = Field(default_factory=list, description="Cart items")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")
