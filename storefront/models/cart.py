"""
Cart data models for database documents.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class CartItemDocument(BaseModel):
    """One product reference inside a cart."""
    product_id: str = Field(..., description="Product ID reference")
    quantity: int = Field(default=1, gt=0, description="Units of the product in the cart")


class CartDocument(BaseModel):
    """
    Cart document model. Products keep their insertion order; a product id
    appears at most once, repeated adds raise its quantity instead.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="Cart ID")
    user_id: Optional[str] = Field(None, description="Owner user ID")
    products: List[CartItemDocument] = Field(default_factory=list, description="Cart items")

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    def to_mongo(self) -> dict:
        return self.model_dump(exclude={"id"}, exclude_none=True)
