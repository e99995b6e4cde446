"""
Schemas package for API request/response validation.
These models define the structure of data sent to and from the API endpoints.
"""

# Product schemas
from .product import (
    CreateProductRequest,
    UpdateProductRequest,
    ProductResponse,
    ProductsPageResponse
)

# Cart schemas
from .cart import (
    CartItemRequest,
    ReplaceCartRequest,
    UpdateQuantityRequest,
    AddProductRequest,
    CartItemResponse,
    CartResponse
)

# Auth schemas
from .auth import (
    RegisterRequest,
    UserResponse,
    LoginPageResponse
)

# Common schemas
from .common import (
    HealthCheckResponse,
    RootResponse,
    ErrorResponse,
    DashboardResponse
)

__all__ = [
    # Product schemas
    "CreateProductRequest",
    "UpdateProductRequest",
    "ProductResponse",
    "ProductsPageResponse",

    # Cart schemas
    "CartItemRequest",
    "ReplaceCartRequest",
    "UpdateQuantityRequest",
    "AddProductRequest",
    "CartItemResponse",
    "CartResponse",

    # Auth schemas
    "RegisterRequest",
    "UserResponse",
    "LoginPageResponse",

    # Common schemas
    "HealthCheckResponse",
    "RootResponse",
    "ErrorResponse",
    "DashboardResponse"
]
