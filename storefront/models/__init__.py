"""
Models package for database document structures.
These models represent how data is stored in MongoDB.
"""
from .product import ProductDocument
from .cart import CartDocument, CartItemDocument
from .user import UserDocument, ROLE_ADMIN, ROLE_USER
from .message import MessageDocument

__all__ = [
    # Product models
    "ProductDocument",

    # Cart models
    "CartDocument",
    "CartItemDocument",

    # User models
    "UserDocument",
    "ROLE_ADMIN",
    "ROLE_USER",

    # Chat models
    "MessageDocument"
]
