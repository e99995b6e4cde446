"""
Lookup helpers shared by routes and services: id validation and
existence checks that raise the application's error types.
"""
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId

from .errors import InvalidIdError, NotFoundError


def validate_object_id(object_id: str, resource_name: str = "resource") -> ObjectId:
    """
    Validate and convert string to ObjectId

    Args:
        object_id: String representation of ObjectId
        resource_name: Name of the resource for error messages

    Returns:
        Valid ObjectId instance

    Raises:
        InvalidIdError: If ObjectId format is invalid
    """
    if not ObjectId.is_valid(object_id):
        raise InvalidIdError(f"Invalid {resource_name} ID format: {object_id}")
    return ObjectId(object_id)


async def verify_product_exists(product_id: str, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Verify that a product exists in the database

    Raises:
        InvalidIdError: If the ID is malformed
        NotFoundError: If the product is not found
    """
    object_id = validate_object_id(product_id, "product")

    product = await db.products.find_one({"_id": object_id})
    if not product:
        raise NotFoundError(f"Product {product_id} not found")

    return product


async def verify_cart_exists(cart_id: str, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Verify that a cart exists in the database

    Raises:
        InvalidIdError: If the ID is malformed
        NotFoundError: If the cart is not found
    """
    object_id = validate_object_id(cart_id, "cart")

    cart = await db.carts.find_one({"_id": object_id})
    if not cart:
        raise NotFoundError(f"Cart {cart_id} not found")

    return cart


async def verify_products_exist(product_ids: List[str], db: AsyncIOMotorDatabase) -> Dict[str, Dict[str, Any]]:
    """
    Verify that multiple products exist in the database

    Args:
        product_ids: List of product IDs to verify
        db: Database instance

    Returns:
        Dictionary mapping product_id -> product document

    Raises:
        NotFoundError: If any product is not found
    """
    object_ids = [validate_object_id(product_id, "product") for product_id in product_ids]
    if not object_ids:
        return {}

    # Fetch all products in a single query
    cursor = db.products.find({"_id": {"$in": object_ids}})
    found_products = await cursor.to_list(length=None)

    product_map = {str(product["_id"]): product for product in found_products}

    missing_products = [product_id for product_id in product_ids if product_id not in product_map]
    if missing_products:
        raise NotFoundError(f"Products not found: {', '.join(missing_products)}")

    return product_map
