"""
Cart mutations.

Each operation is a single MongoDB update; the matched count tells
whether the cart (or the product inside it) was there. There is no
locking, so concurrent writers to the same cart can interleave.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..models import CartDocument, CartItemDocument
from ..schemas import CartItemRequest
from ..utils.dependencies import validate_object_id, verify_cart_exists, verify_product_exists, verify_products_exist
from ..utils.errors import NotFoundError
from ..utils.serializers import serialize_doc

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def create_cart(db: AsyncIOMotorDatabase, user_id: Optional[str] = None) -> str:
    """Create an empty cart and return its ID."""
    now = _now()
    cart = CartDocument(user_id=user_id, created_at=now, updated_at=now)
    result = await db.carts.insert_one(cart.to_mongo())
    logger.info(f"Cart created: {result.inserted_id} for user {user_id}")
    return str(result.inserted_id)


async def get_cart(db: AsyncIOMotorDatabase, cart_id: str) -> Dict[str, Any]:
    return serialize_doc(await verify_cart_exists(cart_id, db))


async def add_product(db: AsyncIOMotorDatabase, cart_id: str, product_id: str, quantity: int = 1) -> Dict[str, Any]:
    """Add ``quantity`` units of a product, raising the quantity if it is already in the cart."""
    object_id = validate_object_id(cart_id, "cart")
    await verify_product_exists(product_id, db)

    result = await db.carts.update_one(
        {"_id": object_id, "products.product_id": product_id},
        {"$inc": {"products.$.quantity": quantity}, "$set": {"updated_at": _now()}},
    )
    if result.matched_count == 0:
        item = CartItemDocument(product_id=product_id, quantity=quantity)
        result = await db.carts.update_one(
            {"_id": object_id},
            {"$push": {"products": item.model_dump()}, "$set": {"updated_at": _now()}},
        )
        if result.matched_count == 0:
            raise NotFoundError(f"Cart {cart_id} not found")

    return await get_cart(db, cart_id)


async def remove_product(db: AsyncIOMotorDatabase, cart_id: str, product_id: str) -> Dict[str, Any]:
    """
    Remove a product from a cart.
    A product that is not in the cart leaves the cart untouched.
    """
    object_id = validate_object_id(cart_id, "cart")

    result = await db.carts.update_one(
        {"_id": object_id, "products.product_id": product_id},
        {"$pull": {"products": {"product_id": product_id}}, "$set": {"updated_at": _now()}},
    )
    if result.matched_count:
        logger.info(f"Product {product_id} removed from cart {cart_id}")

    return await get_cart(db, cart_id)


async def replace_products(db: AsyncIOMotorDatabase, cart_id: str, items: List[CartItemRequest]) -> Dict[str, Any]:
    """Replace the cart's whole product list; every product must exist."""
    object_id = validate_object_id(cart_id, "cart")
    await verify_products_exist([item.product_id for item in items], db)

    products = [CartItemDocument(product_id=item.product_id, quantity=item.quantity).model_dump() for item in items]
    result = await db.carts.update_one(
        {"_id": object_id},
        {"$set": {"products": products, "updated_at": _now()}},
    )
    if result.matched_count == 0:
        raise NotFoundError(f"Cart {cart_id} not found")

    return await get_cart(db, cart_id)


async def set_product_quantity(db: AsyncIOMotorDatabase, cart_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
    """Set the quantity of a product already in the cart."""
    object_id = validate_object_id(cart_id, "cart")

    result = await db.carts.update_one(
        {"_id": object_id, "products.product_id": product_id},
        {"$set": {"products.$.quantity": quantity, "updated_at": _now()}},
    )
    if result.matched_count == 0:
        await verify_cart_exists(cart_id, db)
        raise NotFoundError(f"Product {product_id} is not in cart {cart_id}")

    return await get_cart(db, cart_id)


async def clear_cart(db: AsyncIOMotorDatabase, cart_id: str) -> Dict[str, Any]:
    object_id = validate_object_id(cart_id, "cart")

    result = await db.carts.update_one(
        {"_id": object_id},
        {"$set": {"products": [], "updated_at": _now()}},
    )
    if result.matched_count == 0:
        raise NotFoundError(f"Cart {cart_id} not found")

    logger.info(f"Cart cleared: {cart_id}")
    return await get_cart(db, cart_id)
