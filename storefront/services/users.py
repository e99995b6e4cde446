"""
User records: creation (with the user's cart) and lookups.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..models import ROLE_USER, UserDocument
from ..utils.errors import ConflictError
from ..utils.serializers import serialize_doc
from .carts import create_cart

logger = logging.getLogger(__name__)


def to_user(doc: Optional[dict]) -> Optional[UserDocument]:
    if doc is None:
        return None
    return UserDocument(**serialize_doc(doc))


async def find_user_by_id(db: AsyncIOMotorDatabase, user_id: str) -> Optional[UserDocument]:
    if not ObjectId.is_valid(user_id):
        return None
    return to_user(await db.users.find_one({"_id": ObjectId(user_id)}))


async def find_user_by_username(db: AsyncIOMotorDatabase, username: str) -> Optional[UserDocument]:
    return to_user(await db.users.find_one({"username": username}))


async def find_user_by_github_id(db: AsyncIOMotorDatabase, github_id: str) -> Optional[UserDocument]:
    return to_user(await db.users.find_one({"github_id": github_id}))


async def create_user(
    db: AsyncIOMotorDatabase,
    username: str,
    password_hash: Optional[str] = None,
    role: str = ROLE_USER,
    github_id: Optional[str] = None,
) -> UserDocument:
    """
    Create a user together with an empty cart.

    Raises:
        ConflictError: If the username is taken
    """
    if await db.users.find_one({"username": username}):
        raise ConflictError(f"Username {username} is already taken")

    user = UserDocument(
        username=username,
        password_hash=password_hash,
        role=role,
        github_id=github_id,
        created_at=datetime.now(timezone.utc),
    )
    try:
        result = await db.users.insert_one(user.to_mongo())
    except DuplicateKeyError:
        raise ConflictError(f"Username {username} is already taken")

    user_id = str(result.inserted_id)
    try:
        cart_id = await create_cart(db, user_id)
        await db.users.update_one({"_id": result.inserted_id}, {"$set": {"cart_id": cart_id}})
    except PyMongoError:
        logger.error(f"Could not set up cart for {username}, removing the user")
        await db.users.delete_one({"_id": result.inserted_id})
        await db.carts.delete_many({"user_id": user_id})
        raise

    logger.info(f"User created: {username} (ID: {user_id}, role: {user.role})")
    return await find_user_by_id(db, user_id)
