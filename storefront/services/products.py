"""
Product queries and admin-side product writes.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ..models import ProductDocument
from ..schemas import CreateProductRequest, UpdateProductRequest
from ..utils.dependencies import validate_object_id, verify_product_exists
from ..utils.errors import ConflictError, NotFoundError
from ..utils.serializers import serialize_doc, serialize_docs
from .pagination import build_page_envelope, build_product_filter, page_skip, sort_direction

logger = logging.getLogger(__name__)


async def list_products_page(
    db: AsyncIOMotorDatabase,
    limit: int,
    page: int,
    sort: Optional[str] = None,
    query: Optional[str] = None,
) -> Dict[str, Any]:
    """Fetch one page of products sorted by price and wrap it in the listing envelope."""
    filter_query = build_product_filter(query)

    total = await db.products.count_documents(filter_query)
    cursor = db.products.find(
        filter_query,
        sort=[("price", sort_direction(sort))],
        skip=page_skip(limit, page),
        limit=limit,
    )
    products = await cursor.to_list(length=limit)

    return build_page_envelope(total, limit, page, sort=sort, query=query, payload=serialize_docs(products))


async def get_product(db: AsyncIOMotorDatabase, product_id: str) -> Dict[str, Any]:
    return serialize_doc(await verify_product_exists(product_id, db))


async def _ensure_code_available(db: AsyncIOMotorDatabase, code: str, exclude_id=None) -> None:
    filter_query: Dict[str, Any] = {"code": code}
    if exclude_id is not None:
        filter_query["_id"] = {"$ne": exclude_id}
    if await db.products.find_one(filter_query):
        raise ConflictError(f"Product with code {code} already exists")


async def create_product(db: AsyncIOMotorDatabase, product: CreateProductRequest) -> Dict[str, Any]:
    """Insert a new product; product codes are unique."""
    await _ensure_code_available(db, product.code)

    now = datetime.now(timezone.utc)
    document = ProductDocument(**product.model_dump(), created_at=now, updated_at=now)

    try:
        result = await db.products.insert_one(document.to_mongo())
    except DuplicateKeyError:
        raise ConflictError(f"Product with code {product.code} already exists")

    created_product = await db.products.find_one({"_id": result.inserted_id})
    logger.info(f"Product created: {product.code} (ID: {result.inserted_id})")
    return serialize_doc(created_product)


async def update_product(db: AsyncIOMotorDatabase, product_id: str, product_update: UpdateProductRequest) -> Dict[str, Any]:
    """Replace the fields present in ``product_update``."""
    await verify_product_exists(product_id, db)
    object_id = validate_object_id(product_id, "product")

    update_doc = product_update.model_dump(exclude_unset=True, exclude_none=True)
    if "code" in update_doc:
        await _ensure_code_available(db, update_doc["code"], exclude_id=object_id)
    update_doc["updated_at"] = datetime.now(timezone.utc)

    try:
        await db.products.update_one({"_id": object_id}, {"$set": update_doc})
    except DuplicateKeyError:
        raise ConflictError(f"Product with code {update_doc['code']} already exists")

    updated_product = await db.products.find_one({"_id": object_id})
    logger.info(f"Product updated: {product_id}")
    return serialize_doc(updated_product)


async def delete_product(db: AsyncIOMotorDatabase, product_id: str) -> None:
    object_id = validate_object_id(product_id, "product")

    result = await db.products.delete_one({"_id": object_id})
    if result.deleted_count == 0:
        raise NotFoundError(f"Product {product_id} not found")

    logger.info(f"Product deleted: {product_id}")
