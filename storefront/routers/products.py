"""
Public product routes.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..config.database import get_database
from ..schemas import ProductResponse, ProductsPageResponse
from ..services import products as product_service
from ..utils.errors import StorefrontError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])


@router.get("/api/products", status_code=200, response_model=ProductsPageResponse)
@router.get("/products", status_code=200, response_model=ProductsPageResponse, include_in_schema=False)
async def list_products(
    limit: int = Query(10, ge=1, le=100, description="Products per page"),
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    sort: Optional[str] = Query(None, pattern="^(asc|desc)?$", description="Price order"),
    query: Optional[str] = Query(None, description="Match against category or availability"),
    db=Depends(get_database)
):
    """List products sorted by price, one page at a time"""
    # Empty form fields count as not sent
    sort = sort or None
    query = query or None
    try:
        return await product_service.list_products_page(db, limit, page, sort=sort, query=query)
    except StorefrontError:
        raise
    except Exception:
        logger.exception("Failed to fetch products")
        return JSONResponse(status_code=500, content={"status": "error", "message": "Internal Server Error"})


@router.get("/api/products/{pid}", status_code=200, response_model=ProductResponse)
async def get_product(pid: str, db=Depends(get_database)):
    """Get a specific product by ID"""
    return await product_service.get_product(db, pid)
