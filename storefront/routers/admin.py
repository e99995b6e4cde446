"""
Admin routes. Every route requires the admin role.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ..auth.guards import require_admin
from ..config.database import get_database
from ..schemas import CreateProductRequest, DashboardResponse, ProductResponse, UpdateProductRequest
from ..services import products as product_service
from ..utils.errors import StorefrontError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/", response_model=DashboardResponse)
async def dashboard(db=Depends(get_database)):
    """Collection counts"""
    return DashboardResponse(
        products=await db.products.count_documents({}),
        carts=await db.carts.count_documents({}),
        users=await db.users.count_documents({}),
        messages=await db.messages.count_documents({}),
    )


@router.post("/products", status_code=201, response_model=ProductResponse)
async def create_product(product: CreateProductRequest, db=Depends(get_database)):
    """Create a new product"""
    try:
        return await product_service.create_product(db, product)
    except (HTTPException, StorefrontError):
        raise
    except Exception as e:
        logger.error(f"Failed to create product: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to create product")


@router.put("/products/{pid}", status_code=200, response_model=ProductResponse)
async def update_product(pid: str, product_update: UpdateProductRequest, db=Depends(get_database)):
    """Replace the given fields of a product"""
    try:
        return await product_service.update_product(db, pid, product_update)
    except (HTTPException, StorefrontError):
        raise
    except Exception as e:
        logger.error(f"Failed to update product {pid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update product")


@router.delete("/products/{pid}", status_code=204)
async def delete_product(pid: str, db=Depends(get_database)):
    """Delete a product"""
    try:
        await product_service.delete_product(db, pid)
    except (HTTPException, StorefrontError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete product {pid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete product")
    return Response(status_code=204)
