"""
Cart routes. Every route requires a logged-in user who owns the cart
(admins may touch any cart).
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..auth.guards import require_user
from ..config.database import get_database
from ..models import UserDocument
from ..schemas import AddProductRequest, CartResponse, ReplaceCartRequest, UpdateQuantityRequest
from ..services import carts as cart_service
from ..utils.dependencies import verify_cart_exists
from ..utils.errors import PermissionDeniedError, StorefrontError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/carts", tags=["Carts"], dependencies=[Depends(require_user)])


async def get_accessible_cart(
    cid: str,
    user: UserDocument = Depends(require_user),
    db=Depends(get_database)
) -> Dict[str, Any]:
    cart = await verify_cart_exists(cid, db)
    if not user.is_admin and cart.get("user_id") != user.id:
        raise PermissionDeniedError(f"Cart {cid} belongs to another user")
    return cart


@router.get("/{cid}", status_code=200, response_model=CartResponse)
async def get_cart(cid: str, db=Depends(get_database), _cart=Depends(get_accessible_cart)):
    """Get a cart"""
    return await cart_service.get_cart(db, cid)


@router.post("/{cid}/products/{pid}", status_code=200, response_model=CartResponse)
async def add_product_to_cart(
    cid: str,
    pid: str,
    body: Optional[AddProductRequest] = None,
    db=Depends(get_database),
    _cart=Depends(get_accessible_cart)
):
    """Add a product to a cart"""
    try:
        return await cart_service.add_product(db, cid, pid, body.quantity if body else 1)
    except (HTTPException, StorefrontError):
        raise
    except Exception as e:
        logger.error(f"Failed to add product {pid} to cart {cid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update cart")


@router.delete("/{cid}/products/{pid}", status_code=200, response_model=CartResponse)
async def delete_product_from_cart(cid: str, pid: str, db=Depends(get_database), _cart=Depends(get_accessible_cart)):
    """Remove a product from a cart; a product not in the cart is ignored"""
    try:
        return await cart_service.remove_product(db, cid, pid)
    except (HTTPException, StorefrontError):
        raise
    except Exception as e:
        logger.error(f"Failed to remove product {pid} from cart {cid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update cart")


@router.put("/{cid}", status_code=200, response_model=CartResponse)
async def update_cart(cid: str, body: ReplaceCartRequest, db=Depends(get_database), _cart=Depends(get_accessible_cart)):
    """Replace a cart's entire product list"""
    try:
        return await cart_service.replace_products(db, cid, body.products)
    except (HTTPException, StorefrontError):
        raise
    except Exception as e:
        logger.error(f"Failed to replace products of cart {cid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update cart")


@router.put("/{cid}/products/{pid}", status_code=200, response_model=CartResponse)
async def update_product_quantity(
    cid: str,
    pid: str,
    body: UpdateQuantityRequest,
    db=Depends(get_database),
    _cart=Depends(get_accessible_cart)
):
    """Set the quantity of a product in a cart"""
    try:
        return await cart_service.set_product_quantity(db, cid, pid, body.quantity)
    except (HTTPException, StorefrontError):
        raise
    except Exception as e:
        logger.error(f"Failed to set quantity of {pid} in cart {cid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update cart")


@router.delete("/{cid}", status_code=200, response_model=CartResponse)
async def delete_all_products_from_cart(cid: str, db=Depends(get_database), _cart=Depends(get_accessible_cart)):
    """Remove every product from a cart"""
    try:
        return await cart_service.clear_cart(db, cid)
    except (HTTPException, StorefrontError):
        raise
    except Exception as e:
        logger.error(f"Failed to clear cart {cid}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update cart")
