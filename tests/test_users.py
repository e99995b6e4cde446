import pytest
from pymongo.errors import PyMongoError

from storefront.services import users as user_service
from storefront.services.users import create_user, find_user_by_username
from storefront.utils.errors import ConflictError


async def test_create_user_links_a_cart(db):
    user = await create_user(db, username="alice")

    cart = await db.carts.find_one({"user_id": user.id})
    assert cart is not None
    assert user.cart_id == str(cart["_id"])


async def test_duplicate_username(db):
    await create_user(db, username="alice")

    with pytest.raises(ConflictError):
        await create_user(db, username="alice")


async def test_user_is_removed_when_cart_setup_fails(db, monkeypatch):
    async def broken_cart(db, user_id=None):
        raise PyMongoError("carts unavailable")

    monkeypatch.setattr(user_service, "create_cart", broken_cart)

    with pytest.raises(PyMongoError):
        await create_user(db, username="alice")

    assert await find_user_by_username(db, "alice") is None
    assert await db.users.count_documents({}) == 0
