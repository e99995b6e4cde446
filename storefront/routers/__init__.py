from . import admin, auth, carts, products, realtime

__all__ = ["admin", "auth", "carts", "products", "realtime"]
