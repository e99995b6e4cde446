"""Storefront API: products, carts and session authentication on FastAPI + MongoDB."""

__version__ = "1.0.0"
