"""Storefront API package."""

from storefront.api.errors import install_error_handlers
from storefront.api.routes import account_router, basket_router, category_router, product_router

__all__ = ["product_router", "category_router", "account_router", "basket_router", "install_error_handlers"]
