"""
Request DTOs

DTOs for incoming API requests. These decouple the API from database models
and provide a clear contract for what data the API expects.
"""

from .order_request import OrderDetailRequest, OrderRequest

__all__ = ["OrderDetailRequest", "OrderRequest"]
