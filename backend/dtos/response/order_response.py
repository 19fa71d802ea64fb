"""
Order Response DTOs

DTOs for order-related API responses.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class OrderDetailResponse(BaseModel):
    """Response DTO for a stored order line."""

    id: int = Field(description="Line ID")
    order_id: int = Field(description="Owning order ID")
    product_id: int = Field(description="Product ID")
    quantity: int = Field(description="Quantity ordered")
    unit_price: Decimal = Field(description="Unit price")
    discount: Decimal = Field(description="Discount fraction")

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True


class OrderResponse(BaseModel):
    """
    Response DTO for an order aggregate: the header plus all of its lines.
    """

    order_id: int = Field(description="Order ID")
    customer_id: str = Field(description="Customer ID")
    employee_id: Optional[int] = None
    order_date: datetime = Field(description="Creation timestamp (server-assigned)")
    required_date: Optional[datetime] = None
    shipped_date: Optional[datetime] = None
    ship_via: Optional[int] = None
    freight: Optional[Decimal] = None
    ship_name: Optional[str] = None
    ship_address: Optional[str] = None
    ship_city: Optional[str] = None
    ship_region: Optional[str] = None
    ship_postal_code: Optional[str] = None
    ship_country: Optional[str] = None
    order_details: List[OrderDetailResponse] = Field(default_factory=list, description="Order lines")

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
