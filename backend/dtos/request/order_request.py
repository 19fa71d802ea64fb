"""
Order Request DTOs

DTOs for order-related API requests.

Required fields are declared Optional here. OrderService checks their
presence and raises ValidationError, which the API reports as 400.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class OrderDetailRequest(BaseModel):
    """
    Request DTO for a single order line.

    The same product may be listed more than once; every entry becomes its own line.
    """

    product_id: Optional[int] = Field(None, description="Product ID (required)")
    quantity: int = Field(1, description="Quantity ordered")
    unit_price: Decimal = Field(Decimal("0"), description="Unit price")
    discount: Decimal = Field(Decimal("0"), description="Discount fraction, usually in [0, 1)")

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "productId": 11,
                "quantity": 10,
                "unitPrice": "9.99",
                "discount": "0"
            }
        }


class OrderRequest(BaseModel):
    """
    Request DTO for creating an order together with its lines.

    order_date is not part of the request; the server sets it.
    """

    customer_id: Optional[str] = Field(None, description="Customer ID (required)")
    employee_id: Optional[int] = Field(None, description="Employee handling the order")
    required_date: Optional[datetime] = Field(None, description="Date the customer needs the order")
    ship_via: Optional[int] = Field(None, description="Shipper ID")
    freight: Optional[Decimal] = Field(None, description="Freight charge")
    ship_name: Optional[str] = None
    ship_address: Optional[str] = None
    ship_city: Optional[str] = None
    ship_region: Optional[str] = None
    ship_postal_code: Optional[str] = None
    ship_country: Optional[str] = None
    order_details: Optional[List[OrderDetailRequest]] = Field(
        None,
        description="Order lines (required, one stored line per entry)"
    )

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "customerId": "ALFKI",
                "employeeId": 1,
                "requiredDate": "2023-03-30T00:00:00",
                "shipVia": 1,
                "freight": "12.34",
                "shipName": "Alfreds Futterkiste",
                "shipAddress": "Obere Str. 57",
                "shipCity": "Berlin",
                "shipPostalCode": "12209",
                "shipCountry": "Germany",
                "orderDetails": [
                    {"productId": 1, "quantity": 10, "unitPrice": "9.99", "discount": "0"}
                ]
            }
        }
