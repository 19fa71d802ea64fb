"""
Entity to DTO conversion.

Plain functions, one per entity type. Each reads the ORM object and builds
the response DTO field by field.
"""

from typing import Iterable, List

from models import Order, OrderDetail
from dtos.request.order_request import OrderDetailRequest, OrderRequest
from dtos.response.order_response import OrderDetailResponse, OrderResponse


def to_order_detail_response(line: OrderDetail) -> OrderDetailResponse:
    return OrderDetailResponse(
        id=line.id,
        order_id=line.order_id,
        product_id=line.product_id,
        quantity=line.quantity,
        unit_price=line.unit_price,
        discount=line.discount,
    )


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=order.order_id,
        customer_id=order.customer_id,
        employee_id=order.employee_id,
        order_date=order.order_date,
        required_date=order.required_date,
        shipped_date=order.shipped_date,
        ship_via=order.ship_via,
        freight=order.freight,
        ship_name=order.ship_name,
        ship_address=order.ship_address,
        ship_city=order.ship_city,
        ship_region=order.ship_region,
        ship_postal_code=order.ship_postal_code,
        ship_country=order.ship_country,
        order_details=[to_order_detail_response(line) for line in order.order_details],
    )


def to_order_detail_entities(lines: Iterable[OrderDetailRequest]) -> List[OrderDetail]:
    """
    Build unsaved OrderDetail rows from request lines, one row per entry.

    order_id is left unset; the repository assigns it.
    """
    return [
        OrderDetail(
            product_id=line.product_id,
            quantity=line.quantity,
            unit_price=line.unit_price,
            discount=line.discount,
        )
        for line in lines
    ]


def to_order_entity(request: OrderRequest) -> Order:
    """Build an unsaved Order with its lines. order_date is left to the caller."""
    return Order(
        customer_id=request.customer_id,
        employee_id=request.employee_id,
        required_date=request.required_date,
        ship_via=request.ship_via,
        freight=request.freight,
        ship_name=request.ship_name,
        ship_address=request.ship_address,
        ship_city=request.ship_city,
        ship_region=request.ship_region,
        ship_postal_code=request.ship_postal_code,
        ship_country=request.ship_country,
        order_details=to_order_detail_entities(request.order_details or []),
    )
