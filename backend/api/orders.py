from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response
from typing import List, Optional
import logging

from constants import HTTPStatus
from dependencies import get_order_service
from dtos.request.order_request import OrderDetailRequest, OrderRequest
from dtos.response.order_response import OrderDetailResponse, OrderResponse
from services.interfaces import IOrderService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(order_id: int) -> HTTPException:
    return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=f"Order '{order_id}' not found")


@router.get("/orders", response_model=List[OrderResponse])
@handle_api_errors("List orders")
def list_orders(
    skip: Optional[int] = Query(None, description="Number of orders to skip (must be >= 0)"),
    take: Optional[int] = Query(None, description="Maximum number of orders to return (must be >= 0)"),
    service: IOrderService = Depends(get_order_service)
):
    """List orders by ascending order ID, optionally windowed by skip/take."""
    return service.list_orders(skip=skip, take=take)


@router.get("/orders/{order_id}", response_model=OrderResponse)
@handle_api_errors("Get order")
def get_order(order_id: int, service: IOrderService = Depends(get_order_service)):
    """Get a specific order with all of its lines"""
    order = service.get_order(order_id)
    if order is None:
        raise _not_found(order_id)
    return order


@router.post("/orders", response_model=OrderResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create order")
def create_order(
    request: Request,
    response: Response,
    order_request: Optional[OrderRequest] = Body(None),
    service: IOrderService = Depends(get_order_service)
):
    """
    Create an order together with its lines.

    The Location header points at the new order.
    """
    order = service.create_order(order_request)
    response.headers["Location"] = str(request.url_for("get_order", order_id=order.order_id))
    return order


@router.post("/orders/{order_id}/lines", response_model=List[OrderDetailResponse])
@handle_api_errors("Add order lines")
def add_order_lines(
    order_id: int,
    lines: Optional[List[OrderDetailRequest]] = Body(None),
    service: IOrderService = Depends(get_order_service)
):
    """Append lines to an existing order and return only the new lines."""
    new_lines = service.add_lines(order_id, lines)
    if new_lines is None:
        raise _not_found(order_id)
    return new_lines


@router.delete("/orders/{order_id}")
@handle_api_errors("Delete order")
def delete_order(order_id: int, service: IOrderService = Depends(get_order_service)) -> dict:
    """Delete an order and all of its lines."""
    if not service.delete_order(order_id):
        raise _not_found(order_id)
    return {
        "success": True,
        "message": f"Order {order_id} deleted"
    }
