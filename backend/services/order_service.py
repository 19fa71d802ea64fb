"""
Order Service

Business rules for the order aggregate: pagination, creation of an order
together with its lines, appending lines, and cascading deletion.

Input is validated here, before the repository is touched. Storage failures
come up from the repository as DatabaseError and are not caught.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
from sqlalchemy.orm import Session

from domain.value_objects.page_window import PageWindow
from dtos.mappers import (
    to_order_detail_entities,
    to_order_detail_response,
    to_order_entity,
    to_order_response,
)
from dtos.request.order_request import OrderDetailRequest, OrderRequest
from dtos.response.order_response import OrderDetailResponse, OrderResponse
from exceptions import ValidationError
from models import Order as OrderModel, OrderDetail as OrderDetailModel
from repositories.order_repository import OrderRepository
from services.interfaces import IOrderService
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)


def _check_lines(lines: Optional[Sequence[OrderDetailRequest]], field: str) -> None:
    if lines is None:
        raise ValidationError(f"{field} is required", invalid_fields={field: None})

    missing = [index for index, line in enumerate(lines) if line.product_id is None]
    if missing:
        raise ValidationError(
            f"productId is required for every line (missing at positions {missing})",
            invalid_fields={f"{field}[{index}].productId": None for index in missing}
        )

    invalid: Dict[str, str] = {}
    for index, line in enumerate(lines):
        for name, value, column in (
            ("unitPrice", line.unit_price, OrderDetailModel.unit_price),
            ("discount", line.discount, OrderDetailModel.discount),
        ):
            if not _fits_column(value, column):
                invalid[f"{field}[{index}].{name}"] = str(value)
    _raise_if_invalid(invalid)


def _fits_column(value: Optional[Decimal], column) -> bool:
    """True if value can be stored in a Numeric column without rounding."""
    if value is None:
        return True
    if not value.is_finite():
        return False

    precision, scale = column.type.precision, column.type.scale
    _, digits, exponent = value.normalize().as_tuple()
    places = max(-exponent, 0)
    whole_digits = max(len(digits) + exponent, 0)
    return places <= scale and whole_digits <= precision - scale


def _raise_if_invalid(invalid: Dict[str, str]) -> None:
    if invalid:
        raise ValidationError(
            f"Amounts do not fit the stored precision: {', '.join(sorted(invalid))}",
            invalid_fields=invalid
        )


class OrderService(IOrderService):
    """Service for order aggregate business logic."""

    def __init__(self, db: Session, repository: Optional[OrderRepository] = None):
        """
        Initialize OrderService.

        Args:
            db: Database session (one per request)
            repository: Order repository; built from db when omitted
        """
        self.db = db
        self.order_repo = repository or OrderRepository(db)

    @log_operation("list_orders")
    def list_orders(self, skip: Optional[int] = None, take: Optional[int] = None) -> List[OrderResponse]:
        window = PageWindow(skip=skip, take=take)
        if window.limit == 0:
            return []

        orders = self.order_repo.find_all(None if window.is_unbounded else window)
        return [to_order_response(order) for order in orders]

    @log_operation("get_order")
    def get_order(self, order_id: int) -> Optional[OrderResponse]:
        order = self.order_repo.find_by_id(order_id)
        if order is None:
            logger.info(f"Order {order_id} not found", extra={"order_id": order_id})
            return None
        return to_order_response(order)

    @log_operation("create_order")
    def create_order(self, request: Optional[OrderRequest]) -> OrderResponse:
        """
        Create an order and its lines in one transaction.

        order_date is always the server's current time. Request lines map
        1:1 to stored lines in request order.
        """
        if request is None:
            raise ValidationError("Order request body is required")
        if request.customer_id is None or not request.customer_id.strip():
            raise ValidationError("customerId is required", invalid_fields={"customerId": request.customer_id})
        if not _fits_column(request.freight, OrderModel.freight):
            _raise_if_invalid({"freight": str(request.freight)})
        _check_lines(request.order_details, "orderDetails")
        if not request.order_details:
            logger.warning(
                f"Creating order for customer {request.customer_id} with no lines",
                extra={"customer_id": request.customer_id}
            )

        order = to_order_entity(request)
        order.order_date = datetime.now()

        order = self.order_repo.insert_order(order)
        logger.info(
            f"Created order {order.order_id} with {len(order.order_details)} line(s)",
            extra={"order_id": order.order_id, "customer_id": order.customer_id}
        )
        return to_order_response(order)

    @log_operation("add_lines")
    def add_lines(
        self,
        order_id: int,
        lines: Optional[Sequence[OrderDetailRequest]]
    ) -> Optional[List[OrderDetailResponse]]:
        """
        Append lines to an existing order.

        Existing lines are left untouched. Only the new lines are returned.
        """
        _check_lines(lines, "orderDetails")

        if not self.order_repo.exists(order_id):
            logger.info(f"Order {order_id} not found, no lines added", extra={"order_id": order_id})
            return None

        new_lines = self.order_repo.insert_lines(order_id, to_order_detail_entities(lines))
        return [to_order_detail_response(line) for line in new_lines]

    @log_operation("delete_order")
    def delete_order(self, order_id: int) -> bool:
        deleted = self.order_repo.delete_order_cascade(order_id)
        if not deleted:
            logger.info(f"Order {order_id} not found, nothing deleted", extra={"order_id": order_id})
        return deleted
