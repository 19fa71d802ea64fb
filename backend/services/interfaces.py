"""
Service Interfaces

Abstract base classes for service layer following Dependency Inversion Principle.
This allows for dependency injection and easier testing/mocking.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from dtos.request.order_request import OrderDetailRequest, OrderRequest
from dtos.response.order_response import OrderDetailResponse, OrderResponse


class IOrderService(ABC):
    """
    Interface for order aggregate operations.

    Not-found is reported through the return value (None or False),
    never by raising.
    """

    @abstractmethod
    def list_orders(self, skip: Optional[int] = None, take: Optional[int] = None) -> List[OrderResponse]:
        """
        List orders in ascending order_id order.

        Args:
            skip: Number of leading orders to drop
            take: Maximum number of orders to return

        Returns:
            List of orders (possibly empty)

        Raises:
            ValidationError: If skip or take is negative
        """
        pass

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[OrderResponse]:
        """
        Get one order with its lines.

        Returns:
            The order, or None if it does not exist
        """
        pass

    @abstractmethod
    def create_order(self, request: OrderRequest) -> OrderResponse:
        """
        Create an order together with its lines.

        Returns:
            The persisted order including its assigned order_id

        Raises:
            ValidationError: If customerId or orderDetails is missing
        """
        pass

    @abstractmethod
    def add_lines(
        self,
        order_id: int,
        lines: Optional[Sequence[OrderDetailRequest]]
    ) -> Optional[List[OrderDetailResponse]]:
        """
        Append lines to an existing order.

        Returns:
            The newly stored lines, or None if the order does not exist

        Raises:
            ValidationError: If lines is missing or a line has no productId
        """
        pass

    @abstractmethod
    def delete_order(self, order_id: int) -> bool:
        """
        Delete an order and all of its lines.

        Returns:
            True if deleted, False if the order does not exist
        """
        pass
